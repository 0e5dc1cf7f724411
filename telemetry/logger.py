from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


def _now_iso() -> str:
    # ISO-ish without importing datetime (fast + good enough for logs)
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime())


@dataclass
class TelemetryLogger:
    """
    Append-only JSON-lines event log (floor generated, turns played...).

    Disabled until init() gives it a file. Wall-clock fields only live here,
    never in simulation state.
    """
    path: Optional[Path] = None
    enabled: bool = True
    flush_each_write: bool = False
    _events_written: int = 0
    _started_at: float = field(default_factory=time.time)

    def init(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Touch file (don't overwrite)
        self.path.touch(exist_ok=True)
        self.log("telemetry_init", file=str(self.path))

    def log(self, event: str, **fields: Any) -> None:
        if not self.enabled or self.path is None:
            return

        row: Dict[str, Any] = {
            "t": time.time(),
            "ts": _now_iso(),
            "event": event,
            **fields,
        }

        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(row, ensure_ascii=False) + "\n")
                if self.flush_each_write:
                    f.flush()
        except OSError:
            # Telemetry must never break the game.
            return
        self._events_written += 1

    @property
    def events_written(self) -> int:
        return self._events_written


# global singleton (easy import everywhere)
telemetry = TelemetryLogger()
