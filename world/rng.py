# world/rng.py

"""
Small deterministic PRNG for floor generation and AI.

Every stream is created from a seed (string or int) and never touches the
global ``random`` module, so two streams with the same seed always produce
the same sequence no matter what else the process is doing.
"""

from __future__ import annotations

from typing import Sequence, TypeVar, Union

T = TypeVar("T")

Seed = Union[str, int]

_MASK32 = 0xFFFFFFFF


def hash_seed(text: str) -> int:
    """32-bit FNV-1a hash of a seed string."""
    h = 2166136261
    for ch in text:
        h ^= ord(ch)
        h = (h * 16777619) & _MASK32
    return h


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class SeededRng:
    """
    mulberry32 stream.

    Calling the object (or ``random()``) returns the next float in [0, 1).
    The helpers below each consume exactly one draw, which keeps the order
    of draws easy to reason about when several systems share a stream.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: Seed) -> None:
        if isinstance(seed, int) and not isinstance(seed, bool):
            self._state = seed & _MASK32
        else:
            self._state = hash_seed(str(seed))

    def random(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        a = self._state
        t = _imul(a ^ (a >> 15), 1 | a)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296.0

    __call__ = random

    def randrange(self, n: int) -> int:
        """Return an int in [0, n). ``n`` must be positive."""
        return int(self.random() * n)

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[self.randrange(len(seq))]


def create_rng(seed: Seed) -> SeededRng:
    """Create an independent stream for ``seed``."""
    return SeededRng(seed)
