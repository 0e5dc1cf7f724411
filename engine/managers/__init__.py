from .floor_manager import FloorManager, heal_on_floor_climb

__all__ = [
    "FloorManager",
    "heal_on_floor_climb",
]
