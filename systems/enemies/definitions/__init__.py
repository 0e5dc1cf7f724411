"""
Enemy archetype definitions.

Definitions are organized by the point in a run where they start to appear.

Structure:
- early_game.py: goblin, turret, archer (floors 1-2)
- mid_game.py: brute, mage (floors 3-4)
- late_game.py: ghost (floor 5+)
"""

from . import early_game
from . import mid_game
from . import late_game


def register_all_definitions() -> None:
    """Register all enemy archetypes."""
    early_game.register_early_game_archetypes()
    mid_game.register_mid_game_archetypes()
    late_game.register_late_game_archetypes()
