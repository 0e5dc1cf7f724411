# settings.py

# Floor defaults
DEFAULT_FLOOR_WIDTH = 5
DEFAULT_FLOOR_HEIGHT = 5
FLOOR_VERSION = "0.1.0"

# Combat
MIN_DAMAGE = 5            # no hit is ever fully negated by armor
TRAP_DAMAGE = 10

# Enemy behaviour
DEFAULT_AGGRO_RANGE = 2
PATROL_RADIUS_TILES = 2

# Player
INVENTORY_SLOTS = 25
ABILITY_BAR_SLOTS = 8
HP_PER_VITALITY_CHARM = 5
