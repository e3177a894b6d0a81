"""
Tuning constants for the autonomous agents.
No dependencies on game modules beyond the shared enums.
"""

from autonation.content.config import UnitType
from autonation.content.utils import round_half_up

# ============ CADENCE ============
NATION_ATTACK_RATE_RANGE = (10, 20)
NATION_TRIGGER_RATIO_RANGE = (60, 90)   # hundredths
NATION_RESERVE_RATIO_RANGE = (30, 60)   # hundredths
DELEGATED_BUILD_RATE_RANGE = (30, 60)
DELEGATED_SEED_SALT = 42
PORT_CHECK_INTERVAL = 10

# ============ SPAWN ============
SPAWN_SEARCH_RADIUS = 25
SPAWN_SEARCH_TRIES = 50

# ============ ECONOMY ============
TROOP_CAP_THRESHOLD = 100_000
TROOP_RATIO_CAP = 0.7
EMBARGO_RELATION_MALUS = -20

# Nation reserve: 1M gold per 5 building levels, capped at 50M
RESERVE_PER_BUILDING_STEP = 1_000_000
RESERVE_BUILDING_STEP = 5
RESERVE_MIN = 0
RESERVE_MAX = 50_000_000

DEFAULT_DELEGATION_RESERVE = 500_000

# ============ SPATIAL SAMPLING ============
BUILD_TILE_SAMPLES = 50
BUILD_TILE_EXTRA_SAMPLES = 20
WARSHIP_SPAWN_RADIUS = 250
WARSHIP_SPAWN_TRIES = 50
WARSHIP_VETO_ODDS = 2
PORT_UPGRADE_MULTIPLIER = 1.5

# ============ ATTACKS ============
BOAT_TROOP_DIVISOR = 5
RANDOM_BOAT_DISTANCE = 150
RANDOM_BOAT_TRIES = 500
NO_BORDER_BOAT_ODDS = 10
EXPLORE_BOAT_ODDS = 5
ALLIANCE_OFFER_ODDS = 20
WEAKEST_TARGET_ODDS = 2
FRIENDLY_ATTACK_ODDS = 2
FRIENDLY_DISCOURAGED_ATTACK_ODDS = 200
HOSTILE_DISCOURAGED_ATTACK_ODDS = 4
EMOJI_COOLDOWN = 300
HECKLE_EMOJI = ("\U0001F921", "\U0001F621")
ENEMY_MEMORY_TICKS = 100

# ============ NUCLEAR ============
NUKE_RANDOM_SAMPLES = 10
NUKE_RANDOM_SAMPLE_TRIES = 100
NUKE_SAFE_RADIUS = 15
NUKE_SAFE_RADIUS_UNDER_THREAT = 5
NUKE_SCORE_RADIUS = 25
NUKE_SAM_RADIUS = 50
NUKE_SAM_PENALTY = 50_000
NUKE_SILO_DISTANCE_PENALTY = 30
NUKE_RECENT_TARGET_PENALTY = 1_000_000
NUKE_RECENT_WINDOW = 500
NUKE_HIGH_VALUE = 100_000
NUKE_FALLBACK_VALUE = 50_000
MASS_RETALIATION_COOLDOWN = 500
MASS_RETALIATION_TROOP_FACTOR = 2

THREAT_TERRITORY_RATIO = 2.0
THREAT_TROOP_RATIO = 2.5
THREAT_INCOMING_FRACTION = 0.25

NUKE_STRUCTURE_VALUES = {
    UnitType.CITY: 25_000,
    UnitType.PORT: 10_000,
    UnitType.MISSILE_SILO: 50_000,
    UnitType.DEFENSE_POST: 5_000,
}

NUKE_TARGET_TYPES = (
    UnitType.CITY,
    UnitType.DEFENSE_POST,
    UnitType.MISSILE_SILO,
    UnitType.PORT,
    UnitType.SAM_LAUNCHER,
)

# ============ BUILD ORDERS ============
# (kind, unit type, cap); warship and train station steps carry no cap.
NATION_BUILD_ORDER = (
    ("structure", UnitType.PORT, 1),
    ("structure", UnitType.CITY, 1),
    ("structure", UnitType.MISSILE_SILO, 1),
    ("structure", UnitType.CITY, 2),
    ("warship", UnitType.WARSHIP, None),
    ("train_station", UnitType.TRAIN, None),
    ("structure", UnitType.MISSILE_SILO, 2),
    ("structure", UnitType.PORT, 2),
    ("structure", UnitType.CITY, 3),
    ("structure", UnitType.SAM_LAUNCHER, 1),
    ("structure", UnitType.PORT, 3),
    ("structure", UnitType.CITY, 4),
    ("warship", UnitType.WARSHIP, None),
    ("structure", UnitType.FACTORY, 1),
    ("structure", UnitType.CITY, 5),
)

DELEGATED_BUILD_ORDER = (
    ("structure", UnitType.PORT, 1),
    ("structure", UnitType.CITY, 2),
    ("warship", UnitType.WARSHIP, None),
    ("train_station", UnitType.TRAIN, None),
    ("structure", UnitType.MISSILE_SILO, 1),
    ("structure", UnitType.MISSILE_SILO, 2),
    ("structure", UnitType.PORT, 2),
    ("structure", UnitType.CITY, 3),
    ("structure", UnitType.SAM_LAUNCHER, 1),
    ("structure", UnitType.PORT, 3),
    ("structure", UnitType.CITY, 4),
    ("warship", UnitType.WARSHIP, None),
    ("structure", UnitType.FACTORY, 1),
    ("structure", UnitType.CITY, 5),
)

EXPANSION_TYPES = (
    UnitType.PORT,
    UnitType.CITY,
    UnitType.MISSILE_SILO,
    UnitType.SAM_LAUNCHER,
    UnitType.FACTORY,
)


def trade_ship_spawn_rate(total_ports: int) -> int:
    """Production base rate for trade ships: chance(1/rate) per port check."""
    return min(50, round_half_up(10 * total_ports ** 0.6))


def adjusted_trade_ship_rate(base_rate: int, level: int) -> int:
    """Spawn denominator for a port of the given level; each level is 1.5x more likely."""
    multiplier = PORT_UPGRADE_MULTIPLIER ** (level - 1)
    return max(1, round_half_up(base_rate / multiplier))
