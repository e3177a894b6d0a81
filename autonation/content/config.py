import os
from enum import Enum, IntEnum

# --- PATHS ---
# Absolute path to the project root (autonation/../)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

DATA_DIR = os.path.join(BASE_DIR, "data")

# --- DATA FILES ---
AI_PROFILE_DATA = os.path.join(DATA_DIR, "ai_profile.yaml")

# --- DIAGNOSTICS ---
_debug_raw = os.getenv("AUTONATION_DEBUG", "0").strip().lower()
DEBUG = _debug_raw not in ("0", "false", "off", "no", "")


def debug_print(message):
    if DEBUG:
        print(message)


# --- ENUMS ---
class UnitType(Enum):
    CITY = "city"
    PORT = "port"
    FACTORY = "factory"
    MISSILE_SILO = "missile_silo"
    SAM_LAUNCHER = "sam_launcher"
    DEFENSE_POST = "defense_post"
    WARSHIP = "warship"
    TRAIN = "train"
    TRADE_SHIP = "trade_ship"
    TRANSPORT = "transport"
    CONSTRUCTION = "construction"
    ATOM_BOMB = "atom_bomb"
    HYDROGEN_BOMB = "hydrogen_bomb"
    MIRV = "mirv"

    @classmethod
    def buildings(cls):
        return (cls.CITY, cls.PORT, cls.FACTORY, cls.MISSILE_SILO, cls.SAM_LAUNCHER, cls.DEFENSE_POST)

    @classmethod
    def station_hosts(cls):
        return (cls.CITY, cls.PORT, cls.FACTORY)


class PlayerType(Enum):
    HUMAN = "human"
    NATION = "nation"
    BOT = "bot"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    IMPOSSIBLE = "impossible"


class TerrainType(Enum):
    PLAINS = "plains"
    HIGHLAND = "highland"
    MOUNTAIN = "mountain"
    LAKE = "lake"
    OCEAN = "ocean"


class Relation(IntEnum):
    HOSTILE = 0
    DISTRUSTFUL = 1
    NEUTRAL = 2
    FRIENDLY = 3


# --- SETTINGS KEYS ---
SETTINGS_GROUP = "settings"
SETTING_DELEGATION_ENABLED = "buildingDelegation"
SETTING_DELEGATION_RESERVE = "buildingDelegationReserve"
