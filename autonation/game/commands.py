"""
Commands emitted by the agents.

Each command is an inert record handed to game.add_execution(); the driver
validates and applies it. Agents never mutate world state themselves.
"""
from dataclasses import dataclass
from typing import Any, Optional

from autonation.content.config import UnitType


@dataclass(frozen=True)
class SpawnRequest:
    player_id: str
    tile: Any


@dataclass(frozen=True)
class ConstructionRequest:
    player_id: str
    tile: Any
    unit_type: UnitType


@dataclass(frozen=True)
class UpgradeStructureRequest:
    player_id: str
    unit_id: Any


@dataclass(frozen=True)
class TrainStationRequest:
    player_id: str
    unit_id: Any


@dataclass(frozen=True)
class AttackRequest:
    player_id: str
    target_id: Optional[str]  # None targets terra nullius
    troops: float


@dataclass(frozen=True)
class TransportShipRequest:
    player_id: str
    target_id: Optional[str]
    destination: Any
    troops: float


@dataclass(frozen=True)
class EmojiRequest:
    player_id: str
    recipient_id: str
    emoji: str


@dataclass(frozen=True)
class NukeRequest:
    player_id: str
    weapon: UnitType
    tile: Any


@dataclass(frozen=True)
class AllianceRequest:
    player_id: str
    recipient_id: str


@dataclass(frozen=True)
class AllianceReply:
    player_id: str
    requestor_id: str
    accepted: bool


@dataclass(frozen=True)
class EmbargoRequest:
    player_id: str
    target_id: str
    start: bool


@dataclass(frozen=True)
class RelationChange:
    player_id: str
    other_id: str
    delta: int


@dataclass(frozen=True)
class TargetTroopRatioRequest:
    player_id: str
    ratio: float


@dataclass(frozen=True)
class TradeShipRequest:
    player_id: str
    source_port_id: Any
    destination_port_id: Any
