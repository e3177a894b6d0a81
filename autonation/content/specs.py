"""
Data structures shared by the agents and the loader.

Classes:
- Cell: A plain (x, y) map coordinate.
- BoundingBox: Min/max cells enclosing a set of tiles.
- NationSpec: Static identity of a computer-controlled nation.
- BuildStep: One entry of a prioritized build order.
- AIProfile: Build orders and nuke target values, loadable from YAML.
- DelegationSettings: Enable flag and gold reserve of the building delegation.
"""
from dataclasses import dataclass, field
from typing import Dict, NamedTuple, Optional, Tuple

from autonation.content.config import UnitType


class Cell(NamedTuple):
    x: int
    y: int


class BoundingBox(NamedTuple):
    min: Cell
    max: Cell


@dataclass(frozen=True)
class NationSpec:
    player_id: str
    name: str
    spawn_cell: Cell


BUILD_STEP_KINDS = ("structure", "warship", "train_station")


@dataclass(frozen=True)
class BuildStep:
    """
    A single Phase-1 slot.

        :ivar kind: 'structure', 'warship' or 'train_station'.
        :ivar unit_type: Structure to build (only meaningful for 'structure').
        :ivar cap: Stop building this type once the player owns this many.
    """
    kind: str
    unit_type: UnitType
    cap: Optional[int] = None

    def __post_init__(self):
        if self.kind not in BUILD_STEP_KINDS:
            raise ValueError(f"Unknown build step kind: {self.kind}")
        if self.kind == "structure" and (self.cap is None or self.cap < 1):
            raise ValueError(f"Structure step for {self.unit_type.value} needs a positive cap")

    @classmethod
    def from_tuple(cls, item):
        kind, unit_type, cap = item
        return cls(kind=kind, unit_type=unit_type, cap=cap)


@dataclass
class AIProfile:
    nation_build_order: Tuple[BuildStep, ...]
    delegated_build_order: Tuple[BuildStep, ...]
    nuke_structure_values: Dict[UnitType, int] = field(default_factory=dict)

    @classmethod
    def default(cls):
        from autonation.content import constants
        return cls(
            nation_build_order=tuple(BuildStep.from_tuple(s) for s in constants.NATION_BUILD_ORDER),
            delegated_build_order=tuple(BuildStep.from_tuple(s) for s in constants.DELEGATED_BUILD_ORDER),
            nuke_structure_values=dict(constants.NUKE_STRUCTURE_VALUES),
        )


def _default_delegation_reserve() -> int:
    from autonation.content import constants
    return constants.DEFAULT_DELEGATION_RESERVE


@dataclass
class DelegationSettings:
    enabled: bool = False
    gold_reserve: int = field(default_factory=_default_delegation_reserve)
