from __future__ import annotations

from typing import Optional, Sequence

from autonation.content.config import PlayerType
from autonation.content.constants import (
    DEFAULT_DELEGATION_RESERVE,
    DELEGATED_BUILD_RATE_RANGE,
    DELEGATED_SEED_SALT,
)
from autonation.content.specs import AIProfile, BuildStep
from autonation.content.utils import simple_hash
from autonation.game.execution import Execution
from autonation.game.pseudo_random import PseudoRandom
from autonation.game.structure_planner import StructurePlanner


class DelegatedBuildingExecution(Execution):
    """
    Builds and upgrades structures on behalf of a human player who enabled
    building delegation. Never attacks, nukes or touches diplomacy.
    """

    def __init__(
        self,
        game_id: str,
        player_id: str,
        gold_reserve: int = DEFAULT_DELEGATION_RESERVE,
        enabled: bool = False,
        build_order: Optional[Sequence[BuildStep]] = None,
    ):
        super().__init__()
        self.player_id = player_id
        self.random = PseudoRandom(simple_hash(player_id) + simple_hash(game_id) + DELEGATED_SEED_SALT)
        self.build_rate = self.random.next_int(*DELEGATED_BUILD_RATE_RANGE)
        self.build_tick = self.random.next_int(0, self.build_rate)
        self.gold_reserve = int(gold_reserve)
        self.enabled = bool(enabled)
        self.build_order = tuple(build_order or AIProfile.default().delegated_build_order)
        self.player = None
        self.planner: Optional[StructurePlanner] = None

    def update_settings(self, gold_reserve: int, enabled: bool):
        self.gold_reserve = int(gold_reserve)
        self.enabled = bool(enabled)

    def tick(self, ticks: int):
        game = self._require_game()
        if not self.enabled or ticks % self.build_rate != self.build_tick:
            return

        if self.player is None:
            self.player = next((p for p in game.all_players() if p.id == self.player_id), None)
            if self.player is None or self.player.type != PlayerType.HUMAN:
                self.player = None
                return
            self.planner = StructurePlanner(
                game, self.player, self.random, self.build_order, lambda: self.gold_reserve,
            )

        if not self.player.is_alive():
            self.deactivate()
            return

        # Only build with gold above the reserve
        if self.player.gold() <= self.gold_reserve:
            return

        self.planner.handle_building()
