from typing import Dict, Optional, Sequence

from autonation.content.config import PlayerType
from autonation.content.constants import DEFAULT_DELEGATION_RESERVE
from autonation.content.specs import BuildStep, DelegationSettings
from autonation.game.delegated_building import DelegatedBuildingExecution


class DelegationManager:
    """Owns one building delegation per human player for the lifetime of a game."""

    def __init__(self, game, game_id: str, build_order: Optional[Sequence[BuildStep]] = None):
        self.game = game
        self.game_id = game_id
        self.build_order = build_order
        self.delegations: Dict[str, DelegatedBuildingExecution] = {}

    def init(self):
        humans = [p for p in self.game.all_players() if p.type == PlayerType.HUMAN]
        for player in humans:
            if player.id in self.delegations:
                continue
            delegation = DelegatedBuildingExecution(
                self.game_id,
                player.id,
                gold_reserve=DEFAULT_DELEGATION_RESERVE,
                enabled=False,
                build_order=self.build_order,
            )
            self.delegations[player.id] = delegation
            self.game.add_execution(delegation)
        print(f"Building delegation ready for {len(self.delegations)} human player(s)")

    def update_player_delegation(self, player_id: str, gold_reserve: int, enabled: bool) -> bool:
        delegation = self.delegations.get(player_id)
        if delegation is None:
            return False
        delegation.update_settings(gold_reserve, enabled)
        return True

    def get_delegation(self, player_id: str) -> Optional[DelegatedBuildingExecution]:
        return self.delegations.get(player_id)

    def update_all_from_settings(self, settings: DelegationSettings):
        self.update_all_from_direct_settings(settings.enabled, settings.gold_reserve)

    def update_all_from_direct_settings(self, enabled: bool, gold_reserve: int):
        for delegation in self.delegations.values():
            delegation.update_settings(gold_reserve, enabled)
