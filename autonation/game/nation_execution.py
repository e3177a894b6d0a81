from __future__ import annotations

from typing import Dict, Optional, Set

from autonation.content.config import Difficulty, PlayerType, Relation, TerrainType, UnitType, debug_print
from autonation.content.constants import (
    ALLIANCE_OFFER_ODDS,
    BOAT_TROOP_DIVISOR,
    EMBARGO_RELATION_MALUS,
    EMOJI_COOLDOWN,
    EXPLORE_BOAT_ODDS,
    FRIENDLY_ATTACK_ODDS,
    FRIENDLY_DISCOURAGED_ATTACK_ODDS,
    HECKLE_EMOJI,
    HOSTILE_DISCOURAGED_ATTACK_ODDS,
    NATION_ATTACK_RATE_RANGE,
    NATION_RESERVE_RATIO_RANGE,
    NATION_TRIGGER_RATIO_RANGE,
    NO_BORDER_BOAT_ODDS,
    RANDOM_BOAT_DISTANCE,
    RANDOM_BOAT_TRIES,
    RESERVE_BUILDING_STEP,
    RESERVE_MAX,
    RESERVE_MIN,
    RESERVE_PER_BUILDING_STEP,
    SPAWN_SEARCH_RADIUS,
    SPAWN_SEARCH_TRIES,
    TROOP_CAP_THRESHOLD,
    TROOP_RATIO_CAP,
    WEAKEST_TARGET_ODDS,
)
from autonation.content.specs import AIProfile, NationSpec
from autonation.content.utils import closest_two_tiles, simple_hash
from autonation.game.behavior import BotBehavior
from autonation.game.commands import (
    AllianceRequest,
    EmbargoRequest,
    EmojiRequest,
    RelationChange,
    SpawnRequest,
    TargetTroopRatioRequest,
    TransportShipRequest,
)
from autonation.game.execution import Execution, NotInitializedError
from autonation.game.nuke_planner import NukePlanner
from autonation.game.pseudo_random import PseudoRandom
from autonation.game.structure_planner import StructurePlanner


class NationExecution(Execution):
    """
    Full autonomous agent for a computer-controlled nation.

    Acts once every attack_rate ticks (staggered by attack_tick): spawns during
    the spawn phase, opens with an attack on terra nullius, then each eligible
    tick updates relations, answers alliance requests, handles its current
    enemy (taunts, nukes, attacks), builds, manages embargoes and decides on a
    general attack.
    """

    def __init__(self, game_id: str, nation: NationSpec, profile: Optional[AIProfile] = None, salt: int = 0):
        super().__init__()
        self.game_id = game_id
        self.nation = nation
        self.profile = profile or AIProfile.default()
        self.random = PseudoRandom(simple_hash(nation.player_id) + simple_hash(game_id) + salt)

        self.attack_rate = self.random.next_int(*NATION_ATTACK_RATE_RANGE)
        self.attack_tick = self.random.next_int(0, self.attack_rate)
        self.trigger_ratio = self.random.next_int(*NATION_TRIGGER_RATIO_RANGE) / 100
        self.reserve_ratio = self.random.next_int(*NATION_RESERVE_RATIO_RANGE) / 100

        self.player = None
        self.behavior: Optional[BotBehavior] = None
        self.planner: Optional[StructurePlanner] = None
        self.nukes: Optional[NukePlanner] = None
        self.first_move = True
        self.last_emoji_sent: Dict[str, int] = {}
        self.embargo_malus_applied: Set[str] = set()

    def active_during_spawn_phase(self) -> bool:
        return True

    # ---------- Tick ----------
    def tick(self, ticks: int):
        game = self._require_game()
        if ticks % self.attack_rate != self.attack_tick:
            return

        if game.in_spawn_phase():
            tile = self.random_land()
            if tile is None:
                print(f"Warning: cannot spawn {self.nation.name}")
                return
            game.add_execution(SpawnRequest(self.nation.player_id, tile))
            return

        if self.player is None:
            self.player = self._find_player()
            if self.player is None:
                return

        if not self.player.is_alive():
            self.deactivate()
            return

        if self.behavior is None:
            self._bind_player()

        if self.first_move:
            self.first_move = False
            self.behavior.send_attack(game.terra_nullius())
            return

        if self.player.troops() > TROOP_CAP_THRESHOLD and self.player.target_troop_ratio() > TROOP_RATIO_CAP:
            game.add_execution(TargetTroopRatioRequest(self.player.id, TROOP_RATIO_CAP))

        self.update_relations_from_embargoes()
        self.behavior.handle_alliance_requests()
        self.handle_enemies()
        self.handle_units()
        self.handle_embargoes_to_hostile_nations()
        self.maybe_attack()

    def _find_player(self):
        for p in self.game.all_players():
            if p.id == self.nation.player_id:
                return p
        return None

    def _bind_player(self):
        # The player object only exists once spawned, so helpers are built lazily
        self.behavior = BotBehavior(self.random, self.game, self.player, self.trigger_ratio, self.reserve_ratio)
        self.planner = StructurePlanner(
            self.game, self.player, self.random, self.profile.nation_build_order, self.gold_reserve,
        )
        self.nukes = NukePlanner(self.game, self.player, self.random, self.profile.nuke_structure_values)

    def _require_player(self):
        if self.player is None or self.behavior is None:
            raise NotInitializedError(f"{self.nation.name} has no bound player")
        return self.player

    def _others(self):
        player = self._require_player()
        return [p for p in self.game.players() if p.id != player.id]

    # ---------- Relations & embargoes ----------
    def update_relations_from_embargoes(self):
        player = self._require_player()
        for other in self._others():
            embargoed = other.has_embargo_against(player)
            if embargoed and other.id not in self.embargo_malus_applied:
                self.game.add_execution(RelationChange(player.id, other.id, EMBARGO_RELATION_MALUS))
                self.embargo_malus_applied.add(other.id)
            elif not embargoed and other.id in self.embargo_malus_applied:
                self.game.add_execution(RelationChange(player.id, other.id, -EMBARGO_RELATION_MALUS))
                self.embargo_malus_applied.discard(other.id)

    def handle_embargoes_to_hostile_nations(self):
        player = self._require_player()
        for other in self._others():
            # Start at hostile, do not stop until neutral again
            relation = player.relation(other)
            if relation <= Relation.HOSTILE and not player.has_embargo_against(other):
                self.game.add_execution(EmbargoRequest(player.id, other.id, True))
            elif relation >= Relation.NEUTRAL and player.has_embargo_against(other):
                self.game.add_execution(EmbargoRequest(player.id, other.id, False))

    # ---------- Economy ----------
    def gold_reserve(self) -> int:
        player = self._require_player()
        levels = sum(unit.level() for unit in player.units(*UnitType.buildings()))
        reserve = (levels // RESERVE_BUILDING_STEP) * RESERVE_PER_BUILDING_STEP
        return min(max(reserve, RESERVE_MIN), RESERVE_MAX)

    def handle_units(self) -> bool:
        self._require_player()
        return self.planner.handle_building()

    # ---------- Enemies ----------
    def handle_enemies(self):
        player = self._require_player()
        self.behavior.forget_old_enemies()
        self.behavior.assist_allies()
        enemy = self.behavior.select_enemy()
        if enemy is None:
            return
        self.maybe_send_emoji(enemy)
        self.nukes.maybe_send_nuke(enemy)
        if player.shares_border_with(enemy):
            self.behavior.send_attack(enemy)
        else:
            self.maybe_send_boat_attack(enemy)

    def maybe_send_emoji(self, enemy) -> bool:
        player = self._require_player()
        if enemy.type != PlayerType.HUMAN:
            return False
        now = self.game.ticks()
        last_sent = self.last_emoji_sent.get(enemy.id, -EMOJI_COOLDOWN)
        if now - last_sent <= EMOJI_COOLDOWN:
            return False
        self.last_emoji_sent[enemy.id] = now
        emoji = self.random.rand_element(HECKLE_EMOJI)
        self.game.add_execution(EmojiRequest(player.id, enemy.id, emoji))
        return True

    def maybe_send_boat_attack(self, enemy) -> bool:
        player = self._require_player()
        if player.is_on_same_team(enemy):
            return False
        closest = closest_two_tiles(
            self.game,
            [t for t in player.border_tiles() if self.game.is_ocean_shore(t)],
            [t for t in enemy.border_tiles() if self.game.is_ocean_shore(t)],
        )
        if closest is None:
            return False
        _src, dst = closest
        self.game.add_execution(
            TransportShipRequest(player.id, enemy.id, dst, player.troops() / BOAT_TROOP_DIVISOR)
        )
        return True

    # ---------- General attack ----------
    def maybe_attack(self):
        player = self._require_player()
        game = self.game
        enemy_border = [
            t for border in player.border_tiles() for t in game.neighbors(border)
            if game.is_land(t) and game.owner(t) is not player
        ]

        if not enemy_border:
            if self.random.chance(NO_BORDER_BOAT_ODDS):
                self.send_boat_randomly()
            return
        if self.random.chance(EXPLORE_BOAT_ODDS):
            self.send_boat_randomly()
            return

        owners = [game.owner(t) for t in enemy_border]
        if any(not o.is_player() for o in owners):
            self.behavior.send_attack(game.terra_nullius())
            return

        enemies = sorted(owners, key=lambda o: o.troops())

        if self.random.chance(ALLIANCE_OFFER_ODDS):
            to_ally = self.random.rand_element(enemies)
            if player.can_send_alliance_request(to_ally):
                game.add_execution(AllianceRequest(player.id, to_ally.id))
                return

        # 50-50 attack weakest player vs random player
        if self.random.chance(WEAKEST_TARGET_ODDS):
            target = enemies[0]
        else:
            target = self.random.rand_element(enemies)
        if self.should_attack(target):
            self.behavior.send_attack(target)

    def should_attack(self, other) -> bool:
        player = self._require_player()
        if player.is_on_same_team(other):
            return False
        discouraged = self.should_discourage_attack(other)
        if player.is_friendly(other):
            if discouraged:
                return self.random.chance(FRIENDLY_DISCOURAGED_ATTACK_ODDS)
            return self.random.chance(FRIENDLY_ATTACK_ODDS)
        if discouraged:
            return self.random.chance(HOSTILE_DISCOURAGED_ATTACK_ODDS)
        return True

    def should_discourage_attack(self, other) -> bool:
        # Only humans who are not traitors, on easy or medium
        if other.is_traitor():
            return False
        if self.game.config().difficulty() in (Difficulty.HARD, Difficulty.IMPOSSIBLE):
            return False
        return other.type == PlayerType.HUMAN

    # ---------- Boats ----------
    def send_boat_randomly(self) -> bool:
        player = self._require_player()
        shore = [t for t in player.border_tiles() if self.game.is_ocean_shore(t)]
        if not shore:
            return False
        src = self.random.rand_element(shore)
        dst = self.rand_ocean_shore_tile(src, RANDOM_BOAT_DISTANCE)
        if dst is None:
            return False
        owner = self.game.owner(dst)
        target_id = owner.id if owner.is_player() else None
        self.game.add_execution(
            TransportShipRequest(player.id, target_id, dst, player.troops() / BOAT_TROOP_DIVISOR)
        )
        debug_print(f"AI {player.name} sends a boat to {dst}")
        return True

    def rand_ocean_shore_tile(self, tile, dist: int):
        player = self._require_player()
        x, y = self.game.x(tile), self.game.y(tile)
        for _ in range(RANDOM_BOAT_TRIES):
            rand_x = self.random.next_int(x - dist, x + dist)
            rand_y = self.random.next_int(y - dist, y + dist)
            if not self.game.is_valid_coord(rand_x, rand_y):
                continue
            candidate = self.game.ref(rand_x, rand_y)
            if not self.game.is_ocean_shore(candidate):
                continue
            owner = self.game.owner(candidate)
            if not owner.is_player() or not owner.is_friendly(player):
                return candidate
        return None

    # ---------- Spawn ----------
    def random_land(self):
        cell = self.nation.spawn_cell
        game = self.game
        for _ in range(SPAWN_SEARCH_TRIES):
            x = self.random.next_int(cell.x - SPAWN_SEARCH_RADIUS, cell.x + SPAWN_SEARCH_RADIUS)
            y = self.random.next_int(cell.y - SPAWN_SEARCH_RADIUS, cell.y + SPAWN_SEARCH_RADIUS)
            if not game.is_valid_coord(x, y):
                continue
            tile = game.ref(x, y)
            if not game.is_land(tile) or game.has_owner(tile):
                continue
            if game.terrain_type(tile) == TerrainType.MOUNTAIN and self.random.chance(2):
                continue
            return tile
        return None
