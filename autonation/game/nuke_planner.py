from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

from autonation.content.config import PlayerType, UnitType, debug_print
from autonation.content.constants import (
    MASS_RETALIATION_COOLDOWN,
    MASS_RETALIATION_TROOP_FACTOR,
    NUKE_FALLBACK_VALUE,
    NUKE_HIGH_VALUE,
    NUKE_RANDOM_SAMPLE_TRIES,
    NUKE_RANDOM_SAMPLES,
    NUKE_RECENT_TARGET_PENALTY,
    NUKE_RECENT_WINDOW,
    NUKE_SAFE_RADIUS,
    NUKE_SAFE_RADIUS_UNDER_THREAT,
    NUKE_SAM_PENALTY,
    NUKE_SAM_RADIUS,
    NUKE_SCORE_RADIUS,
    NUKE_SILO_DISTANCE_PENALTY,
    NUKE_STRUCTURE_VALUES,
    NUKE_TARGET_TYPES,
    THREAT_INCOMING_FRACTION,
    THREAT_TERRITORY_RATIO,
    THREAT_TROOP_RATIO,
)
from autonation.content.utils import (
    calculate_bounding_box,
    eucl_dist_fn,
    manhattan_dist_fn,
    round_half_up,
)
from autonation.game.commands import NukeRequest

NUKE_WEAPONS = (UnitType.ATOM_BOMB, UnitType.HYDROGEN_BOMB, UnitType.MIRV)


class NukePlanner:
    """
    Threat assessment and nuclear targeting for one nation.

    Keeps two pieces of bookkeeping between ticks: the recently targeted tiles
    (sliding window of NUKE_RECENT_WINDOW ticks) and the last mass-retaliation
    tick per adversary.
    """

    def __init__(self, game, player, random, structure_values: Optional[Dict[UnitType, int]] = None):
        self.game = game
        self.player = player
        self.random = random
        self.structure_values = dict(structure_values or NUKE_STRUCTURE_VALUES)
        self.recent_nukes: List[Tuple[int, object]] = []
        self.last_mass_retaliation: Dict[str, int] = {}

    # ---------- Threat assessment ----------
    def incoming_troops_from(self, enemy) -> float:
        return sum(
            attack.troops() for attack in self.player.incoming_attacks()
            if attack.attacker() is enemy and attack.is_active()
        )

    def is_existential_threat(self, enemy) -> bool:
        territory_ratio = enemy.num_tiles_owned() / max(1, self.player.num_tiles_owned())
        if territory_ratio > THREAT_TERRITORY_RATIO:
            return True
        troop_ratio = enemy.troops() / max(1, self.player.troops())
        if troop_ratio > THREAT_TROOP_RATIO:
            return True
        return self.incoming_troops_from(enemy) > self.player.troops() * THREAT_INCOMING_FRACTION

    def is_active_attacker(self, enemy) -> bool:
        for attack in self.player.incoming_attacks():
            if attack.attacker() is enemy and attack.is_active():
                return True

        for execution in self.game.executions():
            if isinstance(execution, NukeRequest):
                # Queued strike, not yet running
                if execution.player_id == enemy.id and self.game.owner(execution.tile) is self.player:
                    return True
                continue
            if getattr(execution, "weapon", None) not in NUKE_WEAPONS:
                continue
            owner = getattr(execution, "owner", None)
            if not callable(owner) or not callable(getattr(execution, "target", None)):
                continue
            if owner() is not enemy:
                continue
            try:
                target = execution.target()
            except RuntimeError:
                # Strike not initialized yet
                continue
            if target is self.player:
                return True
        return False

    # ---------- Candidates ----------
    def rand_territory_tile(self, enemy):
        box = calculate_bounding_box(self.game, enemy.border_tiles())
        for _ in range(NUKE_RANDOM_SAMPLE_TRIES):
            x = self.random.next_int(box.min.x, box.max.x + 1)
            y = self.random.next_int(box.min.y, box.max.y + 1)
            if not self.game.is_valid_coord(x, y):
                continue
            tile = self.game.ref(x, y)
            if self.game.owner(tile) is enemy:
                return tile
        return None

    def candidate_tiles(self, enemy, structures) -> list:
        sampled = [self.rand_territory_tile(enemy) for _ in range(NUKE_RANDOM_SAMPLES)]
        ordered = []
        seen = set()
        for tile in sampled + [u.tile() for u in structures]:
            if tile is None or tile in seen:
                continue
            seen.add(tile)
            ordered.append(tile)
        return ordered

    def is_feasible(self, tile, enemy, radius: int) -> bool:
        """Every tile within radius of the target must still belong to the enemy."""
        for t in self.game.bfs(tile, manhattan_dist_fn(tile, radius)):
            if self.game.owner(t) is not enemy:
                return False
        return True

    # ---------- Scoring ----------
    def remove_old_nuke_events(self):
        now = self.game.ticks()
        while self.recent_nukes and self.recent_nukes[0][0] + NUKE_RECENT_WINDOW < now:
            self.recent_nukes.pop(0)

    def nuke_tile_score(self, tile, silos, targets) -> int:
        in_blast = eucl_dist_fn(tile, NUKE_SCORE_RADIUS)
        value = sum(
            self.structure_values.get(unit.type, 0)
            for unit in targets if in_blast(self.game, unit.tile())
        )

        # Avoid areas defended by SAM launchers
        in_sam_range = eucl_dist_fn(tile, NUKE_SAM_RADIUS)
        value -= NUKE_SAM_PENALTY * sum(
            1 for unit in targets
            if unit.type == UnitType.SAM_LAUNCHER and in_sam_range(self.game, unit.tile())
        )

        # Prefer tiles close to one of our silos
        if silos:
            closest = min(self.game.euclidean_dist_squared(tile, s.tile()) for s in silos)
            value -= math.floor(math.sqrt(closest) * NUKE_SILO_DISTANCE_PENALTY)

        # Don't target near recent targets
        value -= NUKE_RECENT_TARGET_PENALTY * sum(
            1 for _tick, recent in self.recent_nukes if in_blast(self.game, recent)
        )
        return value

    def best_target(self, enemy, silos, structures, under_threat: bool):
        radius = NUKE_SAFE_RADIUS_UNDER_THREAT if under_threat else NUKE_SAFE_RADIUS
        best_tile = None
        best_value = 0
        for tile in self.candidate_tiles(enemy, structures):
            if not self.is_feasible(tile, enemy, radius):
                continue
            value = self.nuke_tile_score(tile, silos, structures)
            if value > best_value:
                best_tile = tile
                best_value = value
        return best_tile, best_value

    # ---------- Launch ----------
    def cost(self, unit_type: UnitType) -> int:
        return self.game.unit_info(unit_type).cost(self.player)

    def choose_weapon(self, enemy, value: int, budget: int) -> Optional[UnitType]:
        existential = self.is_existential_threat(enemy)
        high_value = value > NUKE_HIGH_VALUE
        enemy_has_sams = len(enemy.units(UnitType.SAM_LAUNCHER)) > 0

        if budget >= self.cost(UnitType.MIRV) and (existential or (high_value and enemy_has_sams)):
            return UnitType.MIRV
        if budget >= self.cost(UnitType.HYDROGEN_BOMB) and high_value:
            return UnitType.HYDROGEN_BOMB
        if budget >= self.cost(UnitType.ATOM_BOMB):
            return UnitType.ATOM_BOMB
        return None

    def send_smart_nuke(self, tile, enemy, value: int, budget: int) -> int:
        """Emits the best affordable strike on tile; returns the gold it commits (0 if none)."""
        weapon = self.choose_weapon(enemy, value, budget)
        if weapon is None:
            return 0
        self.game.add_execution(NukeRequest(self.player.id, weapon, tile))
        self.recent_nukes.append((self.game.ticks(), tile))
        debug_print(f"AI {self.player.name} launches {weapon.value} at {tile} (score {value})")
        return self.cost(weapon)

    def launch_count(self, enemy, ready_silos) -> int:
        if not self.is_active_attacker(enemy):
            return 1
        now = self.game.ticks()
        incoming = self.incoming_troops_from(enemy)
        last = self.last_mass_retaliation.get(enemy.id)
        cooled_down = last is None or now - last >= MASS_RETALIATION_COOLDOWN
        if incoming > self.player.troops() * MASS_RETALIATION_TROOP_FACTOR and cooled_down:
            self.last_mass_retaliation[enemy.id] = now
            print(f"AI {self.player.name} mass retaliation against {enemy.name}")
        return len(ready_silos)

    def maybe_send_nuke(self, enemy) -> int:
        """Returns the number of strikes emitted this tick."""
        silos = self.player.units(UnitType.MISSILE_SILO)
        if not silos or enemy.type == PlayerType.BOT or self.player.is_on_same_team(enemy):
            return 0

        under_threat = self.is_existential_threat(enemy)
        structures = enemy.units(*NUKE_TARGET_TYPES)
        self.remove_old_nuke_events()
        best_tile, best_value = self.best_target(enemy, silos, structures, under_threat)

        ready_silos = [s for s in silos if not s.is_in_cooldown()]
        launches = self.launch_count(enemy, ready_silos)
        budget = self.player.gold()

        if best_tile is not None:
            cheapest = self.cost(UnitType.ATOM_BOMB)
            launched = 0
            while launched < launches and launched < len(ready_silos):
                if budget < cheapest:
                    break
                spent = self.send_smart_nuke(best_tile, enemy, best_value, budget)
                if spent == 0:
                    break
                budget -= spent
                launched += 1
            return launched

        if under_threat:
            return self._fallback_strike(enemy, budget)
        return 0

    def _fallback_strike(self, enemy, budget: int) -> int:
        # Nuke the centre of the biggest incoming attack stack
        incoming = [
            a for a in self.player.incoming_attacks()
            if a.attacker() is enemy and a.is_active()
        ]
        if not incoming:
            return 0
        largest = incoming[0]
        for attack in incoming[1:]:
            if attack.troops() > largest.troops():
                largest = attack
        pos = largest.average_position()
        if pos is None:
            return 0
        x, y = round_half_up(pos.x), round_half_up(pos.y)
        if not self.game.is_valid_coord(x, y):
            return 0
        spent = self.send_smart_nuke(self.game.ref(x, y), enemy, NUKE_FALLBACK_VALUE, budget)
        return 1 if spent else 0
