from __future__ import annotations

from typing import Callable, Sequence

from autonation.content.config import UnitType, debug_print
from autonation.content.constants import (
    BUILD_TILE_EXTRA_SAMPLES,
    BUILD_TILE_SAMPLES,
    EXPANSION_TYPES,
    WARSHIP_SPAWN_RADIUS,
    WARSHIP_SPAWN_TRIES,
    WARSHIP_VETO_ODDS,
    adjusted_trade_ship_rate,
)
from autonation.content.specs import BuildStep
from autonation.game.commands import (
    ConstructionRequest,
    TrainStationRequest,
    UpgradeStructureRequest,
)

DEFENSIVE_TYPES = (UnitType.SAM_LAUNCHER, UnitType.DEFENSE_POST)


class StructurePlanner:
    """
    Build/upgrade decision tree shared by the nation agent and the building
    delegation. Phase 1 walks a capped build order and stops at the first
    action taken; Phase 2 tries a shuffled set of uncapped build and upgrade
    actions. Every spend keeps gold - cost >= gold_reserve().
    """

    def __init__(
        self,
        game,
        player,
        random,
        build_order: Sequence[BuildStep],
        gold_reserve: Callable[[], int],
    ):
        self.game = game
        self.player = player
        self.random = random
        self.build_order = tuple(build_order)
        self.gold_reserve = gold_reserve

    # ---------- Entry point ----------
    def handle_building(self) -> bool:
        for step in self.build_order:
            if self._run_step(step):
                return True
        return self._expand()

    def _run_step(self, step: BuildStep) -> bool:
        if step.kind == "warship":
            return self.maybe_spawn_warship()
        if step.kind == "train_station":
            return self.maybe_spawn_train_station()
        return self.maybe_spawn_structure_capped(step.unit_type, step.cap)

    def _expand(self) -> bool:
        actions = [("build", t) for t in EXPANSION_TYPES] + [("upgrade", t) for t in EXPANSION_TYPES]
        for action, unit_type in self.random.shuffle(actions):
            if action == "build":
                if self.maybe_spawn_structure(unit_type):
                    return True
            elif self.maybe_upgrade_structure_type(unit_type):
                return True
        return False

    # ---------- Economy ----------
    def cost(self, unit_type: UnitType) -> int:
        return self.game.unit_info(unit_type).cost(self.player)

    def can_afford(self, unit_type: UnitType) -> bool:
        return self.player.gold() - self.cost(unit_type) >= self.gold_reserve()

    # ---------- Construction ----------
    def maybe_spawn_structure_capped(self, unit_type: UnitType, cap: int) -> bool:
        if self.player.units_owned(unit_type) >= cap:
            return False
        return self.maybe_spawn_structure(unit_type)

    def maybe_spawn_structure(self, unit_type: UnitType) -> bool:
        if not self.can_afford(unit_type):
            return False
        tile = self.structure_spawn_tile(unit_type)
        if tile is None:
            return False
        if self.player.can_build(unit_type, tile) is False:
            return False
        self.game.add_execution(ConstructionRequest(self.player.id, tile, unit_type))
        debug_print(f"AI build {unit_type.value} at {tile} for {self.player.name}")
        return True

    # ---------- Upgrades ----------
    def maybe_upgrade_structure_type(self, unit_type: UnitType) -> bool:
        info = self.game.unit_info(unit_type)
        if not info.upgradable:
            return False
        units = self.player.units(unit_type)
        if not units:
            return False
        if not self.can_afford(unit_type):
            return False

        best = None
        for unit in units:
            if not self.is_upgrade_beneficial(unit):
                continue
            if best is None or unit.level() < best.level():
                best = unit
        if best is None:
            return False

        self.game.add_execution(UpgradeStructureRequest(self.player.id, best.id))
        debug_print(f"AI upgrade {unit_type.value} {best.id} (level {best.level()}) for {self.player.name}")
        return True

    def is_upgrade_beneficial(self, unit) -> bool:
        if unit.type != UnitType.PORT:
            return True
        # Only worth it while the next level still lowers the spawn denominator
        total_ports = len(self.player.units(UnitType.PORT))
        base_rate = self.game.config().trade_ship_spawn_rate(total_ports)
        level = unit.level()
        return adjusted_trade_ship_rate(base_rate, level + 1) < adjusted_trade_ship_rate(base_rate, level)

    # ---------- Warships & trains ----------
    def maybe_spawn_warship(self) -> bool:
        ports = self.player.units(UnitType.PORT)
        ships = self.player.units(UnitType.WARSHIP)
        if not ports or ships or not self.can_afford(UnitType.WARSHIP):
            return False
        # Only use randomness when we can actually build
        if not self.random.chance(WARSHIP_VETO_ODDS):
            return False

        port = self.random.rand_element(ports)
        tile = self.warship_spawn_tile(port.tile())
        if tile is None:
            return False
        if self.player.can_build(UnitType.WARSHIP, tile) is False:
            print(f"Warning: {self.player.name} cannot spawn warship at {tile}")
            return False
        self.game.add_execution(ConstructionRequest(self.player.id, tile, UnitType.WARSHIP))
        return True

    def maybe_spawn_train_station(self) -> bool:
        if self.game.config().is_unit_disabled(UnitType.TRAIN):
            return False
        hosts = UnitType.station_hosts()
        for unit in self.player.units():
            if unit.type in hosts and not unit.has_train_station():
                self.game.add_execution(TrainStationRequest(self.player.id, unit.id))
                return True
        return False

    # ---------- Tile selection ----------
    def structure_spawn_tile(self, unit_type: UnitType):
        if unit_type == UnitType.PORT:
            # Ports only go on the coast
            territory = [t for t in self.player.border_tiles() if self.game.is_ocean_shore(t)]
        else:
            territory = list(self.player.tiles())
        if not territory:
            return None

        sampled = len(territory) > BUILD_TILE_SAMPLES
        to_check = self._sample_tiles(territory, BUILD_TILE_SAMPLES) if sampled else territory
        candidates = [t for t in to_check if self.player.can_build(unit_type, t) is not False]

        if not candidates:
            if not sampled:
                return None
            extra = self._sample_tiles(territory, BUILD_TILE_EXTRA_SAMPLES)
            candidates = [t for t in extra if self.player.can_build(unit_type, t) is not False]
            if not candidates:
                return None
            return self.random.rand_element(candidates)

        if unit_type in DEFENSIVE_TYPES:
            border = set(self.player.border_tiles())
            on_border = [t for t in candidates if t in border]
            if on_border:
                return self.random.rand_element(on_border)

        return self.random.rand_element(candidates)

    def _sample_tiles(self, tiles: list, count: int) -> list:
        """Draws up to count distinct tiles by rejection sampling on indices."""
        count = min(count, len(tiles))
        seen = set()
        result = []
        while len(result) < count:
            index = self.random.next_int(0, len(tiles))
            if index in seen:
                continue
            seen.add(index)
            result.append(tiles[index])
        return result

    def warship_spawn_tile(self, port_tile):
        x, y = self.game.x(port_tile), self.game.y(port_tile)
        for _ in range(WARSHIP_SPAWN_TRIES):
            rand_x = self.random.next_int(x - WARSHIP_SPAWN_RADIUS, x + WARSHIP_SPAWN_RADIUS)
            rand_y = self.random.next_int(y - WARSHIP_SPAWN_RADIUS, y + WARSHIP_SPAWN_RADIUS)
            if not self.game.is_valid_coord(rand_x, rand_y):
                continue
            tile = self.game.ref(rand_x, rand_y)
            if not self.game.is_ocean(tile):
                continue
            return tile
        return None
