import pytest

from autonation.content.config import PlayerType, TerrainType, UnitType
from autonation.content.utils import simple_hash
from autonation.game.commands import ConstructionRequest, TrainStationRequest, UpgradeStructureRequest
from autonation.game.delegated_building import DelegatedBuildingExecution
from autonation.game.execution import NotInitializedError
from fake_world import FakeGame


def _world(gold=1_000_000, player_type=PlayerType.HUMAN):
    game = FakeGame(width=20, height=10)
    game.paint(0, 0, 0, 9, terrain=TerrainType.OCEAN)
    player = game.add_player("h1", player_type=player_type, gold=gold)
    game.paint(1, 0, 5, 9, owner=player)
    return game, player


def _delegation(game, **kwargs):
    delegation = DelegatedBuildingExecution("game-1", "h1", **kwargs)
    delegation.init(game, 0)
    return delegation


def _eligible(delegation, n=0):
    return delegation.build_tick + n * delegation.build_rate


def test_seed_and_cadence():
    delegation = DelegatedBuildingExecution("game-1", "h1")

    assert delegation.random.seed == simple_hash("h1") + simple_hash("game-1") + 42
    assert 30 <= delegation.build_rate < 60
    assert 0 <= delegation.build_tick < delegation.build_rate
    assert delegation.enabled is False
    assert delegation.gold_reserve == 500_000


def test_tick_before_init_raises():
    delegation = DelegatedBuildingExecution("game-1", "h1", enabled=True)

    with pytest.raises(NotInitializedError):
        delegation.tick(0)


def test_disabled_delegation_does_nothing():
    game, _player = _world()
    delegation = _delegation(game)

    delegation.tick(_eligible(delegation))

    assert game.commands() == []


def test_enabled_delegation_builds_a_port_first():
    game, _player = _world()
    delegation = _delegation(game, enabled=True)

    delegation.tick(_eligible(delegation))

    [request] = game.commands()
    assert request == ConstructionRequest("h1", request.tile, UnitType.PORT)
    assert game.is_ocean_shore(request.tile)


def test_off_cadence_ticks_are_ignored():
    game, _player = _world()
    delegation = _delegation(game, enabled=True)

    for t in range(delegation.build_rate):
        if t != delegation.build_tick:
            delegation.tick(t)

    assert game.commands() == []


def test_gold_at_or_below_reserve_is_left_alone():
    game, _player = _world(gold=500_000)
    delegation = _delegation(game, enabled=True)

    delegation.tick(_eligible(delegation))

    assert game.commands() == []


def test_reserve_is_respected_when_spending():
    # Above the reserve but a port would dig into it
    game, _player = _world(gold=600_000)
    delegation = _delegation(game, enabled=True)

    delegation.tick(_eligible(delegation))

    assert game.commands() == []


def test_only_human_players_are_served():
    game, _player = _world(player_type=PlayerType.NATION)
    delegation = _delegation(game, enabled=True)

    delegation.tick(_eligible(delegation))

    assert game.commands() == []
    assert delegation.player is None
    assert delegation.is_active()


def test_settings_update_applies_on_next_tick_without_reseeding():
    game, _player = _world(gold=2_000_000)
    delegation = _delegation(game)
    seed, rate, offset = delegation.random.seed, delegation.build_rate, delegation.build_tick

    delegation.tick(_eligible(delegation, 0))
    assert game.commands() == []

    delegation.update_settings(1_000_000, True)
    delegation.tick(_eligible(delegation, 1))

    assert len(game.commands(ConstructionRequest)) == 1
    assert (delegation.random.seed, delegation.build_rate, delegation.build_tick) == (seed, rate, offset)
    assert delegation.gold_reserve == 1_000_000


def test_dead_player_deactivates():
    game, player = _world()
    delegation = _delegation(game, enabled=True)
    delegation.tick(_eligible(delegation, 0))

    player.alive = False
    delegation.tick(_eligible(delegation, 1))

    assert delegation.is_active() is False


def test_only_building_commands_are_emitted():
    game, player = _world(gold=50_000_000)
    player.add_unit(UnitType.PORT, game.ref(1, 2))
    player.add_unit(UnitType.CITY, game.ref(3, 3))
    delegation = _delegation(game, enabled=True)

    for n in range(20):
        delegation.tick(_eligible(delegation, n))

    allowed = (ConstructionRequest, UpgradeStructureRequest, TrainStationRequest)
    assert game.commands()
    assert all(isinstance(c, allowed) for c in game.commands())


def test_player_dead_before_first_lookup_deactivates():
    game, player = _world()
    player.alive = False
    delegation = _delegation(game, enabled=True)

    delegation.tick(_eligible(delegation))

    assert delegation.is_active() is False
    assert game.commands() == []
