import pytest

from autonation.content.config import TerrainType, UnitType
from autonation.game.commands import TradeShipRequest
from autonation.game.execution import NotInitializedError
from autonation.game.port_execution import PortExecution
from fake_world import FakeGame


def _world(ticks=0):
    game = FakeGame(width=20, height=10, ticks=ticks)
    game.paint(0, 0, 0, 9, terrain=TerrainType.OCEAN)
    owner = game.add_player("n1")
    partner = game.add_player("n2")
    game.paint(1, 0, 5, 9, owner=owner)
    game.paint(6, 0, 10, 9, owner=partner)
    partner_port = partner.add_unit(UnitType.PORT, game.ref(6, 0))
    return game, owner, partner, partner_port


def _port_execution(game, player, tile, ticks=None):
    execution = PortExecution(player, tile)
    execution.init(game, game.ticks() if ticks is None else ticks)
    return execution


def _check_ticks(execution, count=5):
    """Ticks on which the port rolls for a trade ship."""
    offset = execution.check_offset
    return [t for t in range(200) if (t + offset) % 10 == 0][:count]


def test_offset_comes_from_creation_tick():
    game, owner, _partner, _port = _world(ticks=37)
    execution = _port_execution(game, owner, game.ref(1, 3))

    assert execution.check_offset == 7
    assert execution.random.seed == 37


def test_tick_before_init_raises():
    game, owner, _partner, _port = _world()
    execution = PortExecution(owner, game.ref(1, 3))

    with pytest.raises(NotInitializedError):
        execution.tick(0)


def test_unbuildable_tile_deactivates(capsys):
    game, owner, _partner, _port = _world()
    execution = _port_execution(game, owner, game.ref(3, 3))

    execution.tick(0)

    assert execution.is_active() is False
    assert "cannot build port" in capsys.readouterr().out


def test_port_built_on_first_tick():
    game, owner, _partner, _port = _world()
    execution = _port_execution(game, owner, game.ref(1, 3))

    execution.tick(0)

    assert execution.port is not None
    assert owner.units(UnitType.PORT) == [execution.port]


def test_trade_ship_sent_on_check_ticks(monkeypatch):
    game, owner, _partner, partner_port = _world()
    execution = _port_execution(game, owner, game.ref(1, 3))
    execution.tick(0)
    monkeypatch.setattr(execution.random, "chance", lambda odds: True)
    game.added.clear()

    for t in range(1, 40):
        game.set_ticks(t)
        execution.tick(t)

    checks = [t for t in range(1, 40) if (t + execution.check_offset) % 10 == 0]
    expected = TradeShipRequest("n1", execution.port.id, partner_port.id)
    assert game.commands() == [expected] * len(checks)


def test_no_trade_ship_without_partners(monkeypatch):
    game, owner, partner, _partner_port = _world()
    partner.unit_list = []
    execution = _port_execution(game, owner, game.ref(1, 3))
    execution.tick(0)
    monkeypatch.setattr(execution.random, "chance", lambda odds: True)

    for t in _check_ticks(execution):
        game.set_ticks(t)
        execution.tick(t)

    assert game.commands() == []


def test_destroyed_port_deactivates():
    game, owner, _partner, _port = _world()
    execution = _port_execution(game, owner, game.ref(1, 3))
    execution.tick(0)

    execution.port.active = False
    execution.tick(1)

    assert execution.is_active() is False


def test_captured_port_trades_for_new_owner(monkeypatch):
    game, owner, partner, _partner_port = _world()
    execution = _port_execution(game, owner, game.ref(1, 3))
    execution.tick(0)
    monkeypatch.setattr(execution.random, "chance", lambda odds: True)
    third = game.add_player("n3")
    third.add_unit(UnitType.PORT, game.ref(15, 5))
    execution.port._owner = partner
    game.added.clear()

    check = _check_ticks(execution)[1]
    game.set_ticks(check)
    execution.tick(check)

    assert execution.player is partner
    [request] = game.commands()
    assert request.player_id == "n2"


def test_spawn_rate_improves_with_level():
    game, owner, _partner, _port = _world()
    execution = _port_execution(game, owner, game.ref(1, 3))
    execution.tick(0)

    # Two ports in the game: base rate round(10 * 2 ** 0.6) = 15
    assert execution.spawn_rate() == 15
    execution.port._level = 2
    assert execution.spawn_rate() == 10
    execution.port._level = 3
    assert execution.spawn_rate() == 7
