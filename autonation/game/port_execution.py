from autonation.content.config import UnitType
from autonation.content.constants import PORT_CHECK_INTERVAL, adjusted_trade_ship_rate
from autonation.game.commands import TradeShipRequest
from autonation.game.execution import Execution, NotInitializedError
from autonation.game.pseudo_random import PseudoRandom


class PortExecution(Execution):
    """Builds a port on first tick, then periodically sends trade ships from it."""

    def __init__(self, player, tile):
        super().__init__()
        self.player = player
        self.tile = tile
        self.port = None
        self.random = None
        self.check_offset = None

    def init(self, game, ticks: int):
        super().init(game, ticks)
        self.random = PseudoRandom(game.ticks())
        self.check_offset = game.ticks() % PORT_CHECK_INTERVAL

    def tick(self, ticks: int):
        game = self._require_game()
        if self.random is None or self.check_offset is None:
            raise NotInitializedError("PortExecution ticked before init()")

        if self.port is None:
            spawn = self.player.can_build(UnitType.PORT, self.tile)
            if spawn is False:
                print(f"Warning: player {self.player.id} cannot build port at {self.tile}")
                self.deactivate()
                return
            self.port = self.player.build_unit(UnitType.PORT, spawn)

        if not self.port.is_active():
            self.deactivate()
            return

        # Follow the port if it was captured
        if self.player.id != self.port.owner().id:
            self.player = self.port.owner()

        # Only check every few ticks for performance
        if (game.ticks() + self.check_offset) % PORT_CHECK_INTERVAL != 0:
            return

        if not self.random.chance(self.spawn_rate()):
            return

        ports = self.player.trading_ports(self.port)
        if not ports:
            return
        destination = self.random.rand_element(ports)
        game.add_execution(TradeShipRequest(self.player.id, self.port.id, destination.id))

    def spawn_rate(self) -> int:
        total_ports = len(self.game.units(UnitType.PORT))
        base_rate = self.game.config().trade_ship_spawn_rate(total_ports)
        return adjusted_trade_ship_rate(base_rate, self.port.level())
