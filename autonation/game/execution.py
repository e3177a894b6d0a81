class NotInitializedError(RuntimeError):
    """Raised when an execution acts before init() bound it to a game."""


class Execution:
    """
    Scheduled unit of agent behaviour.

    The driver calls init(game, ticks) once, then tick(ticks) every step while
    is_active() is True. During the pre-game spawn phase only executions whose
    active_during_spawn_phase() is True are ticked.
    """

    def __init__(self):
        self.active = True
        self.game = None

    def init(self, game, ticks: int):
        self.game = game

    def tick(self, ticks: int):
        raise NotImplementedError

    def is_active(self) -> bool:
        return self.active

    def active_during_spawn_phase(self) -> bool:
        return False

    def deactivate(self):
        self.active = False

    def _require_game(self):
        if self.game is None:
            raise NotInitializedError(f"{type(self).__name__} ticked before init()")
        return self.game
