"""Error taxonomy for the match engine.

Strategy misbehavior (StrategyError subclasses) is always absorbed into
scoring as a forfeit and only ever logged or recorded. Caller protocol
violations (MatchStateError subclasses, InvalidArgument) are raised.
"""


class DilemmaError(Exception):
    """Base class for all Dilemma errors."""


# =============================================================================
# Strategy misbehavior (forfeit triggers, never raised to callers)
# =============================================================================


class StrategyError(DilemmaError):
    """A strategy broke the strategy contract.

    Attributes:
        player: Which side misbehaved (1 or 2)
        name: Display name of the strategy
    """

    def __init__(self, player: int, name: str, message: str):
        super().__init__(f"Player {player} ({name}) {message}")
        self.player = player
        self.name = name


class StrategyConstructionFailed(StrategyError):
    """The strategy factory raised or returned something that is not a strategy."""

    def __init__(self, player: int, name: str, cause: BaseException | str):
        super().__init__(player, name, f"could not be constructed: {cause}")


class StrategyNonTermination(StrategyError):
    """The strategy returned without producing a move."""

    def __init__(self, player: int, name: str):
        super().__init__(player, name, "returned without making a move")


class StrategyIllegalMove(StrategyError):
    """The strategy produced a value other than COOPERATE or DEFECT."""

    def __init__(self, player: int, name: str, value: object):
        super().__init__(player, name, f"made an illegal move {value!r} (expected COOPERATE or DEFECT)")
        self.value = value


class StrategyCrashed(StrategyError):
    """The strategy raised while computing its move."""

    def __init__(self, player: int, name: str, cause: BaseException):
        super().__init__(player, name, f"raised {type(cause).__name__}: {cause}")


# =============================================================================
# Caller protocol violations (raised)
# =============================================================================


class MatchStateError(DilemmaError, RuntimeError):
    """A round was requested in a state that does not allow one."""


class AlreadyRunning(MatchStateError):
    """A round advance was requested while another one is in progress."""

    def __init__(self, operation: str = "play_round"):
        super().__init__(f"Match.{operation}: The match is already running.")


class AlreadyDone(MatchStateError):
    """A round advance was requested on a finished match."""

    def __init__(self, operation: str = "play_round"):
        super().__init__(f"Match.{operation}: The match is already over.")


class InvalidArgument(DilemmaError, ValueError):
    """Bad index or round limit."""
