# Rule violations raised by the engine. None of them leave state modified.
class EngineError(Exception):
    """Base exception for rejected game actions."""

    pass


class InvalidMove(EngineError):
    """Raised when a move is not in the legal set for the acting piece and player."""

    pass


class NotYourTurn(EngineError):
    """Raised when the acting player is not the player to move."""

    pass


class GameNotInProgress(EngineError):
    """Raised when an action needs a game in a different status."""

    pass
