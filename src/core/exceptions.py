"""
Custom exceptions.

Every layer raises a subclass of GameError, so whatever transport sits on top only needs a single except clause
to turn them into error responses for the submitting player.
"""


class GameError(Exception):
    """Top level exception of the application."""


# --- INPUT ---
class InvalidRequestError(GameError):
    """Malformed request data (wrong board length, unknown square code, ...)"""


# --- RULE VALIDATION ---
class IllegalMoveError(GameError):
    """The submitted board cannot be reached from the previous one by a legal move."""


class IllegalCaptureError(IllegalMoveError):
    """The piece cannot capture on the destination square."""


class IllegalPieceError(IllegalMoveError):
    """The squares that changed do not describe a move of one of your own pieces."""


class IllegalCastleError(IllegalMoveError):
    """Castling is not allowed, or the king and rook did not end up on the right squares."""


class SelfCheckError(IllegalMoveError):
    """The move leaves your own king under attack."""


# --- TURN ORDER / GAME STATE ---
class NotYourTurnError(GameError):
    """Round number or color does not match the turn order."""


class GameStateError(GameError):
    """The game is not in a state that allows the requested action."""


# --- LOOKUPS ---
class NotFoundError(GameError):
    """Requested record does not exist."""


class GameNotFoundError(NotFoundError):
    pass


class PlayerNotFoundError(NotFoundError):
    pass


# --- PERSISTENCE ---
class RepositoryError(GameError):
    """Anything that went wrong on the storage side."""


class PersistenceError(RepositoryError):
    """The storage layer failed to read/write. Not retried here: caller decides."""
