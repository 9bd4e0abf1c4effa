"""
Custom exceptions.

Every exception raised on purpose by the application derives from GameError, so the layer above the service
can catch one type. `category` groups them into the four kinds of rejection a client can get back.
"""


class GameError(Exception):
    """Root of all expected (non-fatal) errors."""

    category = "GameError"


# --- Malformed input ---
class ValidationError(GameError):
    category = "ValidationError"


class GameSetupError(ValidationError):
    """Bad player count, mismatched names/icons, duplicate icons, ..."""


class InvalidRequestError(ValidationError):
    """Raised from the pydantic validators of the request models."""


# --- Whose turn is it / is the game running ---
class TurnError(GameError):
    category = "TurnError"


class NotYourTurnError(TurnError):
    pass


class GameNotInProgressError(TurnError):
    pass


# --- Action budget ---
class BudgetError(GameError):
    category = "BudgetError"


class NoActionsLeftError(BudgetError):
    pass


# --- Board / hand state does not allow the action ---
class StateError(GameError):
    category = "StateError"


class PlayerNotFoundError(StateError):
    pass


class BoneNotFoundError(StateError):
    pass


class NoBoneAtPositionError(StateError):
    pass


class HandFullError(StateError):
    pass


class InvalidMoveError(StateError):
    pass


class BoneNotInHandError(StateError):
    pass


class NoMatchingBowlError(StateError):
    pass


class NoBonesOfColorError(StateError):
    pass


class TrackError(StateError):
    """A card that should be on the track is not there."""


class GameModelError(StateError):
    """A persisted GameModel could not be turned back into a Game."""


# --- Persistence ---
class NotFoundError(GameError):
    category = "NotFoundError"


class GameNotFoundError(NotFoundError):
    pass
