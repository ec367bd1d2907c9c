"""Error taxonomy for the riddle game engine."""


class RiddlerError(Exception):
    """Base class for all recoverable game errors."""


class ServiceUnavailable(RiddlerError):
    """The riddle generation service failed or timed out."""


class InvalidServiceResponse(RiddlerError):
    """The riddle generation service returned malformed content."""


class InvalidStateTransition(RiddlerError):
    """A command was issued against a riddle in the wrong state."""


class InvalidOperation(RiddlerError):
    """A command is not allowed in the current game state."""


class RequestCancelled(RiddlerError):
    """The player interrupted a pending request to the Guardian."""


class PersistenceError(RiddlerError):
    """Base class for save/load failures."""


class SaveNotFoundError(PersistenceError):
    """No save record exists."""


class CorruptSaveError(PersistenceError):
    """A save record exists but is structurally invalid."""


class SaveWriteError(PersistenceError):
    """Writing a save record failed; progress was not saved."""
