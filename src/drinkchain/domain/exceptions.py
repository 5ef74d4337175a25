class DrinkChainError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnreachableError(DrinkChainError):
    """The generative backend could not be reached or failed the request."""


class UnparseableError(DrinkChainError):
    """A backend payload failed decoding or structural validation."""


class PersistenceError(DrinkChainError):
    """Durable storage could not be read or written."""


class NotFoundError(DrinkChainError):
    """Requested resource does not exist."""


class ConflictError(DrinkChainError):
    """Operation conflicts with current state (e.g. a chat turn already in flight)."""
