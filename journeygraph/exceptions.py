"""Exceptions raised inside the journey graph core."""


class JourneyGraphError(Exception):
    """Base exception for all journey graph errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class PersistenceError(JourneyGraphError):
    """A blob store could not read or write a slot.

    Raised by blob stores; JourneyRepository catches it at the boundary so
    the in-memory model stays usable.
    """

    def __init__(self, message: str, slot: str | None = None) -> None:
        self.slot = slot
        super().__init__(message)
