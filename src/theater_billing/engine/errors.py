"""
Errors raised while pricing and rendering statements.

None of these are recovered inside the library: a statement is either
complete and correct or not produced at all.
"""
from typing import Optional


class StatementError(Exception):
    """Base class for all statement errors."""


class UnknownPlayType(StatementError):
    """A play's type is not one of the recognized play types."""

    def __init__(self, play_type):
        self.play_type = play_type
        super().__init__(f"unknown type: {play_type}")


class UnknownPlay(StatementError, KeyError):
    """A performance references a play ID missing from the catalog."""

    def __init__(self, play_id: str):
        self.play_id = play_id
        super().__init__(f"unknown play: {play_id}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class InvoiceDataError(StatementError):
    """Invoice, play or rate data could not be decoded."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
