from __future__ import annotations

"""Error taxonomy for content fetching and exam setup.

Every error carries a message fit for display next to a retry action.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for provider and setup failures."""

    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class DataUnavailable(ServiceError):
    default_message = "The question database is not configured or cannot be reached."


class NoData(ServiceError):
    default_message = "No data found in the database."


class ParseFailure(ServiceError):
    """A fetched document is missing required fields or has the wrong shape."""

    default_message = "Failed to parse data from the database."

    def __init__(self, message: Optional[str] = None, *, document_id: Optional[str] = None) -> None:
        self.document_id = document_id
        super().__init__(message)


class InsufficientQuestions(ServiceError):
    def __init__(self, available: int, required: int) -> None:
        self.available = int(available)
        self.required = int(required)
        super().__init__(
            f"Not enough questions available. Need {self.required} but only {self.available} found."
        )
