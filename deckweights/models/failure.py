"""
Failure classification for weight scoring.

Every failure that reaches a caller is a KnownError subclass carrying a
FailureKind and a status code. The API layer renders it as a FailureDetail.

Conditions that are NOT failures (absorbed into the DeckScore shape):
- Malformed deck-list lines (dropped)
- Unknown card names (weight 0)
- Multiple commander lines (last one wins)
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Resource failures
    NOT_FOUND = "not_found"

    # Reference data failures
    DATA_SOURCE_ERROR = "data_source_error"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class DataSourceError(KnownError):
    """
    A reference table could not be fetched or parsed.

    Fatal to the request that triggered the load. The cache does not keep
    the failure around: the next use of the table retries the load.
    """

    def __init__(self, table_id: str, reason: str):
        self.table_id = table_id
        self.reason = reason
        super().__init__(
            kind=FailureKind.DATA_SOURCE_ERROR,
            message=f"Weight table '{table_id}' is unavailable.",
            detail=reason,
            suggestion="Check the weights source and retry.",
            status_code=502,
        )


class UnknownTableError(KnownError):
    """Raised when a table id is not part of the configured tables."""

    def __init__(self, table_id: str):
        self.table_id = table_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Unknown weight table '{table_id}'.",
            status_code=404,
        )
