"""Exception hierarchy for contentconv."""

from __future__ import annotations

from enum import StrEnum


class FailureKind(StrEnum):
    """Why an extraction produced no record."""

    MALFORMED_INPUT = "malformed_input"
    INSUFFICIENT_FIELDS = "insufficient_fields"


class ContentConvError(Exception):
    """Base error for contentconv."""


class ExtractionError(ContentConvError):
    """Raised when a content block cannot be turned into a record.

    Carries the failure kind and the fields that could not be located so
    the extractor boundary can report them without re-parsing.
    """

    kind: FailureKind

    def __init__(self, message: str, missing_fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.missing_fields = list(missing_fields or [])


class MalformedInputError(ExtractionError):
    """Strict mode: a field was not found in its expected position."""

    kind = FailureKind.MALFORMED_INPUT


class InsufficientFieldsError(ExtractionError):
    """Tolerant mode: slug, title and content are all absent."""

    kind = FailureKind.INSUFFICIENT_FIELDS


class NoRecordError(ContentConvError):
    """Raised when a payload is requested but no record is held."""
