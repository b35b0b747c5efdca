"""Result types returned across the extractor boundary."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from contentconv.content.models import ContentRecord
from contentconv.errors import FailureKind


class ExtractionStatus(StrEnum):
    """Outcome of a single extraction."""

    PARSED = "parsed"
    EMPTY = "empty"
    FAILED = "failed"


class ExtractionFailure(BaseModel):
    """User-facing description of why no record was produced."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    message: str
    missing_fields: list[str] = Field(default_factory=list)


class ExtractionResult(BaseModel):
    """Discriminated result: a record, an empty input, or a failure."""

    model_config = ConfigDict(frozen=True)

    status: ExtractionStatus
    record: ContentRecord | None = None
    error: ExtractionFailure | None = None

    @model_validator(mode="after")
    def _check_payload_matches_status(self) -> ExtractionResult:
        """A record only when parsed, an error only when failed."""
        if (self.record is not None) != (self.status == ExtractionStatus.PARSED):
            raise ValueError(f"record must be set exactly when status is 'parsed' (got {self.status})")
        if (self.error is not None) != (self.status == ExtractionStatus.FAILED):
            raise ValueError(f"error must be set exactly when status is 'failed' (got {self.status})")
        return self

    @property
    def is_ok(self) -> bool:
        return self.status == ExtractionStatus.PARSED
