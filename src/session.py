"""Owner of the "current record" for an interactive or batch front end.

State machine::

    empty  --update(ok)-->    parsed
    parsed --update(ok)-->    parsed   (record replaced)
    *      --update(empty)--> empty    (record cleared)
    *      --update(fail)-->  error    (record kept or cleared by policy)
    *      --clear()-->       empty
"""

from __future__ import annotations

import logging
from enum import StrEnum

from contentconv.content.models import ContentRecord, ParseMode
from contentconv.errors import NoRecordError
from contentconv.export.serializer import to_csv_row, to_tab_separated
from contentconv.extraction.extractor import FieldExtractor
from contentconv.extraction.models import (
    ExtractionFailure,
    ExtractionResult,
    ExtractionStatus,
)

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    EMPTY = "empty"
    PARSED = "parsed"
    ERROR = "error"


class FailurePolicy(StrEnum):
    """What happens to the held record when a parse fails."""

    RETAIN = "retain"
    CLEAR = "clear"


class ConverterSession:
    """Holds at most one parsed record and the last failure, if any."""

    def __init__(
        self,
        extractor: FieldExtractor | None = None,
        *,
        mode: ParseMode = ParseMode.TOLERANT,
        policy: FailurePolicy = FailurePolicy.RETAIN,
    ) -> None:
        self._extractor = extractor or FieldExtractor()
        self.mode = mode
        self.policy = policy
        self._state = SessionState.EMPTY
        self._record: ContentRecord | None = None
        self._error: ExtractionFailure | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def record(self) -> ContentRecord | None:
        return self._record

    @property
    def error(self) -> ExtractionFailure | None:
        return self._error

    def update(self, raw: str) -> ExtractionResult:
        """Parse ``raw`` and move to the resulting state."""
        result = self._extractor.extract(raw, self.mode)

        if result.status == ExtractionStatus.EMPTY:
            self.clear()
        elif result.status == ExtractionStatus.PARSED:
            self._record = result.record
            self._error = None
            self._state = SessionState.PARSED
        else:
            self._error = result.error
            self._state = SessionState.ERROR
            if self.policy == FailurePolicy.CLEAR:
                self._record = None
            elif self._record is not None:
                logger.debug("Keeping record %d after failed parse", self._record.id)

        return result

    def clear(self) -> None:
        self._record = None
        self._error = None
        self._state = SessionState.EMPTY

    def clipboard_payload(self) -> str:
        return to_tab_separated(self._held())

    def csv_payload(self, include_header: bool = False) -> str:
        return to_csv_row(self._held(), include_header=include_header)

    def _held(self) -> ContentRecord:
        if self._record is None:
            raise NoRecordError("No parsed record is available")
        return self._record
