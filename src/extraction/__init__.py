"""Field extraction — raw pasted text to ContentRecord."""

from contentconv.extraction.extractor import FieldExtractor, parse_fields
from contentconv.extraction.ids import ClockIdProvider, CounterIdProvider, IdProvider
from contentconv.extraction.models import (
    ExtractionFailure,
    ExtractionResult,
    ExtractionStatus,
)
from contentconv.extraction.patterns import BLOCK_MARKER, capture_pattern

__all__ = [
    "BLOCK_MARKER",
    "ClockIdProvider",
    "CounterIdProvider",
    "ExtractionFailure",
    "ExtractionResult",
    "ExtractionStatus",
    "FieldExtractor",
    "IdProvider",
    "capture_pattern",
    "parse_fields",
]
