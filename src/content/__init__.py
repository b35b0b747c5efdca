"""Content domain — the parsed record model and its field vocabulary."""

from contentconv.content.models import (
    CSV_HEADER,
    ESSENTIAL_FIELDS,
    FIELD_ORDER,
    PLACEHOLDERS,
    ContentRecord,
    ParseMode,
)

__all__ = [
    "CSV_HEADER",
    "ESSENTIAL_FIELDS",
    "FIELD_ORDER",
    "PLACEHOLDERS",
    "ContentRecord",
    "ParseMode",
]
