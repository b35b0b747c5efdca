"""contentconv - pasted content blocks to clipboard TSV and CSV.

Core modules:
- content: ContentRecord and the six-field vocabulary
- extraction: strict and tolerant field matching
- export: TSV/CSV serialization and file naming
- session: holder of the current record
- config: TOML/env/CLI configuration
"""

__version__ = "0.1.0"

from contentconv.content.models import ContentRecord, ParseMode
from contentconv.errors import (
    ContentConvError,
    ExtractionError,
    InsufficientFieldsError,
    MalformedInputError,
    NoRecordError,
)
from contentconv.export.serializer import (
    file_name,
    safe_file_name,
    to_csv_row,
    to_tab_separated,
)
from contentconv.extraction.extractor import FieldExtractor, parse_fields
from contentconv.extraction.models import ExtractionResult, ExtractionStatus
from contentconv.session import ConverterSession, FailurePolicy, SessionState

__all__ = [
    "ContentConvError",
    "ContentRecord",
    "ConverterSession",
    "ExtractionError",
    "ExtractionResult",
    "ExtractionStatus",
    "FailurePolicy",
    "FieldExtractor",
    "InsufficientFieldsError",
    "MalformedInputError",
    "NoRecordError",
    "ParseMode",
    "SessionState",
    "file_name",
    "parse_fields",
    "safe_file_name",
    "to_csv_row",
    "to_tab_separated",
]
