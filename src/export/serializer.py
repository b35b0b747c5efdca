"""Record serialization: clipboard TSV, CSV rows and file names.

Everything here is a pure string function except ``write_csv``, which is
the file-writing collaborator used by the CLI.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from contentconv.content.models import CSV_HEADER, ContentRecord

logger = logging.getLogger(__name__)

_CSV_SPECIAL = (",", '"', "\n")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _require(record: ContentRecord | None) -> ContentRecord:
    if record is None:
        raise TypeError("a ContentRecord is required, got None")
    return record


def to_tab_separated(record: ContentRecord) -> str:
    """Join id and the six fields with tabs (no header, no newline)."""
    return "\t".join(_require(record).row_values())


def escape_csv_value(value: str) -> str:
    """Quote ``value`` only if it contains a comma, quote or newline."""
    if any(char in value for char in _CSV_SPECIAL):
        return '"' + value.replace('"', '""') + '"'
    return value


def to_csv_row(record: ContentRecord, include_header: bool = False) -> str:
    """Render the record as one CSV data line, optionally under a header."""
    line = ",".join(escape_csv_value(value) for value in _require(record).row_values())
    if include_header:
        return f"{CSV_HEADER}\n{line}"
    return line


def file_name(record: ContentRecord) -> str:
    """``content_{slug}.csv`` with the slug used verbatim."""
    return f"content_{_require(record).slug}.csv"


def safe_file_name(record: ContentRecord) -> str:
    """``content_{slug}.csv`` with the slug reduced to ``[A-Za-z0-9._-]``.

    Falls back to the record id when nothing usable is left of the slug.
    """
    record = _require(record)
    slug = _UNSAFE_FILENAME_CHARS.sub("-", record.slug).strip(".-")
    slug = re.sub(r"-{2,}", "-", slug)
    return f"content_{slug or record.id}.csv"


def write_csv(
    record: ContentRecord,
    output_dir: Path,
    *,
    include_header: bool = False,
    safe_names: bool = True,
) -> Path:
    """Write the CSV row as UTF-8 into ``output_dir`` and return the path."""
    name = safe_file_name(record) if safe_names else file_name(record)
    path = output_dir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(to_csv_row(record, include_header=include_header).encode("utf-8"))
    logger.info("Wrote %s", path)
    return path
