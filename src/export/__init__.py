"""Serializers turning a ContentRecord into clipboard and CSV payloads."""

from contentconv.export.serializer import (
    escape_csv_value,
    file_name,
    safe_file_name,
    to_csv_row,
    to_tab_separated,
    write_csv,
)

__all__ = [
    "escape_csv_value",
    "file_name",
    "safe_file_name",
    "to_csv_row",
    "to_tab_separated",
    "write_csv",
]
