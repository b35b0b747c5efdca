"""Content domain models — pure Pydantic v2 data types.

A ContentRecord is the structured form of a pasted content block: six
named text fields plus an integer id assigned when the block was parsed.
Records are immutable; re-parsing always yields a new record.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

# Canonical field order — used for records, TSV payloads and CSV rows.
FIELD_ORDER: tuple[str, ...] = (
    "slug",
    "title",
    "category",
    "excerpt",
    "content",
    "image",
)

CSV_HEADER = ",".join(("id", *FIELD_ORDER))

# Substituted for missing fields in tolerant mode.
PLACEHOLDERS: dict[str, str] = {
    "slug": "no-slug-found",
    "title": "No Title Found",
    "category": "Uncategorized",
    "excerpt": "No excerpt available",
    "content": "No content available",
    "image": "No image URL provided",
}

# Tolerant parsing fails only when all of these are absent.
ESSENTIAL_FIELDS: tuple[str, ...] = ("slug", "title", "content")


class ParseMode(StrEnum):
    """Field matching strategy."""

    STRICT = "strict"
    TOLERANT = "tolerant"


class ContentRecord(BaseModel):
    """A parsed content block with its fields in canonical order."""

    model_config = ConfigDict(frozen=True)

    id: int
    slug: str
    title: str
    category: str
    excerpt: str
    content: str
    image: str

    def row_values(self) -> list[str]:
        """Return ``id`` followed by the six fields, all as strings."""
        return [str(self.id), *(getattr(self, name) for name in FIELD_ORDER)]
