"""Field extraction from pasted ``label: value`` content blocks.

Two strategies share the pattern combinator in ``patterns``:

* strict — the six labels must appear in canonical order; each value runs
  to the next expected label. Any field that cannot be located fails the
  whole parse.
* tolerant — each label is searched independently and captured up to the
  next known label. Missing fields get placeholders; the parse fails only
  when slug, title and content are all absent.

``parse_fields`` raises; ``FieldExtractor.extract`` never does.
"""

from __future__ import annotations

import logging
import re

from contentconv.content.models import (
    ESSENTIAL_FIELDS,
    FIELD_ORDER,
    PLACEHOLDERS,
    ContentRecord,
    ParseMode,
)
from contentconv.errors import (
    ExtractionError,
    InsufficientFieldsError,
    MalformedInputError,
)
from contentconv.extraction.ids import ClockIdProvider, IdProvider
from contentconv.extraction.models import (
    ExtractionFailure,
    ExtractionResult,
    ExtractionStatus,
)
from contentconv.extraction.patterns import BLOCK_MARKER, capture_pattern, label_token

logger = logging.getLogger(__name__)

BLOCK_FIELD = "content"

_OTHER_LABELS = tuple(label for label in FIELD_ORDER if label != BLOCK_FIELD)


def parse_fields(raw: str, mode: ParseMode = ParseMode.TOLERANT) -> dict[str, str]:
    """Extract the six field values from ``raw``.

    Args:
        raw: Full pasted text.
        mode: Matching strategy.

    Returns:
        Field name to trimmed value, in canonical order.

    Raises:
        MalformedInputError: Strict mode and a field is out of place or absent.
        InsufficientFieldsError: Tolerant mode and slug, title and content
            are all absent.
    """
    if mode == ParseMode.STRICT:
        return _parse_strict(raw)
    return _parse_tolerant(raw)


# ── Strict ───────────────────────────────────────────────────────────


def _parse_strict(raw: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    pos = 0
    for index, label in enumerate(FIELD_ORDER):
        following = FIELD_ORDER[index + 1 : index + 2]
        match = _match_in_order(raw, label, following, pos)
        if match is None:
            culprit = _locate_failure(raw, label, following, pos)
            raise MalformedInputError(
                f"Could not locate '{culprit}:' in the expected position. "
                f"Fields must appear in the order: {', '.join(FIELD_ORDER)}"
                f" (with '{BLOCK_FIELD}: {BLOCK_MARKER}').",
                missing_fields=[culprit],
            )
        fields[label] = match.group("value").strip()
        pos = match.end("value")
    return fields


def _match_in_order(
    raw: str, label: str, following: tuple[str, ...], pos: int
) -> re.Match[str] | None:
    is_last = not following
    if label != BLOCK_FIELD:
        return capture_pattern(label, following, allow_end=is_last).search(raw, pos)

    # Prefer a boundary at the start of a line so the body may mention the
    # next label inline; fall back for single-line input.
    for line_start in (True, False):
        pattern = capture_pattern(
            label,
            following,
            block_marker=True,
            line_start=line_start,
            allow_end=is_last,
        )
        match = pattern.search(raw, pos)
        if match is not None:
            return match
    return None


def _locate_failure(raw: str, label: str, following: tuple[str, ...], pos: int) -> str:
    """Name the field responsible for a failed in-order match."""
    head = label_token(label)
    if label == BLOCK_FIELD:
        head += rf"\s*{re.escape(BLOCK_MARKER)}"
    if re.compile(head, re.IGNORECASE).search(raw, pos) is None or not following:
        return label
    return following[0]


# ── Tolerant ─────────────────────────────────────────────────────────


def _parse_tolerant(raw: str) -> dict[str, str]:
    content, text = _match_block(raw)

    fields: dict[str, str] = {}
    for label in FIELD_ORDER:
        if label == BLOCK_FIELD and content is not None:
            fields[label] = content
            continue
        match = capture_pattern(label, FIELD_ORDER).search(text)
        fields[label] = match.group("value").strip() if match else ""

    missing = [name for name in FIELD_ORDER if not fields[name]]
    if all(name in missing for name in ESSENTIAL_FIELDS):
        raise InsufficientFieldsError(
            "Could not extract required fields. Please check your input format.",
            missing_fields=missing,
        )
    if missing:
        logger.debug("Substituting placeholders for: %s", ", ".join(missing))

    return {name: fields[name] or PLACEHOLDERS[name] for name in FIELD_ORDER}


def _match_block(raw: str) -> tuple[str | None, str]:
    """Capture the block-literal body and mask it out of the search text.

    Returns:
        The trimmed body (None when no block marker form is present) and the
        text the remaining labels should be searched in.
    """
    pattern = capture_pattern(BLOCK_FIELD, _OTHER_LABELS, block_marker=True, line_start=True)
    match = pattern.search(raw)
    if match is None:
        return None, raw
    if match.end("value") == len(raw):
        # No label starts a line after the body; a label later on the same
        # line (single-line input) still ends it.
        inline = capture_pattern(BLOCK_FIELD, _OTHER_LABELS, block_marker=True).search(raw)
        if inline is not None and inline.end("value") < len(raw):
            match = inline
    masked = raw[: match.start("value")] + "\n" + raw[match.end("value") :]
    return match.group("value").strip(), masked


# ── Boundary ─────────────────────────────────────────────────────────


class FieldExtractor:
    """Turns raw text into an ExtractionResult.

    Failures are returned, never raised. Ids come from the injected
    provider at the moment a record is built.
    """

    def __init__(self, id_provider: IdProvider | None = None) -> None:
        self._next_id = id_provider or ClockIdProvider()

    def extract(self, raw: str, mode: ParseMode = ParseMode.TOLERANT) -> ExtractionResult:
        if not raw or not raw.strip():
            logger.debug("Empty input, no record")
            return ExtractionResult(status=ExtractionStatus.EMPTY)

        try:
            fields = parse_fields(raw, mode)
        except ExtractionError as exc:
            logger.info("Extraction failed (%s mode, %s): %s", mode, exc.kind, exc.message)
            return ExtractionResult(
                status=ExtractionStatus.FAILED,
                error=ExtractionFailure(
                    kind=exc.kind,
                    message=exc.message,
                    missing_fields=exc.missing_fields,
                ),
            )

        record = ContentRecord(id=self._next_id(), **fields)
        logger.debug("Extracted record %d (slug=%s)", record.id, record.slug)
        return ExtractionResult(status=ExtractionStatus.PARSED, record=record)
