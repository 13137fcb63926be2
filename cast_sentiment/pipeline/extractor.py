"""Response extractor — raw generated text → ordered list of snippets.

Two tiers, first success wins:
  1. Structured — the payload is a JSON object holding an array under the
     requested field. Entries are coerced to text, trimmed, blanks dropped,
     truncated to ``max_count``.
  2. Fallback  — entered only when tier 1 fails to parse. Lines are trimmed,
     leading ``-`` / ``*`` bullet markers stripped, blanks dropped, and
     collection stops at ``max_count``.

extract() never raises; a payload with nothing usable yields ``[]``.
"""

import json
from typing import Any, List, Tuple

from cast_sentiment.core.logger import logger

TIER_STRUCTURED = "structured"
TIER_FALLBACK = "fallback"

_BULLETS = "-*"


class StructuredParseError(ValueError):
    """The payload is not a JSON object with an array under the field."""


def extract(raw: str, field_name: str, max_count: int) -> List[str]:
    """Return up to ``max_count`` non-empty snippets from ``raw``."""
    items, _ = extract_with_tier(raw, field_name, max_count)
    return items


def extract_with_tier(raw: str, field_name: str, max_count: int) -> Tuple[List[str], str]:
    """Like :func:`extract` but also report which tier produced the result.

    Args:
        raw: Generated message content.
        field_name: JSON array field named in the prompt (``reviews``/``tweets``).
        max_count: Maximum number of snippets to keep.

    Returns:
        ``(snippets, tier)`` where ``tier`` is ``"structured"`` or ``"fallback"``.
    """
    raw = raw or ""
    if max_count <= 0:
        return [], TIER_STRUCTURED

    try:
        items = parse_structured(raw, field_name, max_count)
        logger.info(f"extract: structured tier → {len(items)} '{field_name}'")
        return items, TIER_STRUCTURED
    except StructuredParseError as exc:
        logger.warning(f"extract: structured parse failed ({exc}); using line fallback")

    items = parse_lines(raw, max_count)
    logger.info(f"extract: fallback tier → {len(items)} lines")
    return items, TIER_FALLBACK


def parse_structured(raw: str, field_name: str, max_count: int) -> List[str]:
    """Tier 1: read ``{"<field_name>": [...]}``.

    Raises:
        StructuredParseError: If the text is not a JSON object or the field
            is missing or not an array.
    """
    try:
        doc = json.loads(raw)
    except (ValueError, RecursionError, TypeError) as exc:
        # ValueError covers JSONDecodeError and over-long integer literals.
        raise StructuredParseError(f"invalid JSON: {exc}") from exc

    if not isinstance(doc, dict):
        raise StructuredParseError(f"expected object, got {type(doc).__name__}")
    entries = doc.get(field_name)
    if not isinstance(entries, list):
        raise StructuredParseError(f"field '{field_name}' missing or not an array")

    items: List[str] = []
    for entry in entries:
        try:
            text = _as_text(entry).strip()
        except (ValueError, RecursionError):
            logger.warning("extract: skipped an entry that cannot be rendered as text")
            continue
        if text:
            items.append(text)
        if len(items) >= max_count:
            break
    return items


def parse_lines(raw: str, max_count: int) -> List[str]:
    """Tier 2: one snippet per non-blank line, bullet markers removed."""
    items: List[str] = []
    for line in raw.split("\n"):
        text = line.strip().lstrip(_BULLETS).strip()
        if text:
            items.append(text)
        if len(items) >= max_count:
            break
    return items


def _as_text(entry: Any) -> str:
    if entry is None:
        return ""
    if isinstance(entry, str):
        return entry
    # Non-string scalars (numbers, bools) and nested values keep a JSON rendering.
    return json.dumps(entry, ensure_ascii=False)
