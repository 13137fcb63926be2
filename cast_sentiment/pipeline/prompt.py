"""Prompt builder for generated reviews and tweets.

One parameterized builder serves both call sites; a GenerationStyle carries
what differs between them (JSON field name, item count, wording).
"""

from typing import Optional, Sequence

from cast_sentiment.core.errors import InvalidRequest
from cast_sentiment.models.datatypes import GenerationStyle, PromptSpec

MAX_CONTEXT_ITEMS = 8

SYSTEM_PROMPT = "You are a helpful assistant. Return ONLY valid JSON; no extra text."

REVIEW_STYLE = GenerationStyle(
    name="review",
    field_name="reviews",
    count=10,
    item_noun="mini-reviews",
    subject_phrase="the movie",
    context_label="Cast",
    tone="a mix of positive, neutral, and lightly critical",
)

TWEET_STYLE = GenerationStyle(
    name="tweet",
    field_name="tweets",
    count=20,
    item_noun="tweets",
    subject_phrase="the actor",
    context_label="Some notable movies",
    tone="a mix of praise, neutral chatter, and light criticism",
)

STYLES = {style.name: style for style in (REVIEW_STYLE, TWEET_STYLE)}

_USER_TEMPLATE = """\
Generate {count} short, varied, natural-language {item_noun} about {subject_phrase} '{subject}'.
{context_line}
Keep each item to 1-2 sentences, {tone}. No hashtags, @mentions, or markup.
Return ONLY JSON with this exact shape:
{{ "{field}": ["...", "..."] }}
Ensure there are exactly {count} strings in "{field}" and no extra properties."""


def build_prompt(
    subject: str,
    context: Optional[Sequence[str]],
    count: int,
    style: GenerationStyle,
) -> PromptSpec:
    """Compose the instructions and output contract for one generation call.

    Args:
        subject: Movie title or actor name. Must be non-empty.
        context: Supporting names/titles; only the first 8 are used.
        count: Exact number of items to request. Must be positive.
        style: Wording and JSON field for this call site.

    Returns:
        :class:`PromptSpec` ready for a :class:`TextGenerator`.

    Raises:
        InvalidRequest: If ``subject`` is blank or ``count`` <= 0.
    """
    subject = (subject or "").strip()
    if not subject:
        raise InvalidRequest("subject must be a non-empty string")
    if count <= 0:
        raise InvalidRequest(f"count must be positive, got {count}")

    user_prompt = _USER_TEMPLATE.format(
        count=count,
        item_noun=style.item_noun,
        subject_phrase=style.subject_phrase,
        subject=subject,
        context_line=context_clause(context, style.context_label),
        tone=style.tone,
        field=style.field_name,
    )
    return PromptSpec(
        system_prompt=SYSTEM_PROMPT,
        user_prompt=user_prompt,
        field_name=style.field_name,
        count=count,
    )


def context_clause(context: Optional[Sequence[str]], label: str) -> str:
    """Render up to 8 context entries as ``"<label>: a, b, c."``.

    Blank entries are skipped. An empty context renders ``(not provided)``.
    """
    entries = [c.strip() for c in (context or [])[:MAX_CONTEXT_ITEMS] if c and c.strip()]
    if not entries:
        return f"{label}: (not provided)."
    return f"{label}: {', '.join(entries)}."
