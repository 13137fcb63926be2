"""Aggregation of per-snippet scores into an overall result."""

from typing import Sequence

from cast_sentiment.models.datatypes import AggregateResult, ScoredItem
from cast_sentiment.providers.sentiment import label_for, round_compound


def aggregate(items: Sequence[ScoredItem]) -> AggregateResult:
    """Average the item compounds and label the average.

    Items keep their incoming order; nothing is reordered or deduplicated.
    An empty sequence yields ``0.0`` / ``Neutral``.

    Args:
        items: Scored snippets in extraction order.

    Returns:
        :class:`AggregateResult`.
    """
    items = list(items)
    if not items:
        return AggregateResult(items=[], average_compound=0.0, overall_label=label_for(0.0))

    average = round_compound(sum(item.compound for item in items) / len(items))
    return AggregateResult(
        items=items,
        average_compound=average,
        overall_label=label_for(average),
    )
