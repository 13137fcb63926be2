"""Unit tests for score aggregation."""

from cast_sentiment.models.datatypes import ScoredItem
from cast_sentiment.pipeline.aggregate import aggregate
from cast_sentiment.providers.sentiment import label_for


def _items(*compounds: float) -> list:
    return [ScoredItem(text=f"t{i}", compound=c, label=label_for(c)) for i, c in enumerate(compounds)]


def test_empty_items_are_neutral_zero() -> None:
    result = aggregate([])

    assert result.items == []
    assert result.average_compound == 0.0
    assert result.overall_label == "Neutral"


def test_mixed_scores_average_to_neutral() -> None:
    result = aggregate(_items(0.8, 0.2, -0.9))

    assert result.average_compound == 0.0333
    assert result.overall_label == "Neutral"


def test_average_label_uses_same_thresholds() -> None:
    assert aggregate(_items(0.1, 0.0)).overall_label == "Positive"      # 0.05
    assert aggregate(_items(-0.1, 0.0)).overall_label == "Negative"     # -0.05
    assert aggregate(_items(0.9, 0.7)).average_compound == 0.8


def test_order_and_duplicates_preserved() -> None:
    items = [
        ScoredItem("b", 0.5, "Positive"),
        ScoredItem("a", -0.5, "Negative"),
        ScoredItem("b", 0.5, "Positive"),
    ]
    result = aggregate(items)
    assert [i.text for i in result.items] == ["b", "a", "b"]


def test_accepts_any_iterable_sequence() -> None:
    result = aggregate(tuple(_items(0.4)))
    assert result.average_compound == 0.4
    assert isinstance(result.items, list)
