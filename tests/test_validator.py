"""Unit tests for the snippet CSV validator."""

import csv

from cast_sentiment.pipeline.engine import CSV_HEADER
from cast_sentiment.pipeline.validator import validate


def _write(path, rows, header=CSV_HEADER) -> str:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=header)
        writer.writeheader()
        writer.writerows(rows)
    return str(path)


def _row(compound: float, label: str, kind: str = "review", subject: str = "Big", text: str = "ok") -> dict:
    return {"Kind": kind, "Subject": subject, "Index": 1, "Text": text, "Compound": compound, "Label": label}


def test_valid_csv_passes(tmp_path) -> None:
    path = _write(tmp_path / "s.csv", [_row(0.5, "Positive"), _row(0.0, "Neutral"), _row(-0.05, "Negative")])
    passed, messages = validate(path)

    assert passed
    assert all(m.startswith("PASS") for m in messages)


def test_mislabeled_row_fails(tmp_path) -> None:
    path = _write(tmp_path / "s.csv", [_row(0.04, "Positive")])
    passed, messages = validate(path)

    assert not passed
    assert any("mislabeled" in m for m in messages)


def test_out_of_range_compound_fails(tmp_path) -> None:
    path = _write(tmp_path / "s.csv", [_row(1.5, "Positive")])
    passed, _ = validate(path)
    assert not passed


def test_too_many_reviews_for_subject_fails(tmp_path) -> None:
    path = _write(tmp_path / "s.csv", [_row(0.0, "Neutral") for _ in range(11)])
    passed, messages = validate(path)

    assert not passed
    assert any("over item limit" in m for m in messages)


def test_twenty_tweets_allowed(tmp_path) -> None:
    rows = [_row(0.0, "Neutral", kind="tweet", subject="Tom Hanks") for _ in range(20)]
    passed, _ = validate(_write(tmp_path / "s.csv", rows))
    assert passed


def test_missing_columns_fail(tmp_path) -> None:
    path = _write(tmp_path / "s.csv", [{"Text": "x"}], header=["Text"])
    passed, messages = validate(path)

    assert not passed
    assert "missing columns" in messages[0]


def test_missing_file(tmp_path) -> None:
    passed, messages = validate(str(tmp_path / "absent.csv"))
    assert not passed
    assert "not found" in messages[0]


def test_header_only_passes(tmp_path) -> None:
    passed, _ = validate(_write(tmp_path / "s.csv", []))
    assert passed
