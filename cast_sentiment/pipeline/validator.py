"""Output validator — checks snippet_sentiment.csv against the scoring rules.

Checks:
  1. Compound within [-1.0, 1.0]
  2. Label agrees with the ±0.05 thresholds for every row
  3. Kind is a known style and each subject has at most that style's count
  4. No blank Text cells

Usage:
    python -m cast_sentiment.pipeline.validator output/snippet_sentiment.csv
"""

import sys
import csv
from collections import Counter
from typing import List, Tuple

from cast_sentiment.pipeline.engine import CSV_HEADER
from cast_sentiment.pipeline.prompt import STYLES
from cast_sentiment.providers.sentiment import label_for


def validate(csv_path: str) -> Tuple[bool, List[str]]:
    """Run all validation checks against csv_path.

    Args:
        csv_path: Absolute or relative path to ``snippet_sentiment.csv``.

    Returns:
        Tuple of ``(passed: bool, messages: list[str])``.
        ``messages`` contains PASS/FAIL lines for each check.
    """
    messages: List[str] = []
    passed = True

    # ── load ──────────────────────────────────────────────────────────────────
    try:
        with open(csv_path, encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            header = reader.fieldnames or []
            rows = list(reader)
    except FileNotFoundError:
        return False, [f"FAIL  file not found: {csv_path}"]
    except (OSError, csv.Error) as exc:
        return False, [f"FAIL  could not read CSV: {exc}"]

    # ── column presence ───────────────────────────────────────────────────────
    missing = [c for c in CSV_HEADER if c not in header]
    if missing:
        return False, [f"FAIL  missing columns: {missing}"]
    if not rows:
        return True, ["PASS  CSV has no snippet rows"]

    # ── check 1: Compound in [-1, 1] ──────────────────────────────────────────
    bad_scores = []
    mislabeled = []
    for i, row in enumerate(rows, start=2):
        raw = row.get("Compound", "")
        try:
            score = float(raw)
        except ValueError:
            bad_scores.append((i, raw))
            continue
        if not (-1.0 <= score <= 1.0):
            bad_scores.append((i, score))
        elif label_for(score) != row.get("Label"):
            mislabeled.append((i, score, row.get("Label")))

    if not bad_scores:
        messages.append("PASS  Compound ∈ [-1.0, 1.0] for all rows")
    else:
        messages.append(
            f"FAIL  Compound out of range in {len(bad_scores)} rows: {bad_scores[:3]}"
        )
        passed = False

    # ── check 2: label matches thresholds ─────────────────────────────────────
    if not mislabeled:
        messages.append("PASS  Label consistent with ±0.05 thresholds")
    else:
        messages.append(f"FAIL  {len(mislabeled)} mislabeled rows: {mislabeled[:3]}")
        passed = False

    # ── check 3: known kind and per-subject count ─────────────────────────────
    unknown = sorted({r["Kind"] for r in rows if r["Kind"] not in STYLES})
    if unknown:
        messages.append(f"FAIL  unknown Kind values: {unknown}")
        passed = False
    else:
        counts = Counter((r["Kind"], r["Subject"]) for r in rows)
        over = {k: n for k, n in counts.items() if n > STYLES[k[0]].count}
        if not over:
            messages.append(f"PASS  {len(counts)} subjects within their item limits")
        else:
            messages.append(f"FAIL  subjects over item limit: {over}")
            passed = False

    # ── check 4: no blank text ────────────────────────────────────────────────
    blank = [i for i, r in enumerate(rows, start=2) if not (r.get("Text") or "").strip()]
    if not blank:
        messages.append("PASS  Text: 0 blanks")
    else:
        messages.append(f"FAIL  Text: {len(blank)} blank(s) at rows {blank}")
        passed = False

    return passed, messages


def main() -> int:
    if len(sys.argv) < 2:
        print("Usage: python -m cast_sentiment.pipeline.validator <path_to_csv>")
        return 1
    csv_path = sys.argv[1]
    passed, messages = validate(csv_path)
    for msg in messages:
        print(msg)
    if passed:
        print("\nVALIDATION PASSED ✓")
        return 0
    else:
        print("\nVALIDATION FAILED ✗")
        return 1


if __name__ == "__main__":
    sys.exit(main())
