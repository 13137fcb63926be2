"""Pipeline engine — one generate-and-score cycle per subject.

Flow per subject:
  1. Prompt     — build_prompt(subject, context, count, style)
  2. Generate   — TextGenerator.generate(prompt) → raw text (one network call)
  3. Extract    — extract(raw, field, count) → ordered snippets
  4. Score      — SentimentScorer.score(snippet) per snippet
  5. Aggregate  — aggregate(scored) → AggregateResult

Configuration and transport errors propagate out of a single cycle. In a
batch run each subject's failure is logged and recorded on its
BatchOutcome; the remaining subjects still run.

Results are serialised to output/snippet_sentiment.csv (one row per snippet)
and output/summary.json (one entry per subject).
"""

import csv
import json
import os
from concurrent import futures
from typing import Any, Dict, Iterable, List, Optional, Sequence

from cast_sentiment.core.config import GenerationSettings
from cast_sentiment.core.logger import logger
from cast_sentiment.models.datatypes import (
    AggregateResult, BatchOutcome, GenerationStyle, SubjectRequest,
)
from cast_sentiment.pipeline.aggregate import aggregate
from cast_sentiment.pipeline.extractor import extract
from cast_sentiment.pipeline.prompt import REVIEW_STYLE, TWEET_STYLE, build_prompt
from cast_sentiment.providers.base import TextGenerator
from cast_sentiment.providers.generation import AzureOpenAIGenerator
from cast_sentiment.providers.sentiment import SentimentScorer

CSV_FILENAME = "snippet_sentiment.csv"
SUMMARY_FILENAME = "summary.json"

CSV_HEADER = ["Kind", "Subject", "Index", "Text", "Compound", "Label"]


class SnippetPipeline:
    """Generates short texts about a subject and scores their sentiment.

    Holds no per-request state; the generator and scorer are shared
    read-only handles, so cycles may run concurrently.

    Args:
        generator: Text-generation capability.
        scorer: Sentiment scorer (default VADER-backed).
    """

    def __init__(self, generator: TextGenerator, scorer: Optional[SentimentScorer] = None) -> None:
        self.generator = generator
        self.scorer = scorer or SentimentScorer()

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "SnippetPipeline":
        """Build an Azure-backed pipeline from config.yaml + environment.

        Raises:
            ConfigurationError: If endpoint, deployment or key is missing.
        """
        settings = GenerationSettings.from_env(config.get("generation"))
        return cls(AzureOpenAIGenerator(settings))

    # ── public ────────────────────────────────────────────────────────────────

    def generate_and_score(
        self,
        subject: str,
        context: Optional[Sequence[str]],
        style: GenerationStyle,
        count: Optional[int] = None,
    ) -> AggregateResult:
        """Run one full cycle for ``subject``.

        Args:
            subject: Movie title or actor name.
            context: Cast names or notable movie titles (first 8 used).
            style: Call-site style (field name, wording, default count).
            count: Override for ``style.count``.

        Returns:
            :class:`AggregateResult` with at most ``count`` items.

        Raises:
            InvalidRequest: Blank subject or non-positive count.
            TransportError: The generation call failed.
        """
        count = style.count if count is None else count
        prompt = build_prompt(subject, context, count, style)

        raw = self.generator.generate(prompt)
        texts = extract(raw, prompt.field_name, prompt.count)
        if len(texts) < prompt.count:
            logger.warning(
                f"SnippetPipeline: {subject!r} yielded {len(texts)}/{prompt.count} {style.field_name}"
            )

        result = aggregate([self.scorer.score(text) for text in texts])
        logger.info(
            f"SnippetPipeline: {style.name} {subject!r} → {len(result.items)} items, "
            f"avg={result.average_compound:+.4f} [{result.overall_label}]"
        )
        return result

    def generate_reviews(self, movie_title: str, cast: Optional[Sequence[str]] = None) -> AggregateResult:
        """Ten mini-reviews of a movie, guided by its cast."""
        return self.generate_and_score(movie_title, cast, REVIEW_STYLE)

    def generate_tweets(
        self, actor_name: str, notable_movies: Optional[Sequence[str]] = None,
    ) -> AggregateResult:
        """Twenty tweets about an actor, optionally guided by their movies."""
        return self.generate_and_score(actor_name, notable_movies, TWEET_STYLE)

    def run(self, request: SubjectRequest) -> AggregateResult:
        return self.generate_and_score(request.subject, request.context, request.style)

    def run_batch(self, requests: Iterable[SubjectRequest], max_workers: int = 4) -> List[BatchOutcome]:
        """Run independent cycles concurrently.

        Args:
            requests: Subjects to process.
            max_workers: Thread-pool size.

        Returns:
            One :class:`BatchOutcome` per request, in input order.
        """
        requests = list(requests)
        outcomes = [BatchOutcome(request=r) for r in requests]
        if not requests:
            return outcomes

        logger.info(f"SnippetPipeline: batch of {len(requests)} subjects, {max_workers} workers")
        with futures.ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
            pending = {pool.submit(self.run, r): i for i, r in enumerate(requests)}
            for future in futures.as_completed(pending):
                outcome = outcomes[pending[future]]
                try:
                    outcome.result = future.result()
                except Exception as exc:
                    logger.error(
                        f"SnippetPipeline: {outcome.request.style.name} "
                        f"{outcome.request.subject!r} failed: {exc}"
                    )
                    outcome.error = exc
        return outcomes


# ── config → requests ────────────────────────────────────────────────────────

def requests_from_config(config: Dict[str, Any]) -> List[SubjectRequest]:
    """Read ``movies`` and ``actors`` lists from config.yaml.

    Expected shape::

        movies:
          - title: Forrest Gump
            cast: [Tom Hanks, Robin Wright]
        actors:
          - name: Tom Hanks
            movies: [Forrest Gump, Cast Away]
    """
    requests: List[SubjectRequest] = []
    for movie in config.get("movies") or []:
        requests.append(SubjectRequest(
            subject=movie.get("title", ""),
            style=REVIEW_STYLE,
            context=tuple(movie.get("cast") or ()),
        ))
    for actor in config.get("actors") or []:
        requests.append(SubjectRequest(
            subject=actor.get("name", ""),
            style=TWEET_STYLE,
            context=tuple(actor.get("movies") or ()),
        ))
    return requests


# ── output ────────────────────────────────────────────────────────────────────

def write_outputs(outcomes: Sequence[BatchOutcome], output_dir: str = "output") -> None:
    """Write per-snippet CSV and per-subject JSON summary (overwrites each run)."""
    os.makedirs(output_dir, exist_ok=True)

    csv_path = os.path.join(output_dir, CSV_FILENAME)
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_HEADER)
        writer.writeheader()
        for outcome in outcomes:
            if not outcome.ok:
                continue
            for i, item in enumerate(outcome.result.items, start=1):
                writer.writerow({
                    "Kind": outcome.request.style.name,
                    "Subject": outcome.request.subject,
                    "Index": i,
                    "Text": item.text,
                    "Compound": item.compound,
                    "Label": item.label,
                })
    logger.info(f"write_outputs: snippets → {csv_path}")

    summary = []
    for outcome in outcomes:
        entry: Dict[str, Any] = {
            "kind": outcome.request.style.name,
            "subject": outcome.request.subject,
        }
        if outcome.ok:
            entry.update({
                "item_count": len(outcome.result.items),
                "average_compound": outcome.result.average_compound,
                "overall_label": outcome.result.overall_label,
                "error": None,
            })
        else:
            entry.update({
                "item_count": 0,
                "average_compound": None,
                "overall_label": None,
                "error": str(outcome.error),
            })
        summary.append(entry)

    summary_path = os.path.join(output_dir, SUMMARY_FILENAME)
    with open(summary_path, "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)
    logger.info(f"write_outputs: summary → {summary_path}")
