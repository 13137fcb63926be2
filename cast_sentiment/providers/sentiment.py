"""Rule-based short-text sentiment scoring using VADER.

Pipeline:
    snippet (str) → VaderProvider.polarity() → compound → label_for() → ScoredItem

Label mapping (inclusive thresholds, applied per item and to the average):
    compound >=  0.05 → "Positive"
    compound <= -0.05 → "Negative"
    otherwise         → "Neutral"

Compound scores are rounded to 4 decimal places and the label is derived
from the rounded value, so the stored score and label never disagree.
"""

import threading
from typing import Optional

from cast_sentiment.core.logger import logger
from cast_sentiment.models.datatypes import ScoredItem
from cast_sentiment.providers.base import SentimentProvider

POSITIVE = "Positive"
NEUTRAL = "Neutral"
NEGATIVE = "Negative"

POSITIVE_THRESHOLD = 0.05
NEGATIVE_THRESHOLD = -0.05

_PRECISION = 4


def label_for(compound: float) -> str:
    """Map a compound score to ``Positive`` / ``Neutral`` / ``Negative``.

    Args:
        compound: Compound polarity in ``[-1.0, 1.0]``.

    Returns:
        Canonical label string.
    """
    if compound >= POSITIVE_THRESHOLD:
        return POSITIVE
    if compound <= NEGATIVE_THRESHOLD:
        return NEGATIVE
    return NEUTRAL


def round_compound(compound: float) -> float:
    """Clamp to ``[-1.0, 1.0]`` and round to 4 decimal places."""
    return round(max(-1.0, min(1.0, float(compound))), _PRECISION)


class VaderProvider(SentimentProvider):
    """Lexicon-and-rule sentiment using ``vaderSentiment``.

    The analyzer (and its bundled lexicon) is loaded lazily on the first call
    to :meth:`polarity` so that importing this module has zero cost. The
    analyzer holds no per-call state, so one instance can be shared.
    """

    def __init__(self) -> None:
        self._analyzer = None  # lazy-loaded
        self._lock = threading.Lock()

    def polarity(self, text: str) -> float:
        """Return VADER's normalized compound score for ``text``."""
        analyzer = self._get_analyzer()
        return float(analyzer.polarity_scores(text)["compound"])

    def _get_analyzer(self):
        """Lazy-load the VADER analyzer on first call."""
        if self._analyzer is None:
            with self._lock:
                if self._analyzer is None:
                    from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer
                    self._analyzer = SentimentIntensityAnalyzer()
                    logger.info("VaderProvider: lexicon loaded")
        return self._analyzer


class SentimentScorer:
    """Turns a snippet into a :class:`ScoredItem` using any polarity provider.

    Args:
        provider: Polarity source (default :class:`VaderProvider`).
    """

    def __init__(self, provider: Optional[SentimentProvider] = None) -> None:
        self.provider = provider or VaderProvider()

    def score(self, text: str) -> ScoredItem:
        """Score one snippet.

        Args:
            text: Extracted, trimmed snippet.

        Returns:
            :class:`ScoredItem` whose label is derived from its rounded compound.
        """
        compound = round_compound(self.provider.polarity(text))
        label = label_for(compound)
        logger.debug(f"SentimentScorer: [{label} / {compound:+.4f}] {text[:60]!r}")
        return ScoredItem(text=text, compound=compound, label=label)
