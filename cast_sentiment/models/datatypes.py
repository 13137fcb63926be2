"""Data structures for the generated-snippet sentiment pipeline."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class GenerationStyle:
    """
    Per-call-site wording and output contract for one kind of generated text.

    The review and tweet call sites differ only in these values.
    """
    name: str
    field_name: str          # JSON array field the model must fill
    count: int               # exact number of items requested
    item_noun: str           # e.g. "mini-reviews"
    subject_phrase: str      # e.g. "the movie" / "the actor"
    context_label: str       # e.g. "Cast" / "Some notable movies"
    tone: str


@dataclass(frozen=True)
class PromptSpec:
    """
    A composed generation request: instructions plus the output contract.
    """
    system_prompt: str
    user_prompt: str
    field_name: str
    count: int


@dataclass(frozen=True)
class ScoredItem:
    """
    One generated snippet with its compound score (4 d.p.) and derived label.
    """
    text: str
    compound: float
    label: str


@dataclass
class AggregateResult:
    """
    Scored items in extraction order plus the averaged compound and its label.
    """
    items: List[ScoredItem] = field(default_factory=list)
    average_compound: float = 0.0
    overall_label: str = "Neutral"


@dataclass(frozen=True)
class SubjectRequest:
    """
    One subject to generate about, as handed over by the catalogue layer.
    """
    subject: str
    style: GenerationStyle
    context: Tuple[str, ...] = ()


@dataclass
class BatchOutcome:
    """
    Result of one cycle in a batch run. Exactly one of result / error is set.
    """
    request: SubjectRequest
    result: Optional[AggregateResult] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
