"""Shared pytest fixtures for unit tests."""

import json
import os
import tempfile
from typing import Callable, Dict, List, Sequence

import pytest

# Keep the module-level logger from writing into the working tree.
os.environ.setdefault(
    "CAST_SENTIMENT_LOG_FILE", os.path.join(tempfile.gettempdir(), "cast_sentiment_tests.log")
)

from cast_sentiment.core.errors import TransportError  # noqa: E402
from cast_sentiment.models.datatypes import PromptSpec  # noqa: E402
from cast_sentiment.providers.base import SentimentProvider, TextGenerator  # noqa: E402


class RecordingGenerator(TextGenerator):
    """Returns a fixed payload and remembers every prompt it was given."""

    def __init__(self, payload: str) -> None:
        self.payload = payload
        self.prompts: List[PromptSpec] = []

    def generate(self, prompt: PromptSpec) -> str:
        self.prompts.append(prompt)
        return self.payload


class FailingGenerator(TextGenerator):
    """Always fails the way a rejected HTTP call does."""

    def __init__(self, status: int = 500, body: str = "upstream exploded") -> None:
        self.status = status
        self.body = body

    def generate(self, prompt: PromptSpec) -> str:
        raise TransportError(f"Azure OpenAI error {self.status}", status=self.status, body=self.body)


class TableProvider(SentimentProvider):
    """Looks polarity up in a dict; unknown text scores 0.0."""

    def __init__(self, table: Dict[str, float]) -> None:
        self.table = table

    def polarity(self, text: str) -> float:
        return self.table.get(text, 0.0)


@pytest.fixture
def json_payload() -> Callable[..., str]:
    """Return a factory building ``{"<field>": [...]}`` payload strings."""

    def _factory(field: str, items: Sequence[object]) -> str:
        return json.dumps({field: list(items)})

    return _factory


@pytest.fixture
def recording_generator() -> Callable[[str], RecordingGenerator]:
    return RecordingGenerator


@pytest.fixture
def table_provider() -> Callable[[Dict[str, float]], TableProvider]:
    return TableProvider


@pytest.fixture
def failing_generator() -> Callable[..., FailingGenerator]:
    return FailingGenerator
