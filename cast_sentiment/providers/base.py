"""Abstract capability interfaces for text generation and sentiment scoring."""

from abc import ABC, abstractmethod

from cast_sentiment.models.datatypes import PromptSpec


class TextGenerator(ABC):
    """Abstract interface for an external text-generation capability."""

    @abstractmethod
    def generate(self, prompt: PromptSpec) -> str:
        """
        Send a composed prompt and return the raw generated text.

        Args:
            prompt (PromptSpec): System/user instructions and output contract.

        Returns:
            str: The generated message content. May or may not be valid JSON.
        """
        pass


class SentimentProvider(ABC):
    """Abstract interface for scoring short-text sentiment polarity."""

    @abstractmethod
    def polarity(self, text: str) -> float:
        """
        Compute the compound polarity of a text.

        Args:
            text (str): The text to score.

        Returns:
            float: Compound score in [-1.0, 1.0]. Same input, same output.
        """
        pass
