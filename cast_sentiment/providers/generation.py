"""Text-generation providers.

AzureOpenAIGenerator performs exactly one chat-completions call per prompt and
returns the generated message content. It never retries: a non-2xx status,
a network failure or an unreadable envelope raises TransportError and the
caller decides what to do.

StaticTextGenerator returns a fixed payload and is used for offline runs.
"""

from typing import Any, Dict

import requests

from cast_sentiment.core.config import GenerationSettings
from cast_sentiment.core.errors import TransportError
from cast_sentiment.core.logger import logger
from cast_sentiment.models.datatypes import PromptSpec
from cast_sentiment.providers.base import TextGenerator

_CHAT_PATH = "/openai/deployments/{deployment}/chat/completions"
_BODY_PREVIEW = 500


class AzureOpenAIGenerator(TextGenerator):
    """Azure OpenAI chat-completions provider in JSON mode.

    Holds only read-only settings, so one instance may be shared between
    threads.

    Args:
        settings: Validated :class:`GenerationSettings`.
    """

    def __init__(self, settings: GenerationSettings) -> None:
        self.settings = settings
        self.url = settings.endpoint.rstrip("/") + _CHAT_PATH.format(
            deployment=settings.deployment
        )

    def generate(self, prompt: PromptSpec) -> str:
        """Send ``prompt`` and return the generated message content.

        Args:
            prompt: Composed :class:`PromptSpec`.

        Returns:
            Raw text of ``choices[0].message.content`` (``""`` when null).

        Raises:
            TransportError: On network failure, non-2xx status or a response
                envelope without a message.
        """
        logger.info(
            f"AzureOpenAIGenerator: requesting {prompt.count} '{prompt.field_name}' "
            f"from deployment {self.settings.deployment}"
        )
        try:
            resp = requests.post(
                self.url,
                params={"api-version": self.settings.api_version},
                headers=self._headers(),
                json=self._payload(prompt),
                timeout=self.settings.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.error(f"AzureOpenAIGenerator: request failed: {exc}")
            raise TransportError(f"Azure OpenAI request failed: {exc}", body=str(exc)) from exc

        if not resp.ok:
            logger.error(
                f"AzureOpenAIGenerator: HTTP {resp.status_code}: {resp.text[:200]}"
            )
            raise TransportError(
                f"Azure OpenAI error {resp.status_code}: {resp.text[:_BODY_PREVIEW]}",
                status=resp.status_code,
                body=resp.text,
            )

        content = _message_content(resp)
        logger.info(f"AzureOpenAIGenerator: received {len(content)} chars")
        return content

    def _headers(self) -> Dict[str, str]:
        return {
            "api-key": self.settings.api_key,
            "Accept": "application/json",
        }

    def _payload(self, prompt: PromptSpec) -> Dict[str, Any]:
        return {
            "messages": [
                {"role": "system", "content": prompt.system_prompt},
                {"role": "user", "content": prompt.user_prompt},
            ],
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens,
            "response_format": {"type": "json_object"},
            "model": self.settings.deployment,
        }


class StaticTextGenerator(TextGenerator):
    """Returns the same raw payload for every prompt.

    Args:
        payload: Text handed back from :meth:`generate`.
    """

    def __init__(self, payload: str) -> None:
        self.payload = payload

    def generate(self, prompt: PromptSpec) -> str:
        logger.info(f"StaticTextGenerator: returning fixed payload for '{prompt.field_name}'")
        return self.payload


# ── helpers ───────────────────────────────────────────────────────────────────

def _message_content(resp: requests.Response) -> str:
    """Pull ``choices[0].message.content`` out of a chat-completions envelope."""
    try:
        envelope = resp.json()
        content = envelope["choices"][0]["message"].get("content")
    except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
        logger.error(f"AzureOpenAIGenerator: malformed response envelope: {exc}")
        raise TransportError(
            f"Azure OpenAI returned a malformed envelope: {resp.text[:_BODY_PREVIEW]}",
            status=resp.status_code,
            body=resp.text,
        ) from exc
    return content or ""
