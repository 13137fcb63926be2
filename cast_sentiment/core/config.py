"""Configuration module for loading project settings and environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from cast_sentiment.core.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_VERSION = "2024-12-01-preview"

# Environment variable → GenerationSettings field
_ENV_KEYS = {
    "endpoint": "AZURE_OPENAI_ENDPOINT",
    "deployment": "AZURE_OPENAI_DEPLOYMENT",
    "api_key": "AZURE_OPENAI_KEY",
    "api_version": "AZURE_OPENAI_API_VERSION",
}


def load_config(config_path: str | Path = "config.yaml") -> Dict[str, Any]:
    """
    Load configuration from the specified YAML file.

    Args:
        config_path (str | Path): Path to the configuration file. Defaults to "config.yaml".

    Returns:
        Dict[str, Any]: A dictionary containing the configuration settings.
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found at {config_path}")

    with open(config_file, "r", encoding="utf-8") as file:
        config_data = yaml.safe_load(file)

    if not config_data:
        raise ValueError(f"Configuration file {config_path} is empty or invalid.")

    return config_data


@dataclass(frozen=True)
class GenerationSettings:
    """Connection and style settings for the text-generation endpoint.

    Validated once on construction; instances are read-only afterwards so a
    single client built from them can be shared across threads.

    Attributes:
        endpoint: Base URL of the Azure OpenAI resource.
        deployment: Deployment (model) name, also sent as ``model``.
        api_key: Credential sent in the ``api-key`` header.
        api_version: ``api-version`` query parameter.
        temperature: Sampling temperature.
        max_tokens: Upper bound on generated tokens.
        timeout_seconds: Network timeout for the single outbound call.
    """
    endpoint: str
    deployment: str
    api_key: str
    api_version: str = DEFAULT_API_VERSION
    temperature: float = 0.7
    max_tokens: int = 800
    timeout_seconds: float = 60.0

    def __post_init__(self) -> None:
        missing = [
            _ENV_KEYS[name]
            for name in ("endpoint", "deployment", "api_key")
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Missing generation endpoint configuration: {', '.join(missing)}"
            )
        if not (self.api_version or "").strip():
            object.__setattr__(self, "api_version", DEFAULT_API_VERSION)
        if self.max_tokens <= 0:
            raise ConfigurationError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.timeout_seconds <= 0:
            raise ConfigurationError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )

    @classmethod
    def from_env(cls, overrides: Optional[Mapping[str, Any]] = None) -> "GenerationSettings":
        """Build settings from ``AZURE_OPENAI_*`` environment variables.

        Args:
            overrides: Optional ``generation`` mapping from config.yaml
                (``temperature``, ``max_tokens``, ``timeout_seconds``).

        Returns:
            Validated :class:`GenerationSettings`.

        Raises:
            ConfigurationError: If endpoint, deployment or key is missing, or an
                override is not numeric.
        """
        overrides = overrides or {}
        return cls(
            endpoint=os.getenv(_ENV_KEYS["endpoint"], ""),
            deployment=os.getenv(_ENV_KEYS["deployment"], ""),
            api_key=os.getenv(_ENV_KEYS["api_key"], ""),
            api_version=os.getenv(_ENV_KEYS["api_version"]) or DEFAULT_API_VERSION,
            temperature=_numeric(overrides, "temperature", 0.7, float),
            max_tokens=_numeric(overrides, "max_tokens", 800, int),
            timeout_seconds=_numeric(overrides, "timeout_seconds", 60.0, float),
        )


def _numeric(overrides: Mapping[str, Any], key: str, default: Any, cast: Callable[[Any], Any]) -> Any:
    """Convert one ``generation`` override, reporting bad values as ConfigurationError."""
    value = overrides.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(f"generation.{key} must be a number, got {value!r}")
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"generation.{key} must be a number, got {value!r}") from exc
