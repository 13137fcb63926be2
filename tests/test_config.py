"""Unit tests for configuration loading and settings validation."""

import pytest

from cast_sentiment.core.config import DEFAULT_API_VERSION, GenerationSettings, load_config
from cast_sentiment.core.errors import ConfigurationError

_ENV = ("AZURE_OPENAI_ENDPOINT", "AZURE_OPENAI_DEPLOYMENT", "AZURE_OPENAI_KEY", "AZURE_OPENAI_API_VERSION")


@pytest.fixture
def clean_env(monkeypatch):
    for key in _ENV:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_from_env_reads_all_values(clean_env) -> None:
    clean_env.setenv("AZURE_OPENAI_ENDPOINT", "https://x.openai.azure.com")
    clean_env.setenv("AZURE_OPENAI_DEPLOYMENT", "gpt-x")
    clean_env.setenv("AZURE_OPENAI_KEY", "k")
    clean_env.setenv("AZURE_OPENAI_API_VERSION", "2025-01-01")

    settings = GenerationSettings.from_env({"temperature": 0.2, "max_tokens": 400})

    assert settings.endpoint == "https://x.openai.azure.com"
    assert settings.deployment == "gpt-x"
    assert settings.api_version == "2025-01-01"
    assert settings.temperature == 0.2
    assert settings.max_tokens == 400


def test_api_version_defaults(clean_env) -> None:
    clean_env.setenv("AZURE_OPENAI_ENDPOINT", "https://x")
    clean_env.setenv("AZURE_OPENAI_DEPLOYMENT", "d")
    clean_env.setenv("AZURE_OPENAI_KEY", "k")

    assert GenerationSettings.from_env().api_version == DEFAULT_API_VERSION


def test_missing_values_fail_fast_and_are_named(clean_env) -> None:
    clean_env.setenv("AZURE_OPENAI_DEPLOYMENT", "d")

    with pytest.raises(ConfigurationError) as excinfo:
        GenerationSettings.from_env()

    message = str(excinfo.value)
    assert "AZURE_OPENAI_ENDPOINT" in message
    assert "AZURE_OPENAI_KEY" in message
    assert "AZURE_OPENAI_DEPLOYMENT" not in message


def test_blank_values_count_as_missing() -> None:
    with pytest.raises(ConfigurationError):
        GenerationSettings(endpoint="https://x", deployment="  ", api_key="k")


def test_blank_api_version_falls_back_to_default() -> None:
    settings = GenerationSettings(endpoint="https://x", deployment="d", api_key="k", api_version="")
    assert settings.api_version == DEFAULT_API_VERSION


def test_non_positive_max_tokens_rejected() -> None:
    with pytest.raises(ConfigurationError):
        GenerationSettings(endpoint="https://x", deployment="d", api_key="k", max_tokens=0)


def test_settings_are_read_only() -> None:
    settings = GenerationSettings(endpoint="https://x", deployment="d", api_key="k")
    with pytest.raises(AttributeError):
        settings.api_key = "other"


def test_load_config_reads_yaml(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("output_dir: out\nactors:\n  - name: Tom Hanks\n", encoding="utf-8")

    config = load_config(path)
    assert config["output_dir"] == "out"
    assert config["actors"][0]["name"] == "Tom Hanks"


def test_load_config_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_load_config_empty_file(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("max_tokens", None),
        ("max_tokens", "lots"),
        ("temperature", None),
        ("temperature", "warm"),
        ("timeout_seconds", [30]),
        ("timeout_seconds", True),
    ],
)
def test_bad_generation_override_is_configuration_error(clean_env, key, value) -> None:
    clean_env.setenv("AZURE_OPENAI_ENDPOINT", "https://x")
    clean_env.setenv("AZURE_OPENAI_DEPLOYMENT", "d")
    clean_env.setenv("AZURE_OPENAI_KEY", "k")

    with pytest.raises(ConfigurationError) as excinfo:
        GenerationSettings.from_env({key: value})
    assert f"generation.{key}" in str(excinfo.value)


def test_numeric_strings_are_accepted(clean_env) -> None:
    clean_env.setenv("AZURE_OPENAI_ENDPOINT", "https://x")
    clean_env.setenv("AZURE_OPENAI_DEPLOYMENT", "d")
    clean_env.setenv("AZURE_OPENAI_KEY", "k")

    settings = GenerationSettings.from_env({"max_tokens": "400", "temperature": "0.3"})
    assert settings.max_tokens == 400
    assert settings.temperature == 0.3
