import pytest

from tools.credentials import EnvCredentialProvider, MissingCredentialError, StaticCredentialProvider
from utils.config import FallbackScoringConfig, load_config, load_scoring_config


ENV_KEYS = [
    "GEMINI_API_KEY", "GOOGLE_API_KEY", "OPENAI_API_KEY", "OPENAI_KEY", "OPEN_API_KEY", "ANTHROPIC_API_KEY",
    "MODEL_PREFERENCE", "GEMINI_API_BASE", "REQUEST_TIMEOUT_SECONDS", "MAX_RETRIES", "LOG_LEVEL",
    "FALLBACK_SHORT_ANSWER_CHARS", "FALLBACK_JITTER",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    cfg = load_config()
    assert cfg.model_preference == "gemini:gemini-2.0-flash"
    assert cfg.gemini_api_base == "https://generativelanguage.googleapis.com/v1"
    assert cfg.request_timeout_seconds == 60.0
    assert cfg.max_retries == 1
    assert cfg.gemini_api_key is None


def test_overrides(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("MAX_RETRIES", "0")
    monkeypatch.setenv("GEMINI_API_BASE", "http://localhost:9000/v1/")
    cfg = load_config()
    assert cfg.gemini_api_key == "g-key"
    assert cfg.request_timeout_seconds is None
    assert cfg.max_retries == 1
    assert cfg.gemini_api_base == "http://localhost:9000/v1"


def test_scoring_config(monkeypatch):
    assert load_scoring_config() == FallbackScoringConfig()
    monkeypatch.setenv("FALLBACK_SHORT_ANSWER_CHARS", "80")
    monkeypatch.setenv("FALLBACK_JITTER", "0.5")
    cfg = load_scoring_config()
    assert (cfg.short_answer_chars, cfg.jitter) == (80, 0.5)
    assert cfg.substantive_range == (5, 8)


def test_env_credentials(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    provider = EnvCredentialProvider()
    assert provider.get_api_key("gemini") == "abc"
    with pytest.raises(MissingCredentialError) as info:
        provider.get_api_key("anthropic")
    assert info.value.provider == "anthropic"


def test_static_credentials_reject_blank_keys():
    provider = StaticCredentialProvider({"gemini": "   "})
    with pytest.raises(MissingCredentialError):
        provider.get_api_key("gemini")
