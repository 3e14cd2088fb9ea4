from __future__ import annotations

from typing import Dict, Mapping, Optional

from utils.config import AppConfig, load_config


class MissingCredentialError(RuntimeError):
    """No API key is configured for the requested provider."""

    def __init__(self, provider: str):
        super().__init__(f"API key not configured for provider '{provider}'. Please contact administrator.")
        self.provider = provider


class CredentialProvider:
    def lookup(self, provider: str) -> Optional[str]:
        raise NotImplementedError

    def get_api_key(self, provider: str) -> str:
        key = (self.lookup(provider) or "").strip()
        if not key:
            raise MissingCredentialError(provider)
        return key


class EnvCredentialProvider(CredentialProvider):
    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or load_config()

    def lookup(self, provider: str) -> Optional[str]:
        return {
            "gemini": self.config.gemini_api_key,
            "openai": self.config.openai_api_key,
            "anthropic": self.config.anthropic_api_key,
        }.get(provider)


class StaticCredentialProvider(CredentialProvider):
    """Keys held in memory, e.g. as read from an admin settings record."""

    def __init__(self, keys: Mapping[str, str]):
        self._keys: Dict[str, str] = dict(keys)

    def lookup(self, provider: str) -> Optional[str]:
        return self._keys.get(provider)
