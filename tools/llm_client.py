from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import asyncio
import json

import httpx

from utils.config import AppConfig, load_config
from utils.logging import get_logger
from .credentials import CredentialProvider, EnvCredentialProvider


logger = get_logger(__name__)


@dataclass
class InlineDocument:
    """A base64 file attached to a message (a PDF resume, for instance)."""

    mime_type: str
    data: str
    filename: str = "document.pdf"

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass
class ChatMessage:
    role: str
    content: str
    documents: List[InlineDocument] = field(default_factory=list)


class LLMError(Exception):
    pass


class UpstreamHTTPError(LLMError):
    """The completion endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error status {status_code}: {_error_message(body)}")


def _error_message(body: str) -> str:
    try:
        data = json.loads(body)
    except ValueError:
        return body[:500]
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return str(data["error"].get("message") or body[:500])
    return body[:500]


def extract_candidate_text(data: Any) -> str:
    """Pull the completion text out of a generateContent response body.

    Anything other than ``candidates[0].content.parts[0].text`` being a string
    is an ``LLMError``, never a lookup error on a malformed body.
    """
    if not isinstance(data, dict):
        raise LLMError("Unexpected response format")
    candidates = data.get("candidates")
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        content = candidates[0].get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if isinstance(parts, list) and parts and isinstance(parts[0], dict):
            text = parts[0].get("text")
            if isinstance(text, str):
                return text
    if data.get("error"):
        err = data["error"]
        message = err.get("message") if isinstance(err, dict) else str(err)
        raise LLMError(message or "API error")
    raise LLMError("Unexpected response format")


def _openai_content(message: ChatMessage) -> Any:
    if not message.documents:
        return message.content
    content: List[Dict[str, Any]] = [{"type": "text", "text": message.content}]
    for doc in message.documents:
        content.append({"type": "file", "file": {"filename": doc.filename, "file_data": doc.data_url}})
    return content


class LLMClient:
    def __init__(
        self,
        config: Optional[AppConfig] = None,
        credentials: Optional[CredentialProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or load_config()
        self.credentials = credentials or EnvCredentialProvider(self.config)
        self._transport = transport
        self._provider, self._model = self._parse_model_preference(self.config.model_preference)
        logger.info(
            f"LLM preflight provider={self._provider} model={self._model} "
            f"timeout={self.config.request_timeout_seconds} attempts={self.config.max_retries}"
        )

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def model(self) -> str:
        return self._model

    @staticmethod
    def _parse_model_preference(pref: str) -> tuple[str, str]:
        if ":" in pref:
            provider, model = pref.split(":", 1)
        else:
            provider, model = "gemini", pref
        return provider.strip().lower(), model.strip()

    def require_api_key(self) -> str:
        return self.credentials.get_api_key(self._provider)

    async def acomplete(
        self,
        system_prompt: str,
        messages: List[ChatMessage],
        temperature: float = 0.2,
        max_tokens: int = 1024,
    ) -> str:
        # Missing credentials are not an upstream failure; let them propagate.
        api_key = self.require_api_key()
        max_retries = self.config.max_retries
        for attempt in range(1, max_retries + 1):
            try:
                if self._provider == "gemini":
                    return await self._gemini_complete(api_key, system_prompt, messages, temperature, max_tokens)
                elif self._provider == "openai":
                    return await self._openai_complete(api_key, system_prompt, messages, temperature, max_tokens)
                elif self._provider == "anthropic":
                    return await self._anthropic_complete(api_key, system_prompt, messages, temperature, max_tokens)
                else:
                    raise LLMError(f"Unsupported provider: {self._provider}")
            except LLMError as e:
                logger.warning(f"LLM request failed (attempt {attempt}/{max_retries}): {e}")
                if attempt == max_retries:
                    raise
                await asyncio.sleep(0.5 * attempt)
        raise LLMError("no attempts made")

    async def _gemini_complete(
        self,
        api_key: str,
        system_prompt: str,
        messages: List[ChatMessage],
        temperature: float,
        max_tokens: int,
    ) -> str:
        url = f"{self.config.gemini_api_base}/models/{self._model}:generateContent"
        # The v1 endpoint has no system role; the instructions lead the single user turn.
        chunks = [system_prompt] if system_prompt else []
        chunks.extend(m.content for m in messages)
        parts: List[Dict[str, Any]] = [{"text": "\n\n".join(chunks)}]
        for m in messages:
            for doc in m.documents:
                parts.append({"inline_data": {"mime_type": doc.mime_type, "data": doc.data}})
        body = {
            "contents": [{"parts": parts}],
            "generationConfig": {"temperature": temperature, "maxOutputTokens": max_tokens},
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.config.request_timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, params={"key": api_key}, json=body)
        except httpx.HTTPError as e:
            raise LLMError(f"Gemini request failed: {e!r}") from e

        logger.info(f"Gemini API response status: {resp.status_code}")
        if not resp.is_success:
            raise UpstreamHTTPError(resp.status_code, resp.text)
        try:
            data = resp.json()
        except ValueError as e:
            raise LLMError("Gemini returned a non-JSON body") from e
        return extract_candidate_text(data)

    async def _openai_complete(
        self,
        api_key: str,
        system_prompt: str,
        messages: List[ChatMessage],
        temperature: float,
        max_tokens: int,
    ) -> str:
        import openai

        try:
            client = openai.AsyncOpenAI(api_key=api_key)
            full_messages = ([{"role": "system", "content": system_prompt}] +
                             [{"role": m.role, "content": _openai_content(m)} for m in messages])
            resp = await asyncio.wait_for(
                client.chat.completions.create(
                    model=self._model,
                    messages=full_messages,
                    temperature=temperature,
                    max_tokens=max_tokens,
                ),
                timeout=self.config.request_timeout_seconds,
            )
            if not resp.choices:
                raise LLMError("Unexpected response format")
            return resp.choices[0].message.content or ""
        except openai.APIStatusError as e:
            raise UpstreamHTTPError(e.status_code, str(e)) from e
        except (openai.OpenAIError, asyncio.TimeoutError) as e:
            raise LLMError(str(e) or type(e).__name__) from e

    async def _anthropic_complete(
        self,
        api_key: str,
        system_prompt: str,
        messages: List[ChatMessage],
        temperature: float,
        max_tokens: int,
    ) -> str:
        import anthropic

        try:
            client = anthropic.AsyncAnthropic(api_key=api_key)
            user_content = []
            for m in messages:
                if m.role == "user":
                    user_content.append({"type": "text", "text": m.content})
                    for doc in m.documents:
                        user_content.append({
                            "type": "document",
                            "source": {"type": "base64", "media_type": doc.mime_type, "data": doc.data},
                        })
                elif m.role == "assistant":
                    # Anthropic API expects a linear conversation; fold assistant turns into the user content
                    user_content.append({"type": "text", "text": f"Assistant: {m.content}"})
            resp = await asyncio.wait_for(
                client.messages.create(
                    model=self._model,
                    system=system_prompt,
                    max_tokens=max_tokens,
                    temperature=temperature,
                    messages=[{"role": "user", "content": user_content}],
                ),
                timeout=self.config.request_timeout_seconds,
            )
            if not resp.content:
                raise LLMError("Unexpected response format")
            return getattr(resp.content[0], "text", "") or ""
        except anthropic.APIStatusError as e:
            raise UpstreamHTTPError(e.status_code, str(e)) from e
        except (anthropic.AnthropicError, asyncio.TimeoutError) as e:
            raise LLMError(str(e) or type(e).__name__) from e
