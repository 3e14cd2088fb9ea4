from __future__ import annotations

from typing import List, Optional

from tools.llm_client import ChatMessage, InlineDocument, LLMClient
from utils.logging import get_logger


class BaseAgent:
    def __init__(self, name: str, role: str, llm: Optional[LLMClient] = None):
        self.name = name
        self.role = role
        self.logger = get_logger(f"agent.{name}")
        self.llm = llm or LLMClient()

    async def acomplete(
        self,
        system_prompt: str,
        user_content: str,
        temperature: float = 0.2,
        max_tokens: int = 1024,
        documents: Optional[List[InlineDocument]] = None,
    ) -> str:
        messages = [ChatMessage(role="user", content=user_content, documents=list(documents or []))]
        return await self.llm.acomplete(system_prompt, messages, temperature=temperature, max_tokens=max_tokens)
