from __future__ import annotations

from typing import List, Optional

from models import ChatMessage
from tools.llm_client import LLMClient
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
        messages: List[ChatMessage],
        temperature: float = 0.2,
        json_mode: bool = False,
    ) -> str:
        return await self.llm.acomplete(system_prompt, messages, temperature=temperature, json_mode=json_mode)

    def describe(self) -> str:
        return f"{self.name}: {self.role}"
