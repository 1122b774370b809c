from __future__ import annotations

from typing import Dict, List, Optional, Tuple
import asyncio
import importlib

from models import ChatMessage
from utils.config import AppConfig, load_config
from utils.logging import get_logger


logger = get_logger(__name__)

# provider -> (config attribute holding the key, SDK module)
PROVIDERS: Dict[str, Tuple[str, str]] = {
    "groq": ("groq_api_key", "groq"),
    "openai": ("openai_api_key", "openai"),
    "anthropic": ("anthropic_api_key", "anthropic"),
}


class LLMError(Exception):
    pass


class LLMUnavailable(LLMError):
    """Provider cannot be used at all: missing key or SDK."""


class LLMClient:
    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or load_config()
        self._provider, self._model = self._parse_model_preference(self.config.model_preference)
        self._unavailable_reason = self._preflight()
        status = "ready" if self.ready else f"unavailable:{self._unavailable_reason}"
        logger.info(f"LLM preflight provider={self._provider} model={self._model} status={status}")

    @property
    def ready(self) -> bool:
        return self._unavailable_reason is None

    @property
    def unavailable_reason(self) -> Optional[str]:
        return self._unavailable_reason

    @property
    def transcription_ready(self) -> bool:
        return bool(self.config.groq_api_key)

    @staticmethod
    def _parse_model_preference(pref: str) -> Tuple[str, str]:
        if ":" in pref:
            provider, model = pref.split(":", 1)
        else:
            provider, model = "groq", pref
        return provider.strip().lower(), model.strip()

    def _preflight(self) -> Optional[str]:
        if self._provider not in PROVIDERS:
            return f"unsupported_provider_{self._provider}"
        key_attr, module = PROVIDERS[self._provider]
        if not getattr(self.config, key_attr):
            return f"missing_{key_attr}"
        try:
            importlib.import_module(module)
        except ImportError:
            return f"missing_{module}_package"
        return None

    async def acomplete(
        self,
        system_prompt: str,
        messages: List[ChatMessage],
        temperature: float = 0.2,
        json_mode: bool = False,
    ) -> str:
        if not self.ready:
            raise LLMUnavailable(self._unavailable_reason or "provider_unavailable")
        max_retries = max(1, self.config.max_retries)
        timeout = self.config.request_timeout_seconds
        complete = getattr(self, f"_{self._provider}_complete")
        for attempt in range(1, max_retries + 1):
            try:
                return await complete(system_prompt, messages, temperature, timeout, json_mode)
            except LLMError as e:
                logger.warning(f"LLM request failed (attempt {attempt}/{max_retries}): {e}")
                if attempt == max_retries:
                    raise
                await asyncio.sleep(0.5 * attempt)
        raise LLMError("no attempts made")

    @staticmethod
    def _chat_payload(system_prompt: str, messages: List[ChatMessage]) -> List[Dict[str, str]]:
        return [{"role": "system", "content": system_prompt}] + [m.to_dict() for m in messages]

    async def _groq_complete(
        self, system_prompt: str, messages: List[ChatMessage], temperature: float, timeout: int, json_mode: bool
    ) -> str:
        try:
            from groq import AsyncGroq
            client = AsyncGroq(api_key=self.config.groq_api_key)
            extra = {"response_format": {"type": "json_object"}} if json_mode else {}
            resp = await asyncio.wait_for(
                client.chat.completions.create(
                    model=self._model,
                    messages=self._chat_payload(system_prompt, messages),
                    temperature=temperature,
                    **extra,
                ),
                timeout=timeout,
            )
            return resp.choices[0].message.content or ""
        except Exception as e:
            raise LLMError(str(e)) from e

    async def _openai_complete(
        self, system_prompt: str, messages: List[ChatMessage], temperature: float, timeout: int, json_mode: bool
    ) -> str:
        try:
            import openai
            client = openai.AsyncOpenAI(api_key=self.config.openai_api_key)
            extra = {"response_format": {"type": "json_object"}} if json_mode else {}
            resp = await asyncio.wait_for(
                client.chat.completions.create(
                    model=self._model,
                    messages=self._chat_payload(system_prompt, messages),
                    temperature=temperature,
                    **extra,
                ),
                timeout=timeout,
            )
            return resp.choices[0].message.content or ""
        except Exception as e:
            raise LLMError(str(e)) from e

    async def _anthropic_complete(
        self, system_prompt: str, messages: List[ChatMessage], temperature: float, timeout: int, json_mode: bool
    ) -> str:
        try:
            from anthropic import AsyncAnthropic
            client = AsyncAnthropic(api_key=self.config.anthropic_api_key)
            if json_mode:
                system_prompt += "\nRespond with the JSON object only."
            # Anthropic needs the conversation to open with a user turn
            turns = [m.to_dict() for m in messages]
            if not turns or turns[0]["role"] != "user":
                turns.insert(0, {"role": "user", "content": "Begin."})
            resp = await asyncio.wait_for(
                client.messages.create(
                    model=self._model,
                    system=system_prompt,
                    max_tokens=1200,
                    temperature=temperature,
                    messages=turns,
                ),
                timeout=timeout,
            )
            return resp.content[0].text if resp.content else ""
        except Exception as e:
            raise LLMError(str(e)) from e

    async def atranscribe(self, audio: bytes, filename: str = "answer.webm") -> str:
        if not self.transcription_ready:
            raise LLMUnavailable("missing_groq_api_key")
        try:
            from groq import AsyncGroq
            client = AsyncGroq(api_key=self.config.groq_api_key)
            resp = await asyncio.wait_for(
                client.audio.transcriptions.create(
                    file=(filename, audio),
                    model=self.config.transcription_model,
                ),
                timeout=self.config.request_timeout_seconds,
            )
            return (resp.text or "").strip()
        except Exception as e:
            raise LLMError(str(e)) from e
