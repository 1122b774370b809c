from __future__ import annotations

import base64
from typing import Optional

import httpx

from utils.config import AppConfig, load_config
from utils.logging import get_logger

logger = get_logger(__name__)

CARTESIA_TTS_URL = "https://api.cartesia.ai/tts/bytes"
CARTESIA_VERSION = "2024-06-30"


class TTSError(Exception):
    pass


class CartesiaTTS:
    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or load_config()

    @property
    def available(self) -> bool:
        return bool(self.config.cartesia_api_key)

    async def synthesize(self, text: str) -> bytes:
        if not self.available:
            raise TTSError("TTS API key not configured")
        payload = {
            "model_id": self.config.cartesia_model_id,
            "transcript": text,
            "voice": {"mode": "id", "id": self.config.cartesia_voice_id},
            "output_format": {"container": "mp3", "encoding": "mp3", "sample_rate": 24000},
        }
        headers = {
            "Cartesia-Version": CARTESIA_VERSION,
            "Content-Type": "application/json",
            "X-API-Key": self.config.cartesia_api_key or "",
        }
        try:
            async with httpx.AsyncClient(timeout=self.config.request_timeout_seconds) as client:
                resp = await client.post(CARTESIA_TTS_URL, json=payload, headers=headers)
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TTSError(f"Failed to generate speech: {exc.response.status_code} {exc.response.text}") from exc
        except httpx.HTTPError as exc:
            raise TTSError(f"Failed to generate speech: {exc}") from exc
        logger.info(f"Audio generated, size={len(resp.content)} bytes")
        return resp.content

    async def synthesize_data_uri(self, text: str) -> str:
        audio = await self.synthesize(text)
        return "data:audio/mp3;base64," + base64.b64encode(audio).decode("ascii")
