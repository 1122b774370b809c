from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import os


@dataclass
class AppConfig:
    groq_api_key: Optional[str]
    openai_api_key: Optional[str]
    anthropic_api_key: Optional[str]
    cartesia_api_key: Optional[str]
    model_preference: str
    transcription_model: str
    cartesia_model_id: str
    cartesia_voice_id: str
    request_timeout_seconds: int
    max_retries: int
    log_level: str
    history_path: str


def load_config() -> AppConfig:
    return AppConfig(
        groq_api_key=os.getenv("GROQ_API_KEY"),
        openai_api_key=(
            os.getenv("OPENAI_API_KEY")
            or os.getenv("OPENAI_KEY")
        ),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
        cartesia_api_key=os.getenv("CARTESIA_API_KEY"),
        model_preference=os.getenv("MODEL_PREFERENCE", "groq:llama3-8b-8192"),
        transcription_model=os.getenv("TRANSCRIPTION_MODEL", "whisper-large-v3"),
        cartesia_model_id=os.getenv("CARTESIA_MODEL_ID", "sonic-english"),
        cartesia_voice_id=os.getenv("CARTESIA_VOICE_ID", "79a125e8-cd45-4c13-8a67-188112f4dd22"),
        request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT_SECONDS", "30")),
        max_retries=int(os.getenv("MAX_RETRIES", "3")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        history_path=os.getenv("HISTORY_PATH", "problem_history.json"),
    )
