from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from models import ChatMessage
from tools.llm_client import LLMClient
from tools.tts import CartesiaTTS, TTSError
from utils.config import AppConfig, load_config
from utils.logging import get_logger
from utils.telemetry import Telemetry
from .evaluator_agent import EvaluationResult, EvaluatorAgent
from .interviewer_agent import InterviewerAgent


@dataclass
class QuestionReply:
    response: str
    structured: Optional[Dict[str, Any]] = None
    audio_data: Optional[str] = None
    error: Optional[str] = None


class OrchestratorAgent:
    """Entry point for one practice round: question, answer, feedback."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        llm: Optional[LLMClient] = None,
        tts: Optional[CartesiaTTS] = None,
    ):
        self.config = config or load_config()
        self.logger = get_logger("agent.orchestrator")
        self.telemetry = Telemetry()
        self.llm = llm or LLMClient(self.config)
        self.tts = tts or CartesiaTTS(self.config)
        self.interviewer = InterviewerAgent("interviewer", "Generates category questions with hints", self.llm)
        self.evaluator = EvaluatorAgent("evaluator", "Evaluates answers and provides feedback", self.llm)
        for agent in (self.interviewer, self.evaluator):
            self.logger.debug(f"Registered {agent.describe()}")

    @property
    def llm_ready(self) -> bool:
        return self.llm.ready

    async def fetch_question(
        self, category: str, messages: List[ChatMessage], generate_audio: bool = False
    ) -> QuestionReply:
        self.telemetry.incr("questions_requested")
        with self.telemetry.timer("question_gen_ms"):
            result = await self.interviewer.generate_question(category, messages)
        reply = QuestionReply(response=result.raw, structured=result.structured)
        if not generate_audio:
            return reply

        if not self.tts.available:
            self.logger.warning("CARTESIA_API_KEY not set, returning text-only question")
            reply.error = "TTS API key not configured"
            return reply
        try:
            with self.telemetry.timer("tts_ms"):
                reply.audio_data = await self.tts.synthesize_data_uri(result.question_text)
        except TTSError as e:
            self.logger.error(f"Error generating speech: {e}")
            reply.error = "TTS generation failed"
        return reply

    async def evaluate_answer(self, category: str, messages: List[ChatMessage]) -> EvaluationResult:
        self.telemetry.incr("answers_evaluated")
        with self.telemetry.timer("evaluation_ms"):
            return await self.evaluator.evaluate(category, messages)

    async def transcribe(self, audio: bytes, filename: str = "answer.webm") -> str:
        self.telemetry.incr("transcriptions")
        with self.telemetry.timer("transcription_ms"):
            text = await self.llm.atranscribe(audio, filename)
        self.logger.info(f"Transcription finished, {len(text)} characters")
        return text
