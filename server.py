from __future__ import annotations

import json
from typing import Any, Dict, List, Optional
import time

from dotenv import load_dotenv, find_dotenv
from fastapi import Depends, FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from agents.orchestrator_agent import OrchestratorAgent
from models import CATEGORIES, ChatMessage
from parsers import parse_evaluation
from tools.llm_client import LLMError, LLMUnavailable
from utils.config import load_config
from utils.logging import get_logger, setup_logging

load_dotenv(find_dotenv(), override=False)

REQUEST_TYPES = {"question", "evaluate", "audio"}
MIN_AUDIO_BYTES = 1000
MIN_TRANSCRIPT_CHARS = 5

config = load_config()
setup_logging(config.log_level)
logger = get_logger("server")

app = FastAPI(title="feedback-loop")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.start_time = time.time()
app.state.orchestrator = None


class HealthResp(BaseModel):
    status: str
    uptime_seconds: float
    llm_ready: bool
    counters: Dict[str, int]


class VersionResp(BaseModel):
    version: str
    api: str


class CategoryResp(BaseModel):
    id: str
    name: str


class ParseEvaluationReq(BaseModel):
    text: str


class ParsedEvaluationResp(BaseModel):
    score: float
    strengths: List[str]
    improvements: List[str]
    missedPoints: List[str]
    followUp: str
    idealResponse: str


def get_orchestrator() -> OrchestratorAgent:
    if app.state.orchestrator is None:
        app.state.orchestrator = OrchestratorAgent(config)
    return app.state.orchestrator


def parse_messages(entries: List[str]) -> List[ChatMessage]:
    """Decode the repeated ``messages`` form field, dropping bad entries."""
    messages: List[ChatMessage] = []
    for entry in entries:
        try:
            data = json.loads(entry)
        except ValueError:
            logger.error(f"Failed to parse message JSON: {entry[:200]}")
            continue
        if not isinstance(data, dict) or "role" not in data or "content" not in data:
            logger.error(f"Invalid message structure: {str(data)[:200]}")
            continue
        messages.append(ChatMessage(role=str(data["role"]), content=str(data["content"])))
    return messages


def _error(message: str, status_code: int, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


async def _handle_audio(orch: OrchestratorAgent, audio: UploadFile) -> JSONResponse:
    data = await audio.read()
    logger.info(f"Processing audio transcription request, file size: {len(data)} bytes")
    if len(data) < MIN_AUDIO_BYTES:
        return _error(
            "Audio file too small or empty. Please ensure your microphone is working and try again.", 400
        )
    if not orch.llm.transcription_ready:
        logger.error("GROQ_API_KEY environment variable is not set")
        return _error("API key configuration error. Transcription service is not properly configured.", 500)
    try:
        text = await orch.transcribe(data, audio.filename or "answer.webm")
    except LLMError as e:
        logger.error(f"Error transcribing audio: {e}")
        return _error(
            f"Failed to transcribe audio: {e}", 500, errorDetails={"message": str(e), "type": "transcription_error"}
        )
    if len(text) < MIN_TRANSCRIPT_CHARS:
        logger.warning(f"Transcription result was empty or too short: {text!r}")
        return JSONResponse(
            content={
                "error": "No speech detected in the recording. Please speak clearly and try again.",
                "transcript": text,
            }
        )
    return JSONResponse(content={"transcript": text})


@app.get("/health", response_model=HealthResp)
async def health(orch: OrchestratorAgent = Depends(get_orchestrator)) -> HealthResp:
    return HealthResp(
        status="ok",
        uptime_seconds=round(time.time() - app.state.start_time, 3),
        llm_ready=orch.llm_ready,
        counters=dict(orch.telemetry.counters),
    )


@app.get("/version", response_model=VersionResp)
async def version() -> VersionResp:
    return VersionResp(version="0.1.0", api="v1")


@app.get("/api/categories", response_model=List[CategoryResp])
async def categories() -> List[CategoryResp]:
    return [CategoryResp(id=c.id, name=c.name) for c in CATEGORIES]


@app.post("/api/evaluation/parse", response_model=ParsedEvaluationResp)
async def parse_evaluation_text(req: ParseEvaluationReq) -> ParsedEvaluationResp:
    return ParsedEvaluationResp(**parse_evaluation(req.text).to_dict())


@app.post("/api")
async def interview_api(
    category: str = Form(""),
    requestType: str = Form("question"),
    messages: List[str] = Form([]),
    generateAudio: str = Form("false"),
    audioData: Optional[UploadFile] = File(None),
    orch: OrchestratorAgent = Depends(get_orchestrator),
) -> JSONResponse:
    request_type = requestType.strip().lower()
    if request_type not in REQUEST_TYPES:
        logger.warning(f"Unknown requestType '{requestType}', treating as question")
        request_type = "question"
    generate_audio = generateAudio.strip().lower() == "true"
    chat = parse_messages(messages)
    logger.info(
        f"Processing {request_type} request for category: {category}, "
        f"messages={len(chat)}, generateAudio={generate_audio}"
    )

    if request_type == "audio":
        if audioData is None:
            return _error("audioData is required for audio requests", 400)
        return await _handle_audio(orch, audioData)

    try:
        if request_type == "evaluate":
            result = await orch.evaluate_answer(category, chat)
            return JSONResponse(
                content={
                    "response": result.raw,
                    "structuredContent": None,
                    "evaluation": result.parsed.to_dict(),
                }
            )
        reply = await orch.fetch_question(category, chat, generate_audio=generate_audio)
    except LLMUnavailable as e:
        logger.error(f"LLM provider unavailable: {e}")
        return _error("API key configuration error", 500)
    except LLMError as e:
        logger.error(f"Error generating response: {e}")
        return _error(f"Failed to generate response: {e}", 500)

    body: Dict[str, Any] = {"response": reply.response, "structuredContent": reply.structured}
    if generate_audio:
        body["audioData"] = reply.audio_data
    if reply.error:
        body["error"] = reply.error
    return JSONResponse(content=body)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
