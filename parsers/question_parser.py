from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from models import Difficulty, Hint, InterviewQuestion
from utils.logging import get_logger

logger = get_logger(__name__)

_QUESTION_BLOCK = re.compile(r"Question:\s*([\s\S]*?)(?=Hint1:|\Z)")
_HINT_BLOCKS = (
    re.compile(r"Hint1:\s*([\s\S]*?)(?=Hint2:|\Z)"),
    re.compile(r"Hint2:\s*([\s\S]*?)(?=Hint3:|\Z)"),
    re.compile(r"Hint3:\s*([\s\S]*?)\Z"),
)
# 'term' or ‘term’ not already inside backticks
_QUOTED_TERM = re.compile(r"(?<![`\\])['‘’]([a-zA-Z0-9_.]+)['‘’](?!`)")


class QuestionPayload(BaseModel):
    question: str
    hints: List[str] = Field(min_length=3, max_length=3)
    difficulty: Literal["easy", "medium", "hard"]


def validate_question_payload(raw: str) -> Optional[Dict[str, Any]]:
    """Validate a JSON question reply; None when it does not fit the schema."""
    try:
        return QuestionPayload.model_validate_json(raw).model_dump()
    except ValidationError as e:
        logger.warning(f"Question response failed validation: {e.error_count()} error(s)")
        return None


def _from_mapping(data: Dict[str, Any]) -> Optional[InterviewQuestion]:
    question = data.get("question")
    hints = data.get("hints")
    if not question or not isinstance(hints, list):
        return None
    difficulty = data.get("difficulty")
    return InterviewQuestion(
        question=str(question),
        hints=[Hint(text=str(h)) for h in hints],
        difficulty=difficulty if difficulty in Difficulty.ALL else None,
    )


def parse_labeled_question(raw: str) -> InterviewQuestion:
    match = _QUESTION_BLOCK.search(raw)
    question = match.group(1).strip() if match else raw
    hints = []
    for pattern in _HINT_BLOCKS:
        hint = pattern.search(raw)
        if hint:
            hints.append(Hint(text=hint.group(1).strip()))
    return InterviewQuestion(question=question, hints=hints)


def parse_question_response(
    raw: str, structured: Optional[Dict[str, Any]] = None
) -> InterviewQuestion:
    """Build a question from an API reply.

    Structured content wins; then the raw text is tried as JSON; then the
    ``Question:`` / ``HintN:`` labels are split out. Without a ``Question:``
    label the whole text is the question.
    """
    if structured:
        parsed = _from_mapping(structured)
        if parsed:
            return parsed
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        data = None
    if isinstance(data, dict):
        parsed = _from_mapping(data)
        if parsed:
            return parsed
    logger.debug("Question reply is not JSON, using labeled blocks")
    return parse_labeled_question(raw or "")


def format_question_markdown(text: str) -> str:
    if not text:
        return ""
    return _QUOTED_TERM.sub(r"`\1`", text)
