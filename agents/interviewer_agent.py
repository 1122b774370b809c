from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from models import ChatMessage
from parsers import validate_question_payload
from .base_agent import BaseAgent
from .prompts import FORMATTING_RULES


QUESTION_SYSTEM = (
    "You are Cartesia, a technical interviewer specializing in {category}.\n\n"
    "Generate a realistic interview question about {category} that would be asked in a technical "
    "interview, along with three progressive hints and a difficulty rating.\n\n"
    "The question should:\n"
    "1. Be concise and clear\n"
    "2. Be challenging but reasonable for a software engineering interview\n"
    "3. Test both theoretical knowledge and practical application\n"
    "4. Be specific enough that it can be answered in 1-3 minutes verbally\n\n"
    "{formatting}\n"
    "Also provide THREE hints of increasing magnitude:\n"
    "- Hint 1: A subtle hint that gently guides the user toward the answer\n"
    "- Hint 2: A more direct hint that clarifies an important concept needed for the answer\n"
    "- Hint 3: A substantial hint that almost gives away the answer but still requires some thinking\n\n"
    'Rate the difficulty of the question as one of "easy", "medium" or "hard".\n\n'
    "IMPORTANT: You MUST respond with a valid JSON object in the following format:\n"
    "{{\n"
    '  "question": "The interview question text",\n'
    '  "hints": ["First hint", "Second hint", "Third hint"],\n'
    '  "difficulty": "easy|medium|hard"\n'
    "}}\n\n"
    "Do not include any additional text outside of this JSON structure."
)


@dataclass
class QuestionResult:
    raw: str
    structured: Optional[Dict[str, Any]] = None

    @property
    def question_text(self) -> str:
        return self.structured["question"] if self.structured else self.raw


class InterviewerAgent(BaseAgent):
    async def generate_question(self, category: str, messages: List[ChatMessage]) -> QuestionResult:
        system = QUESTION_SYSTEM.format(category=category, formatting=FORMATTING_RULES)
        raw = await self.acomplete(system, messages, temperature=0.7, json_mode=True)
        structured = validate_question_payload(raw)
        if structured:
            self.logger.info(f"Structured question received for {category} ({structured['difficulty']})")
        else:
            self.logger.info(f"Falling back to raw question text for {category}")
        return QuestionResult(raw=raw, structured=structured)
