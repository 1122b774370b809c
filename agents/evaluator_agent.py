from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from models import ChatMessage, ParsedEvaluation
from parsers import parse_evaluation
from .base_agent import BaseAgent
from .prompts import FORMATTING_RULES


EVALUATOR_SYSTEM = (
    "You are Cartesia, an expert technical interviewer specializing in {category}.\n\n"
    "You're evaluating a candidate's answer to a technical interview question.\n"
    "Based on their response:\n"
    "1. Provide a score from 1-5 (where 5 is excellent)\n"
    "2. Give specific feedback on the strengths of the answer\n"
    "3. Suggest areas for improvement\n"
    "4. Add any key points the candidate missed\n"
    "5. If appropriate, ask a follow-up question to dig deeper\n"
    "6. Show an ideal response\n\n"
    "Use these labels, each on its own line: 'Score: N/5', 'Strengths:', "
    "'Areas for Improvement:', 'Key Points Missed:', 'Follow-up Question:', 'Ideal Response:'.\n\n"
    "{formatting}"
    "- Use **bold** text for important points\n"
    "- Use bullet points for lists where appropriate\n\n"
    "Be honest but constructive - your goal is to help the candidate improve."
)


@dataclass
class EvaluationResult:
    raw: str
    parsed: ParsedEvaluation = field(default_factory=ParsedEvaluation)


class EvaluatorAgent(BaseAgent):
    async def evaluate(self, category: str, messages: List[ChatMessage]) -> EvaluationResult:
        system = EVALUATOR_SYSTEM.format(category=category, formatting=FORMATTING_RULES)
        raw = await self.acomplete(system, messages)
        parsed = parse_evaluation(raw)
        self.logger.info(
            f"Evaluation for {category}: score={parsed.score} strengths={len(parsed.strengths)} "
            f"improvements={len(parsed.improvements)} missed={len(parsed.missed_points)}"
        )
        return EvaluationResult(raw=raw, parsed=parsed)
