from __future__ import annotations

import json
import os
from dataclasses import asdict
from typing import Any, List

from models import InterviewState, ProblemHistoryItem, find_category
from parsers import parse_evaluation
from utils.logging import get_logger

logger = get_logger(__name__)

HISTORY_LIMIT = 50


def state_to_dict(state: InterviewState) -> dict[str, Any]:
    """Snapshot of one interview, with each evaluation in parsed form too."""
    turns = []
    pending_answer = None
    for msg in state.messages[1:]:
        if msg.role == "user":
            pending_answer = msg.content
        elif pending_answer is not None:
            turns.append(
                {
                    "answer": pending_answer,
                    "evaluation": msg.content,
                    "parsed": parse_evaluation(msg.content).to_dict(),
                }
            )
            pending_answer = None
    return {
        "id": state.problem_id,
        "category": state.category,
        "question": state.current_question,
        "difficulty": state.difficulty,
        "hints": [h.text for h in state.hints],
        "messages": [m.to_dict() for m in state.messages],
        "turns": turns,
    }


def save_transcript_json(states: List[InterviewState], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump([state_to_dict(s) for s in states], f, indent=2)


class HistoryStore:
    """Most-recent-first list of practiced problems kept in a JSON file."""

    def __init__(self, path: str, limit: int = HISTORY_LIMIT):
        self.path = path
        self.limit = limit

    def load(self) -> List[ProblemHistoryItem]:
        if not os.path.isfile(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [ProblemHistoryItem(**item) for item in data]
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to parse history at {self.path}: {e}")
            return []

    def record(self, state: InterviewState) -> ProblemHistoryItem:
        category = find_category(state.category or "")
        item = ProblemHistoryItem.from_state(state, category.name if category else "Unknown")
        history = self.load()
        for index, existing in enumerate(history):
            if existing.id == item.id:
                history[index] = item
                break
        else:
            history.insert(0, item)
        history = history[: self.limit]
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([asdict(h) for h in history], f, indent=2)
        return item
