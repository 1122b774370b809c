from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


class Difficulty:
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    ALL = (EASY, MEDIUM, HARD)


@dataclass
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class Hint:
    text: str
    visible: bool = False


@dataclass
class InterviewQuestion:
    question: str
    hints: List[Hint] = field(default_factory=list)
    difficulty: Optional[str] = None

    def reveal_next_hint(self) -> Optional[Hint]:
        for hint in self.hints:
            if not hint.visible:
                hint.visible = True
                return hint
        return None
