from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ParsedEvaluation:
    score: float = 0.0
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)
    missed_points: List[str] = field(default_factory=list)
    follow_up: str = ""
    ideal_response: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "missedPoints": list(self.missed_points),
            "followUp": self.follow_up,
            "idealResponse": self.ideal_response,
        }
