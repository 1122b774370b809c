from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import time
import uuid

from .question import ChatMessage, Hint


class InterviewStep:
    IDLE = "idle"
    QUESTION = "question"
    ANSWERING = "answering"
    RECORDING = "recording"
    EVALUATING = "evaluating"
    INPUT = "input"


class InterviewEvent:
    START = "start"
    NEXT_QUESTION = "next_question"
    QUESTION_READY = "question_ready"
    QUESTION_PLAYED = "question_played"
    START_RECORDING = "start_recording"
    STOP_RECORDING = "stop_recording"
    SUBMIT = "submit"
    EVALUATED = "evaluated"
    EVALUATION_FAILED = "evaluation_failed"
    RECORDING_FAILED = "recording_failed"
    START_FAILED = "start_failed"
    END = "end"


# (event, from_step) -> to_step
TRANSITIONS: Dict[Tuple[str, str], str] = {
    (InterviewEvent.START, InterviewStep.IDLE): InterviewStep.QUESTION,
    (InterviewEvent.NEXT_QUESTION, InterviewStep.IDLE): InterviewStep.QUESTION,
    (InterviewEvent.QUESTION_READY, InterviewStep.QUESTION): InterviewStep.INPUT,
    (InterviewEvent.QUESTION_PLAYED, InterviewStep.QUESTION): InterviewStep.ANSWERING,
    (InterviewEvent.START_FAILED, InterviewStep.QUESTION): InterviewStep.IDLE,
    (InterviewEvent.START_RECORDING, InterviewStep.ANSWERING): InterviewStep.RECORDING,
    (InterviewEvent.STOP_RECORDING, InterviewStep.RECORDING): InterviewStep.EVALUATING,
    (InterviewEvent.SUBMIT, InterviewStep.INPUT): InterviewStep.EVALUATING,
    (InterviewEvent.SUBMIT, InterviewStep.ANSWERING): InterviewStep.EVALUATING,
    (InterviewEvent.EVALUATED, InterviewStep.EVALUATING): InterviewStep.IDLE,
    (InterviewEvent.EVALUATION_FAILED, InterviewStep.EVALUATING): InterviewStep.INPUT,
    (InterviewEvent.RECORDING_FAILED, InterviewStep.EVALUATING): InterviewStep.ANSWERING,
}


class InvalidTransition(Exception):
    def __init__(self, event: str, step: str):
        super().__init__(f"cannot apply '{event}' in step '{step}'")
        self.event = event
        self.step = step


@dataclass
class InterviewState:
    """Explicit state of one practice interview.

    The step only changes through ``apply``; every other field is data the
    steps carry along. ``END`` is accepted from any step and resets the
    interview to an inactive idle state.
    """

    category: Optional[str] = None
    is_active: bool = False
    current_step: str = InterviewStep.IDLE
    messages: List[ChatMessage] = field(default_factory=list)
    current_question: str = ""
    hints: List[Hint] = field(default_factory=list)
    difficulty: Optional[str] = None
    voice_mode_enabled: bool = False
    problem_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    started_at: float = field(default_factory=time.time)

    def can_apply(self, event: str) -> bool:
        return event == InterviewEvent.END or (event, self.current_step) in TRANSITIONS

    def apply(self, event: str) -> str:
        if event == InterviewEvent.END:
            self.is_active = False
            self.current_step = InterviewStep.IDLE
            return self.current_step
        target = TRANSITIONS.get((event, self.current_step))
        if target is None:
            raise InvalidTransition(event, self.current_step)
        if event == InterviewEvent.START:
            self.is_active = True
            self.messages = []
        elif event == InterviewEvent.START_FAILED:
            self.is_active = False
            self.category = None
            self.messages = []
            self.current_question = ""
        self.current_step = target
        return target

    def start(self, category: str) -> None:
        self.category = category
        self.apply(InterviewEvent.START)

    def set_question(self, question: str, hints: List[Hint], difficulty: Optional[str] = None) -> None:
        self.current_question = question
        self.hints = hints
        self.difficulty = difficulty
        self.messages.append(ChatMessage(role="assistant", content=question))

    def record_answer(self, answer: str) -> None:
        self.messages.append(ChatMessage(role="user", content=answer))

    def record_evaluation(self, evaluation_text: str) -> None:
        self.messages.append(ChatMessage(role="assistant", content=evaluation_text))


@dataclass
class ProblemHistoryItem:
    id: str
    title: str
    category: str
    date: str
    status: str  # "in-progress" | "completed"

    @staticmethod
    def from_state(state: InterviewState, category_name: str) -> "ProblemHistoryItem":
        question = state.current_question
        title = question[:50] + ("..." if len(question) > 50 else "")
        return ProblemHistoryItem(
            id=state.problem_id,
            title=title,
            category=category_name or "Unknown",
            date=time.strftime("%Y-%m-%d", time.localtime(state.started_at)),
            status="completed" if len(state.messages) > 1 else "in-progress",
        )
