from .evaluation import ParsedEvaluation
from .question import ChatMessage, Difficulty, Hint, InterviewQuestion
from .category import Category, CATEGORIES, find_category
from .session import (
    InterviewEvent,
    InterviewState,
    InterviewStep,
    InvalidTransition,
    ProblemHistoryItem,
)

__all__ = [
    "ParsedEvaluation",
    "ChatMessage",
    "Difficulty",
    "Hint",
    "InterviewQuestion",
    "Category",
    "CATEGORIES",
    "find_category",
    "InterviewEvent",
    "InterviewState",
    "InterviewStep",
    "InvalidTransition",
    "ProblemHistoryItem",
]
