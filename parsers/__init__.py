from .evaluation_headings import DEFAULT_SECTION_HEADINGS, SectionHeading
from .evaluation_parser import parse_evaluation
from .list_segmenter import segment_list
from .question_parser import (
    format_question_markdown,
    parse_question_response,
    validate_question_payload,
)
from .sanitizer import DEFAULT_CODE_LANGUAGE, sanitize_follow_up, sanitize_ideal_response
from .score_extractor import extract_score
from .section_extractor import extract_sections

__all__ = [
    "DEFAULT_SECTION_HEADINGS",
    "SectionHeading",
    "parse_evaluation",
    "segment_list",
    "format_question_markdown",
    "parse_question_response",
    "validate_question_payload",
    "DEFAULT_CODE_LANGUAGE",
    "sanitize_follow_up",
    "sanitize_ideal_response",
    "extract_score",
    "extract_sections",
]
