"""
Turn a free-form answer evaluation into a ParsedEvaluation.

The pipeline is: score extraction over the whole text, section extraction
with the heading table, then one field processor per section. Every step is
a plain function so each rule can be exercised on its own.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

from models import ParsedEvaluation
from utils.logging import get_logger
from .evaluation_headings import DEFAULT_SECTION_HEADINGS, SectionHeading
from .list_segmenter import segment_list
from .sanitizer import sanitize_follow_up, sanitize_ideal_response
from .score_extractor import extract_score
from .section_extractor import extract_sections

logger = get_logger(__name__)

FIELD_PROCESSORS: Dict[str, Callable[[str], Any]] = {
    "strengths": segment_list,
    "improvements": segment_list,
    "missed_points": segment_list,
    "follow_up": sanitize_follow_up,
    "ideal_response": sanitize_ideal_response,
}


def parse_evaluation(
    text: Optional[str],
    headings: Tuple[SectionHeading, ...] = DEFAULT_SECTION_HEADINGS,
) -> ParsedEvaluation:
    """Parse evaluation text; never raises for any input string.

    ``headings`` replaces the section heading table. Its field names must be
    ParsedEvaluation fields (see FIELD_PROCESSORS).
    """
    for heading in headings:
        if heading.field not in FIELD_PROCESSORS:
            raise ValueError(f"Unknown evaluation field in heading table: {heading.field}")

    source = (text or "").replace("\r\n", "\n")
    result = ParsedEvaluation(score=extract_score(source))
    sections = extract_sections(source, tuple(headings))
    for field_name, raw in sections.items():
        setattr(result, field_name, FIELD_PROCESSORS[field_name](raw))

    missing = [h.field for h in headings if h.field not in sections]
    if missing:
        logger.debug(f"Evaluation parsed without sections: {', '.join(missing)}")
    return result
