from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SectionHeading:
    field: str
    variants: Tuple[str, ...]


# Order matters: each section's body stops at the heading of any later entry.
# Words inside a variant match across spaces or hyphens, so "Follow-up" also
# covers "Follow up" and "Followup".
DEFAULT_SECTION_HEADINGS: Tuple[SectionHeading, ...] = (
    SectionHeading("strengths", ("Strengths", "Strength")),
    SectionHeading(
        "improvements",
        ("Areas for Improvement", "Areas to Improve", "Improvements", "Improvement"),
    ),
    SectionHeading(
        "missed_points",
        ("Key Points Missed", "Key Missed Points", "Missed Key Points", "Missed Points", "Points Missed"),
    ),
    SectionHeading("follow_up", ("Follow-up Question", "Follow-up")),
    SectionHeading("ideal_response", ("Ideal Response", "Ideal Answer", "Model Answer")),
)
