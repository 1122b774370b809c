from __future__ import annotations

import re

# "Score: 4.5", "Overall score 3", "**Score:** 4"; not "underscore 5"
SCORE_LABEL_PATTERN = re.compile(r"\bscore\**[ \t]*:?[ \t]*\**[ \t]*(\d+(?:\.\d+)?)", re.IGNORECASE)
# "4/5"
SCORE_FRACTION_PATTERN = re.compile(r"(\d+(?:\.\d+)?)/5(?!\d)")

SCORE_PATTERNS = (SCORE_LABEL_PATTERN, SCORE_FRACTION_PATTERN)


def extract_score(text: str) -> float:
    """Return the first score found, trying each pattern over the whole text.

    A missing score is reported as 0.0, the same as a real zero. Values are
    not clamped to the 0-5 range.
    """
    for pattern in SCORE_PATTERNS:
        match = pattern.search(text)
        if match:
            return float(match.group(1))
    return 0.0
