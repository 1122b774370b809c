from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, List, Pattern, Tuple

from .evaluation_headings import DEFAULT_SECTION_HEADINGS, SectionHeading

_EMPHASIS = r"(?:\*{1,2}|_{1,2})?"
_FLAGS = re.IGNORECASE | re.MULTILINE | re.DOTALL
# "of your answer" in "Strengths of your answer:"
_QUALIFIER = r"[ \t]+(?:of|in|for|from|to|on|with)\b[^\n:*_]{0,40}?"
_AFTER_SENTENCE = r"(?<=[.!?;])[ \t]+"


def _variant_regex(variant: str) -> str:
    words = [w for w in re.split(r"[\s-]+", variant.strip()) if w]
    return r"[ \t-]*".join(re.escape(w) for w in words)


def heading_regex(heading: SectionHeading) -> str:
    """Regex source for one heading lead-in.

    At the start of a line this accepts ``Strengths:``, ``## Strengths``,
    ``**Strengths:**``, ``2. **Strengths**:``, ``Strengths of your answer:``
    and similar; a heading without a colon must then end the line. After
    sentence punctuation on the same line (``Score: 4/5. Strengths: ...``)
    only the colon form counts. Emphasis after the colon is only consumed
    when it closes the heading, not when it opens the body.
    """
    names = "|".join(
        _variant_regex(v) for v in sorted(heading.variants, key=len, reverse=True)
    )
    name = _EMPHASIS + r"[ \t]*" + f"(?:{names})"
    colon_end = (
        r"[ \t]*" + _EMPHASIS + r"[ \t]*"
        + r":(?:[ \t]*(?:\*{1,2}|_{1,2})(?=\s))?"
    )
    line_end = r"[ \t]*" + _EMPHASIS + r"[ \t]*(?=\n|\Z)"
    line_start = (
        r"^[ \t]*(?:#{1,6}[ \t]*)?(?:\d+[.)][ \t]*)?" + name
        + f"(?:(?:{_QUALIFIER})?{colon_end}|{line_end})"
    )
    mid_line = _AFTER_SENTENCE + name + colon_end
    return f"(?:{line_start}|{mid_line})"


@lru_cache(maxsize=16)
def compile_section_patterns(
    headings: Tuple[SectionHeading, ...],
) -> List[Tuple[SectionHeading, Pattern[str]]]:
    compiled: List[Tuple[SectionHeading, Pattern[str]]] = []
    for index, heading in enumerate(headings):
        later = [heading_regex(h) for h in headings[index + 1:]]
        if later:
            stop = "(?=" + "|".join(f"(?:{src})" for src in later) + r"|\Z)"
        else:
            stop = r"\Z"
        source = heading_regex(heading) + r"(?P<body>.*?)" + stop
        compiled.append((heading, re.compile(source, _FLAGS)))
    return compiled


def extract_sections(
    text: str,
    headings: Tuple[SectionHeading, ...] = DEFAULT_SECTION_HEADINGS,
) -> Dict[str, str]:
    """Map field name to the raw body of each section found in ``text``.

    Sections whose heading does not appear are left out of the result.
    """
    sections: Dict[str, str] = {}
    for heading, pattern in compile_section_patterns(tuple(headings)):
        match = pattern.search(text)
        if match:
            sections[heading.field] = match.group("body").strip()
    return sections
