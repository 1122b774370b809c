from __future__ import annotations

import re
from typing import Callable, List, Tuple

DEFAULT_CODE_LANGUAGE = "plaintext"

_H3_HEADER = re.compile(r"^###(?!#)[ \t]*")
_LEADING_ASTERISKS = re.compile(r"^\*+")
_TRAILING_ASTERISKS = re.compile(r"\*+$")
# Fence written after other content on the same line; indentation alone
# does not count as content
_FENCE_AFTER_CONTENT = re.compile(r"([^\s`])[ \t]*```")
_FENCE_LINE = re.compile(r"^[ \t]*```(?!`)(.*?)[ \t]*$")
# One or two backticks opening a line with no partner later on that line
_STRAY_BACKTICKS = re.compile(r"^([ \t]*)`{1,2}[ \t]*(?=[^`]*$)")

Rule = Callable[[str], str]


def strip_header_token(text: str) -> str:
    return _H3_HEADER.sub("", text.strip(), count=1).strip()


def strip_emphasis_runs(text: str) -> str:
    text = _LEADING_ASTERISKS.sub("", text.strip())
    return _TRAILING_ASTERISKS.sub("", text).strip()


FOLLOW_UP_RULES: Tuple[Rule, ...] = (strip_header_token, strip_emphasis_runs)


def sanitize_follow_up(text: str) -> str:
    """Clean a follow-up question: no ``###`` token, no emphasis wrapping.

    The rules are re-run until nothing changes so that combinations such as
    ``**### Why?**`` end up fully cleaned and a second call is a no-op.
    """
    current = (text or "").strip()
    while True:
        cleaned = current
        for rule in FOLLOW_UP_RULES:
            cleaned = rule(cleaned)
        if cleaned == current:
            return cleaned
        current = cleaned


def break_before_fences(text: str) -> str:
    return _FENCE_AFTER_CONTENT.sub("\\1\n```", text)


def normalize_fences(text: str, default_language: str = DEFAULT_CODE_LANGUAGE) -> str:
    """Tag bare openers, tidy bare closers and drop stray backticks.

    Fence state is tracked line by line so a bare closing fence is never
    mistaken for an opener. A bare opener on the last line has no code after
    it and is left untagged. Lines inside code blocks are not touched.
    """
    lines = text.split("\n")
    out: List[str] = []
    in_code = False
    last = len(lines) - 1
    for index, line in enumerate(lines):
        fence = _FENCE_LINE.match(line)
        if fence:
            info = fence.group(1).strip()
            if in_code:
                if not info:
                    line = "```"
                    in_code = False
            else:
                if not info:
                    line = "```" + default_language if index < last else "```"
                in_code = True
        elif not in_code:
            line = _STRAY_BACKTICKS.sub(r"\1", line)
        out.append(line)
    return "\n".join(out)


def sanitize_ideal_response(text: str, default_language: str = DEFAULT_CODE_LANGUAGE) -> str:
    cleaned = break_before_fences((text or "").strip())
    return normalize_fences(cleaned, default_language).strip()
