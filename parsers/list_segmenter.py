from __future__ import annotations

import re
from typing import List, Optional, Tuple

from utils.logging import get_logger

logger = get_logger(__name__)

BULLET_CHARS = ("-", "•", "*")

# "- text", "* text", "•text"; a bare "*" at the end of the block counts too
_LEADING_BULLET = re.compile(r"^\s*(?:•\s*|[-*](?:\s+|$))")
# Marker at the start of an item: bullet or "1." / "1)"
_ITEM_MARKER = re.compile(r"^\s*(?:•\s*|(?:[-*]|\d+[.)])\s+)")
# Bullet or number opening a new line
_LINE_MARKER = r"\n[ \t]*(?:•[ \t]*|(?:[-*]|\d+[.)])[ \t]+)"
# " - " between items written on one line
_INLINE_MARKER = r"[ \t]+[-•][ \t]+"
_BLANK_LINE = r"\n[ \t]*\n"

_LINE_MARKER_RE = re.compile(_LINE_MARKER)
_INLINE_MARKER_RE = re.compile(_INLINE_MARKER)
_LINE_SPLIT_RE = re.compile(f"({_LINE_MARKER}|{_BLANK_LINE})")
_INLINE_SPLIT_RE = re.compile(f"({_LINE_MARKER}|{_INLINE_MARKER}|{_BLANK_LINE})")

# (item text, introduced by an explicit marker)
Item = Tuple[str, bool]


def strip_leading_bullet(block: str) -> str:
    return _LEADING_BULLET.sub("", block, count=1).strip()


def strip_item_marker(item: str) -> str:
    return _ITEM_MARKER.sub("", item, count=1).strip()


def split_marked_items(block: str, opened_with_bullet: bool = False) -> Optional[List[Item]]:
    """Split on bullet/number markers; None when the block has no markers.

    An item runs until the next marker, a blank line or the end of the block.
    When the block opened with a bullet and no later line starts with a
    marker, `` - `` inside a line also separates items (a list written on one
    line). Once items sit on their own lines, a spaced dash is item text.
    """
    line_markers = bool(_LINE_MARKER_RE.search(block))
    inline = opened_with_bullet and not line_markers
    has_markers = line_markers or bool(_ITEM_MARKER.match(block))
    if inline and not has_markers:
        has_markers = bool(_INLINE_MARKER_RE.search(block))
    if not has_markers:
        return None

    splitter = _INLINE_SPLIT_RE if inline else _LINE_SPLIT_RE
    parts = splitter.split(block)
    first = parts[0].lstrip("\n")
    items: List[Item] = [
        (strip_item_marker(first), opened_with_bullet or bool(_ITEM_MARKER.match(first)))
    ]
    for separator, part in zip(parts[1::2], parts[2::2]):
        part = part.lstrip("\n")
        marked = bool(separator.strip()) or bool(_ITEM_MARKER.match(part))
        items.append((strip_item_marker(part), marked))
    return items


def split_lines(block: str) -> List[Item]:
    items: List[Item] = []
    for line in block.split("\n"):
        text = strip_item_marker(line)
        if text:
            items.append((text, bool(_ITEM_MARKER.match(line))))
    return items


def keep_item(item: str, marked: bool = False) -> bool:
    """Drop lone bullets and one-character artifacts.

    Length is measured with the item's marker, so ``- a`` keeps ``a`` while
    an unmarked stray ``a`` is discarded.
    """
    if not item or item in BULLET_CHARS:
        return False
    return marked or len(item) > 1


def segment_list(raw: str) -> List[str]:
    """Turn one list section's raw text into its items.

    Rules run in order and the first one that applies wins: marked items,
    then one item per line, then the whole block. Artifact items are dropped
    afterwards; if that leaves nothing, the cleaned block becomes the only
    item.
    """
    text = (raw or "").strip()
    block = strip_leading_bullet(text)
    opened_with_bullet = block != text

    items = split_marked_items(block, opened_with_bullet)
    if items is not None:
        rule = "markers"
    elif "\n" in block:
        items = split_lines(block)
        rule = "lines"
    else:
        items = [(block, opened_with_bullet)]
        rule = "single"

    kept = [item for item, marked in items if keep_item(item, marked)]
    if not kept:
        logger.debug(f"List segmenter: nothing survived the '{rule}' rule, using the whole block")
        return [block] if block else []
    logger.debug(f"List segmenter: '{rule}' rule produced {len(kept)} item(s)")
    return kept
