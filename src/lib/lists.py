"""
List segmentation for the "list" rule

Splits a matched list block into items, dedents each item so nested block
content parses at its own top level, and decides whether the list is tight
(items render inline) or loose (items render as paragraphs).

Example:
    * hi
      this is part of the same item

      as is this, which is a new paragraph in the same item

    * but this is not part of the same item
"""

import re
from typing import Any, Callable, Dict, List

from ..models.lists import ListSegments
from ..models.rules import ParseState
from .log import LOG

# A "*", "-", "+", "1.", "2.", ... bullet
LIST_BULLET = r"(?:[*+-]|\d+\.)"

# Start of a list item: leading spaces, a bullet, a space ("   * ")
LIST_ITEM_PREFIX = r"( *)(" + LIST_BULLET + r") "
LIST_ITEM_PREFIX_R = re.compile("^" + LIST_ITEM_PREFIX)

# One item: the bullet line plus every following line that does not start
# a sibling item at the same indent
LIST_ITEM_R = re.compile(
    LIST_ITEM_PREFIX
    + r"[^\n]*(?:\n"
    + r"(?!\1" + LIST_BULLET + r" )[^\n]*)*"
)

# Paragraph break at the end of an item
LIST_BLOCK_END_R = re.compile(r"\n{2,}\Z")

# Whole list block; the \s*\Z branch lets nested lists end without a
# trailing blank line
LIST_R = re.compile(
    r"( *)(" + LIST_BULLET + r") "
    + r"[\s\S]+?(?:\n{2,}(?! )"
    + r"(?!\1" + LIST_BULLET + r" )\n*"
    + r"|\s*\Z)"
)


def items_split(text: str) -> List[str]:
    """
    Split a list block into raw item substrings

    Args:
        text: Full text matched by the list rule

    Returns:
        Item substrings, bullets and indentation included

    Example:
        >>> items_split("* a\\n* b\\n")
        ['* a', '* b\\n']
    """
    return [match.group(0) for match in LIST_ITEM_R.finditer(text)]


def item_clean(item: str) -> str:
    """
    Dedent an item and strip its bullet

    Every line loses up to as many leading spaces as the item's own
    "<indent><bullet><space>" prefix is wide, so deeper indentation
    survives relative to the item's content baseline.

    Example:
        >>> item_clean("  * nested\\n    child line\\n")
        'nested\\nchild line\\n\\n'
    """
    space = len(LIST_ITEM_PREFIX_R.match(item).group(0))
    space_r = re.compile(r"^ {1,%d}" % space, re.MULTILINE)

    content = space_r.sub("", item + "\n")
    return LIST_ITEM_PREFIX_R.sub("", content, count=1)


def list_segment(text: str, bullet: str) -> ListSegments:
    """
    Segment a matched list block into cleaned item contents

    Tight/loose: the second-to-last item decides. If it ends in two or
    more newlines the list is loose and every item keeps its trailing blank
    lines; otherwise the list is tight and the last item's trailing
    newline run is stripped so it renders inline. A single-item list has no
    second-to-last item and is always tight.

    Args:
        text: Full text matched by the list rule
        bullet: The first bullet token ("*", "-", "+", "1.", ...)

    Returns:
        ListSegments with ordered flag, looseness and item contents
    """
    contents = [item_clean(item) for item in items_split(text)]

    loose = len(contents) >= 2 and LIST_BLOCK_END_R.search(contents[-2]) is not None
    if contents and not loose:
        contents[-1] = LIST_BLOCK_END_R.sub("", contents[-1])

    return ListSegments(ordered=len(bullet) > 1, loose=loose, contents=contents)


def list_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
    """
    Builder for the "list" rule

    Parses each item's content with the shared state. ``listDepth`` in the
    state counts how many lists enclose the content being parsed.
    """
    segments = list_segment(capture[0], capture[2])
    LOG(
        f"List: {len(segments.contents)} items, "
        f"{'ordered' if segments.ordered else 'unordered'}, "
        f"{'loose' if segments.loose else 'tight'}",
        level=3,
    )

    state["listDepth"] = state.get("listDepth", 0) + 1
    try:
        items = [parse(content, state) for content in segments.contents]
    finally:
        state["listDepth"] -= 1

    return {
        "ordered": segments.ordered,
        "items": items,
    }
