"""
List segmentation data models
"""

from dataclasses import dataclass
from typing import List


@dataclass
class ListSegments:
    """
    Result of splitting a matched list block into items

    Returned by list_segment() before any item content is parsed.

    Attributes:
        ordered: True if the first bullet is a number ("1."), False for
                 "*", "+" or "-"
        loose: True if the second-to-last item ends in a blank line, in
               which case every item keeps its trailing blank lines and
               renders as a block
        contents: Dedented, bullet-stripped content of each item, ready
                  to be parsed

    Example:
        Input: "* a\\n\\n* b\\n\\n"
        Result: ListSegments(
            ordered=False,
            loose=True,
            contents=["a\\n\\n", "b\\n\\n\\n"]
        )
    """
    ordered: bool
    loose: bool
    contents: List[str]
