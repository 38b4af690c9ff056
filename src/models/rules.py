"""
Pattern rule specification and metadata models

Defines the structure and categories of parse rules for validation,
documentation and registry management.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Pattern, Sequence, Union

# Result of a successful match: index 0 is the full matched prefix,
# indices 1..n are sub-captures (re.Match, tuple, list, ...)
Capture = Sequence[Optional[str]]

# Opaque mutable context threaded through one parse call
ParseState = Dict[str, Any]

Matcher = Callable[[str], Optional[Capture]]
Builder = Callable[[Any, Callable[..., list], ParseState], Dict[str, Any]]
Renderer = Callable[[Any, Callable[[Any], Any]], Any]


class RuleCategory(Enum):
    """
    Categories of parse rules

    Used for organization and documentation; precedence comes only from
    the priority order.
    """
    BLOCK = "block"      # heading, list, paragraph, ...
    INLINE = "inline"    # link, strong, em, ...
    TEXT = "text"        # newline, text (catch-all)


@dataclass(frozen=True)
class PatternRule:
    """
    Specification for a parse rule

    Attributes:
        match: Regex source, compiled pattern, or callable
               (remaining source) -> Capture | None. Regexes are
               anchored at the start of the remaining input.
        build: Builder (capture, parse, state) -> attributes dict.
               May return a "type" key to retag the node.
        output: Optional renderer (node, output) -> representation
        category: Category for organization
        description: Human-readable description
        examples: Example source strings
    """
    match: Union[str, Pattern[str], Matcher]
    build: Builder
    output: Optional[Renderer] = None
    category: RuleCategory = RuleCategory.INLINE
    description: str = ""
    examples: List[str] = field(default_factory=list)
