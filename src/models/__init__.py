"""
Models package for simpledown

Contains data structures and type definitions for parsing and output.
"""

from .nodes import Node
from .rules import PatternRule, RuleCategory, Capture, ParseState
from .lists import ListSegments

__all__ = [
    "Node",
    "PatternRule",
    "RuleCategory",
    "Capture",
    "ParseState",
    "ListSegments",
]
