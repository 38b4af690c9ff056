"""
simpledown - Rule-driven Markdown-to-tree parser

A precedence-ordered set of pattern rules turns Markdown into a node tree;
per-rule renderers turn the tree into HTML or any other representation.
"""

__version__ = "1.0.0"

from .lib import (
    Parser,
    parser_make,
    renderer_make,
    ruleOutput_lookup,
    RuleRegistry,
    SimpledownError,
    NoRuleMatched,
    UnknownRuleType,
    MalformedPattern,
    default_parse,
    default_output,
    default_rules,
    default_priorities,
    markdown_render,
    LOG,
    state_connectToLogger,
)
from .models import Node, PatternRule, RuleCategory

__all__ = [
    "Parser",
    "parser_make",
    "renderer_make",
    "ruleOutput_lookup",
    "RuleRegistry",
    "SimpledownError",
    "NoRuleMatched",
    "UnknownRuleType",
    "MalformedPattern",
    "default_parse",
    "default_output",
    "default_rules",
    "default_priorities",
    "markdown_render",
    "LOG",
    "state_connectToLogger",
    "Node",
    "PatternRule",
    "RuleCategory",
    "__version__",
]
