"""
simpledown - Rule-driven Markdown-to-tree parser

A small, extensible parser turning a Markdown dialect into a node tree and
rendering that tree through per-rule renderers.
"""

__version__ = "1.0.0"

from .parser import Parser, parser_make
from .renderer import renderer_make, ruleOutput_lookup
from .rules import RuleRegistry
from .errors import SimpledownError, NoRuleMatched, UnknownRuleType, MalformedPattern
from .markdown import default_parse, default_output, default_rules, default_priorities, markdown_render
from .log import LOG, state_connectToLogger

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
    "__version__",
]
