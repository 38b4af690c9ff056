"""
Default Markdown parse and output functions

Wires the built-in RuleRegistry into a parser and an HTML output function.

Example:
    >>> markdown_render("# Hello\\n\\n*world*")
    '<h1>Hello</h1><em>world</em>'
"""

from typing import Any, List, Optional

from ..models.nodes import Node
from ..models.rules import ParseState
from .parser import Parser
from .renderer import renderer_make, ruleOutput_lookup
from .rules import RuleRegistry

_registry = RuleRegistry()

default_rules = _registry.specs
default_priorities = list(_registry.priorities)

_default_parser = Parser(default_rules, default_priorities)
default_output = renderer_make(ruleOutput_lookup(_default_parser.rules))


def default_parse(source: str, state: Optional[ParseState] = None) -> List[Node]:
    """Parse source with the built-in rules"""
    return _default_parser.parse(source, state)


def markdown_render(source: str, state: Optional[ParseState] = None) -> str:
    """
    Parse source with the built-in rules and render it to HTML

    Args:
        source: Markdown text
        state: Optional parse state shared with rule builders

    Returns:
        Concatenated HTML of every top-level node
    """
    rendered: Any = default_output(default_parse(source, state))
    return "".join(rendered)
