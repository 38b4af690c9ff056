"""
Output engine for parse trees

Walks a node list or a single node and delegates every node to the renderer
resolved for its type. Renderers receive the output function itself so they
can render nested content without knowing how dispatch works.

The engine never inspects what renderers return: HTML strings, terminal
markup or widget objects all thread back up unchanged.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from ..models.rules import PatternRule, Renderer
from .errors import UnknownRuleType

RendererLookup = Callable[[Any], Optional[Renderer]]


def mappingLookup_make(renderers: Mapping) -> RendererLookup:
    """Default lookup: direct mapping access by node type"""
    def lookup(node: Any) -> Optional[Renderer]:
        return renderers.get(node.type)
    return lookup


def ruleOutput_lookup(rules: Mapping[str, PatternRule]) -> RendererLookup:
    """
    Lookup resolving a node to the ``output`` of its rule

    Args:
        rules: Rule table used to build the parse tree

    Returns:
        Lookup (node) -> renderer, None if the rule is missing or has no
        renderer
    """
    def lookup(node: Any) -> Optional[Renderer]:
        rule = rules.get(node.type)
        return rule.output if rule is not None else None
    return lookup


def renderer_make(lookup: Union[RendererLookup, Mapping]) -> Callable[[Any], Any]:
    """
    Build an output function for a renderer lookup

    Args:
        lookup: Callable (node) -> renderer, or a mapping of node type to
                renderer

    Returns:
        output(node_or_list) -> representation. Lists and tuples map
        element-wise to a list (order preserved); a node dispatches to
        exactly one renderer call with (node, output).

    Raises (from output):
        UnknownRuleType: If no renderer resolves for a node

    Example:
        >>> output = renderer_make({"text": lambda node, output: node.content})
        >>> output([Node("text", {"content": "hi"})])
        ['hi']
    """
    if isinstance(lookup, Mapping):
        lookup = mappingLookup_make(lookup)

    def output(ast: Any) -> Any:
        if isinstance(ast, (list, tuple)):
            return [output(node) for node in ast]

        renderer = lookup(ast)
        if renderer is None:
            raise UnknownRuleType(getattr(ast, "type", None))
        return renderer(ast, output)

    return output
