"""
Rule-driven parsing engine

Transforms source text into a list of Nodes using a rule table and a
priority order.

The parser operates in one greedy loop:
1. Try each rule's matcher, in priority order, against the start of the
   remaining source
2. The first rule that matches wins: its prefix is consumed and its
   builder turns the capture into node attributes
3. Builders recurse through the same parse function, sharing one state

Key features:
- Strict first-match precedence (no longest match, no backtracking)
- Parse state threaded by reference through every nested parse
- Type overrides (a builder may retag its node)
- Rule validation when the parser is built

Example:
    >>> from simpledown.lib.rules import RuleRegistry
    >>> registry = RuleRegistry()
    >>> parse = parser_make(registry.specs, registry.priorities)
    >>> nodes = parse("# Hello\\n")
    >>> nodes[0].type
    'heading'
    >>> nodes[0].content[0].content
    'Hello'
"""

import re
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..config import appsettings
from ..models.nodes import Node
from ..models.rules import Capture, Matcher, ParseState, PatternRule
from .errors import MalformedPattern, NoRuleMatched
from .log import LOG


def matcher_resolve(rule_type: str, match: Any) -> Matcher:
    """
    Turn a rule's ``match`` field into an anchored matcher callable

    Regex sources and compiled patterns are anchored with ``Pattern.match``
    so they only ever consume a prefix of the remaining input.

    Args:
        rule_type: Rule type (for error reporting)
        match: Regex source, compiled pattern, or callable

    Returns:
        Callable (source) -> Capture | None

    Raises:
        MalformedPattern: If the regex does not compile, accepts the empty
                          string, or match is neither regex nor callable
    """
    if isinstance(match, str):
        try:
            match = re.compile(match)
        except re.error as e:
            raise MalformedPattern(rule_type, f"invalid pattern: {e}") from e

    if isinstance(match, re.Pattern):
        if match.match("") is not None:
            raise MalformedPattern(rule_type, "pattern accepts an empty match")
        return match.match

    if callable(match):
        return match

    raise MalformedPattern(
        rule_type, f"matcher must be a pattern or callable, got {type(match).__name__}"
    )


class Parser:
    """
    Parser for a rule table and priority order

    Handles:
    - Greedy, priority-ordered rule selection
    - Recursive parsing of nested content with a shared state
    - Builder type overrides
    - Fail-fast rule validation at construction time

    The rule table and priority order are frozen on construction, so one
    Parser can be shared by any number of parse calls, each with its own
    state.
    """

    def __init__(self, rules: Mapping[str, PatternRule], priorities: Sequence[str]) -> None:
        """
        Initialize parser with rules and their precedence

        Args:
            rules: Mapping of rule type -> PatternRule
            priorities: Rule types in precedence order (earlier wins)

        Raises:
            MalformedPattern: If a priority entry has no rule, or a rule's
                              matcher or builder is unusable
        """
        self.rules: Mapping[str, PatternRule] = MappingProxyType(dict(rules))
        self.priorities: tuple = tuple(priorities)
        self.matchers: Dict[str, Matcher] = {}

        self.rules_validate()
        LOG(
            f"Parser ready: {len(self.priorities)} rules "
            f"({', '.join(self.priorities)})",
            level=2,
        )

    def rules_validate(self) -> None:
        """
        Check that every prioritized rule is usable

        Resolves each matcher once. Rule table entries absent from the
        priority order can never match; they are reported as a warning, or
        raised in strict mode.
        """
        for rule_type in self.priorities:
            if rule_type not in self.rules:
                raise MalformedPattern(rule_type, "listed in priorities but not in rule table")

            rule = self.rules[rule_type]
            if not callable(rule.build):
                raise MalformedPattern(rule_type, "builder is not callable")
            self.matchers[rule_type] = matcher_resolve(rule_type, rule.match)

        unreachable = [name for name in self.rules if name not in self.matchers]
        if unreachable:
            if appsettings.strict_mode:
                raise MalformedPattern(unreachable[0], "not listed in priorities")
            LOG(f"Warning: rules never tried (not in priorities): {unreachable}", level=2)

    def parse(self, source: str, state: Optional[ParseState] = None) -> List[Node]:
        """
        Parse source text into a list of nodes

        Main entry point; builders re-enter it for nested content, passing
        the same state back in.

        Args:
            source: Text to parse
            state: Parse state shared with every builder. A fresh dict is
                   created when omitted.

        Returns:
            List of Nodes in source order. Empty source gives [].

        Raises:
            NoRuleMatched: If no rule matches the remaining source
            MalformedPattern: If a matcher reports an empty or unanchored
                              capture

        Example:
            >>> parser = Parser(registry.specs, registry.priorities)
            >>> [n.type for n in parser.parse("*hi* there")]
            ['em', 'text']
        """
        if state is None:
            state = {}
        result: List[Node] = []

        while source:
            for rule_type in self.priorities:
                capture = self.matchers[rule_type](source)
                if capture:
                    break
            else:
                raise NoRuleMatched(source)

            source = self.capture_consume(rule_type, capture, source)
            result.append(self.node_build(rule_type, capture, state))

        return result

    __call__ = parse

    def capture_consume(self, rule_type: str, capture: Capture, source: str) -> str:
        """
        Remove a capture's matched prefix from the source

        Raises:
            MalformedPattern: If the capture would not shorten the source
        """
        matched = capture[0]
        if not matched:
            raise MalformedPattern(rule_type, "matcher accepted an empty match")
        if not source.startswith(matched):
            raise MalformedPattern(rule_type, "matched text is not a prefix of the input")

        LOG(f"Matched '{rule_type}' consuming {len(matched)} chars: {matched[:30]!r}", level=3)
        return source[len(matched):]

    def node_build(self, rule_type: str, capture: Capture, state: ParseState) -> Node:
        """
        Run a rule's builder and tag the result

        A "type" key returned by the builder overrides the rule type.
        """
        attributes = dict(self.rules[rule_type].build(capture, self.parse, state))
        node_type = attributes.pop("type", rule_type)
        return Node(type=node_type, attributes=attributes)


def parser_make(
    rules: Mapping[str, PatternRule], priorities: Sequence[str]
) -> Callable[..., List[Node]]:
    """
    Build a parse function for a rule table and priority order

    Args:
        rules: Mapping of rule type -> PatternRule
        priorities: Rule types in precedence order

    Returns:
        parse(source, state=None) -> List[Node]
    """
    return Parser(rules, priorities).parse
