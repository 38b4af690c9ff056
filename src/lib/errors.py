"""
Exception classes for simpledown

All errors signal configuration bugs (rule table, priority order, renderer
coverage), not bad user input: a catch-all text rule accepts any markup.
They propagate to the caller of parse/output untouched.
"""

from typing import Optional


class SimpledownError(Exception):
    """Base exception for all simpledown errors"""
    pass


class NoRuleMatched(SimpledownError):
    """
    Raised by the parser when no rule in the priority order matches

    Attributes:
        remainder: The unconsumed input at the point of failure
    """

    def __init__(self, remainder: str) -> None:
        self.remainder = remainder
        preview = remainder if len(remainder) <= 40 else remainder[:40] + "..."
        super().__init__(f"could not find rule to match content: {preview!r}")


class UnknownRuleType(SimpledownError):
    """
    Raised by the output engine when a node type has no renderer

    Attributes:
        rule_type: The node type that could not be resolved
    """

    def __init__(self, rule_type: Optional[str]) -> None:
        self.rule_type = rule_type
        super().__init__(f"no renderer registered for node type {rule_type!r}")


class MalformedPattern(SimpledownError):
    """
    Raised when a rule cannot be used by the parser

    Surfaced while the parser is constructed (bad regex, missing builder,
    priority entry without a rule), or during parsing if a matcher reports
    a capture that consumes nothing or does not anchor at the input start.

    Attributes:
        rule_type: Offending rule type
        reason: What is wrong with it
    """

    def __init__(self, rule_type: str, reason: str) -> None:
        self.rule_type = rule_type
        self.reason = reason
        super().__init__(f"rule {rule_type!r}: {reason}")
