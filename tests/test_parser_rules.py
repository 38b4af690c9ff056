"""
Built-in rule tests

Tests each default Markdown rule through the default parser, plus the
registry that orders them.
"""

import pytest

from simpledown.lib.errors import MalformedPattern
from simpledown.lib.markdown import default_parse, default_priorities
from simpledown.lib.parser import Parser
from simpledown.lib.rules import RuleRegistry
from simpledown.models.nodes import Node
from simpledown.models.rules import PatternRule, RuleCategory


def text(content):
    return Node(type="text", attributes={"content": content})


class TestBlockRules:
    """Test block-level rules"""

    def test_heading(self):
        """ATX heading with level and inline content"""
        nodes = default_parse("## Hello\n")

        assert nodes == [Node(type="heading", attributes={"level": 2, "content": [text("Hello")]})]

    def test_heading_closing_hashes(self):
        """Trailing hashes are not part of the heading text"""
        nodes = default_parse("### Section ###\n")

        assert nodes[0].level == 3
        assert nodes[0].content == [text("Section")]

    @pytest.mark.parametrize("underline, level", [("=====", 1), ("---", 2)])
    def test_underlined_heading(self, underline, level):
        """Setext headings become canonical heading nodes"""
        nodes = default_parse(f"Title\n{underline}\n")

        assert nodes[0].type == "heading"
        assert nodes[0].level == level
        assert nodes[0].content == [text("Title")]

    def test_hr(self):
        """Horizontal rule has no attributes"""
        assert default_parse("---\n") == [Node(type="hr")]
        assert default_parse("* * *\n") == [Node(type="hr")]

    def test_fence_with_language(self):
        """Fenced code keeps its raw content and language"""
        nodes = default_parse("```python\nprint('hi')\n```\n")

        assert nodes == [Node(type="fence", attributes={"lang": "python", "content": "print('hi')"})]

    def test_fence_without_language(self):
        """Language is optional"""
        nodes = default_parse("~~~\n*not emphasis*\n~~~")

        assert nodes[0].type == "fence"
        assert nodes[0].lang is None
        assert nodes[0].content == "*not emphasis*"

    def test_code_block(self):
        """Four-space indented code is dedented and right-trimmed"""
        nodes = default_parse("    x = 1\n    y\n\n")

        assert nodes == [Node(type="codeBlock", attributes={"content": "x = 1\ny"})]

    def test_block_quote(self):
        """Quote markers are stripped and the rest parsed"""
        nodes = default_parse("> quoted\n")

        assert nodes[0].type == "blockQuote"
        assert nodes[0].content == [text("quoted\n")]

    def test_paragraph(self):
        """A blank line closes a paragraph"""
        nodes = default_parse("Some text.\n\nMore")

        assert [n.type for n in nodes] == ["paragraph", "text"]
        assert nodes[0].content == [text("Some text.")]


class TestInlineRules:
    """Test inline rules"""

    def test_escape_becomes_text(self):
        """Escaped characters are retagged as text"""
        nodes = default_parse("\\*x")

        assert nodes == [text("*"), text("x")]

    def test_strong(self):
        """Double asterisks"""
        nodes = default_parse("**b**")
        assert nodes == [Node(type="strong", attributes={"content": [text("b")]})]

    def test_underline(self):
        """Double underscores"""
        nodes = default_parse("__u__")
        assert nodes[0].type == "u"

    @pytest.mark.parametrize("source", ["*i*", "_i_"])
    def test_em(self, source):
        """Single asterisks or underscores"""
        nodes = default_parse(source)
        assert nodes == [Node(type="em", attributes={"content": [text("i")]})]

    def test_del(self):
        """Double tildes"""
        nodes = default_parse("~~gone~~")
        assert nodes == [Node(type="del", attributes={"content": [text("gone")]})]

    def test_inline_code(self):
        """Backtick content is kept raw"""
        nodes = default_parse("`a*b`")
        assert nodes == [Node(type="inlineCode", attributes={"content": "a*b"})]

    def test_newline(self):
        """Newlines left over between inline nodes become newline nodes"""
        nodes = default_parse("*a*\nb")
        assert [n.type for n in nodes] == ["em", "newline", "text"]

    def test_paragraph_before_inline(self):
        """A blank line after inline text makes a paragraph, not text"""
        nodes = default_parse("a\n\nb")
        assert [n.type for n in nodes] == ["paragraph", "text"]

    def test_text_stops_before_markup(self):
        """Plain text ends where emphasis can begin"""
        nodes = default_parse("plain *em*")

        assert [n.type for n in nodes] == ["text", "em"]
        assert nodes[0].content == "plain "


class TestLinks:
    """Test links and the in-link state"""

    def test_link_with_title(self):
        """Target and optional title are captured"""
        nodes = default_parse('[x](http://e.com "T")')

        assert nodes[0].type == "link"
        assert nodes[0].target == "http://e.com"
        assert nodes[0].title == "T"
        assert nodes[0].content == [text("x")]

    def test_link_without_title(self):
        """Title is None when absent"""
        nodes = default_parse("[x](<http://e.com>)")

        assert nodes[0].target == "http://e.com"
        assert nodes[0].title is None

    def test_nested_link_stays_text(self):
        """A link inside a link label is left as literal text"""
        nodes = default_parse("[a [b](c) d](e)")

        assert nodes[0].type == "link"
        assert nodes[0].target == "e"
        assert nodes[0].content == [text("a "), text("[b](c)"), text(" d")]

    def test_in_link_flag_reset(self):
        """The in-link flag is cleared after the link"""
        state = {}
        default_parse("[a](b)", state)

        assert state["inLink"] is False


class TestRuleRegistry:
    """Test rule registration and ordering"""

    def test_default_priorities(self):
        """Built-in rules are tried in registration order"""
        assert default_priorities == [
            "heading", "lheading", "hr", "fence", "codeBlock", "blockQuote",
            "list", "paragraph", "escape", "link", "strong", "u", "em", "del",
            "inlineCode", "newline", "text",
        ]

    def test_text_is_last(self):
        """The catch-all must not shadow anything"""
        assert default_priorities[-1] == "text"

    def test_categories(self):
        """Rules are grouped by category in priority order"""
        registry = RuleRegistry()

        assert registry.rules_listByCategory(RuleCategory.TEXT) == ["newline", "text"]
        assert registry.rules_listByCategory(RuleCategory.BLOCK)[0] == "heading"

    def test_register_before(self):
        """Custom rules can be inserted ahead of an existing rule"""
        registry = RuleRegistry()
        registry.register("mention", PatternRule(
            match=r"@(\w+)",
            build=lambda capture, parse, state: {"user": capture[1]},
        ), before="text")

        assert registry.priorities[-2:] == ["mention", "text"]
        nodes = Parser(registry.specs, registry.priorities).parse("@ann")
        assert nodes == [Node(type="mention", attributes={"user": "ann"})]

    def test_reregister_moves_rule(self):
        """Registering an existing name replaces it and reorders it"""
        registry = RuleRegistry()
        registry.register("hr", registry.get("hr"))

        assert registry.priorities[-1] == "hr"
        assert registry.priorities.count("hr") == 1

    def test_register_before_unknown(self):
        """An unknown insertion point fails and leaves the registry intact"""
        registry = RuleRegistry()
        hr = registry.get("hr")
        priorities = list(registry.priorities)

        with pytest.raises(MalformedPattern, match="unknown rule 'ghost'"):
            registry.register("hr", PatternRule(match=r"x", build=dict), before="ghost")

        assert registry.get("hr") is hr
        assert registry.priorities == priorities

    def test_register_before_itself(self):
        """A rule cannot be inserted ahead of itself"""
        registry = RuleRegistry()
        priorities = list(registry.priorities)

        with pytest.raises(MalformedPattern, match="before itself"):
            registry.register("text", registry.get("text"), before="text")
        with pytest.raises(MalformedPattern, match="before itself"):
            registry.register("mention", PatternRule(match=r"@\w+", build=dict), before="mention")

        assert registry.priorities == priorities
        assert registry.get("mention") is None
