"""
Built-in rule implementations for simpledown

Each rule pairs an anchored pattern with a builder that turns the capture
into node attributes, and (usually) an HTML renderer. Registration order is
the default priority order.

Regexes adapted from marked.js: https://github.com/chjj/marked
"""

import html
import re
from typing import Any, Callable, Dict, List, Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.util import ClassNotFound

from ..config import appsettings
from ..models.rules import PatternRule, RuleCategory, ParseState
from .errors import MalformedPattern
from .lexer import SimpledownLexer
from .lists import LIST_R, list_build

# Link label: balanced [brackets] or anything but "]"
LINK_INSIDE = r"(?:\[[^\]]*\]|[^\]]|\](?=[^\[]*\]))*"
# Link target with optional "title"
LINK_HREF = r"\s*<?([^\s]*?)>?(?:\s+['\"]([\s\S]*?)['\"])?\s*"


def content_join(output: Callable[[Any], Any], nodes: List[Any]) -> str:
    """Render a node list and concatenate the HTML fragments"""
    return "".join(output(nodes))


def parseCapture(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
    """Builder parsing the first sub-capture as nested content"""
    return {"content": parse(capture[1], state)}


def ignoreCapture(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
    """Builder for nodes without attributes"""
    return {}


def code_highlight(code: str, language: Optional[str]) -> str:
    """
    Render a code block, syntax highlighted when a language is given

    Args:
        code: Raw code text
        language: Pygments language name, "simpledown"/"sd" for this
                  dialect, or None for a plain block

    Returns:
        HTML for the code block
    """
    if not language or not appsettings.highlight_code:
        class_attr = f' class="language-{html.escape(language, quote=True)}"' if language else ''
        return f'<pre><code{class_attr}>{html.escape(code)}</code></pre>'

    lexer: Lexer
    try:
        if language.lower() in ['simpledown', 'sd']:
            lexer = SimpledownLexer()
        else:
            lexer = get_lexer_by_name(language)
    except ClassNotFound:
        lexer = TextLexer()

    formatter = HtmlFormatter(style=appsettings.pygments_style, noclasses=True)
    return highlight(code, lexer, formatter)


class RuleRegistry:
    """
    Registry of pattern rules and their precedence

    Maps rule types to PatternRule objects; ``priorities`` lists the rule
    types in the order they are tried.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in rules"""
        self.specs: Dict[str, PatternRule] = {}
        self.priorities: List[str] = []
        self.blockRules_register()
        self.inlineRules_register()
        self.textRules_register()

    def register(self, name: str, spec: PatternRule, before: Optional[str] = None) -> None:
        """
        Register a rule

        Args:
            name: Rule type tag
            spec: The rule
            before: Existing rule type to insert ahead of in the priority
                    order. Appended last when omitted.

        Raises:
            MalformedPattern: If before names no registered rule, or the
                              rule itself. The registry is left unchanged.
        """
        priorities = [rule for rule in self.priorities if rule != name]
        if before is None:
            priorities.append(name)
        elif before == name:
            raise MalformedPattern(name, "cannot be registered before itself")
        elif before not in priorities:
            raise MalformedPattern(name, f"unknown rule {before!r} to insert before")
        else:
            priorities.insert(priorities.index(before), name)

        self.specs[name] = spec
        self.priorities[:] = priorities

    def get(self, name: str) -> Optional[PatternRule]:
        """Get rule by type"""
        return self.specs.get(name)

    def rules_listByCategory(self, category: RuleCategory) -> List[str]:
        """Get rule types in a category, in priority order"""
        return [name for name in self.priorities if self.specs[name].category == category]

    def blockRules_register(self) -> None:
        """Register block-level rules"""

        def heading_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
            return {
                "level": len(capture[1]),
                "content": parse(capture[2], state),
            }

        def heading_output(node: Any, output: Callable[[Any], Any]) -> str:
            return f'<h{node.level}>{content_join(output, node.content)}</h{node.level}>'

        def lheading_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
            # Reclassified as the canonical heading
            return {
                "type": "heading",
                "level": 1 if capture[2] == "=" else 2,
                "content": parse(capture[1], state),
            }

        def fence_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
            return {
                "lang": capture[2],
                "content": capture[3],
            }

        def codeBlock_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
            content = re.sub(r"^    ", "", capture[0], flags=re.MULTILINE)
            return {"content": re.sub(r"\n+\Z", "", content)}

        def blockQuote_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
            content = re.sub(r"^ *> ?", "", capture[0], flags=re.MULTILINE)
            return {"content": parse(content, state)}

        def list_output(node: Any, output: Callable[[Any], Any]) -> str:
            tag = "ol" if node.ordered else "ul"
            items = "".join(f"<li>{content_join(output, item)}</li>" for item in node.items)
            return f"<{tag}>{items}</{tag}>"

        self.register("heading", PatternRule(
            match=r"^ *(#{1,6}) *([^\n]+?) *#* *\n+",
            build=heading_build,
            output=heading_output,
            category=RuleCategory.BLOCK,
            description="ATX heading",
            examples=["# Title\n", "### Section ###\n"],
        ))

        self.register("lheading", PatternRule(
            match=r"^([^\n]+)\n *(=|-){3,} *\n+",
            build=lheading_build,
            category=RuleCategory.BLOCK,
            description="Setext heading, underlined with === or ---",
            examples=["Title\n=====\n"],
        ))

        self.register("hr", PatternRule(
            match=r"^( *[-*_]){3,} *\n+",
            build=ignoreCapture,
            output=lambda node, output: "<hr>",
            category=RuleCategory.BLOCK,
            description="Horizontal rule",
            examples=["---\n", "* * *\n"],
        ))

        self.register("fence", PatternRule(
            match=r"^ *(`{3,}|~{3,}) *([^\s`~]+)? *\n([\s\S]*?)\n? *\1[`~]* *(?:\n+|\Z)",
            build=fence_build,
            output=lambda node, output: code_highlight(node.content, node.lang),
            category=RuleCategory.BLOCK,
            description="Fenced code block with optional language",
            examples=["```python\nprint('hi')\n```\n"],
        ))

        self.register("codeBlock", PatternRule(
            match=r"^(?:    [^\n]+\n*)+\n\n",
            build=codeBlock_build,
            output=lambda node, output: f"<pre><code>{html.escape(node.content)}</code></pre>",
            category=RuleCategory.BLOCK,
            description="Code block indented by four spaces",
            examples=["    x = 1\n\n"],
        ))

        self.register("blockQuote", PatternRule(
            match=r"^( *>[^\n]+(\n[^\n]+)*\n*)+",
            build=blockQuote_build,
            output=lambda node, output: f"<blockquote>{content_join(output, node.content)}</blockquote>",
            category=RuleCategory.BLOCK,
            description="Block quote",
            examples=["> quoted\n"],
        ))

        self.register("list", PatternRule(
            match=LIST_R,
            build=list_build,
            output=list_output,
            category=RuleCategory.BLOCK,
            description="Ordered or unordered list, tight or loose",
            examples=["* a\n* b\n", "1. one\n\n2. two\n\n"],
        ))

        self.register("paragraph", PatternRule(
            match=r"^((?:[^\n]|\n[^\n])+)\n\n+",
            build=parseCapture,
            output=lambda node, output: (
                f"{appsettings.paragraph_openTag()}{content_join(output, node.content)}</div>"
            ),
            category=RuleCategory.BLOCK,
            description="Paragraph terminated by a blank line",
            examples=["Some text.\n\n"],
        ))

    def inlineRules_register(self) -> None:
        """Register inline formatting rules"""

        def make_html_wrapper(tag: str) -> Callable[[Any, Callable[[Any], Any]], str]:
            """Factory for simple HTML tag wrappers"""
            def handler(node: Any, output: Callable[[Any], Any]) -> str:
                """Wrap rendered content in HTML tag"""
                return f"<{tag}>{content_join(output, node.content)}</{tag}>"
            return handler

        def escape_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
            return {
                "type": "text",
                "content": capture[1],
            }

        def link_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
            # Links do not nest: an inner link stays literal text
            if state.get("inLink"):
                return {"type": "text", "content": capture[0]}

            state["inLink"] = True
            try:
                content = parse(capture[1], state)
            finally:
                state["inLink"] = False

            return {
                "content": content,
                "target": capture[2],
                "title": capture[3],
            }

        def link_output(node: Any, output: Callable[[Any], Any]) -> str:
            title = node.get("title")
            title_attr = f' title="{html.escape(title, quote=True)}"' if title else ''
            href = html.escape(node.target or "", quote=True)
            return f'<a href="{href}"{title_attr}>{content_join(output, node.content)}</a>'

        def em_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
            return {"content": parse(capture[2] or capture[1], state)}

        def inlineCode_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
            return {"content": capture[2]}

        self.register("escape", PatternRule(
            match=r"^\\([\\`*{}\[\]()#+\-.!_<>~|])",
            build=escape_build,
            description="Backslash escape, produces literal text",
            examples=["\\*not emphasis\\*"],
        ))

        self.register("link", PatternRule(
            match=r"^!?\[(" + LINK_INSIDE + r")\]\(" + LINK_HREF + r"\)",
            build=link_build,
            output=link_output,
            description="Inline link with optional title",
            examples=['[label](http://example.com "Title")'],
        ))

        formatting_specs = [
            ("strong", r"^\*\*([\s\S]+?)\*\*(?!\*)", "strong", "Strong text", ["**bold**"]),
            ("u", r"^__([\s\S]+?)__(?!_)", "u", "Underlined text", ["__underlined__"]),
        ]

        for name, pattern, tag, desc, examples in formatting_specs:
            self.register(name, PatternRule(
                match=pattern,
                build=parseCapture,
                output=make_html_wrapper(tag),
                description=desc,
                examples=examples,
            ))

        self.register("em", PatternRule(
            match=r"^\b_((?:__|[\s\S])+?)_\b|^\*((?:\*\*|[\s\S])+?)\*(?!\*)",
            build=em_build,
            output=make_html_wrapper("em"),
            description="Emphasized text",
            examples=["*italic*", "_italic_"],
        ))

        self.register("del", PatternRule(
            match=r"^~~(?=\S)([\s\S]*?\S)~~",
            build=parseCapture,
            output=make_html_wrapper("del"),
            description="Struck-through text",
            examples=["~~gone~~"],
        ))

        self.register("inlineCode", PatternRule(
            match=r"^(`+)\s*([\s\S]*?[^`])\s*\1(?!`)",
            build=inlineCode_build,
            output=lambda node, output: f"<code>{html.escape(node.content)}</code>",
            description="Inline code span",
            examples=["`code`"],
        ))

    def textRules_register(self) -> None:
        """Register the newline and catch-all text rules"""

        def text_build(capture: Any, parse: Callable[..., list], state: ParseState) -> Dict[str, Any]:
            return {"content": capture[0]}

        self.register("newline", PatternRule(
            match=r"^\n+",
            build=ignoreCapture,
            output=lambda node, output: " ",
            category=RuleCategory.TEXT,
            description="Run of newlines, rendered as a space",
        ))

        self.register("text", PatternRule(
            # Relies on stopping before _ and *; new rules starting with
            # other characters need this lookahead extended
            match=r"^[\s\S]+?(?=[\\<!\[_*`]|\n\n| {2,}\n|\Z)",
            build=text_build,
            output=lambda node, output: html.escape(node.content),
            category=RuleCategory.TEXT,
            description="Plain text (catch-all)",
        ))
