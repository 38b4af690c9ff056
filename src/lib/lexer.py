"""
Custom Pygments lexer for simpledown syntax highlighting

Provides syntax highlighting for the simpledown Markdown dialect when a
fenced code block declares ``simpledown`` (or ``sd``) as its language.

Token types:
- Generic.Heading / Generic.Subheading: "#" and underlined headings
- Keyword: List bullets
- Comment: Block quote markers
- Generic.Strong / Generic.Emph / Generic.Deleted: **, *_, ~~ spans
- String.Backtick: Inline code and fences
- Name.Tag / Name.Attribute: Link labels and targets
"""

from pygments.lexer import RegexLexer, bygroups, include
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Comment,
    Generic,
)


class SimpledownLexer(RegexLexer):
    """
    Lexer for the simpledown markup language

    Example:
        # Title
        * item with **bold** and [a link](http://example.com)

    Tokens:
        # Title → Generic.Heading
        * → Keyword
        **bold** → Generic.Strong
        [a link] → Name.Tag
    """

    name = 'Simpledown'
    aliases = ['simpledown', 'sd']
    filenames = ['*.sd']

    tokens = {
        'root': [
            # Fenced code blocks (content left unhighlighted)
            (r'^( *)(`{3,}|~{3,})([^\n]*\n)([\s\S]*?)(^ *\2 *$)',
             bygroups(Text, String.Backtick, Name.Attribute, String, String.Backtick)),

            # Headings
            (r'^ *#{1,6}[^\n]*$', Generic.Heading),
            (r'^([^\n]+)(\n *(?:=|-){3,} *)$', bygroups(Generic.Heading, Generic.Subheading)),

            # Horizontal rules
            (r'^( *[-*_]){3,} *$', Punctuation),

            # Block quote markers
            (r'^( *>)', Comment),

            # List bullets
            (r'^( *)([*+-]|\d+\.)( )', bygroups(Text, Keyword, Text)),

            include('inline'),
        ],

        'inline': [
            # Escapes
            (r'\\[\\`*{}\[\]()#+\-.!_<>~|]', String.Escape),

            # Links: [label](target "title")
            (r'(!?\[)([^\]\n]*)(\]\()([^)\n]*)(\))',
             bygroups(Punctuation, Name.Tag, Punctuation, Name.Attribute, Punctuation)),

            # Emphasis family
            (r'\*\*[^\n]+?\*\*', Generic.Strong),
            (r'__[^\n]+?__', Generic.Strong),
            (r'~~[^\n]+?~~', Generic.Deleted),
            (r'\*[^*\n]+\*', Generic.Emph),
            (r'\b_[^_\n]+_\b', Generic.Emph),

            # Inline code
            (r'(`+)[^`\n]*?\1', String.Backtick),

            # Everything else is text
            (r'[^\\\[!*_~`\n]+', Text),
            (r'\n', Text),
            (r'.', Text),
        ],
    }


def get_lexer() -> SimpledownLexer:
    """
    Get the SimpledownLexer instance

    Returns:
        SimpledownLexer instance ready for use with Pygments
    """
    return SimpledownLexer()
