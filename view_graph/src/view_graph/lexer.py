"""
PHP token stream built from a Tree-sitter parse.

The class reader works on flat lexical tokens rather than on the syntax tree, so
this module only flattens the tree back into its leaves, in source order, and tags
each leaf with a `TokenKind`. A few composite nodes (variables, qualified names,
literals, comments) are kept whole so that `$name` or `\\App\\User` come out as one
token each.
"""
import re
from typing import Optional

from tree_sitter import Node, Parser

from view_graph.inputs.source_files import PathLike, read_text
from view_graph.models.class_models import Token, TokenKind
from view_graph.tree_sitter_helpers import make_parser, node_point, node_text

# Nodes emitted as one token instead of descending into their children.
ATOMIC_NODE_TYPES = frozenset({
    "variable_name",
    "qualified_name",
    "string",
    "encapsed_string",
    "heredoc",
    "nowdoc",
    "integer",
    "float",
    "comment",
})

_STRING_NODE_TYPES = frozenset({"string", "encapsed_string", "heredoc", "nowdoc"})

_KEYWORDS = {
    "class": TokenKind.CLASS,
    "interface": TokenKind.INTERFACE,
    "trait": TokenKind.TRAIT,
    "function": TokenKind.FUNCTION,
    "abstract": TokenKind.ABSTRACT,
    "final": TokenKind.FINAL,
    "static": TokenKind.STATIC,
    "public": TokenKind.PUBLIC,
    "protected": TokenKind.PROTECTED,
    "private": TokenKind.PRIVATE,
    "readonly": TokenKind.READONLY,
    "new": TokenKind.NEW,
}

_NAME_RE = re.compile(r"^\\?[A-Za-z_\x80-\uffff][\w\x80-\uffff]*(\\[A-Za-z_\x80-\uffff][\w\x80-\uffff]*)*$")

_parser: Optional[Parser] = None


def _get_parser() -> Parser:
    global _parser
    if _parser is None:
        _parser = make_parser()
    return _parser


def classify(text: str, node_type: str = "") -> TokenKind:
    """Tags a token by its text; keywords are matched case-insensitively."""
    if node_type == "comment" or text.startswith(("//", "/*")) or (text.startswith("#") and not text.startswith("#[")):
        return TokenKind.COMMENT
    if node_type in _STRING_NODE_TYPES:
        return TokenKind.STRING
    if not text.strip():
        return TokenKind.WHITESPACE
    keyword = _KEYWORDS.get(text.lower())
    if keyword is not None:
        return keyword
    if text.startswith("$") and len(text) > 1:
        return TokenKind.VARIABLE
    if text[0] in "'\"":
        return TokenKind.STRING
    if text[0].isdigit():
        return TokenKind.NUMBER
    if text == "...":
        return TokenKind.ELLIPSIS
    if text == "::":
        return TokenKind.DOUBLE_COLON
    if _NAME_RE.match(text):
        return TokenKind.NAME
    if node_type == "php_tag" or text.startswith("<?"):
        return TokenKind.OTHER
    return TokenKind.PUNCT


def tokenize(source: str) -> list[Token]:
    """
    Parses PHP source and returns its leaves as tokens, in source order.
    Parse errors are tolerated: Tree-sitter still yields the leaves it saw.
    """
    source_bytes = source.encode("utf-8")
    tree = _get_parser().parse(source_bytes)
    return tokens_from_node(source_bytes, tree.root_node)


def tokens_from_node(source_bytes: bytes, root: Node) -> list[Token]:
    """Leaves of one subtree as tokens, e.g. a single class declaration."""
    tokens: list[Token] = []
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        # Zero-width nodes inserted by error recovery carry no text.
        if node.is_missing:
            continue
        if node.child_count == 0 or node.type in ATOMIC_NODE_TYPES:
            text = node_text(source_bytes, node)
            if text:
                line, _ = node_point(node)
                tokens.append(Token(classify(text, node.type), text, line + 1))
            continue
        # Reverse so the leftmost child is popped first.
        stack.extend(reversed(node.children))
    return tokens


def tokenize_file(path: PathLike) -> list[Token]:
    return tokenize(read_text(path))
