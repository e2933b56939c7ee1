# --- Tree-sitter plumbing ----------------------------------------------------
from tree_sitter import Language, Node, Parser


def load_php_language() -> Language:
    """
    Loads the Tree-sitter PHP grammar from the `tree_sitter_php` wheel.
    The full `php` dialect is used, so sources must start with an opening tag.
    """
    try:
        import tree_sitter_php as tsphp
    except ImportError as e:
        raise RuntimeError(
            "Could not load the PHP grammar.\n"
            "- Install `tree_sitter_php` (pip install tree-sitter-php)."
        ) from e
    return Language(tsphp.language_php())


def make_parser() -> Parser:
    return Parser(load_php_language())


def node_text(source_bytes: bytes, node: Node) -> str:
    """
    Converts a node's [start_byte:end_byte] into the corresponding string.
    Tree-sitter nodes only store byte offsets, so we slice the original source.
    """
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def node_point(node: Node) -> tuple[int, int]:
    """
    Returns the (line, column) of a node's start in 0-based coordinates.
    """
    return (node.start_point[0], node.start_point[1])


def node_end_line(node: Node) -> int:
    """0-based line of the node's last character."""
    return node.end_point[0]
