from pathlib import Path

from view_graph.lexer import classify
from view_graph.models.class_models import Token


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def toks(*texts: str, line: int = 1) -> list[Token]:
    """Hand-built token stream, one token per text, all on one line."""
    return [Token(classify(t), t, line) for t in texts]
