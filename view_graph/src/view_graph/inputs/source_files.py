# --- Raw source-file access -------------------------------------------------
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def read_text(path: PathLike) -> str:
    # Line endings are left untranslated so offsets match what Tree-sitter sees
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


def split_lines(text: str) -> list[str]:
    """
    Splits on "\\n" only, line endings kept. Form feeds, "\\u2028" and the
    other characters `str.splitlines` treats as breaks stay inside their line.
    """
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def read_lines(path: PathLike) -> list[str]:
    """
    Returns every physical line of a file, line endings kept, so that
    list index + 1 is the source line number.
    """
    return split_lines(read_text(path))
