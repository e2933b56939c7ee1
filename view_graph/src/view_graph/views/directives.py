"""
Vocabulary of textual forms that reference another view.

Each form is a `Directive`: the literal marker that opens the call (up to and
including its parenthesis) and the rule that says which argument names the view.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Removed from the chosen argument to leave the bare identifier.
IGNORED_CHARS = "()[];'\""
_IGNORED_TABLE = str.maketrans("", "", IGNORED_CHARS)


class ArgumentRule(Enum):
    FIRST = "first"  # @include('a.b', [...])
    SECOND = "second"  # @includeWhen($cond, 'a.b')
    FIRST_OF_ARRAY = "first_of_array"  # @includeFirst(['a.b', 'c.d'])


@dataclass(frozen=True)
class Extracted:
    name: str
    literal: bool


@dataclass(frozen=True)
class Directive:
    marker: str
    argument: ArgumentRule = ArgumentRule.FIRST

    def extract(self, text: str) -> Extracted:
        """
        Pulls the view identifier out of the text following the marker.
        """
        args = split_arguments(text)
        if self.argument is ArgumentRule.SECOND:
            raw = args[1] if len(args) > 1 else ""
        elif self.argument is ArgumentRule.FIRST_OF_ARRAY:
            raw = args[0] if args else ""
            inner = raw.strip()
            if inner.startswith("["):
                inner = inner[1:]
            raw = (split_arguments(inner) or [""])[0]
        else:
            raw = args[0] if args else ""
        return Extracted(name=normalize_argument(raw), literal=is_string_literal(raw))


def split_arguments(text: str) -> list[str]:
    """
    Splits call arguments on top-level commas, stopping at the first
    unmatched closing parenthesis. Brackets and commas inside quoted strings
    do not count.
    """
    args: list[str] = []
    depth = 0
    start = 0
    quote = ""
    escaped = False
    for i, ch in enumerate(text):
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch in "([{":
            depth += 1
        elif ch in ")]}":
            if depth == 0:
                args.append(text[start:i])
                return args
            depth -= 1
        elif ch == "," and depth == 0:
            args.append(text[start:i])
            start = i + 1
    args.append(text[start:])
    return args


def normalize_argument(raw: str) -> str:
    return raw.translate(_IGNORED_TABLE).strip()


def is_string_literal(raw: str) -> bool:
    """True for exactly one quoted string, e.g. 'a.b' or "a.b"."""
    raw = raw.strip()
    if len(raw) < 2 or raw[0] not in "'\"" or raw[-1] != raw[0]:
        return False
    return raw[0] not in raw[1:-1]


def parse_directive(node) -> Directive:
    """Builds a Directive from a config entry: a marker string or a mapping."""
    if isinstance(node, str):
        return Directive(node)
    marker = str(node["marker"])
    argument: Optional[str] = node.get("argument")
    return Directive(marker, ArgumentRule(argument) if argument else ArgumentRule.FIRST)


RENDER_CALLS: tuple[Directive, ...] = (
    Directive("View::make("),
    Directive("view("),
    Directive("view->make("),
)

BLADE_DIRECTIVES: tuple[Directive, ...] = (
    Directive("@include("),
    Directive("@includeIf("),
    Directive("@extends("),
    Directive("Blade::include("),
    Directive("@includeWhen(", ArgumentRule.SECOND),
    Directive("@includeUnless(", ArgumentRule.SECOND),
    Directive("@includeFirst(", ArgumentRule.FIRST_OF_ARRAY),
)
