"""
Reads the method structure of one PHP class, interface or trait out of its token
stream.

This is a scanner over a constrained subset of the declaration grammar, not a
validator: malformed input produces a partially filled `ClassDescriptor`, and a
broken method never spoils the methods declared after it.
"""
import logging
from typing import Iterable, Optional

from view_graph.models.class_models import (
    MODIFIER_KINDS,
    VISIBILITY_KINDS,
    ClassDescriptor,
    ClassKind,
    MethodDescriptor,
    Parameter,
    Token,
    TokenKind,
)

log = logging.getLogger(__name__)

_CLASS_KINDS = {
    TokenKind.CLASS: ClassKind.CLASS,
    TokenKind.INTERFACE: ClassKind.INTERFACE,
    TokenKind.TRAIT: ClassKind.TRAIT,
}

_OPENERS = ("(", "[", "{", "#[")
_CLOSERS = (")", "]", "}")

# Tokens that can never be a method name.
_NOT_A_NAME = frozenset({
    TokenKind.PUNCT, TokenKind.STRING, TokenKind.VARIABLE, TokenKind.NUMBER, TokenKind.OTHER,
})

# Trivia-free stream of (index in the caller's token list, token).
Stream = list[tuple[int, Token]]


class ClassReader:
    """
    Turns a token stream spanning one class declaration into a ClassDescriptor.

    `default_visibility` is what a method without a visibility modifier gets;
    for PHP that is "public".
    """

    def __init__(self, default_visibility: str = "public"):
        self.default_visibility = default_visibility

    def read(self, tokens: Iterable[Token]) -> ClassDescriptor:
        stream: Stream = [(i, t) for i, t in enumerate(tokens) if not t.is_trivia]
        descriptor = ClassDescriptor()

        pos = self._read_declaration(stream, descriptor)
        if pos is None:
            log.debug("no class declaration found in %d tokens", len(stream))
            return descriptor

        pos = _find_text(stream, pos, "{")
        if pos is None:
            return descriptor
        pos += 1
        body_start = pos

        while pos < len(stream):
            tok = stream[pos][1]
            if tok.text == "}":
                break
            if tok.text == "{":
                # e.g. trait adaptation blocks: use A { foo as bar; }
                pos = _skip_block(stream, pos)
            elif tok.kind is TokenKind.FUNCTION:
                pos = self._read_method(stream, pos, body_start, descriptor)
            else:
                pos += 1

        return descriptor

    # -- declaration ----------------------------------------------------------

    def _read_declaration(self, stream: Stream, descriptor: ClassDescriptor) -> Optional[int]:
        """
        Fills name/kind/location from the first class-like keyword and returns the
        position just past the declared name.
        """
        for pos, (_, tok) in enumerate(stream):
            kind = _CLASS_KINDS.get(tok.kind)
            if kind is None:
                continue
            # Foo::class and anonymous `new class` are not declarations.
            if pos > 0 and stream[pos - 1][1].kind in (TokenKind.DOUBLE_COLON, TokenKind.NEW):
                continue
            if pos + 1 >= len(stream) or stream[pos + 1][1].kind is not TokenKind.NAME:
                continue

            name_index, name_tok = stream[pos + 1]
            descriptor.name = name_tok.text
            descriptor.offset = name_index
            descriptor.line = name_tok.line
            descriptor.kind = kind
            descriptor.is_abstract = any(
                m.kind is TokenKind.ABSTRACT for m in _modifiers_before(stream, pos, 0)
            )
            return pos + 2
        return None

    # -- methods --------------------------------------------------------------

    def _read_method(self, stream: Stream, pos: int, body_start: int,
                     descriptor: ClassDescriptor) -> int:
        """
        Reads the method whose `function` keyword sits at `pos` and returns the
        position to resume scanning from.
        """
        fn_tok = stream[pos][1]
        modifiers = _modifiers_before(stream, pos, body_start)

        k = pos + 1
        if k < len(stream) and stream[k][1].text == "&":
            k += 1
        if k >= len(stream):
            return k

        name_tok = stream[k][1]
        if name_tok.kind in _NOT_A_NAME:
            log.debug("skipping nameless function at line %d", fn_tok.line)
            return pos + 1
        k += 1
        if k >= len(stream) or stream[k][1].text != "(":
            log.debug("skipping method %r without a parameter list at line %d",
                      name_tok.text, name_tok.line)
            return k

        method = MethodDescriptor(
            name=name_tok.text,
            line=name_tok.line,
            visibility=self.default_visibility,
        )
        for mod in modifiers:
            if mod.kind in VISIBILITY_KINDS:
                method.visibility = mod.text.lower()
                method.visibility_text = mod.text
            elif mod.kind is TokenKind.STATIC:
                method.is_static = True
            elif mod.kind is TokenKind.ABSTRACT:
                method.is_abstract = True

        # Appended before parsing the rest so a truncated stream keeps it.
        descriptor.methods.append(method)

        k = self._read_parameters(stream, k, method)
        k = self._read_return_type(stream, k, method)
        return self._read_body(stream, k, method)

    def _read_parameters(self, stream: Stream, k: int, method: MethodDescriptor) -> int:
        """`k` points at the opening parenthesis; returns the position after `)`."""
        k += 1
        depth = 0
        groups: list[list[Token]] = []
        current: list[Token] = []

        while k < len(stream):
            tok = stream[k][1]
            if depth == 0:
                if tok.text == ")":
                    k += 1
                    break
                if tok.text in ("{", ";"):
                    # Unterminated list: leave the body or terminator to the caller.
                    log.debug("parameter list of %r not closed (line %d)", method.name, tok.line)
                    break
                if tok.text == ",":
                    groups.append(current)
                    current = []
                    k += 1
                    continue
            if tok.text in _OPENERS:
                depth += 1
            elif tok.text in _CLOSERS:
                depth -= 1
            current.append(tok)
            k += 1

        if current:
            groups.append(current)

        for group in groups:
            param = _build_parameter(group)
            method.signature.extend(param.tokens)
            if param.name is not None:
                method.parameters.append(param)
        return k

    def _read_return_type(self, stream: Stream, k: int, method: MethodDescriptor) -> int:
        if k >= len(stream) or stream[k][1].text != ":":
            return k
        k += 1

        type_tokens: list[Token] = []
        while k < len(stream):
            tok = stream[k][1]
            if tok.text in ("{", ";", "}") or tok.kind is TokenKind.FUNCTION:
                break
            type_tokens.append(tok)
            k += 1

        nullable = bool(type_tokens) and type_tokens[0].text == "?"
        if nullable:
            type_tokens = type_tokens[1:]
        if type_tokens:
            method.nullable_return_type = nullable
            method.return_type = "".join(t.text for t in type_tokens)
        return k

    def _read_body(self, stream: Stream, k: int, method: MethodDescriptor) -> int:
        if k >= len(stream):
            return k
        tok = stream[k][1]
        if tok.text == ";":
            method.is_abstract = True
            return k + 1
        if tok.text == "{":
            return _skip_block(stream, k)
        log.debug("unexpected %r after method %r (line %d)", tok.text, method.name, tok.line)
        return k


def read(tokens: Iterable[Token], default_visibility: str = "public") -> ClassDescriptor:
    """Reads one class declaration from a token stream."""
    return ClassReader(default_visibility).read(tokens)


# --- Stream helpers ------------------------------------------------------------

def _modifiers_before(stream: Stream, pos: int, lower: int) -> list[Token]:
    """Modifier tokens directly preceding `pos`, in source order."""
    mods = []
    j = pos - 1
    while j >= lower and stream[j][1].kind in MODIFIER_KINDS:
        mods.append(stream[j][1])
        j -= 1
    mods.reverse()
    return mods


def _find_text(stream: Stream, start: int, text: str) -> Optional[int]:
    for pos in range(start, len(stream)):
        if stream[pos][1].text == text:
            return pos
    return None


def _skip_block(stream: Stream, pos: int) -> int:
    """`pos` points at `{`; returns the position after its matching `}`."""
    depth = 0
    while pos < len(stream):
        text = stream[pos][1].text
        if text == "{":
            depth += 1
        elif text == "}":
            depth -= 1
            if depth == 0:
                return pos + 1
        pos += 1
    return pos


def _strip_attributes(group: list[Token]) -> list[Token]:
    out = []
    depth = 0
    for tok in group:
        if depth == 0 and tok.text == "#[":
            depth = 1
            continue
        if depth:
            if tok.text in ("[", "#["):
                depth += 1
            elif tok.text == "]":
                depth -= 1
            continue
        out.append(tok)
    return out


def _build_parameter(group: list[Token]) -> Parameter:
    """
    Splits one parameter's tokens into a Parameter. The tokens kept in
    `Parameter.tokens` are, in source order: ?, type, ..., $name, =, default.
    """
    param = Parameter(name=None)
    type_tokens: list[Token] = []
    default_tokens: list[Token] = []
    after_name = False
    after_equals = False

    for tok in _strip_attributes(group):
        if not after_name:
            if tok.kind in MODIFIER_KINDS:
                # promoted constructor property
                continue
            if tok.text == "&":
                param.by_reference = True
                continue
            if tok.text == "?":
                param.nullable = True
            elif tok.kind is TokenKind.ELLIPSIS:
                param.variadic = True
            elif tok.kind is TokenKind.VARIABLE:
                param.name = tok.text
                after_name = True
            else:
                type_tokens.append(tok)
        elif not after_equals and tok.text == "=":
            after_equals = True
        else:
            default_tokens.append(tok)
        param.tokens.append(tok)

    if type_tokens:
        param.type = "".join(t.text for t in type_tokens)
    if default_tokens:
        param.default = "".join(t.text for t in default_tokens)
    return param
