# --- Data models for class/method metadata ----------------------------------
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TokenKind(Enum):
    """Lexical category of a PHP token, as far as the class reader cares."""
    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    FUNCTION = "function"
    ABSTRACT = "abstract"
    FINAL = "final"
    STATIC = "static"
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    READONLY = "readonly"
    NEW = "new"
    VARIABLE = "variable"  # $name, sigil included
    NAME = "name"  # identifiers, type names, qualified names
    STRING = "string"  # quoted literals and heredocs
    NUMBER = "number"
    ELLIPSIS = "ellipsis"
    DOUBLE_COLON = "double_colon"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    PUNCT = "punct"  # single operators and delimiters: ( ) { } ; ? = , ...
    OTHER = "other"


VISIBILITY_KINDS = frozenset({TokenKind.PUBLIC, TokenKind.PROTECTED, TokenKind.PRIVATE})
MODIFIER_KINDS = VISIBILITY_KINDS | {
    TokenKind.STATIC, TokenKind.ABSTRACT, TokenKind.FINAL, TokenKind.READONLY,
}


@dataclass(frozen=True)
class Token:
    """One lexical token: kind tag, literal text, 1-based source line."""
    kind: TokenKind
    text: str
    line: int

    @property
    def is_trivia(self) -> bool:
        return self.kind in (TokenKind.COMMENT, TokenKind.WHITESPACE)


class ClassKind(Enum):
    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"


@dataclass
class Parameter:
    """Structured view of one declared parameter."""
    name: Optional[str]  # e.g. "$rest"
    type: Optional[str] = None  # e.g. "string", "int|string", "\\App\\User"
    nullable: bool = False
    variadic: bool = False
    by_reference: bool = False
    default: Optional[str] = None  # literal text of the default value, if any
    tokens: list[Token] = field(default_factory=list)  # this parameter's slice of the signature


@dataclass
class MethodDescriptor:
    """Information about a method declaration in a class."""
    name: str
    line: int
    visibility: str  # "public" | "protected" | "private"
    visibility_text: Optional[str] = None  # raw modifier text; None when omitted
    is_static: bool = False
    is_abstract: bool = False
    nullable_return_type: Optional[bool] = None  # None: no return type declared
    return_type: Optional[str] = None
    signature: list[Token] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)

    @property
    def signature_texts(self) -> list[str]:
        return [t.text for t in self.signature]


@dataclass
class ClassDescriptor:
    """Information about one class, interface or trait."""
    name: Optional[str] = None
    offset: Optional[int] = None  # index of the name token in the input stream
    line: Optional[int] = None
    kind: Optional[ClassKind] = None
    is_abstract: bool = False
    methods: list[MethodDescriptor] = field(default_factory=list)

    def method(self, name: str) -> Optional[MethodDescriptor]:
        """First method with the given (case-insensitive) name, PHP style."""
        lowered = name.lower()
        for m in self.methods:
            if m.name.lower() == lowered:
                return m
        return None
