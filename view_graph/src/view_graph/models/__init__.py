from view_graph.models.class_models import (
    ClassDescriptor,
    ClassKind,
    MethodDescriptor,
    Parameter,
    Token,
    TokenKind,
)
from view_graph.models.view_models import ViewDependencyTree, ViewReference

__all__ = [
    "ClassDescriptor",
    "ClassKind",
    "MethodDescriptor",
    "Parameter",
    "Token",
    "TokenKind",
    "ViewDependencyTree",
    "ViewReference",
]
