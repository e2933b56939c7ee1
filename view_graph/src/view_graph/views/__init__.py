from view_graph.views.call_sites import CallSiteFinder, SubstringCallSiteFinder, ViewCallScanner
from view_graph.views.directives import ArgumentRule, Directive
from view_graph.views.finder import FileViewFinder, normalize_view_name
from view_graph.views.resolver import TemplateDependencyResolver
from view_graph.views.tree import TreeBuilder, flatten

__all__ = [
    "ArgumentRule",
    "CallSiteFinder",
    "Directive",
    "FileViewFinder",
    "SubstringCallSiteFinder",
    "TemplateDependencyResolver",
    "TreeBuilder",
    "ViewCallScanner",
    "flatten",
    "normalize_view_name",
]
