"""
Expansion of view references into dependency trees, and flattening them back.

The inclusion graph may be deep or cyclic, so expansion uses an explicit work
stack. Each node remembers the identifiers on its path from the root: meeting one
of them again marks the node `cycle`, and going past `max_depth` marks it
`truncated`. Neither node is expanded further.
"""
import logging
from typing import Iterable, Mapping, Union

from view_graph.models.view_models import ViewReference
from view_graph.views.finder import normalize_view_name
from view_graph.views.resolver import TemplateDependencyResolver

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


def key_by_name(refs: Iterable[ViewReference]) -> dict[str, ViewReference]:
    # A later duplicate replaces the earlier value but keeps its position.
    keyed: dict[str, ViewReference] = {}
    for ref in refs:
        keyed[ref.name] = ref
    return keyed


class TreeBuilder:

    def __init__(self, resolver: TemplateDependencyResolver, max_depth: int = DEFAULT_MAX_DEPTH):
        self.resolver = resolver
        self.max_depth = max_depth

    def expand_tree(self, node_or_list: Union[str, Iterable[ViewReference]]) -> dict[str, ViewReference]:
        """
        Expands an identifier, or a list of already found references, into an
        identifier-keyed tree. Every reference's `children` is filled in place.
        """
        if isinstance(node_or_list, str):
            root_path = frozenset({normalize_view_name(node_or_list)})
            tree = key_by_name(self.resolver.expand(node_or_list))
        else:
            root_path = frozenset()
            tree = key_by_name(node_or_list)

        # (reference, depth, identifiers on the path above it)
        stack = [(ref, 1, root_path) for ref in reversed(list(tree.values()))]
        while stack:
            ref, depth, ancestors = stack.pop()
            key = normalize_view_name(ref.name)

            if not ref.literal:
                log.debug("not expanding non-literal view %r (%s:%d)", ref.name, ref.file, ref.line_number)
                ref.children = {}
                continue
            if key in ancestors:
                log.warning("view cycle: %r includes itself through %s:%d", ref.name, ref.file, ref.line_number)
                ref.cycle = True
                ref.children = {}
                continue
            if depth > self.max_depth:
                log.warning("view %r exceeds maximum include depth %d", ref.name, self.max_depth)
                ref.truncated = True
                ref.children = {}
                continue

            ref.children = key_by_name(self.resolver.expand(ref.name))
            path = ancestors | {key}
            stack.extend((child, depth + 1, path) for child in reversed(list(ref.children.values())))

        return tree


def flatten(tree: Mapping[str, ViewReference]) -> list[str]:
    """
    Every identifier in the tree, depth first, parents before their children.
    Identifiers met at several places are listed each time.
    """
    names: list[str] = []
    stack = list(reversed(list(tree.items())))
    while stack:
        name, ref = stack.pop()
        names.append(name)
        if ref.children:
            stack.extend(reversed(list(ref.children.items())))
    return names
