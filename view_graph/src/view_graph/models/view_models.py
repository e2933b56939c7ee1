# --- Data models for view dependency trees ----------------------------------
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ViewReference:
    """
    One render call or template inclusion found in source, plus the views it
    reaches once expanded. `children` stays None until the tree builder visits it.
    """
    name: str  # target view identifier, e.g. "partials.header"
    file: str  # referencing class name or template file name
    line_number: int
    directive: str  # alias or directive marker matched, e.g. "view(" or "@include("
    line: str  # raw source line
    literal: bool = True  # argument was a plain quoted string
    children: Optional[dict[str, "ViewReference"]] = None
    cycle: bool = False  # not expanded: identifier already on the path from the root
    truncated: bool = False  # not expanded: maximum depth reached

    @property
    def expanded(self) -> bool:
        return self.children is not None


@dataclass
class ViewDependencyTree:
    """Fully expanded views of one callable."""
    roots: dict[str, ViewReference] = field(default_factory=dict)

    @property
    def names(self) -> list[str]:
        # views.tree imports this module
        from view_graph.views.tree import flatten
        return flatten(self.roots)

    def as_mapping(self) -> dict[str, Any]:
        """Nested identifier -> subtree mapping."""
        def build(level: dict[str, ViewReference]) -> dict[str, Any]:
            return {name: build(ref.children or {}) for name, ref in level.items()}
        return build(self.roots)

    def walk(self):
        """Yields every reference in depth-first pre-order."""
        stack = list(reversed(self.roots.values()))
        while stack:
            ref = stack.pop()
            yield ref
            if ref.children:
                stack.extend(reversed(list(ref.children.values())))

    def cycles(self) -> list[ViewReference]:
        return [ref for ref in self.walk() if ref.cycle]

    def truncated(self) -> list[ViewReference]:
        return [ref for ref in self.walk() if ref.truncated]
