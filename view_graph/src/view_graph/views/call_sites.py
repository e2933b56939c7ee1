"""
Finding render calls and inclusion directives in source lines.

Detection is plain substring search: it finds literal-argument calls reliably and
extracts whatever text follows the marker otherwise. Callers depend only on the
`CallSiteFinder` protocol so a token-based finder can replace it.
"""
import logging
from typing import Iterable, Optional, Protocol, Sequence

from view_graph.models.view_models import ViewReference
from view_graph.views.directives import BLADE_DIRECTIVES, RENDER_CALLS, Directive

log = logging.getLogger(__name__)


class CallSiteFinder(Protocol):
    def find_call_sites(self, lines: Sequence[str], start_line: int, file: str) -> list[ViewReference]:
        """References found in `lines`, the first of which is source line `start_line`."""
        ...


class SubstringCallSiteFinder:
    """
    Matches every directive of a fixed vocabulary against each line.

    every_occurrence: report each occurrence of a marker on a line, not only
        the first one.
    continue_on_next_line: when nothing follows the marker on its line, read
        the argument from the next line (formatter-wrapped calls).
    """

    def __init__(self, directives: Iterable[Directive], *,
                 every_occurrence: bool = False, continue_on_next_line: bool = False):
        self.directives = tuple(directives)
        self.every_occurrence = every_occurrence
        self.continue_on_next_line = continue_on_next_line

    def find_call_sites(self, lines: Sequence[str], start_line: int, file: str) -> list[ViewReference]:
        refs: list[ViewReference] = []
        for offset, line in enumerate(lines):
            for directive in self.directives:
                for position in self._positions(line, directive.marker):
                    tail = line[position + len(directive.marker):].strip()
                    if not tail and self.continue_on_next_line and offset + 1 < len(lines):
                        tail = lines[offset + 1].strip()
                    extracted = directive.extract(tail)
                    if not extracted.literal:
                        log.debug("non-literal view argument in %s:%d: %r",
                                  file, start_line + offset, extracted.name)
                    refs.append(ViewReference(
                        name=extracted.name,
                        file=file,
                        line_number=start_line + offset,
                        directive=directive.marker,
                        line=line,
                        literal=extracted.literal,
                    ))
        return refs

    def _positions(self, line: str, marker: str) -> list[int]:
        positions = []
        pos = line.find(marker)
        while pos != -1:
            positions.append(pos)
            if not self.every_occurrence:
                break
            pos = line.find(marker, pos + len(marker))
        return positions


class ViewCallScanner:
    """Finds the views a callable's body renders."""

    def __init__(self, finder: Optional[CallSiteFinder] = None):
        self.finder = finder or SubstringCallSiteFinder(RENDER_CALLS, continue_on_next_line=True)

    def scan_callable(self, source_lines: Sequence[str], start_line: int,
                      class_name: str = "") -> list[ViewReference]:
        return self.finder.find_call_sites(source_lines, start_line, class_name)


def template_finder(directives: Iterable[Directive] = BLADE_DIRECTIVES) -> SubstringCallSiteFinder:
    """The finder used on template bodies: every occurrence, no line continuation."""
    return SubstringCallSiteFinder(directives, every_occurrence=True)
