import logging
from typing import Optional

from view_graph.inputs.source_files import read_lines
from view_graph.models.view_models import ViewReference
from view_graph.views.call_sites import CallSiteFinder, template_finder
from view_graph.views.finder import ViewPathResolver, normalize_view_name

log = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".blade.php"


class TemplateDependencyResolver:
    """
    Expands a view identifier into the views its template includes.

    A view that cannot be found or read has no children; that is reported
    through logging only, never raised.
    """

    def __init__(self, finder: ViewPathResolver,
                 call_sites: Optional[CallSiteFinder] = None,
                 template_suffix: str = TEMPLATE_SUFFIX):
        self.finder = finder
        self.call_sites = call_sites or template_finder()
        self.template_suffix = template_suffix

    def expand(self, identifier: str) -> list[ViewReference]:
        path = self.finder.find(normalize_view_name(identifier))
        if path is None:
            log.debug("view %r not found", identifier)
            return []
        try:
            lines = read_lines(path)
        except OSError as e:
            log.warning("cannot read template %s: %s", path, e)
            return []
        # Template line numbers are 1-based.
        return self.call_sites.find_call_sites(lines, 1, identifier + self.template_suffix)
