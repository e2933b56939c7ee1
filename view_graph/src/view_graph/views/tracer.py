import logging
from typing import Optional

from view_graph.config import AnalyzerConfig
from view_graph.indexer import MethodLocation, PhpIndexer, locate_method, read_class
from view_graph.inputs.source_files import PathLike
from view_graph.models.class_models import ClassDescriptor
from view_graph.models.view_models import ViewDependencyTree
from view_graph.views.call_sites import SubstringCallSiteFinder, ViewCallScanner, template_finder
from view_graph.views.finder import FileViewFinder
from view_graph.views.resolver import TemplateDependencyResolver
from view_graph.views.tree import TreeBuilder

log = logging.getLogger(__name__)


class ViewTracer:
    """
    Follows a controller action (or any method) to every template it renders,
    directly or through inclusions.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        config = config or AnalyzerConfig()
        self.config = config
        finder = FileViewFinder(config.view_paths, config.view_namespaces, config.view_extensions)
        resolver = TemplateDependencyResolver(finder, template_finder(config.directives), config.template_suffix)

        self.scanner = ViewCallScanner(SubstringCallSiteFinder(config.render_calls, continue_on_next_line=True))
        self.builder = TreeBuilder(resolver, config.max_depth)

    def trace(self, location: MethodLocation) -> ViewDependencyTree:
        lines = location.read_lines()
        roots = self.scanner.scan_callable(lines, location.start_line, location.class_name)
        if not roots:
            return ViewDependencyTree()
        return ViewDependencyTree(self.builder.expand_tree(roots))

    def trace_method(self, path: PathLike, method: str,
                     class_name: Optional[str] = None) -> Optional[ViewDependencyTree]:
        """Locates `method` in a PHP file, then traces it; None if there is no such method."""
        location = locate_method(path, method, class_name, PhpIndexer.from_config(self.config))
        if location is None:
            log.debug("method %r not found in %s", method, path)
            return None
        return self.trace(location)

    def read_class(self, path: PathLike) -> Optional[ClassDescriptor]:
        """The first class in a PHP file, omitted visibilities taken from the config."""
        return read_class(path, self.config.default_visibility)
