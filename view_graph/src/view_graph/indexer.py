import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tree_sitter import Node, Tree

from view_graph.class_reader import ClassReader
from view_graph.config import AnalyzerConfig
from view_graph.inputs.source_files import PathLike, read_lines, read_text
from view_graph.lexer import tokens_from_node
from view_graph.models.class_models import ClassDescriptor
from view_graph.tree_sitter_helpers import make_parser, node_end_line, node_point, node_text

log = logging.getLogger(__name__)

CLASS_NODE_TYPES = ("class_declaration", "interface_declaration", "trait_declaration")


@dataclass(frozen=True)
class MethodLocation:
    """Where a method lives: declaring class, file and 1-based line extent."""
    class_name: str  # fully-qualified, e.g. "App\\Http\\Controllers\\HomeController"
    method: str
    file: str
    start_line: int
    end_line: int

    def read_lines(self) -> list[str]:
        """The method's own physical lines."""
        return read_lines(self.file)[self.start_line - 1:self.end_line]


# --- The Indexer -------------------------------------------------------------

class PhpIndexer:
    """
    Walks a Tree-sitter PHP tree to build a small index:
    namespace -> classes (read from their tokens) -> method locations.
    """

    def __init__(self, default_visibility: str = "public"):
        self.parser = make_parser()
        self.reader = ClassReader(default_visibility)

        # In-memory index
        self.classes: dict[str, ClassDescriptor] = {}  # fqcn -> descriptor
        self.locations: dict[tuple[str, str], MethodLocation] = {}  # (fqcn lower, method lower)

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> "PhpIndexer":
        return cls(config.default_visibility)

    def index_source(self, source: str, file_path: Optional[PathLike] = None):
        """
        Parses & indexes one PHP source file.
        """
        source_bytes = source.encode("utf-8")
        tree: Tree = self.parser.parse(source_bytes)
        file_name = str(file_path) if file_path is not None else "<source>"

        namespace: Optional[str] = None
        for child in tree.root_node.children:
            if child.type == "namespace_definition":
                name_node = child.child_by_field_name("name")
                name = node_text(source_bytes, name_node) if name_node else None
                body = child.child_by_field_name("body")
                if body is None:
                    # `namespace Foo;` applies to everything after it
                    namespace = name
                    continue
                for inner in body.children:
                    self._walk_and_index(source_bytes, inner, name, file_name)
                continue
            self._walk_and_index(source_bytes, child, namespace, file_name)

    def index_file(self, path: PathLike):
        self.index_source(read_text(path), path)

    def locate(self, class_name: str, method: str) -> Optional[MethodLocation]:
        """Location of `class_name::method`; the class may be simple or fully qualified."""
        wanted = class_name.lstrip("\\").lower()
        for (fqcn, name), location in self.locations.items():
            if name != method.lower():
                continue
            if fqcn == wanted or fqcn.rsplit("\\", 1)[-1] == wanted:
                return location
        return None

    # -- AST helpers ----------------------------------------------------------

    def _walk_and_index(self, source_bytes: bytes, node: Node, namespace: Optional[str], file_name: str):
        if node.type in CLASS_NODE_TYPES:
            self._index_class(source_bytes, node, namespace, file_name)
            return
        # Conditional declarations, error recovery nodes, ...
        for child in node.children:
            self._walk_and_index(source_bytes, child, namespace, file_name)

    def _index_class(self, source_bytes: bytes, node: Node, namespace: Optional[str], file_name: str):
        descriptor = self.reader.read(tokens_from_node(source_bytes, node))
        if descriptor.name is None:
            log.debug("unreadable class declaration in %s at line %d", file_name, node_point(node)[0] + 1)
            return
        fqcn = _fqcn(namespace, descriptor.name)
        self.classes[fqcn] = descriptor

        body = node.child_by_field_name("body")
        if body is None:
            return
        for member in body.children:
            if member.type != "method_declaration":
                continue
            name_node = member.child_by_field_name("name")
            if name_node is None:
                continue
            method = node_text(source_bytes, name_node)
            self.locations[(fqcn.lower(), method.lower())] = MethodLocation(
                class_name=fqcn,
                method=method,
                file=file_name,
                start_line=node_point(member)[0] + 1,
                end_line=node_end_line(member) + 1,
            )


def _fqcn(namespace: Optional[str], name: str) -> str:
    return f"{namespace}\\{name}" if namespace else name


def locate_method(path: PathLike, method: str, class_name: Optional[str] = None,
                  indexer: Optional[PhpIndexer] = None) -> Optional[MethodLocation]:
    """
    Finds a method in one PHP file. Without `class_name`, the first class
    declaring the method wins.
    """
    indexer = indexer or PhpIndexer()
    indexer.index_file(path)
    if class_name is not None:
        return indexer.locate(class_name, method)
    for (_, name), location in indexer.locations.items():
        if name == method.lower():
            return location
    return None


def read_class(path: PathLike, default_visibility: str = "public") -> Optional[ClassDescriptor]:
    """The first class, interface or trait declared in a PHP file."""
    indexer = PhpIndexer(default_visibility)
    indexer.index_file(Path(path))
    return next(iter(indexer.classes.values()), None)
