"""
Mapping view identifiers ("admin.users.index", "mail::layout") to template files.
"""
import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional, Protocol

log = logging.getLogger(__name__)

HINT_DELIMITER = "::"
DEFAULT_EXTENSIONS = ("blade.php", "php", "css", "html")


class ViewPathResolver(Protocol):
    def find(self, name: str) -> Optional[Path]:
        """Existing template file for a normalized view name, or None."""
        ...


def normalize_view_name(name: str) -> str:
    """`admin/users.index` -> `admin.users.index`; a `ns::` hint is kept as is."""
    name = name.strip()
    if HINT_DELIMITER not in name:
        return name.replace("/", ".")
    namespace, _, rest = name.partition(HINT_DELIMITER)
    return namespace + HINT_DELIMITER + rest.replace("/", ".")


class FileViewFinder:
    """
    Looks views up under a list of root directories, plus per-namespace roots
    for hinted names, trying each extension in order.
    """

    def __init__(self, paths: Iterable[Path],
                 namespaces: Optional[Mapping[str, Iterable[Path]]] = None,
                 extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        self.paths = [Path(p) for p in paths]
        self.namespaces = {ns: [Path(p) for p in roots] for ns, roots in (namespaces or {}).items()}
        self.extensions = tuple(extensions)

    def find(self, name: str) -> Optional[Path]:
        name = normalize_view_name(name)
        if not name:
            return None
        if HINT_DELIMITER in name:
            namespace, _, view = name.partition(HINT_DELIMITER)
            roots = self.namespaces.get(namespace)
            if roots is None:
                log.debug("no paths registered for view namespace %r", namespace)
                return None
            return self._find_in_paths(view, roots)
        return self._find_in_paths(name, self.paths)

    def _find_in_paths(self, name: str, roots: Iterable[Path]) -> Optional[Path]:
        relative = name.replace(".", "/")
        for root in roots:
            for ext in self.extensions:
                candidate = root / f"{relative}.{ext}"
                if candidate.is_file():
                    return candidate
        return None
