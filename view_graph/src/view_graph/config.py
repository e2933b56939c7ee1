from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from view_graph.errors import ConfigError
from view_graph.views.directives import BLADE_DIRECTIVES, RENDER_CALLS, Directive, parse_directive
from view_graph.views.finder import DEFAULT_EXTENSIONS
from view_graph.views.resolver import TEMPLATE_SUFFIX
from view_graph.views.tree import DEFAULT_MAX_DEPTH

_yaml = YAML(typ="safe")
_CFG_FILE = "view-graph.yaml"

_VISIBILITIES = ("public", "protected", "private")


@dataclass
class AnalyzerConfig:
    view_paths: List[Path] = field(default_factory=lambda: [Path("resources/views")])
    view_namespaces: Dict[str, List[Path]] = field(default_factory=dict)
    view_extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    template_suffix: str = TEMPLATE_SUFFIX
    max_depth: int = DEFAULT_MAX_DEPTH
    render_calls: Tuple[Directive, ...] = RENDER_CALLS
    directives: Tuple[Directive, ...] = BLADE_DIRECTIVES
    default_visibility: str = "public"

    @staticmethod
    def from_dict(raw: Dict[str, Any], root: Path = Path(".")) -> "AnalyzerConfig":
        """Builds a config from a parsed YAML mapping; relative paths are resolved against `root`."""
        cfg = AnalyzerConfig()
        views = raw.get("views") or {}
        if not isinstance(views, dict):
            raise ConfigError("views: must be a mapping")

        if "paths" in views:
            cfg.view_paths = [root / str(p) for p in _as_list(views["paths"], "views.paths")]
        else:
            cfg.view_paths = [root / p for p in cfg.view_paths]

        namespaces = views.get("namespaces") or {}
        if not isinstance(namespaces, dict):
            raise ConfigError("views.namespaces: must be a mapping of namespace -> paths")
        cfg.view_namespaces = {
            str(ns): [root / str(p) for p in _as_list(paths, f"views.namespaces.{ns}")]
            for ns, paths in namespaces.items()
        }

        if "extensions" in views:
            cfg.view_extensions = tuple(str(e).lstrip(".") for e in _as_list(views["extensions"], "views.extensions"))
        cfg.template_suffix = str(views.get("suffix", cfg.template_suffix))
        try:
            cfg.max_depth = int(views.get("max_depth", cfg.max_depth))
        except (TypeError, ValueError):
            raise ConfigError(f"views.max_depth: not an integer: {views.get('max_depth')!r}")

        if "render_calls" in raw:
            cfg.render_calls = _directives(raw["render_calls"], "render_calls")
        if "directives" in raw:
            cfg.directives = _directives(raw["directives"], "directives")

        visibility = str(raw.get("default_visibility", cfg.default_visibility)).lower()
        if visibility not in _VISIBILITIES:
            raise ConfigError(f"default_visibility: must be one of {', '.join(_VISIBILITIES)}")
        cfg.default_visibility = visibility
        return cfg


def _as_list(node: Any, location: str) -> list:
    if isinstance(node, (str, int)):
        return [node]
    if not isinstance(node, list):
        raise ConfigError(f"{location}: must be a list")
    return node


def _directives(node: Any, location: str) -> Tuple[Directive, ...]:
    try:
        return tuple(parse_directive(entry) for entry in _as_list(node, location))
    except (KeyError, ValueError, TypeError) as e:
        raise ConfigError(f"{location}: invalid entry ({e})") from e


def _cfg_path(root: Path) -> Path:
    return (root / _CFG_FILE).resolve()


def load_config(root: Path) -> AnalyzerConfig:
    """
    Loads `view-graph.yaml` from the project root, or the defaults when the
    file does not exist.
    """
    root = Path(root)
    p = _cfg_path(root)
    if not p.is_file():
        return AnalyzerConfig.from_dict({}, root)
    try:
        raw = _yaml.load(p.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"{p}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{p}: must be a mapping with keys: views?, render_calls?, directives?, default_visibility?")
    return AnalyzerConfig.from_dict(raw, root)
