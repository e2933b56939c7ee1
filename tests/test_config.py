import textwrap
from pathlib import Path

import pytest

from view_graph.config import AnalyzerConfig, load_config
from view_graph.errors import ConfigError, ViewGraphError
from view_graph.views.directives import BLADE_DIRECTIVES, RENDER_CALLS, ArgumentRule, Directive
from tests.infrastructure.helpers import write


def test_defaults_without_file(tmp_path: Path):
    cfg = load_config(tmp_path)
    assert cfg.view_paths == [tmp_path / "resources/views"]
    assert cfg.render_calls == RENDER_CALLS
    assert cfg.directives == BLADE_DIRECTIVES
    assert cfg.template_suffix == ".blade.php"
    assert cfg.max_depth == 32
    assert cfg.default_visibility == "public"


def test_full_file(tmp_path: Path):
    write(tmp_path / "view-graph.yaml", textwrap.dedent("""
        views:
          paths: [themes/default, resources/views]
          namespaces:
            mail: vendor/mail
          extensions: [.blade.php]
          max_depth: 4
        render_calls: ["view("]
        directives:
          - "@include("
          - marker: "@includeWhen("
            argument: second
        default_visibility: Protected
    """))
    cfg = load_config(tmp_path)
    assert cfg.view_paths == [tmp_path / "themes/default", tmp_path / "resources/views"]
    assert cfg.view_namespaces == {"mail": [tmp_path / "vendor/mail"]}
    assert cfg.view_extensions == ("blade.php",)
    assert cfg.max_depth == 4
    assert cfg.render_calls == (Directive("view("),)
    assert cfg.directives == (Directive("@include("), Directive("@includeWhen(", ArgumentRule.SECOND))
    assert cfg.default_visibility == "protected"


@pytest.mark.parametrize("text", [
    "- just\n- a list\n",
    "views: [a, b]\n",
    "views:\n  max_depth: deep\n",
    "directives:\n  - {argument: second}\n",
    "directives:\n  - {marker: '@x(', argument: third}\n",
    "default_visibility: internal\n",
    "views: {paths: [a\n",
])
def test_invalid_files(tmp_path: Path, text: str):
    write(tmp_path / "view-graph.yaml", text)
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_config_error_is_user_facing():
    assert issubclass(ConfigError, ViewGraphError)


def test_empty_file_means_defaults(tmp_path: Path):
    write(tmp_path / "view-graph.yaml", "")
    assert load_config(tmp_path).render_calls == AnalyzerConfig().render_calls
