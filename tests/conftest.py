from pathlib import Path

import pytest

from view_graph.views.finder import FileViewFinder
from view_graph.views.resolver import TemplateDependencyResolver

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def views_root(tmp_path: Path) -> Path:
    """Empty view directory, laid out like a Laravel project."""
    root = tmp_path / "resources" / "views"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def resolver(views_root: Path) -> TemplateDependencyResolver:
    return TemplateDependencyResolver(FileViewFinder([views_root]))
