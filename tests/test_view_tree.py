"""
Tests for template resolution, tree expansion and flattening.
"""
from view_graph.models.view_models import ViewDependencyTree, ViewReference
from view_graph.views.finder import FileViewFinder, normalize_view_name
from view_graph.views.tree import TreeBuilder, flatten
from tests.infrastructure.helpers import write


def ref(name: str, children=None) -> ViewReference:
    return ViewReference(name=name, file="x", line_number=1, directive="view(", line="", children=children)


class TestFinder:

    def test_normalize(self):
        assert normalize_view_name("admin/users.index") == "admin.users.index"
        assert normalize_view_name("mail::html/layout") == "mail::html.layout"

    def test_find_by_dotted_name(self, views_root):
        path = write(views_root / "admin" / "users" / "index.blade.php", "")
        assert FileViewFinder([views_root]).find("admin.users.index") == path

    def test_extension_order(self, views_root):
        write(views_root / "page.php", "")
        blade = write(views_root / "page.blade.php", "")
        assert FileViewFinder([views_root]).find("page") == blade

    def test_namespaced_view(self, tmp_path, views_root):
        vendor = tmp_path / "vendor" / "mail"
        path = write(vendor / "layout.blade.php", "")
        finder = FileViewFinder([views_root], {"mail": [vendor]})
        assert finder.find("mail::layout") == path
        assert finder.find("unknown::layout") is None

    def test_missing(self, views_root):
        finder = FileViewFinder([views_root])
        assert finder.find("nope") is None
        assert finder.find("") is None
        assert finder.find("$name") is None


class TestResolver:

    def test_unresolvable_identifier_is_a_leaf(self, resolver):
        assert resolver.expand("does.not.exist") == []

    def test_two_inclusions_of_the_same_partial(self, resolver, views_root):
        write(views_root / "page.blade.php", "<div>\n@include('partial')\n</div>\n@include('partial')\n")
        refs = resolver.expand("page")
        assert [(r.name, r.line_number) for r in refs] == [("partial", 2), ("partial", 4)]
        assert all(r.file == "page.blade.php" for r in refs)
        assert all(r.directive == "@include(" for r in refs)

    def test_line_numbers_count_only_newlines(self, resolver, views_root):
        write(views_root / "page.blade.php", "<p>a\u2028b</p>\f\n@include('x')\n")
        refs = resolver.expand("page")
        assert [(r.name, r.line_number) for r in refs] == [("x", 2)]

    def test_slash_identifier(self, resolver, views_root):
        write(views_root / "admin" / "page.blade.php", "@extends('layouts.admin')\n")
        refs = resolver.expand("admin/page")
        assert [r.name for r in refs] == ["layouts.admin"]

    def test_conditional_directives(self, resolver, views_root):
        write(views_root / "page.blade.php",
              "@includeWhen($a, 'x')\n@includeUnless($b, 'y')\n@includeFirst(['z', 'w'])\n")
        assert [r.name for r in resolver.expand("page")] == ["x", "y", "z"]


class TestTreeBuilder:

    def test_expand_identifier(self, resolver, views_root):
        write(views_root / "home.blade.php", "@extends('layout')\n@include('card')\n")
        write(views_root / "layout.blade.php", "@include('nav')\n")
        write(views_root / "nav.blade.php", "<nav></nav>\n")

        tree = TreeBuilder(resolver).expand_tree("home")
        assert list(tree) == ["layout", "card"]
        assert list(tree["layout"].children) == ["nav"]
        assert tree["layout"].children["nav"].children == {}
        # card.blade.php does not exist
        assert tree["card"].children == {}
        assert flatten(tree) == ["layout", "nav", "card"]

    def test_expand_reference_list(self, resolver, views_root):
        write(views_root / "home.blade.php", "@include('a')\n")
        roots = [ref("home")]
        tree = TreeBuilder(resolver).expand_tree(roots)
        assert tree["home"] is roots[0]
        assert list(roots[0].children) == ["a"]

    def test_duplicate_keys_at_one_level_collapse(self, resolver, views_root):
        write(views_root / "page.blade.php", "@include('partial')\n@include('other')\n@include('partial')\n")
        tree = TreeBuilder(resolver).expand_tree("page")
        assert list(tree) == ["partial", "other"]
        assert tree["partial"].line_number == 3

    def test_self_inclusion_terminates(self, resolver, views_root):
        write(views_root / "loop.blade.php", "@include('loop')\n")
        tree = TreeBuilder(resolver).expand_tree([ref("loop")])
        child = tree["loop"].children["loop"]
        assert child.cycle is True
        assert child.children == {}
        assert flatten(tree) == ["loop", "loop"]

    def test_indirect_cycle(self, resolver, views_root):
        write(views_root / "a.blade.php", "@include('b')\n")
        write(views_root / "b.blade.php", "@include('a')\n")
        tree = TreeBuilder(resolver).expand_tree("a")
        # "a" is the starting identifier, so reaching it again is a cycle
        assert flatten(tree) == ["b", "a"]
        assert tree["b"].children["a"].cycle is True

    def test_same_view_on_sibling_paths_is_not_a_cycle(self, resolver, views_root):
        write(views_root / "page.blade.php", "@include('left')\n@include('right')\n")
        write(views_root / "left.blade.php", "@include('shared')\n")
        write(views_root / "right.blade.php", "@include('shared')\n")
        tree = TreeBuilder(resolver).expand_tree("page")
        assert flatten(tree) == ["left", "shared", "right", "shared"]
        assert not any(r.cycle for r in ViewDependencyTree(tree).walk())

    def test_max_depth(self, resolver, views_root):
        for i in range(5):
            write(views_root / f"v{i}.blade.php", f"@include('v{i + 1}')\n")
        tree = TreeBuilder(resolver, max_depth=2).expand_tree("v0")
        assert flatten(tree) == ["v1", "v2", "v3"]
        deepest = tree["v1"].children["v2"].children["v3"]
        assert deepest.truncated is True
        assert deepest.children == {}

    def test_non_literal_is_not_expanded(self, resolver, views_root):
        write(views_root / "page.blade.php", "@include($partial)\n")
        tree = TreeBuilder(resolver).expand_tree("page")
        node = tree["$partial"]
        assert node.literal is False
        assert node.children == {}


class TestFlatten:

    def test_three_levels_pre_order(self):
        tree = {
            "a": ref("a", {
                "b": ref("b", {"d": ref("d", {})}),
                "c": ref("c", {}),
            }),
            "e": ref("e", {"d": ref("d", {})}),
        }
        names = flatten(tree)
        assert names == ["a", "b", "d", "c", "e", "d"]
        assert len(names) == 6

    def test_unexpanded_nodes_are_leaves(self):
        assert flatten({"a": ref("a")}) == ["a"]

    def test_dependency_tree_helpers(self):
        leaf = ref("d", {})
        leaf.cycle = True
        tree = ViewDependencyTree({"a": ref("a", {"d": leaf})})
        assert tree.names == ["a", "d"]
        assert tree.as_mapping() == {"a": {"d": {}}}
        assert tree.cycles() == [leaf]
        assert tree.truncated() == []
