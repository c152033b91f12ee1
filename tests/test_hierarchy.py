"""Tests for parent/child linking."""

from sitegraph.collection import IdentifiableCollection
from sitegraph.content import Item
from sitegraph.hierarchy import link
from sitegraph.hierarchy import unlink


def _collection(*identifiers):
    return IdentifiableCollection(Item("", {}, i) for i in identifiers)


def _tree(items):
    return {
        item.identifier: (
            item.parent.identifier if item.parent else None,
            [child.identifier for child in item.children],
        )
        for item in items
    }


class TestLink:
    def test_links_nested_items(self):
        items = _collection("/", "/a/", "/a/b/", "/a/b/c.html")
        link(items)

        assert items["/a/b/c.html"].parent is items["/a/b/"]
        assert items["/a/b/"].parent is items["/a/"]
        assert items["/a/"].parent is items["/"]
        assert items["/"].parent is None
        assert items["/a/"] in items["/"].children

    def test_children_follow_collection_order(self):
        items = _collection("/", "/z/", "/a/", "/m.html")
        link(items)
        assert [c.identifier for c in items["/"].children] == ["/z/", "/a/", "/m.html"]

    def test_missing_parent_leaves_root_node(self):
        items = _collection("/", "/x/y/")
        link(items)
        assert items["/x/y/"].parent is None
        assert items["/"].children == []

    def test_non_full_identifier_cannot_be_parent(self):
        items = _collection("/a", "/a/b")
        link(items)
        assert items["/a/b"].parent is None
        assert items["/a"].children == []

    def test_link_twice_does_not_duplicate_children(self):
        items = _collection("/", "/a/", "/b/")
        link(items)
        link(items)
        assert [c.identifier for c in items["/"].children] == ["/a/", "/b/"]

    def test_repeated_identifier_listed_once_among_children(self):
        items = _collection("/", "/a/", "/a/", "/b.html")
        first, second = items[1], items[2]
        link(items)

        assert [c.identifier for c in items["/"].children] == ["/a/", "/b.html"]
        assert items["/"].children[0] is first
        assert second.parent is items["/"]

    def test_unlink_then_link_rebuilds_identical_tree(self):
        items = _collection("/", "/a/", "/a/b/", "/a/b/c.html", "/d.html")
        link(items)
        before = _tree(items)

        unlink(items)
        assert all(item.parent is None and item.children == [] for item in items)

        link(items)
        assert _tree(items) == before

    def test_unlinked_items_have_no_relations(self):
        item = Item("", {}, "/a/")
        assert item.parent is None
        assert item.children == []
