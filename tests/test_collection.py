"""Tests for IdentifiableCollection and uniqueness validation."""

import pytest

from sitegraph.collection import IdentifiableCollection
from sitegraph.collection import ensure_identifier_uniqueness
from sitegraph.content import Item
from sitegraph.content import Layout
from sitegraph.errors import DuplicateIdentifier
from sitegraph.errors import FrozenError


def _items(*identifiers):
    return [Item(f"content of {i}", {}, i) for i in identifiers]


class TestIdentifiableCollection:
    def test_iteration_follows_insertion_order(self):
        collection = IdentifiableCollection(_items("/b/", "/a/", "/c/"))
        assert [i.identifier for i in collection] == ["/b/", "/a/", "/c/"]
        assert collection.identifiers == ["/b/", "/a/", "/c/"]
        assert len(collection) == 3

    def test_contains_and_get(self):
        collection = IdentifiableCollection(_items("/a/"))
        assert "/a/" in collection
        assert "/b/" not in collection
        assert collection.get("/a/").identifier == "/a/"
        assert collection.get("/b/") is None
        assert collection["/a/"] is collection[0]

    def test_duplicates_allowed_on_insert_and_first_wins(self):
        first, second = _items("/a/", "/a/")
        collection = IdentifiableCollection([first, second])
        assert len(collection) == 2
        assert collection.get("/a/") is first

    def test_find_all_with_glob(self):
        collection = IdentifiableCollection(_items("/blog/one/", "/blog/two/", "/about/"))
        assert [i.identifier for i in collection.find_all("/blog/*")] == ["/blog/one/", "/blog/two/"]

    def test_empty_collection_is_falsy(self):
        assert not IdentifiableCollection()

    def test_freeze_blocks_insertion_and_freezes_nodes(self):
        collection = IdentifiableCollection(_items("/a/"))
        collection.freeze()

        assert collection.frozen
        assert collection[0].frozen
        with pytest.raises(FrozenError):
            collection.add(Item("", {}, "/b/"))


class TestEnsureIdentifierUniqueness:
    def test_unique_identifiers_pass(self):
        ensure_identifier_uniqueness(_items("/a/", "/b/"), "item")

    def test_first_repeat_in_scan_order_is_reported(self):
        with pytest.raises(DuplicateIdentifier) as excinfo:
            ensure_identifier_uniqueness(_items("/a/", "/b/", "/b/", "/a/"), "item")

        assert excinfo.value.identifier == "/b/"
        assert excinfo.value.kind == "item"
        assert "multiple items with the /b/ identifier" in str(excinfo.value)

    def test_kind_is_reported_for_layouts(self):
        layouts = [Layout("", {}, "/default/"), Layout("", {}, "/default/")]
        with pytest.raises(DuplicateIdentifier) as excinfo:
            ensure_identifier_uniqueness(layouts, "layout")
        assert excinfo.value.kind == "layout"
