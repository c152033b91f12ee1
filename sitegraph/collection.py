"""Insertion-ordered collections of identifiable nodes."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable
from collections.abc import Iterator
from typing import Generic
from typing import TypeVar

from .content import _Node
from .errors import DuplicateIdentifier
from .errors import FrozenError

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=_Node)


class IdentifiableCollection(Generic[N]):
    """Ordered container of nodes addressed by identifier.

    Uniqueness is deliberately not checked on insertion: several data sources
    add to the same collection independently, and the invariant is checked
    once afterwards with :func:`ensure_identifier_uniqueness`. Lookups by
    identifier return the first node added under it.
    """

    def __init__(self, nodes: Iterable[N] = ()):
        self._nodes: list[N] = []
        self._index: dict[str, N] = {}
        self._frozen = False
        self.extend(nodes)

    def add(self, node: N) -> None:
        if self._frozen:
            raise FrozenError("collection")
        self._nodes.append(node)
        self._index.setdefault(node.identifier, node)

    def extend(self, nodes: Iterable[N]) -> None:
        for node in nodes:
            self.add(node)

    def get(self, identifier: str) -> N | None:
        return self._index.get(identifier)

    def find_all(self, pattern: str) -> list[N]:
        """Return nodes whose identifier matches a glob pattern, in insertion order."""
        return [node for node in self._nodes if fnmatch.fnmatchcase(node.identifier, pattern)]

    def __getitem__(self, key: int | str) -> N | None:
        if isinstance(key, int):
            return self._nodes[key]
        return self.get(key)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._index

    def __iter__(self) -> Iterator[N]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return bool(self._nodes)

    @property
    def identifiers(self) -> list[str]:
        return [node.identifier for node in self._nodes]

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Freeze the collection and every node in it."""
        for node in self._nodes:
            node.freeze()
        self._frozen = True

    def __repr__(self) -> str:
        return f"<IdentifiableCollection size={len(self._nodes)}>"


def ensure_identifier_uniqueness(nodes: Iterable[_Node], kind: str) -> None:
    """Raise DuplicateIdentifier for the first repeated identifier, scanning in order."""
    seen: set[str] = set()
    for node in nodes:
        if node.identifier in seen:
            raise DuplicateIdentifier(node.identifier, kind)
        seen.add(node.identifier)
    logger.debug(f"All {len(seen)} {kind} identifiers are unique")
