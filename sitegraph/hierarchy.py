"""Parent/child links derived from identifier structure."""

import logging
import weakref

from .collection import IdentifiableCollection
from .content import Item
from .identifier import is_full
from .identifier import parent_identifier

logger = logging.getLogger(__name__)


def link(items: IdentifiableCollection[Item]) -> None:
    """Fill in each item's parent and children.

    Only full identifiers (ending in a slash) can be parents. Children are
    recorded in collection order; items sharing an identifier resolve to
    the first of them, as with :meth:`IdentifiableCollection.get`. Items
    whose candidate parent does not exist stay root nodes. Existing links
    are cleared first, so calling this repeatedly never duplicates children.
    """
    unlink(items)

    parents: dict[str, Item] = {}
    for item in items:
        if is_full(item.identifier):
            parents.setdefault(item.identifier, item)

    ref = weakref.ref(items)
    linked = 0
    for item in items:
        item._collection = ref
        parent_id = parent_identifier(item.identifier)
        if parent_id is None:
            continue
        parent = parents.get(parent_id)
        if parent is None:
            continue
        item._parent_id = parent.identifier
        # Children are looked up by identifier, so a repeated one is listed once.
        if item.identifier not in parent._child_ids:
            parent._child_ids.append(item.identifier)
        linked += 1

    logger.debug(f"Linked {linked} of {len(items)} items to a parent")


def unlink(items: IdentifiableCollection[Item]) -> None:
    """Remove all parent/child links."""
    for item in items:
        item._parent_id = None
        item._child_ids = []
