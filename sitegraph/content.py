"""Content node types: items, layouts and code snippets."""

from __future__ import annotations

import importlib.machinery
import importlib.util
import logging
import sys
import weakref
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING
from typing import Any

from .errors import FrozenError

if TYPE_CHECKING:
    from .collection import IdentifiableCollection
    from .site import Site

logger = logging.getLogger(__name__)

# Code snippets are executed as submodules of this namespace.
SNIPPET_NAMESPACE = "sitegraph_lib"


class _Node:
    """Common behaviour for identifiable content nodes."""

    kind = "node"

    def __init__(self, content: Any, attributes: Mapping[str, Any] | None, identifier: str):
        self._frozen = False
        self.content = content
        self.attributes: Mapping[str, Any] = dict(attributes or {})
        self.identifier = identifier

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise FrozenError(f"{self.kind} {self.identifier}")
        super().__setattr__(name, value)

    def __getitem__(self, key: str) -> Any:
        return self.attributes.get(key)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the node and its attributes read-only."""
        if self._frozen:
            return
        self.attributes = MappingProxyType(dict(self.attributes))
        object.__setattr__(self, "_frozen", True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} identifier={self.identifier!r}>"


class Item(_Node):
    """A unit of site content.

    Parent and children are not owned by the item. The item only remembers
    identifiers; the node objects are looked up through the collection that
    owns them, so the links can be rebuilt from identifiers at any time.
    """

    kind = "item"

    def __init__(
        self,
        content: Any,
        attributes: Mapping[str, Any] | None,
        identifier: str,
        *,
        binary: bool = False,
    ):
        super().__init__(content, attributes, identifier)
        self.binary = binary
        self.site: Site | None = None
        self._collection: weakref.ref[IdentifiableCollection] | None = None
        self._parent_id: str | None = None
        self._child_ids: list[str] = []

    @property
    def parent(self) -> Item | None:
        if self._parent_id is None or self._collection is None:
            return None
        collection = self._collection()
        return collection.get(self._parent_id) if collection is not None else None

    @property
    def children(self) -> list[Item]:
        collection = self._collection() if self._collection is not None else None
        if collection is None:
            return []
        return [child for child in (collection.get(cid) for cid in self._child_ids) if child is not None]

    def freeze(self) -> None:
        if not self._frozen:
            self._child_ids = tuple(self._child_ids)  # type: ignore[assignment]
        super().freeze()


class Layout(_Node):
    """A template that items are laid out in."""

    kind = "layout"


class CodeSnippet:
    """Auxiliary Python source loaded from one of the site's lib directories.

    ``name`` is the dotted module path below ``sitegraph_lib``, normally the
    file's path relative to its lib directory (``sub/util.py`` becomes
    ``sub.util``). It defaults to the file stem.
    """

    def __init__(self, data: str, filename: str | Path, name: str | None = None):
        self.data = data
        self.filename = str(filename)
        self.name = name or Path(self.filename).stem
        self.module_name = f"{SNIPPET_NAMESPACE}.{self.name}"
        self._frozen = False

    def load(self) -> None:
        """Execute the snippet for its side effects.

        The snippet runs as a fresh module registered in ``sys.modules`` so
        that later snippets and data sources can import what earlier ones
        define. Exceptions raised by the snippet propagate unchanged.
        """
        package_name, _, attr = self.module_name.rpartition(".")
        package = _ensure_package(package_name)
        spec = importlib.machinery.ModuleSpec(self.module_name, None, origin=self.filename)
        module = importlib.util.module_from_spec(spec)
        module.__file__ = self.filename
        sys.modules[self.module_name] = module
        setattr(package, attr, module)

        code = compile(self.data, self.filename, "exec")
        exec(code, module.__dict__)
        logger.debug(f"Loaded code snippet {self.filename} as {self.module_name}")

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __repr__(self) -> str:
        return f"<CodeSnippet filename={self.filename!r}>"


def _ensure_package(name: str):
    """Return the package module called ``name``, creating it and its parents if needed."""
    package = sys.modules.get(name)
    if package is None:
        spec = importlib.machinery.ModuleSpec(name, None, is_package=True)
        package = importlib.util.module_from_spec(spec)
        package.__path__ = []
        sys.modules[name] = package
        parent_name, _, attr = name.rpartition(".")
        if parent_name:
            setattr(_ensure_package(parent_name), attr, package)
    return package
