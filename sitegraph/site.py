"""The in-memory site: configuration, content collections and their lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Mapping
from contextlib import ExitStack
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any

from . import hierarchy
from .collection import IdentifiableCollection
from .collection import ensure_identifier_uniqueness
from .compiler import Compiler
from .config import ConfigResolver
from .config import Configuration
from .content import CodeSnippet
from .content import Item
from .content import Layout
from .data_sources import DataSource
from .data_sources import DataSourceRegistry
from .data_sources import get_registry
from .errors import DuplicateIdentifier
from .errors import FrozenError
from .identifier import prefix

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    """Where a site is in its load lifecycle."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


class Site:
    """A site and all of its data.

    The configuration is resolved once, on construction. Everything else
    (code snippets, items, layouts) is loaded lazily on first access by
    :meth:`load`. A load that fails for any reason is rolled back with
    :meth:`unload` before the error propagates, so callers never see a
    partially loaded site; the next access simply tries again.

    Attributes:
        site_dir: Directory relative paths (lib_dirs) are resolved against
    """

    def __init__(
        self,
        dir_or_config: str | Path | Mapping[str, Any] = ".",
        *,
        overrides: Mapping[str, Any] | None = None,
        registry: DataSourceRegistry | None = None,
        compiler_factory: Callable[[Site], Compiler] = Compiler,
        resolver: ConfigResolver | None = None,
    ):
        """
        Create a site.

        Args:
            dir_or_config: Site directory, or the configuration mapping itself
            overrides: Configuration values taking precedence over the site's own
            registry: Data source registry (defaults to the global one)
            compiler_factory: Called with the site to create its compiler
            resolver: Configuration resolver (defaults to the built-in defaults)

        Raises:
            ConfigNotFound, ConfigParentMissing, ConfigCycle, ConfigInvalid
        """
        if isinstance(dir_or_config, Mapping):
            self.site_dir = Path.cwd()
        else:
            self.site_dir = Path(dir_or_config).resolve()

        self._config = (resolver or ConfigResolver()).resolve(dir_or_config, overrides)
        self._registry = registry or get_registry()
        self._compiler_factory = compiler_factory
        self._compiler: Compiler | None = None
        self._data_sources: list[DataSource] | None = None

        self._state = LoadState.UNLOADED
        self._unloading = False
        self._frozen = False

        self._code_snippets_loaded = False
        self._code_snippets: list[CodeSnippet] = []
        self._items: IdentifiableCollection[Item] = IdentifiableCollection()
        self._layouts: IdentifiableCollection[Layout] = IdentifiableCollection()

    @property
    def config(self) -> Configuration:
        return self._config

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def loaded(self) -> bool:
        return self._state is LoadState.LOADED

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def compiler(self) -> Compiler:
        if self._compiler is None:
            self._compiler = self._compiler_factory(self)
        return self._compiler

    def compile(self) -> int:
        """Compile the site. Returns the number of compiled items."""
        return self.compiler.run()

    @property
    def data_sources(self) -> list[DataSource]:
        """The configured data sources, created once in declaration order.

        Raises:
            UnknownBackend: If a data source type is not registered
        """
        self._load_code_snippets()

        if self._data_sources is None:
            self._data_sources = self._registry.instantiate(self, list(self._config["data_sources"]))
        return self._data_sources

    @property
    def code_snippets(self) -> list[CodeSnippet]:
        self.load()
        return self._code_snippets

    @property
    def items(self) -> IdentifiableCollection[Item]:
        self.load()
        return self._items

    @property
    def layouts(self) -> IdentifiableCollection[Layout]:
        self.load()
        return self._layouts

    def load(self) -> None:
        """Load code snippets, items and layouts.

        Does nothing when the site is loaded or already loading. On failure
        the site is unloaded and the original exception is re-raised.
        """
        if self._state is not LoadState.UNLOADED:
            return
        self._state = LoadState.LOADING

        try:
            self._load_code_snippets()
            with self._activated_data_sources() as data_sources:
                self._load_items(data_sources)
                self._load_layouts(data_sources)
            self.setup_child_parent_links()

            ensure_identifier_uniqueness(self._items, "item")
            ensure_identifier_uniqueness(self._layouts, "layout")

            self.compiler.load()
            self._state = LoadState.LOADED
        finally:
            if self._state is LoadState.LOADING:
                logger.debug("Site load failed, unloading")
                self.unload()

        logger.info(
            f"Loaded site with {len(self._items)} items, {len(self._layouts)} layouts "
            f"and {len(self._code_snippets)} code snippets",
            extra={"site_dir": str(self.site_dir)},
        )

    def unload(self) -> None:
        """Undo :meth:`load`. Safe to call in any state.

        A frozen site keeps its data: unloading it is a no-op, so accessors
        keep returning the frozen collections instead of triggering a reload.
        """
        if self._unloading:
            return
        if self._frozen:
            logger.debug("Site is frozen, not unloading")
            return
        self._unloading = True

        try:
            self._code_snippets_loaded = False
            self._code_snippets = []
            self._items = IdentifiableCollection()
            self._layouts = IdentifiableCollection()
            self._state = LoadState.UNLOADED

            if self._compiler is not None:
                self._compiler.unload()
        finally:
            self._unloading = False

    def freeze(self) -> None:
        """Prevent all further modification of the configuration, items, layouts and code snippets."""
        self.load()
        self._config.freeze()
        self._items.freeze()
        self._layouts.freeze()
        for snippet in self._code_snippets:
            snippet.freeze()
        self._frozen = True

    def setup_child_parent_links(self) -> None:
        """Rebuild item parent/children links from identifiers."""
        if self._frozen:
            raise FrozenError("site")
        hierarchy.link(self._items)

    def teardown_child_parent_links(self) -> None:
        if self._frozen:
            raise FrozenError("site")
        hierarchy.unlink(self._items)

    @contextmanager
    def _activated_data_sources(self) -> Iterator[list[DataSource]]:
        """Keep every data source activated for the duration of the block.

        Data sources activated so far are deactivated on every exit path,
        including a failure to activate a later one.
        """
        data_sources = self.data_sources
        with ExitStack() as stack:
            for data_source in data_sources:
                data_source.activate()
                stack.callback(data_source.deactivate)
            yield data_sources

    def _load_code_snippets(self) -> None:
        if self._code_snippets_loaded:
            return
        self._code_snippets_loaded = True

        try:
            self._code_snippets = self._find_code_snippets()
            for snippet in self._code_snippets:
                snippet.load()
        except Exception:
            self._code_snippets_loaded = False
            self._code_snippets = []
            raise
        logger.debug(f"Loaded {len(self._code_snippets)} code snippets")

    def _find_code_snippets(self) -> list[CodeSnippet]:
        """Collect lib_dirs snippets in load order, named after their path within the lib dir."""
        snippets: list[CodeSnippet] = []
        names: set[str] = set()
        for lib_dir in self._config["lib_dirs"]:
            lib_path = self.site_dir / lib_dir
            if not lib_path.is_dir():
                continue
            for filename in sorted(lib_path.glob("**/*.py")):
                name = ".".join(filename.relative_to(lib_path).with_suffix("").parts)
                snippet = CodeSnippet(filename.read_text(encoding="utf-8"), filename, name)
                if name in names:
                    raise DuplicateIdentifier(snippet.module_name, "code snippet")
                names.add(name)
                snippets.append(snippet)
        return snippets

    def _load_items(self, data_sources: list[DataSource]) -> None:
        self._items = IdentifiableCollection()
        for data_source in data_sources:
            for item in data_source.items():
                item.identifier = prefix(item.identifier, data_source.items_root)
                item.site = self
                self._items.add(item)

    def _load_layouts(self, data_sources: list[DataSource]) -> None:
        self._layouts = IdentifiableCollection()
        for data_source in data_sources:
            for layout in data_source.layouts():
                layout.identifier = prefix(layout.identifier, data_source.layouts_root)
                self._layouts.add(layout)

    def __repr__(self) -> str:
        return f"<Site dir={str(self.site_dir)!r} state={self._state.value}>"
