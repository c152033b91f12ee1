"""Registry mapping data source type names to factories.

Data sources register in-process with the :func:`register` decorator, or
are published by installed distributions under the ``sitegraph.data_sources``
entry-point group and discovered on first lookup.
"""

from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Callable
from collections.abc import Mapping
from typing import TYPE_CHECKING
from typing import Any

from ..errors import UnknownBackend
from .base import DataSource

if TYPE_CHECKING:
    from ..site import Site

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "sitegraph.data_sources"

DataSourceFactory = Callable[..., DataSource]


class DataSourceRegistry:
    """Data source factories keyed by type name."""

    def __init__(self, entry_point_group: str | None = ENTRY_POINT_GROUP):
        self._factories: dict[str, DataSourceFactory] = {}
        self._entry_point_group = entry_point_group

    def register(self, name: str, factory: DataSourceFactory) -> None:
        if name in self._factories:
            logger.debug(f"Replacing data source factory '{name}'")
        self._factories[name] = factory

    def unregister(self, name: str) -> None:
        self._factories.pop(name, None)

    def named(self, name: str) -> DataSourceFactory | None:
        """Look up a factory, consulting entry points when it is not registered yet."""
        factory = self._factories.get(name)
        if factory is None:
            factory = self._load_entry_point(name)
        return factory

    def registered_names(self) -> list[str]:
        return sorted(self._factories)

    def instantiate(self, site: Site | None, data_sources: list[Mapping[str, Any]]) -> list[DataSource]:
        """
        Create one data source per configured entry, in declaration order.

        Args:
            site: Owning site
            data_sources: Resolved data_sources entries

        Returns:
            Data source instances

        Raises:
            UnknownBackend: If an entry names an unregistered type
        """
        instances = []
        for entry in data_sources:
            name = entry["type"]
            factory = self.named(name)
            if factory is None:
                raise UnknownBackend(name)

            # Keys of the nested config mapping win over entry-level keys.
            config = {**entry, **(entry.get("config") or {})}
            instance = factory(site, entry["items_root"], entry["layouts_root"], config)
            logger.debug(f"Created data source {instance!r}")
            instances.append(instance)
        return instances

    def _load_entry_point(self, name: str) -> DataSourceFactory | None:
        if self._entry_point_group is None:
            return None
        for ep in importlib.metadata.entry_points(group=self._entry_point_group):
            if ep.name == name:
                factory = ep.load()
                logger.debug(f"Loaded data source '{name}' from entry point {ep.value}")
                self.register(name, factory)
                return factory
        return None


# Singleton instance
_registry = DataSourceRegistry()


def get_registry() -> DataSourceRegistry:
    return _registry


def register(name: str) -> Callable[[DataSourceFactory], DataSourceFactory]:
    """Class decorator registering a data source under a type name."""

    def decorator(factory: DataSourceFactory) -> DataSourceFactory:
        _registry.register(name, factory)
        return factory

    return decorator


def named(name: str) -> DataSourceFactory | None:
    return _registry.named(name)
