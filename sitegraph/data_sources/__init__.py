"""Pluggable data sources and their registry."""

from .base import DataSource
from .inline import InlineDataSource
from .registry import ENTRY_POINT_GROUP
from .registry import DataSourceRegistry
from .registry import get_registry
from .registry import named
from .registry import register

__all__ = [
    "ENTRY_POINT_GROUP",
    "DataSource",
    "DataSourceRegistry",
    "InlineDataSource",
    "get_registry",
    "named",
    "register",
]
