"""Data source serving items and layouts declared in its own configuration.

Example site configuration::

    data_sources:
      - type: inline
        items_root: /blog/
        items:
          - identifier: /post1/
            content: Hello
            attributes: {title: First post}
        layouts:
          - identifier: /default/
            content: "<html>{{ content }}</html>"
"""

from collections.abc import Mapping
from typing import Any

from ..content import Item
from ..content import Layout
from ..errors import ConfigInvalid
from .base import DataSource
from .registry import register


@register("inline")
class InlineDataSource(DataSource):
    """Nodes come straight from the ``items`` and ``layouts`` config lists."""

    def items(self) -> list[Item]:
        return [
            Item(
                entry.get("content", ""),
                entry.get("attributes"),
                _identifier(entry, "item"),
                binary=bool(entry.get("binary", False)),
            )
            for entry in self.config.get("items") or []
        ]

    def layouts(self) -> list[Layout]:
        return [
            Layout(entry.get("content", ""), entry.get("attributes"), _identifier(entry, "layout"))
            for entry in self.config.get("layouts") or []
        ]


def _identifier(entry: Any, kind: str) -> str:
    if not isinstance(entry, Mapping) or not isinstance(entry.get("identifier"), str):
        raise ConfigInvalid(f"Each inline {kind} needs a string identifier, got {entry!r}")
    return entry["identifier"]
