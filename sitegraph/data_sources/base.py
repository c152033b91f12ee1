"""Base class for data sources."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from ..content import Item
    from ..content import Layout
    from ..site import Site

logger = logging.getLogger(__name__)


class DataSource:
    """Provider of raw items and layouts for one mount.

    Identifiers returned by :meth:`items` and :meth:`layouts` are relative to
    the mount; the site prefixes them with ``items_root``/``layouts_root``.
    Every call to :meth:`items` or :meth:`layouts` must return new node
    objects.

    Activation is reference counted: the first :meth:`activate` calls
    :meth:`up` and the matching last :meth:`deactivate` calls :meth:`down`.
    Subclasses acquire connections or open files in ``up`` and release them
    in ``down``.

    Attributes:
        site: The site this data source belongs to
        items_root: Mount root for items
        layouts_root: Mount root for layouts
        config: The data source entry merged with its ``config`` sub-mapping
    """

    def __init__(
        self,
        site: Site | None,
        items_root: str = "/",
        layouts_root: str = "/",
        config: dict[str, Any] | None = None,
    ):
        self.site = site
        self.items_root = items_root
        self.layouts_root = layouts_root
        self.config = config or {}
        self._references = 0

    @property
    def active(self) -> bool:
        return self._references > 0

    def activate(self) -> None:
        if self._references == 0:
            logger.debug(f"Bringing up data source {self!r}")
            self.up()
        self._references += 1

    def deactivate(self) -> None:
        if self._references == 0:
            return
        self._references -= 1
        if self._references == 0:
            logger.debug(f"Bringing down data source {self!r}")
            self.down()

    def up(self) -> None:
        """Acquire resources. Called on first activation."""

    def down(self) -> None:
        """Release resources. Called on last deactivation."""

    def items(self) -> list[Item]:
        return []

    def layouts(self) -> list[Layout]:
        return []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(items_root={self.items_root!r}, layouts_root={self.layouts_root!r})"
