"""Compiler collaborator bound to a site."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .content import Item
    from .site import Site

logger = logging.getLogger(__name__)


class Compiler:
    """Drives compilation of a loaded site.

    The site creates one compiler lazily and keeps its load/unload lifecycle
    in step with its own. Rendering is left to subclasses, which override
    :meth:`compile_item`.
    """

    def __init__(self, site: Site):
        self.site = site
        self.loaded = False

    def load(self) -> None:
        if self.loaded:
            return
        self.loaded = True
        logger.debug("Compiler loaded")

    def unload(self) -> None:
        self.loaded = False

    def run(self) -> int:
        """Load and freeze the site, then compile every item.

        Returns:
            Number of items compiled
        """
        self.site.load()
        self.load()
        self.site.freeze()

        count = 0
        for item in self.site.items:
            self.compile_item(item)
            count += 1

        logger.info(f"Compiled {count} items")
        return count

    def compile_item(self, item: Item) -> None:
        """Compile a single item. The base compiler does nothing."""
