"""sitegraph - content aggregation core for static site builds."""

from .collection import IdentifiableCollection
from .compiler import Compiler
from .config import Configuration
from .content import CodeSnippet
from .content import Item
from .content import Layout
from .data_sources import DataSource
from .data_sources import register
from .errors import ConfigCycle
from .errors import ConfigInvalid
from .errors import ConfigNotFound
from .errors import ConfigParentMissing
from .errors import DuplicateIdentifier
from .errors import FrozenError
from .errors import InvalidPrefix
from .errors import SiteError
from .errors import UnknownBackend
from .site import LoadState
from .site import Site

__all__ = [
    "CodeSnippet",
    "Compiler",
    "ConfigCycle",
    "ConfigInvalid",
    "ConfigNotFound",
    "ConfigParentMissing",
    "Configuration",
    "DataSource",
    "DuplicateIdentifier",
    "FrozenError",
    "IdentifiableCollection",
    "InvalidPrefix",
    "Item",
    "Layout",
    "LoadState",
    "Site",
    "SiteError",
    "UnknownBackend",
    "register",
]
