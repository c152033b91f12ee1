"""Site configuration: defaults, parent chains and validation."""

from .configuration import Configuration
from .defaults import CONFIG_FILENAMES
from .defaults import DEFAULT_CONFIG
from .defaults import DEFAULT_DATA_SOURCE_CONFIG
from .merge import deep_merge
from .resolver import ConfigResolver
from .resolver import config_filename_for_dir
from .resolver import is_site_dir

__all__ = [
    "CONFIG_FILENAMES",
    "DEFAULT_CONFIG",
    "DEFAULT_DATA_SOURCE_CONFIG",
    "ConfigResolver",
    "Configuration",
    "config_filename_for_dir",
    "deep_merge",
    "is_site_dir",
]
