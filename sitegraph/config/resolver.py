"""Configuration resolution: parent chains, overrides and defaults."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..errors import ConfigCycle
from ..errors import ConfigInvalid
from ..errors import ConfigNotFound
from ..errors import ConfigParentMissing
from .configuration import Configuration
from .defaults import CONFIG_FILENAMES
from .defaults import DEFAULT_CONFIG
from .defaults import DEFAULT_DATA_SOURCE_CONFIG
from .defaults import PARENT_CONFIG_KEY
from .merge import deep_merge
from .merge import merge_defaults
from .schema import SiteConfig

logger = logging.getLogger(__name__)


def config_filename_for_dir(directory: str | Path = ".") -> Path | None:
    """Return the configuration file of a site directory, or None if there is none."""
    for filename in CONFIG_FILENAMES:
        candidate = Path(directory) / filename
        if candidate.is_file():
            return candidate
    return None


def is_site_dir(directory: str | Path = ".") -> bool:
    """Check whether a directory contains a site configuration file."""
    return config_filename_for_dir(directory) is not None


class ConfigResolver:
    """Builds the resolved configuration for a site.

    Precedence, lowest to highest: global defaults, parent documents
    (root-most first), the site document, per-call overrides. Each
    data_sources entry is then layered over the data source defaults.
    """

    def __init__(
        self,
        defaults: dict[str, Any] | None = None,
        data_source_defaults: dict[str, Any] | None = None,
    ):
        self.defaults = DEFAULT_CONFIG if defaults is None else defaults
        self.data_source_defaults = DEFAULT_DATA_SOURCE_CONFIG if data_source_defaults is None else data_source_defaults

    def resolve(
        self,
        dir_or_config: str | Path | Mapping[str, Any],
        overrides: Mapping[str, Any] | None = None,
    ) -> Configuration:
        """
        Resolve a site directory or an inline configuration mapping.

        Args:
            dir_or_config: Site directory containing a configuration file, or
                the configuration itself
            overrides: Values applied on top of the resolved document

        Returns:
            Resolved (not yet frozen) configuration

        Raises:
            ConfigNotFound: If the directory holds no configuration file
            ConfigParentMissing: If a parent configuration file does not exist
            ConfigCycle: If the parent chain revisits a file
            ConfigInvalid: If a document or the merged result is malformed
        """
        if isinstance(dir_or_config, Mapping):
            config = self.apply_parent_config(dict(dir_or_config), (), Path.cwd())
        else:
            directory = Path(dir_or_config)
            config_path = config_filename_for_dir(directory)
            if config_path is None:
                raise ConfigNotFound(str(directory), CONFIG_FILENAMES)
            config_path = Path(os.path.abspath(config_path))
            logger.debug(f"Using configuration file {config_path}")
            config = self.apply_parent_config(self.load_document(config_path), (str(config_path),), config_path.parent)

        if overrides:
            config = deep_merge(config, dict(overrides))
            # Parent references are only followed from configuration documents.
            if config.pop(PARENT_CONFIG_KEY, None) is not None:
                logger.warning(f"Ignoring {PARENT_CONFIG_KEY} given as an override")

        return self.finalize(config)

    def load_document(self, path: Path) -> dict[str, Any]:
        """Parse one YAML configuration document."""
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigInvalid(f"Could not parse configuration file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigInvalid(f"Configuration file {path} must contain a mapping, got {type(data).__name__}")
        return data

    def apply_parent_config(self, config: dict[str, Any], visited: tuple[str, ...], base_dir: Path) -> dict[str, Any]:
        """
        Merge a document on top of its parent chain.

        Args:
            config: The document; it is not modified
            visited: Absolute paths already on the chain, the document's own path last
            base_dir: Directory that a relative parent reference is resolved against

        Returns:
            Merged document without the parent reference
        """
        config = dict(config)
        parent_config_file = config.pop(PARENT_CONFIG_KEY, None)
        if not parent_config_file:
            return config

        parent_path = os.path.abspath(os.path.join(base_dir, parent_config_file))
        if not os.path.isfile(parent_path):
            raise ConfigParentMissing(str(parent_config_file))
        if parent_path in visited:
            raise ConfigCycle(str(parent_config_file), [*visited, parent_path])

        logger.debug(f"Applying parent configuration {parent_path}")
        parent = self.apply_parent_config(
            self.load_document(Path(parent_path)),
            (*visited, parent_path),
            Path(parent_path).parent,
        )
        return deep_merge(parent, config)

    def finalize(self, config: dict[str, Any]) -> Configuration:
        """Layer the defaults underneath and validate the result."""
        merged = merge_defaults(self.defaults, config)

        data_sources = merged.get("data_sources")
        if not isinstance(data_sources, list):
            raise ConfigInvalid("data_sources must be a list of mappings")
        entries = []
        for entry in data_sources:
            if entry is None:
                entry = {}
            if not isinstance(entry, dict):
                raise ConfigInvalid(f"Each data_sources entry must be a mapping, got {entry!r}")
            entries.append(merge_defaults(self.data_source_defaults, entry))
        merged["data_sources"] = entries

        try:
            SiteConfig.model_validate(merged)
        except ValidationError as e:
            raise ConfigInvalid(f"Invalid site configuration: {e}") from e

        return Configuration(merged)
