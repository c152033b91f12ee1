"""Error types raised while resolving configuration and loading site data.

All errors derive from SiteError so callers (the CLI in particular) can
report any site problem uniformly while letting unrelated exceptions
propagate untouched.
"""

from typing import Any


class SiteError(Exception):
    """Base class for all sitegraph errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigNotFound(SiteError):
    """No configuration file exists in the site directory."""

    def __init__(self, directory: str, filenames: tuple[str, ...]):
        super().__init__(
            f"Could not find {' or '.join(filenames)} in {directory}",
            {"directory": directory, "filenames": list(filenames)},
        )
        self.directory = directory


class ConfigParentMissing(SiteError):
    """A parent_config_file reference points at a file that does not exist."""

    def __init__(self, filename: str):
        super().__init__(f"Could not find parent configuration file '{filename}'", {"filename": filename})
        self.filename = filename


class ConfigCycle(SiteError):
    """The parent_config_file chain revisits a file."""

    def __init__(self, filename: str, chain: list[str] | None = None):
        chain = chain or []
        super().__init__(
            f"Cycle detected. Could not use parent configuration file '{filename}'",
            {"filename": filename, "chain": chain},
        )
        self.filename = filename
        self.chain = chain


class ConfigInvalid(SiteError):
    """The configuration document has the wrong shape."""


class UnknownBackend(SiteError):
    """No data source is registered under the configured type name."""

    def __init__(self, name: str):
        super().__init__(f"The data source specified in the site's configuration file, '{name}', does not exist.")
        self.name = name


class DuplicateIdentifier(SiteError):
    """Two nodes of the same kind share an identifier."""

    def __init__(self, identifier: str, kind: str):
        super().__init__(f"There are multiple {kind}s with the {identifier} identifier.")
        self.identifier = identifier
        self.kind = kind


class InvalidPrefix(SiteError):
    """A mount root does not start with the path separator."""

    def __init__(self, prefix: str):
        super().__init__(f"Invalid prefix (does not start with a slash): {prefix!r}")
        self.prefix = prefix


class FrozenError(SiteError):
    """A frozen object was modified."""

    def __init__(self, what: str):
        super().__init__(f"Cannot modify frozen {what}")
        self.what = what
