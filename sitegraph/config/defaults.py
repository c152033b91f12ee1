"""Built-in configuration defaults."""

from typing import Any

# Looked up in this order in the site directory.
CONFIG_FILENAMES = ("sitegraph.yaml", "config.yaml")

PARENT_CONFIG_KEY = "parent_config_file"

# Defaults for every entry under data_sources. Entry values override these.
DEFAULT_DATA_SOURCE_CONFIG: dict[str, Any] = {
    "type": "filesystem_unified",
    "items_root": "/",
    "layouts_root": "/",
    "config": {},
}

# Defaults for the site. Top-level keys in the site configuration replace
# these wholesale.
DEFAULT_CONFIG: dict[str, Any] = {
    "text_extensions": sorted(
        [
            "coffee",
            "css",
            "erb",
            "haml",
            "handlebars",
            "hb",
            "htm",
            "html",
            "js",
            "less",
            "markdown",
            "md",
            "ms",
            "mustache",
            "php",
            "py",
            "rb",
            "sass",
            "scss",
            "slim",
            "txt",
            "xhtml",
            "xml",
        ]
    ),
    "lib_dirs": ["lib"],
    "commands_dirs": ["commands"],
    "output_dir": "output",
    "data_sources": [{}],
    "index_filenames": ["index.html"],
    "enable_output_diff": False,
    "prune": {"auto_prune": False, "exclude": [".git", ".hg", ".svn", "CVS"]},
}
