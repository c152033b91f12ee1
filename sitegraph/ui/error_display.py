"""Clean error display for site errors."""

import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..errors import ConfigCycle
from ..errors import ConfigInvalid
from ..errors import ConfigNotFound
from ..errors import ConfigParentMissing
from ..errors import DuplicateIdentifier
from ..errors import FrozenError
from ..errors import InvalidPrefix
from ..errors import SiteError
from ..errors import UnknownBackend


def display_site_error(console: Console, error: Exception, verbose: bool = False) -> bool:
    """Display a SiteError with clean Rich formatting.

    Args:
        console: Rich console for output.
        error: The error to display.
        verbose: If True, also print traceback.

    Returns:
        True if error was handled as a SiteError, False if not (caller should handle).
    """
    if not isinstance(error, SiteError):
        return False

    if isinstance(error, (ConfigNotFound, ConfigParentMissing, ConfigCycle, ConfigInvalid)):
        title = "Configuration Error"
    elif isinstance(error, UnknownBackend):
        title = "Unknown Data Source"
    elif isinstance(error, DuplicateIdentifier):
        title = "Duplicate Identifier"
    else:
        title = "Site Error"

    content = Text()
    content.append(error.message, style="white")
    if isinstance(error, ConfigCycle) and error.chain:
        content.append("\n\n")
        content.append("── Chain ──", style="dim")
        content.append("\n")
        content.append("\n -> ".join(error.chain), style="dim")

    console.print()
    console.print(Panel(content, title=f"[bold red]{title}[/bold red]", border_style="red", padding=(1, 2)))
    console.print(f"[dim]Tip: {_get_tip(error)}[/dim]")
    console.print()

    if verbose:
        console.print("[dim]——— Traceback ———[/dim]")
        if sys.exc_info()[0] is not None:
            console.print_exception()

    return True


def _get_tip(error: SiteError) -> str:
    """Return an actionable tip based on the error type."""
    if isinstance(error, ConfigNotFound):
        return "Run this command from the site directory, or pass --site-dir."

    if isinstance(error, ConfigParentMissing):
        return "parent_config_file is resolved relative to the file that declares it."

    if isinstance(error, ConfigCycle):
        return "Remove one of the parent_config_file references so the chain ends."

    if isinstance(error, UnknownBackend):
        return "Check the data source type, or install the package that provides it."

    if isinstance(error, DuplicateIdentifier):
        if error.kind == "code snippet":
            return "Two lib_dirs contain a file at the same relative path. Rename or remove one of them."
        return "Two data sources, or one data source twice, produce this identifier. Adjust items_root/layouts_root."

    if isinstance(error, InvalidPrefix):
        return "items_root and layouts_root must start with a slash."

    if isinstance(error, FrozenError):
        return "The site is frozen once compilation starts."

    return "Check the error details above."
