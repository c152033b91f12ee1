"""Terminal presentation helpers."""

from .error_display import display_site_error

__all__ = ["display_site_error"]
