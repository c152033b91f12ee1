"""Helpers for slash-delimited node identifiers."""

from .errors import InvalidPrefix

SEPARATOR = "/"


def is_full(identifier: str) -> bool:
    """Return True when the identifier can act as a container (ends in a slash)."""
    return identifier.endswith(SEPARATOR)


def prefix(identifier: str, root: str) -> str:
    """Mount an identifier under a root.

    The root's trailing slashes are dropped before joining, so both
    ``prefix("/post1/", "/blog/")`` and ``prefix("/post1/", "/blog")``
    yield ``"/blog/post1/"``.

    Raises:
        InvalidPrefix: If root does not start with a slash
    """
    if not root.startswith(SEPARATOR):
        raise InvalidPrefix(root)
    return root.rstrip(SEPARATOR) + identifier


def parent_identifier(identifier: str) -> str | None:
    """Return the candidate parent identifier, or None for top-level identifiers.

    The candidate ends at the separator immediately before the final path
    segment: the second-to-last separator of a full identifier, the last one
    otherwise.
    """
    end = identifier.rfind(SEPARATOR, 0, len(identifier) - 1)
    if end < 0:
        return None
    return identifier[: end + 1]
