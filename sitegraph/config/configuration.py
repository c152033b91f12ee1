"""Resolved site configuration mapping."""

from __future__ import annotations

from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import MutableMapping
from typing import Any

from ..errors import FrozenError


class Configuration(MutableMapping[str, Any]):
    """Mapping holding the resolved configuration.

    Behaves like a dict until frozen. ``freeze()`` makes it read-only all the
    way down: nested mappings become frozen Configurations and lists become
    tuples.
    """

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data: dict[str, Any] = dict(data or {})
        self._frozen = False

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if self._frozen:
            raise FrozenError("configuration")
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        if self._frozen:
            raise FrozenError("configuration")
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        if self._frozen:
            return
        self._data = {key: _freeze_value(value) for key, value in self._data.items()}
        self._frozen = True

    def to_dict(self) -> dict[str, Any]:
        """Return a plain, mutable deep copy (lists stay lists)."""
        return {key: _thaw_value(value) for key, value in self._data.items()}

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "mutable"
        return f"<Configuration {state} keys={sorted(self._data)}>"


def _freeze_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        frozen = Configuration(value)
        frozen.freeze()
        return frozen
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_value(v) for v in value)
    if isinstance(value, set):
        return frozenset(value)
    return value


def _thaw_value(value: Any) -> Any:
    if isinstance(value, Configuration):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {k: _thaw_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_thaw_value(v) for v in value]
    if isinstance(value, frozenset):
        return set(value)
    return value
