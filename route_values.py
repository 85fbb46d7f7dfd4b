"""Case-insensitive, insertion-ordered route value mapping."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any


def _fold(key: str) -> str:
    return key.casefold()


class RouteValues(MutableMapping[str, Any]):
    """Mapping whose keys compare case-insensitively.

    Keys are casefolded both when stored and when looked up, so a lookup is a
    single dict access. Iteration yields the spelling the key was first
    stored with.
    """

    def __init__(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        self._store: dict[str, tuple[str, Any]] = {}
        if values is not None:
            self.update(values)
        if kwargs:
            self.update(kwargs)

    def __getitem__(self, key: str) -> Any:
        return self._store[_fold(key)][1]

    def __setitem__(self, key: str, value: Any) -> None:
        folded = _fold(key)
        existing = self._store.get(folded)
        original_key = existing[0] if existing is not None else key
        self._store[folded] = (original_key, value)

    def __delitem__(self, key: str) -> None:
        del self._store[_fold(key)]

    def __iter__(self) -> Iterator[str]:
        return (original_key for original_key, _value in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _fold(key) in self._store

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if len(other) != len(self):
            return False
        for key, value in other.items():
            if key not in self or self[key] != value:
                return False
        return True

    def __repr__(self) -> str:
        return f"RouteValues({dict(self.items())!r})"

    def copy(self) -> RouteValues:
        return RouteValues(self.items())


def get_value(values: Mapping[str, Any] | None, key: str) -> str | None:
    """Return the value for ``key`` as a string, ignoring key case.

    A missing key, a missing mapping, or a stored ``None`` all yield ``None``.
    """
    if values is None:
        return None
    if isinstance(values, RouteValues):
        value = values.get(key)
    else:
        folded = _fold(key)
        value = next(
            (item for item_key, item in values.items() if _fold(item_key) == folded),
            None,
        )
    if value is None:
        return None
    return str(value)
