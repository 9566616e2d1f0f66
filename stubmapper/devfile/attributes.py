"""Devfile attribute store with tagged lookups.

Devfile attributes are free-form values keyed by string. Every read
returns an :class:`AttributeLookup` that says whether the key was absent,
held a usable value, or held something of the wrong shape, so callers
never have to tell "not set" apart from "broken" by inspecting exceptions.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class LookupStatus(str, Enum):
    ABSENT = "absent"
    VALUE = "value"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class AttributeLookup(Generic[T]):
    """Outcome of reading one attribute key."""

    key: str
    status: LookupStatus
    value: T | None = None
    reason: str | None = None

    @property
    def absent(self) -> bool:
        return self.status is LookupStatus.ABSENT

    @property
    def malformed(self) -> bool:
        return self.status is LookupStatus.MALFORMED

    def value_or(self, default: T) -> T:
        """Return the value, or ``default`` when the key was absent or malformed."""
        if self.status is LookupStatus.VALUE:
            return self.value  # type: ignore[return-value]
        return default


class Attributes(Mapping[str, Any]):
    """Read-mostly view over a devfile ``attributes`` mapping.

    Writes go through :meth:`put_string`, which returns a new store and
    leaves this one untouched.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Attributes({self._data!r})"

    # ── typed reads ──────────────────────────────────────────────────────

    def get_string(self, key: str) -> AttributeLookup[str]:
        if key not in self._data:
            return AttributeLookup(key, LookupStatus.ABSENT)
        raw = self._data[key]
        if not isinstance(raw, str):
            return AttributeLookup(
                key, LookupStatus.MALFORMED, reason=f"expected string, got {type(raw).__name__}"
            )
        return AttributeLookup(key, LookupStatus.VALUE, value=raw)

    def get_number(self, key: str) -> AttributeLookup[float]:
        if key not in self._data:
            return AttributeLookup(key, LookupStatus.ABSENT)
        raw = self._data[key]
        # bool is an int subclass but never a valid number attribute
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            return AttributeLookup(
                key, LookupStatus.MALFORMED, reason=f"expected number, got {type(raw).__name__}"
            )
        return AttributeLookup(key, LookupStatus.VALUE, value=raw)

    def get_into(self, key: str, decode: Callable[[Any], T]) -> AttributeLookup[T]:
        """Decode a structured attribute with ``decode``.

        ``decode`` signals a shape mismatch by raising ValueError or
        TypeError; that becomes a MALFORMED lookup.
        """
        if key not in self._data:
            return AttributeLookup(key, LookupStatus.ABSENT)
        try:
            value = decode(copy.deepcopy(self._data[key]))
        except (TypeError, ValueError) as exc:
            return AttributeLookup(key, LookupStatus.MALFORMED, reason=str(exc))
        return AttributeLookup(key, LookupStatus.VALUE, value=value)

    # ── writes ───────────────────────────────────────────────────────────

    def put_string(self, key: str, value: str) -> Attributes:
        updated = dict(self._data)
        updated[key] = value
        return Attributes(updated)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)
