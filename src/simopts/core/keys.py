from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyLike(Protocol):
    """Anything that names one legal value of an option, e.g. an Enum member."""

    @property
    def key(self) -> str: ...

    @property
    def title(self) -> str: ...


@dataclass(frozen=True)
class Key:
    """
    One member of an option's enumerated value domain.

    ``key`` is the token written on the command line, ``title`` a short
    name and ``description`` an optional longer explanation used in help.
    """

    key: str
    title: str
    description: str | None = None

    def matches(self, candidate: str) -> bool:
        """True if ``candidate`` starts with this key (key specific suffixes may follow)."""
        return candidate.startswith(self.key)

    def __str__(self) -> str:
        return f"{self.key}: {self.description if self.description is not None else self.title}"


def differ_at(a: str, b: str) -> int:
    """Index of the first character where ``a`` and ``b`` differ (length of the common prefix)."""
    limit = min(len(a), len(b))
    idx = 0
    while idx < limit and a[idx] == b[idx]:
        idx += 1
    return idx


def as_key(item: Key | KeyLike | str, title: str | None = None, description: str | None = None) -> Key:
    """Coerce ``item`` into a Key."""
    if isinstance(item, Key):
        return item
    if isinstance(item, str):
        return Key(item, title if title is not None else item, description)
    return Key(str(item.key), str(item.title), description)


__all__ = ["Key", "KeyLike", "as_key", "differ_at"]
