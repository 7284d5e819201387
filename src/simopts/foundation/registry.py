"""
Name-keyed registry used by the engine to hold the active option set.

Registration is first-wins: a later item under an existing name never
replaces the earlier one. Iteration is in alphabetical order of the names.
"""

from __future__ import annotations

from typing import Any, Generic, Iterator, TypeVar

T = TypeVar("T")


class Registry(Generic[T]):
    """
    A simple registry for managing named items.

    Items are kept in a dict keyed by name; views are sorted by name.
    """

    def __init__(self, name: str = "Registry") -> None:
        self._name = name
        self._items: dict[str, T] = {}

    def register(self, key: str, item: T) -> T:
        """
        Register an item with the given key unless the key is taken.

        Args:
            key: The unique name for the item.
            item: The item to register.

        Returns:
            The item stored under ``key`` after the call. This is ``item`` for
            a fresh key and the earlier registration otherwise.
        """
        existing = self._items.get(key)
        if existing is not None:
            return existing
        self._items[key] = item
        return item

    def unregister(self, key: str) -> T | None:
        """Remove and return the item registered under ``key`` (None if absent)."""
        return self._items.pop(key, None)

    def get(self, key: str, default: Any = ...) -> T:
        """
        Retrieve an item by key.

        Args:
            key: Identity of item to retrieve.
            default: Value to return if key missing. If not provided, raises KeyError.

        Returns:
            The item.
        """
        if key not in self._items:
            if default is not ...:
                return default
            raise KeyError(f"Key '{key}' not found in registry '{self._name}'")
        return self._items[key]

    def clear(self) -> None:
        self._items.clear()

    def list(self) -> list[str]:
        """Return a sorted list of registered keys."""
        return sorted(self._items.keys())

    def values(self) -> tuple[T, ...]:
        """Return the registered items ordered by key."""
        return tuple(self._items[key] for key in self.list())

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __getitem__(self, key: str) -> T:
        return self.get(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["Registry"]
