from __future__ import annotations

from typing import Iterable, Iterator


class TokenCursor(Iterator[str]):
    """
    Cursor over a token sequence that can step back.

    Options consume their argument with ``next()`` and give it back with
    ``rewind()`` when the token turns out to belong to someone else.
    """

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens: tuple[str, ...] = tuple(tokens)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def tokens(self) -> tuple[str, ...]:
        return self._tokens

    def has_next(self) -> bool:
        return self._pos < len(self._tokens)

    def peek(self) -> str | None:
        """Next token without consuming it (None at the end)."""
        if not self.has_next():
            return None
        return self._tokens[self._pos]

    def __next__(self) -> str:
        if not self.has_next():
            raise StopIteration
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def rewind(self) -> None:
        """Step back over the token most recently returned by ``next()``."""
        if self._pos == 0:
            raise ValueError("cannot rewind past the first token")
        self._pos -= 1

    def __repr__(self) -> str:
        return f"TokenCursor(position={self._pos}, tokens={list(self._tokens)!r})"


__all__ = ["TokenCursor"]
