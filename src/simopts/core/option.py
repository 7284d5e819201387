"""
A single command line option: names, arity, default and the handler that
interprets its argument.

Matching rules
--------------
``--<name>`` must match exactly. ``-<short>`` matches any token starting
with the short form; characters following the two character prefix are a
concatenated argument. An argument is consumed from the following token
according to the arity:

* NONE never consumes anything.
* A following token starting with ``--`` is always another long option.
* REQUIRED is greedy (negative numbers and ``-`` are fine) unless the option
  declares keys and the token shares no leading character with any of them.
* OPTIONAL only takes a token starting with ``-`` if it parses as a number,
  vector or matrix.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable, TextIO

from simopts.foundation.exceptions import InternalInconsistencyError
from simopts.foundation.values import looks_numeric

from .keys import Key, KeyLike, as_key, differ_at

if TYPE_CHECKING:
    from .handlers import OptionHandler
    from .tokens import TokenCursor

KEY_INDENT = "\n         "
STATE_INDENT = "\n      "


class Arity(Enum):
    """Whether an option takes no, an optional or a required argument."""

    NONE = "none"
    OPTIONAL = "optional"
    REQUIRED = "required"


class MatchResult(Enum):
    """Outcome of offering a token to an option."""

    NO_MATCH = -1
    SUCCESS = 0
    ARG_PARSE_FAILURE = 1
    SHORT_CONCAT_FAILURE = 2


class Option:
    """
    Command line option with long name, optional short alias and argument arity.

    Attributes:
        name: Long name, used as ``--name`` and as the unique key in an engine.
        short: Optional single character alias, used as ``-s``.
        arity: Argument arity.
        default: Argument used when the option is not given (or fails to parse).
        description: Static help text; when None the handler describes the option.
        handler: Strategy that interprets, reports and describes the argument.
    """

    def __init__(
        self,
        name: str,
        handler: OptionHandler,
        *,
        short: str | None = None,
        arity: Arity = Arity.NONE,
        default: str | None = None,
        description: str | None = None,
    ) -> None:
        if not name or name.startswith("-"):
            raise ValueError(f"Invalid option name {name!r}; give the long name without leading dashes.")
        if short is not None and (len(short) != 1 or short == "-"):
            raise ValueError(f"Invalid short name {short!r} for option '{name}'; expected a single character.")
        self.name = name
        self.short = short
        self.arity = arity
        if default is None:
            default = f"no{name}" if arity is Arity.NONE else ""
        self.default = default
        self.description = description
        self.handler = handler
        self._arg: str | None = None
        self._is_set = False
        self._keys: dict[str, Key] | None = None
        self._inherited_keys = False
        bind = getattr(handler, "bind", None)
        if callable(bind):
            bind(self)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def is_set(self) -> bool:
        """True if the option was given on the command line (with or without argument)."""
        return self._is_set

    @property
    def is_default(self) -> bool:
        """True if no argument was stored."""
        return self._arg is None

    @property
    def arg(self) -> str | None:
        """The stored argument (None unless one was supplied)."""
        return self._arg

    def get_arg(self) -> str:
        """Stored argument if present, else the default."""
        if self._arg is None:
            return self.default
        return self._arg

    def set_default(self, default: str | KeyLike) -> None:
        if isinstance(default, str):
            self.default = default
        else:
            self.default = str(default.key)

    def reset(self) -> None:
        """Clear the argument and mark the option as not set."""
        self._arg = None
        self._is_set = False

    def _mark(self, arg: str | None = None) -> bool:
        self._arg = arg
        self._is_set = True
        return True

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------
    def process_option(self, token: str, cursor: TokenCursor) -> MatchResult:
        """
        Offer ``token`` to this option, consuming an argument from ``cursor`` if appropriate.

        Returns MatchResult.NO_MATCH without touching the option if the token
        names neither its long nor its short form.
        """
        if token == f"--{self.name}":
            return MatchResult.SUCCESS if self._consume(cursor) else MatchResult.ARG_PARSE_FAILURE
        if self.short is not None and token.startswith(f"-{self.short}"):
            if len(token) > 2:
                if self.arity is Arity.NONE:
                    return MatchResult.NO_MATCH
                if self._consume_inline(token[2:]):
                    return MatchResult.SUCCESS
                return MatchResult.SHORT_CONCAT_FAILURE
            return MatchResult.SUCCESS if self._consume(cursor) else MatchResult.ARG_PARSE_FAILURE
        return MatchResult.NO_MATCH

    def _consume(self, cursor: TokenCursor) -> bool:
        self.reset()
        if self.arity is Arity.NONE:
            return self._mark()
        if not cursor.has_next():
            if self.arity is Arity.REQUIRED:
                return False
            return self._mark()
        arg = next(cursor)
        if arg.startswith("--"):
            cursor.rewind()
            if self.arity is Arity.REQUIRED:
                return False
            return self._mark()
        if self.arity is Arity.REQUIRED:
            if not self.is_valid_key(arg):
                cursor.rewind()
                return False
            return self._mark(arg)
        if arg.startswith("-"):
            # short option or negative number
            if looks_numeric(arg):
                return self._mark(arg)
            cursor.rewind()
            return self._mark()
        return self._mark(arg)

    def _consume_inline(self, arg: str) -> bool:
        self.reset()
        if self.arity is Arity.REQUIRED:
            if not self.is_valid_key(arg):
                return False
            return self._mark(arg)
        if self.arity is Arity.OPTIONAL:
            if arg.startswith("-") and not looks_numeric(arg):
                return self._mark()
            return self._mark(arg)
        raise InternalInconsistencyError(
            f"unreachable: concatenated argument for option without argument (--{self.name}, arg={arg!r}).",
            self.name,
        )

    # ------------------------------------------------------------------
    # Materialization
    # ------------------------------------------------------------------
    def parse(self) -> bool:
        """Pass the current (or default) argument to the handler."""
        return self.handler.parse(self.get_arg()) is not False

    def parse_default(self) -> bool:
        """Pass the default argument to the handler, typically after ``parse()`` failed."""
        return self.handler.parse(self.default) is not False

    def report(self, output: TextIO | None) -> None:
        if output is None:
            return
        self.handler.report(output)

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------
    @property
    def keys(self) -> tuple[Key, ...]:
        if not self._keys:
            return ()
        return tuple(self._keys.values())

    def add_key(
        self,
        key: Key | KeyLike | str | int,
        title: str | None = None,
        description: str | None = None,
    ) -> Key:
        if isinstance(key, int):
            key = str(key)
        entry = as_key(key, title, description)
        if self._keys is None:
            self._keys = {}
        self._keys[entry.key] = entry
        return entry

    def add_keys(self, keys: Iterable[Key | KeyLike | str]) -> None:
        for key in keys:
            self.add_key(key)

    def get_key(self, key: KeyLike | str | int) -> Key | None:
        if not self._keys:
            return None
        return self._keys.get(self._key_name(key))

    def remove_key(self, key: KeyLike | str | int) -> Key | None:
        if not self._keys:
            return None
        return self._keys.pop(self._key_name(key), None)

    def clear_keys(self) -> None:
        if self._keys is not None:
            self._keys.clear()

    def inherit_keys_from(self, other: Option) -> None:
        """Share the key table of ``other``; inherited keys are not listed in the description."""
        if other._keys is None:
            other._keys = {}
        self._keys = other._keys
        self._inherited_keys = True

    @staticmethod
    def _key_name(key: KeyLike | str | int) -> str:
        if isinstance(key, (str, int)):
            return str(key)
        return str(key.key)

    def is_valid_key(self, candidate: KeyLike | str | int) -> bool:
        """
        Lenient check of ``candidate`` against the key domain.

        Passes if no keys are declared or if ``candidate`` shares at least its
        first character with one of the keys, so abbreviations and key
        specific suffixes remain acceptable.
        """
        if not self._keys:
            return True
        name = self._key_name(candidate)
        return any(differ_at(key, name) > 0 for key in self._keys)

    def describe_key(self, key: KeyLike | str | int) -> str | None:
        entry = self.get_key(key)
        if entry is None:
            return None
        return str(entry)

    def describe_keys(self) -> str:
        if not self._keys or self._inherited_keys:
            return ""
        return "".join(KEY_INDENT + str(key) for key in self._keys.values())

    # ------------------------------------------------------------------
    # Description
    # ------------------------------------------------------------------
    def get_description(self) -> str:
        """Help text including the key listing and the current and default arguments."""
        if self.description is None:
            descr = self.handler.describe() or f"--{self.name}"
        else:
            descr = self.description + self.describe_keys()
        if self.arity is Arity.NONE:
            return f"{descr}{STATE_INDENT}(current: {'' if self._is_set else 'not '}set)"
        arg = self.get_arg()
        if not self._is_set or self.is_default or arg == self.default:
            return f"{descr}{STATE_INDENT}(default: {self.default})"
        return f"{descr}{STATE_INDENT}(current: {arg}, default: {self.default})"

    def __repr__(self) -> str:
        short = f", short={self.short!r}" if self.short else ""
        return f"Option({self.name!r}{short}, arity={self.arity.name}, default={self.default!r}, arg={self._arg!r})"


__all__ = ["Arity", "MatchResult", "Option"]
