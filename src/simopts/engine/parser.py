"""
Option engine: collects options from providers and parses command lines.

Parsing runs in three stages:

A. ``retokenize`` splits combined option/argument tokens.
B. Every token is offered to the options (alphabetical order) until one
   accepts it; unknown options and rejected arguments are dropped with a
   warning.
C. Every option, whether given or not, hands its argument (or default) to
   its handler. Rejected arguments fall back to the default.

Problems in stages B and C never abort the parse: the result is False but
every option ends up with a usable value.
"""

from __future__ import annotations

import logging
import re
import shlex
import sys
from typing import Iterable, Iterator, TextIO

from simopts.core.option import Arity, MatchResult, Option
from simopts.core.tokens import TokenCursor
from simopts.foundation.exceptions import (
    DuplicateOptionError,
    InternalInconsistencyError,
    MalformedArgumentError,
    MissingArgumentError,
    OptionError,
    UnknownOptionError,
)
from simopts.foundation.registry import Registry

from .provider import OptionProvider
from .tokenizer import retokenize

# characters shlex.split would not hand back unchanged
_NEEDS_QUOTES = re.compile(r"[\s'\"\\]")


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class OptionEngine:
    """
    Active, name-unique and alphabetically ordered set of options contributed by providers.

    Providers are contacted in the order they were added. Names are
    first-wins: an option registered under a name already in use is rejected
    with a warning, so a provider overrides an option of another provider by
    being added before it.
    """

    def __init__(
        self,
        providers: Iterable[OptionProvider] = (),
        *,
        logger: logging.Logger | None = None,
        output: TextIO | None = None,
    ) -> None:
        self._providers: list[OptionProvider] = []
        self._options: Registry[Option] = Registry("options")
        self._logger = logger
        self._output = output
        self.issues: list[OptionError] = []
        for provider in providers:
            self.add_provider(provider)

    # ------------------------------------------------------------------
    # Sinks
    # ------------------------------------------------------------------
    @property
    def logger(self) -> logging.Logger:
        return self._logger or _logger()

    def set_logger(self, logger: logging.Logger | None) -> None:
        self._logger = logger

    @property
    def output(self) -> TextIO:
        return self._output or sys.stdout

    def set_output(self, output: TextIO | None) -> None:
        self._output = output

    # ------------------------------------------------------------------
    # Providers
    # ------------------------------------------------------------------
    @property
    def providers(self) -> tuple[OptionProvider, ...]:
        return tuple(self._providers)

    def add_provider(self, provider: OptionProvider | None) -> bool:
        """Append ``provider``; returns False if it is None or already registered."""
        if provider is None or any(p is provider for p in self._providers):
            return False
        self._providers.append(provider)
        return True

    def remove_provider(self, provider: OptionProvider | None) -> bool:
        for idx, known in enumerate(self._providers):
            if known is provider:
                del self._providers[idx]
                return True
        return False

    def initialize(self) -> None:
        """Rebuild the active option set from scratch."""
        self.clear()
        self.update()

    def update(self) -> None:
        """Ask every provider, in order, to contribute its options."""
        for provider in self._providers:
            provider.contribute(self)

    def clear(self) -> None:
        self._options.clear()

    def reset(self) -> None:
        """Return every option to its unset state."""
        for option in self._options.values():
            option.reset()

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------
    @property
    def options(self) -> tuple[Option, ...]:
        """Active options in alphabetical order."""
        return self._options.values()

    def add_option(self, option: Option) -> bool:
        """
        Add ``option`` to the active set.

        Adding the same option twice is a no-op. An option whose name is
        already taken by another option is rejected: a DuplicateOptionError
        is logged and recorded, the earlier option is kept and False returned.
        """
        existing = self._options.get(option.name, None)
        if existing is option:
            return True
        if existing is not None:
            self._record(DuplicateOptionError(option.name, existing.get_description(), option.get_description()))
            return False
        option.reset()
        self._options.register(option.name, option)
        return True

    def remove_option(self, option: Option | str) -> bool:
        """
        Remove an option (given by instance or long name) from the active set.

        Returns False, without touching the set, if no such option is active.
        """
        name = option if isinstance(option, str) else option.name
        active = self._options.get(name, None)
        if active is None or (isinstance(option, Option) and active is not option):
            self.logger.debug("option '%s' not found.", name)
            return False
        self._options.unregister(name)
        return True

    def remove_options(self, names: Iterable[Option | str]) -> bool:
        """Remove several options; True only if every one of them was active."""
        removed = True
        for name in names:
            removed = self.remove_option(name) and removed
        return removed

    def get_option(self, name: str) -> Option | None:
        return self._options.get(name, None)

    def provides(self, name: str) -> bool:
        return name in self._options

    def __contains__(self, name: object) -> bool:
        return name in self._options

    def __iter__(self) -> Iterator[Option]:
        return iter(self._options.values())

    def __len__(self) -> int:
        return len(self._options)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------
    def parse_all(self, tokens: Iterable[str]) -> bool:
        """
        Parse raw command line ``tokens`` and materialize every option.

        Returns:
            True if every token was understood and every argument accepted.
            Problems are logged as warnings and collected in ``issues``.

        Raises:
            InternalInconsistencyError: on an engine defect (never for bad input).
        """
        self.issues = []
        success = True
        cursor = TokenCursor(retokenize(tokens))
        for token in cursor:
            if not self._dispatch(token, cursor):
                success = False
        # note: options are applied in alphabetical order, not in command line order
        for option in self._options.values():
            if not self._materialize(option):
                success = False
        return success

    def _dispatch(self, token: str, cursor: TokenCursor) -> bool:
        for option in self._options.values():
            result = option.process_option(token, cursor)
            if result is MatchResult.NO_MATCH:
                continue
            if result is MatchResult.SUCCESS:
                return True
            if result is MatchResult.SHORT_CONCAT_FAILURE:
                self._record(MalformedArgumentError(option.name, token[2:]))
                return False
            following = cursor.peek()
            if following is None or following.startswith("--"):
                self._record(MissingArgumentError(option.name))
            else:
                # drop the rejected argument together with its option
                next(cursor)
                self._record(MalformedArgumentError(option.name, following))
            return False
        self._record(UnknownOptionError(token))
        return False

    def _materialize(self, option: Option) -> bool:
        try:
            if option.parse():
                return True
            self._record(MalformedArgumentError(option.name, option.get_arg(), "using default"))
        except InternalInconsistencyError:
            raise
        except Exception as exc:
            self._record(self._as_issue(option, option.get_arg(), exc))
        try:
            if not option.parse_default():
                self._record(MalformedArgumentError(option.name, option.default, "default rejected"))
        except InternalInconsistencyError:
            raise
        except Exception as exc:
            self._record(self._as_issue(option, option.default, exc))
        return False

    @staticmethod
    def _as_issue(option: Option, arg: str | None, exc: Exception) -> OptionError:
        if isinstance(exc, OptionError):
            return exc
        return MalformedArgumentError(option.name, arg, f"{type(exc).__name__}: {exc}")

    def _record(self, issue: OptionError) -> None:
        self.issues.append(issue)
        self.logger.warning("%s", issue.message)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    def canonicalize(self) -> str:
        """
        Long form of every option currently set, separated by spaces.

        Short options are written in their long form. Arguments that stage A
        would split or drop (empty, or starting with ``-`` without being a
        number) are attached as ``--name=<arg>``; parts containing whitespace,
        quotes or backslashes are shell quoted. The result can be split with
        ``tokenize`` and handed to ``parse_all`` again.
        """
        parts: list[str] = []
        for option in self._options.values():
            if not option.is_set:
                continue
            flag = f"--{option.name}"
            if option.arity is Arity.NONE or (option.arity is Arity.OPTIONAL and option.is_default):
                parts.append(flag)
                continue
            arg = option.get_arg()
            if arg == "" or retokenize([arg]) != [arg]:
                parts.append(f"{flag}={arg}")
            else:
                parts.extend([flag, arg])
        return " ".join(shlex.quote(part) if _NEEDS_QUOTES.search(part) else part for part in parts)

    def help(self) -> str:
        """Description of every option, one block per option."""
        return "\n".join(option.get_description() for option in self._options.values())

    def dump(self, output: TextIO | None = None) -> None:
        """Have every option report its current setting."""
        sink = output or self.output
        for option in self._options.values():
            option.report(sink)


__all__ = ["OptionEngine"]
