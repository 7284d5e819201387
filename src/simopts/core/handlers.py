"""
Callback strategies attached to options.

An option owns exactly one handler. The engine asks it to interpret the
final argument (``parse``), to print the resulting setting (``report``)
and, for options without a static description, to describe itself
(``describe``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Protocol, TextIO, runtime_checkable

from simopts.foundation.exceptions import MalformedArgumentError

if TYPE_CHECKING:
    from .keys import Key
    from .option import Option


@runtime_checkable
class OptionHandler(Protocol):
    """
    Strategy interpreting and reporting an option's argument.

    ``parse`` returns False (or raises) to reject the argument; any other
    return value, including None, is success.
    """

    def parse(self, arg: str | None) -> bool | None: ...

    def report(self, output: TextIO) -> None: ...

    def describe(self) -> str | None: ...


def format_report(label: str, value: Any) -> str:
    """Format one report line, e.g. ``# populationsize:       100``."""
    return f"# {label + ':':<22}{value}"


@dataclass
class CallbackHandler:
    """Handler assembled from plain callables, usually closures over application state."""

    on_parse: Callable[[str | None], bool | None]
    on_report: Callable[[TextIO], None] | None = None
    on_describe: Callable[[], str | None] | None = None

    def parse(self, arg: str | None) -> bool | None:
        return self.on_parse(arg)

    def report(self, output: TextIO) -> None:
        if self.on_report is not None:
            self.on_report(output)

    def describe(self) -> str | None:
        if self.on_describe is None:
            return None
        return self.on_describe()


@dataclass
class ValueHandler:
    """
    Convert the argument and keep the result in ``value``.

    Conversion errors are turned into MalformedArgumentError so the engine
    falls back to the option default.
    """

    name: str
    convert: Callable[[str], Any] = str
    label: str | None = None
    value: Any = None

    def parse(self, arg: str | None) -> bool:
        if arg is None:
            self.value = None
            return True
        try:
            self.value = self.convert(arg)
        except (TypeError, ValueError) as exc:
            raise MalformedArgumentError(self.name, arg, str(exc)) from exc
        if self.value is None:
            raise MalformedArgumentError(self.name, arg)
        return True

    def report(self, output: TextIO) -> None:
        output.write(format_report(self.label or self.name, self.value) + "\n")

    def describe(self) -> str | None:
        return None


@dataclass
class FlagHandler:
    """Handler for options without argument: ``value`` mirrors whether the option was given."""

    option: Option | None = None
    label: str | None = None
    value: bool = False

    def bind(self, option: Option) -> None:
        self.option = option

    def parse(self, arg: str | None) -> bool:
        self.value = bool(self.option is not None and self.option.is_set)
        return True

    def report(self, output: TextIO) -> None:
        name = self.label or (self.option.name if self.option is not None else "flag")
        output.write(format_report(name, self.value) + "\n")

    def describe(self) -> str | None:
        return None


@dataclass
class KeyHandler:
    """
    Resolve the argument against the key domain of ``option``.

    The longest key the argument starts with wins; whatever follows the key
    is kept in ``suffix`` (e.g. ``l4`` selects key ``l`` with suffix ``4``).
    Without a full key match, a unique key starting with the argument is
    accepted as an abbreviation.
    """

    option: Option | None = None
    label: str | None = None
    selected: Key | None = None
    suffix: str = ""

    def bind(self, option: Option) -> None:
        self.option = option

    def parse(self, arg: str | None) -> bool:
        if self.option is None or arg is None:
            return False
        keys = self.option.keys
        matches = [key for key in keys if key.matches(arg)]
        if matches:
            best = max(matches, key=lambda key: len(key.key))
            self.selected = best
            self.suffix = arg[len(best.key) :]
            return True
        abbreviations = [key for key in keys if arg and key.key.startswith(arg)]
        if len(abbreviations) == 1:
            self.selected = abbreviations[0]
            self.suffix = ""
            return True
        raise MalformedArgumentError(self.option.name, arg, "no matching key")

    def report(self, output: TextIO) -> None:
        if self.selected is None:
            return
        name = self.label or (self.option.name if self.option is not None else "key")
        output.write(format_report(name, self.selected.title + self.suffix) + "\n")

    def describe(self) -> str | None:
        return None


__all__ = [
    "CallbackHandler",
    "FlagHandler",
    "KeyHandler",
    "OptionHandler",
    "ValueHandler",
    "format_report",
]
