from __future__ import annotations

from .handlers import CallbackHandler, FlagHandler, KeyHandler, OptionHandler, ValueHandler, format_report
from .keys import Key, KeyLike, differ_at
from .option import Arity, MatchResult, Option
from .tokens import TokenCursor

__all__ = [
    "Arity",
    "CallbackHandler",
    "FlagHandler",
    "Key",
    "KeyHandler",
    "KeyLike",
    "MatchResult",
    "Option",
    "OptionHandler",
    "TokenCursor",
    "ValueHandler",
    "differ_at",
    "format_report",
]
