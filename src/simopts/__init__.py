"""
simopts: command line option engine for simulation programs.

Components contribute options to a shared engine; the engine splits the
raw command line, matches tokens against options and hands every final
argument (or default) to the option's handler.
"""

from .core import (
    Arity,
    CallbackHandler,
    FlagHandler,
    Key,
    KeyHandler,
    MatchResult,
    Option,
    OptionHandler,
    TokenCursor,
    ValueHandler,
)
from .engine import OptionEngine, OptionProvider, discover_providers, retokenize, tokenize
from .foundation.exceptions import (
    DuplicateOptionError,
    InternalInconsistencyError,
    MalformedArgumentError,
    MissingArgumentError,
    OptionError,
    SimOptsError,
    UnknownOptionError,
)
from .foundation.logging import configure_simopts_logging

__version__ = "0.1.0"

__all__ = [
    "Arity",
    "CallbackHandler",
    "FlagHandler",
    "Key",
    "KeyHandler",
    "MatchResult",
    "Option",
    "OptionHandler",
    "TokenCursor",
    "ValueHandler",
    "OptionEngine",
    "OptionProvider",
    "discover_providers",
    "retokenize",
    "tokenize",
    "DuplicateOptionError",
    "InternalInconsistencyError",
    "MalformedArgumentError",
    "MissingArgumentError",
    "OptionError",
    "SimOptsError",
    "UnknownOptionError",
    "configure_simopts_logging",
]
