"""
Foundation layer: exceptions, logging setup, the name registry and value parsing.
"""

from __future__ import annotations

from .exceptions import (
    ConfigFileError,
    ConfigurationError,
    DuplicateOptionError,
    InternalInconsistencyError,
    MalformedArgumentError,
    MissingArgumentError,
    OptionError,
    SimOptsError,
    UnknownOptionError,
)
from .logging import configure_simopts_logging
from .registry import Registry

__all__ = [
    "ConfigFileError",
    "ConfigurationError",
    "DuplicateOptionError",
    "InternalInconsistencyError",
    "MalformedArgumentError",
    "MissingArgumentError",
    "OptionError",
    "Registry",
    "SimOptsError",
    "UnknownOptionError",
    "configure_simopts_logging",
]
