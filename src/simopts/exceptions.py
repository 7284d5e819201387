"""
Exceptions an application sees from simopts.

Option problems are not raised by ``OptionEngine.parse_all``; they are
collected in ``engine.issues``. Catch ``OptionError`` in handlers or when
inspecting issues, ``ConfigurationError`` around option files and let
``InternalInconsistencyError`` propagate.
"""

from __future__ import annotations

from .foundation.exceptions import (
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

__all__ = [
    "SimOptsError",
    "OptionError",
    "UnknownOptionError",
    "MissingArgumentError",
    "MalformedArgumentError",
    "DuplicateOptionError",
    "ConfigurationError",
    "ConfigFileError",
    "InternalInconsistencyError",
]
