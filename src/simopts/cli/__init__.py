from __future__ import annotations

from .main import SessionProvider, build_engine, main, verbosity_from

__all__ = ["SessionProvider", "build_engine", "main", "verbosity_from"]
