"""
Stage A of the parse: rewrite raw command line tokens into a canonical
sequence of option and argument tokens.
"""

from __future__ import annotations

import shlex
from typing import Iterable

from simopts.foundation.values import looks_numeric


def retokenize(tokens: Iterable[str]) -> list[str]:
    """
    Split combined option/argument tokens.

    * Tokens not starting with ``-`` (and ``-`` itself) are arguments.
    * ``-<x>...`` is kept whole if it parses as a number, vector or matrix
      (``-3.5``, ``-1,2;3,4``); otherwise it becomes ``-<x>`` followed by the
      remainder, with a leading ``=`` stripped from the remainder.
    * ``--<name>=<arg>`` is split at the first ``=``.

    The input is not modified; a new list is returned.
    """
    canonical: list[str] = []
    for token in tokens:
        if not token.startswith("-") or token == "-":
            # note: a lone '-' is a legitimate argument (e.g. a key)
            canonical.append(token)
            continue
        if not token.startswith("--"):
            if looks_numeric(token):
                canonical.append(token)
                continue
            canonical.append(token[:2])
            rest = token[2:]
            if rest.startswith("="):
                rest = rest[1:]
            if rest:
                canonical.append(rest)
            continue
        name, sep, arg = token.partition("=")
        canonical.append(name)
        if sep:
            canonical.append(arg)
    return canonical


def tokenize(text: str) -> list[str]:
    """
    Split a canonical option string (see OptionEngine.canonicalize) into raw tokens.

    Splitting follows shell rules, so quoted arguments may contain whitespace.
    """
    return shlex.split(text)


__all__ = ["retokenize", "tokenize"]
