"""
``simopts`` console entry point.

Collects options from the session provider and from every provider
registered under the ``simopts.providers`` entry-point group, parses the
command line and prints the canonical argument string followed by the
report of every option (or the option help with ``--help``).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Iterable, Sequence, TextIO

from simopts.config.loader import expand_config_tokens
from simopts.core.handlers import CallbackHandler, format_report
from simopts.core.option import Arity, Option
from simopts.engine.parser import OptionEngine
from simopts.engine.provider import OptionProvider, discover_providers
from simopts.foundation.exceptions import ConfigFileError
from simopts.foundation.logging import LEVELS, LOG_LEVEL_ENV, configure_simopts_logging, resolve_level

TITLE = "simopts"
STDOUT = "stdout"


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class SessionProvider:
    """Options controlling the session itself: help, output redirection and verbosity."""

    def __init__(self) -> None:
        self.output: TextIO = sys.stdout
        self.help_requested = False
        self._opened: TextIO | None = None
        self.help = Option(
            "help",
            CallbackHandler(self._parse_help),
            short="h",
            description="--help, -h               print this help screen",
        )
        self.output_file = Option(
            "output",
            CallbackHandler(self._parse_output, self._report_output),
            arity=Arity.REQUIRED,
            default=STDOUT,
            description="--output <f>             redirect output to file",
        )
        self.append_file = Option(
            "append",
            CallbackHandler(self._parse_append),
            arity=Arity.REQUIRED,
            default=STDOUT,
            description="--append <f>             append output to file",
        )
        self.verbose = Option(
            "verbose",
            CallbackHandler(self._parse_verbose),
            arity=Arity.REQUIRED,
            default=os.environ.get(LOG_LEVEL_ENV, "warning"),
            description="--verbose <l>            level of reporting\n      l: level",
        )
        for level in LEVELS:
            self.verbose.add_key(level, f"report {level} messages" if level != "off" else "no reports")

    def contribute(self, engine: OptionEngine) -> None:
        engine.add_option(self.help)
        engine.add_option(self.output_file)
        engine.add_option(self.append_file)
        engine.add_option(self.verbose)

    def _parse_help(self, arg: str | None) -> bool:
        self.help_requested = self.help.is_set
        return True

    def _parse_append(self, arg: str | None) -> bool:
        # --append takes precedence over --output
        if not self.append_file.is_set:
            if not self.output_file.is_set:
                self._redirect(None)
            return True
        return self._open(arg, "a")

    def _parse_output(self, arg: str | None) -> bool:
        if self.append_file.is_set:
            return True
        if not self.output_file.is_set:
            self._redirect(None)
            return True
        return self._open(arg, "w")

    def _report_output(self, output: TextIO) -> None:
        target = self.append_file if self.append_file.is_set else self.output_file
        if target.is_set:
            output.write(format_report(target.name, target.get_arg()) + "\n")

    def _parse_verbose(self, arg: str | None) -> bool:
        name = (arg or "").strip().lower()
        matches = [level for level in LEVELS if name and level.startswith(name)]
        if not matches:
            return False
        logging.getLogger("simopts").setLevel(LEVELS[matches[0]])
        return True

    def _open(self, path: str | None, mode: str) -> bool:
        if path == STDOUT:
            self._redirect(None)
            return True
        if not path:
            self._redirect(None)
            return False
        try:
            stream = open(path, mode, encoding="utf-8")
        except OSError as exc:
            self._redirect(None)
            _logger().warning("failed to open '%s' - using stdout (%s).", path, exc)
            return False
        self._redirect(stream)
        return True

    def _redirect(self, stream: TextIO | None) -> None:
        if self._opened is not None and self._opened is not stream:
            self._opened.close()
        self._opened = stream
        self.output = stream if stream is not None else sys.stdout

    def close(self) -> None:
        self._redirect(None)


def verbosity_from(tokens: Sequence[str], option: str = "verbose") -> str | None:
    """
    Level given with ``--verbose <l>`` or ``--verbose=<l>`` (last one wins), None if absent.

    Applied before parsing so warnings about the other options already obey it.
    """
    flag = f"--{option}"
    level = None
    for idx, token in enumerate(tokens):
        if token == flag and idx + 1 < len(tokens):
            level = tokens[idx + 1]
        elif token.startswith(flag + "="):
            level = token[len(flag) + 1 :]
    return level


def build_engine(session: SessionProvider, providers: Iterable[OptionProvider]) -> OptionEngine:
    engine = OptionEngine([session, *providers])
    engine.initialize()
    return engine


def main(argv: Sequence[str] | None = None, *, providers: Iterable[OptionProvider] | None = None) -> int:
    tokens = list(sys.argv[1:] if argv is None else argv)
    package_logger = configure_simopts_logging()
    try:
        tokens = expand_config_tokens(tokens)
    except (FileNotFoundError, ConfigFileError) as exc:
        _logger().error("%s", exc)
        return 2
    level = verbosity_from(tokens)
    if level is not None:
        package_logger.setLevel(resolve_level(level, default=package_logger.getEffectiveLevel()))
    session = SessionProvider()
    engine = build_engine(session, discover_providers() if providers is None else providers)
    try:
        ok = engine.parse_all(tokens)
        if session.help_requested:
            session.output.write(f"{TITLE}\nlist of command line options:\n{engine.help()}\n")
            return 0
        session.output.write(format_report("arguments", engine.canonicalize()) + "\n")
        engine.dump(session.output)
        return 0 if ok else 1
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
