"""
Option files: YAML or JSON mappings of long option names to arguments.

Values from an option file are turned into command line tokens and placed
in front of the actual command line, so arguments given on the command
line override the file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from simopts.foundation.exceptions import ConfigFileError
from simopts.foundation.values import MATRIX_DELIMITER, VECTOR_DELIMITER

CONFIG_OPTION = "config"


def load_option_file(path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML or JSON option file.
    """
    spec_path = Path(path).expanduser().resolve()
    if not spec_path.exists():
        raise FileNotFoundError(f"Option file '{spec_path}' does not exist.")
    suffix = spec_path.suffix.lower()
    with spec_path.open("r", encoding="utf-8") as fh:
        if suffix in {".yaml", ".yml"}:
            import yaml

            try:
                data = yaml.safe_load(fh)
            except yaml.YAMLError as exc:
                raise ConfigFileError(str(spec_path), f"malformed YAML ({exc})") from exc
        else:
            try:
                data = json.load(fh)
            except json.JSONDecodeError as exc:
                raise ConfigFileError(str(spec_path), f"malformed JSON ({exc})") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(str(spec_path), f"expected a mapping, got {type(data).__name__}")
    return data


def _format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        if value and all(isinstance(row, (list, tuple)) for row in value):
            return MATRIX_DELIMITER.join(_format_value(row) for row in value)
        return VECTOR_DELIMITER.join(str(entry) for entry in value)
    return str(value)


def option_file_tokens(options: Mapping[str, Any]) -> List[str]:
    """
    Convert a mapping of option names to values into command line tokens.

    ``True`` or ``None`` give the bare option, ``False`` drops it, lists become
    comma separated vectors and lists of lists semicolon separated matrices.
    """
    tokens: List[str] = []
    for name, value in options.items():
        flag = f"--{str(name).lstrip('-')}"
        if value is False:
            continue
        if value is True or value is None:
            tokens.append(flag)
            continue
        tokens.extend([flag, _format_value(value)])
    return tokens


def expand_config_tokens(tokens: Iterable[str], option: str = CONFIG_OPTION) -> List[str]:
    """
    Replace ``--config <file>`` (or ``--config=<file>``) with the tokens of the file.

    File tokens are placed in front of the remaining command line so later,
    explicit arguments take precedence. The input is not modified.

    Raises:
        FileNotFoundError: if an option file does not exist.
        ConfigFileError: if ``--config`` lacks a file name or the file is malformed.
    """
    flag = f"--{option}"
    remaining: List[str] = []
    from_files: List[str] = []
    raw = list(tokens)
    idx = 0
    while idx < len(raw):
        token = raw[idx]
        idx += 1
        if token == flag:
            if idx >= len(raw) or raw[idx].startswith("--"):
                raise ConfigFileError("", f"{flag} requires a file name")
            path = raw[idx]
            idx += 1
        elif token.startswith(flag + "="):
            path = token[len(flag) + 1 :]
        else:
            remaining.append(token)
            continue
        from_files.extend(option_file_tokens(load_option_file(path)))
    return from_files + remaining


__all__ = ["CONFIG_OPTION", "expand_config_tokens", "load_option_file", "option_file_tokens"]
