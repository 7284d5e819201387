"""
Option file handling shared by the CLI and programmatic entrypoints.
"""

from __future__ import annotations

from .loader import CONFIG_OPTION, expand_config_tokens, load_option_file, option_file_tokens

__all__ = ["CONFIG_OPTION", "expand_config_tokens", "load_option_file", "option_file_tokens"]
