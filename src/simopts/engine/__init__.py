from __future__ import annotations

from .parser import OptionEngine
from .provider import PROVIDER_GROUP, OptionProvider, discover_providers
from .tokenizer import retokenize, tokenize

__all__ = [
    "OptionEngine",
    "OptionProvider",
    "PROVIDER_GROUP",
    "discover_providers",
    "retokenize",
    "tokenize",
]
