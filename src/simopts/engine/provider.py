"""
Option providers and their discovery through package entry points.
"""

from __future__ import annotations

import logging
from importlib import metadata
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .parser import OptionEngine

PROVIDER_GROUP = "simopts.providers"


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@runtime_checkable
class OptionProvider(Protocol):
    """
    Component contributing options to an engine.

    ``contribute`` is called every time the engine is initialized and
    typically calls ``engine.add_option`` for each of its options. Providers
    may also prune the active set with ``engine.remove_option``, e.g. when a
    specialization makes an option contributed by an earlier provider
    meaningless.
    """

    def contribute(self, engine: OptionEngine) -> None: ...


def discover_providers(group: str = PROVIDER_GROUP) -> list[OptionProvider]:
    """
    Instantiate the providers registered under the entry-point ``group``.

    Entry points refer either to a provider object or to a zero argument
    factory returning one. Entry points that fail to load are logged and
    skipped; they never prevent the remaining providers from loading.
    """
    providers: list[OptionProvider] = []
    for entry in sorted(metadata.entry_points(group=group), key=lambda ep: ep.name):
        try:
            target = entry.load()
            provider = target if isinstance(target, OptionProvider) and not isinstance(target, type) else target()
        except Exception:
            _logger().warning("Failed to load option provider '%s' (%s).", entry.name, entry.value, exc_info=True)
            continue
        if not isinstance(provider, OptionProvider):
            _logger().warning("Entry point '%s' did not produce an option provider; ignored.", entry.name)
            continue
        providers.append(provider)
    return providers


__all__ = ["OptionProvider", "PROVIDER_GROUP", "discover_providers"]
