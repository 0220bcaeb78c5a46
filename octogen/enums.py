"""Enumeration table filled while the document is walked."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .models import EnumDefinition

logger = logging.getLogger(__name__)


class EnumRegistry:
    """Maps enum name -> ordered options. Last registration of a name wins."""

    def __init__(self) -> None:
        self._options: dict[str, tuple[str, ...]] = {}
        self._descriptions: dict[str, str] = {}
        self._flushed = False

    def __contains__(self, name: str) -> bool:
        return name in self._options

    def __len__(self) -> int:
        return len(self._options)

    def get(self, name: str) -> tuple[str, ...] | None:
        return self._options.get(name)

    def register(
        self,
        name: str | None,
        options: Sequence[str] | None,
        description: str = "",
    ) -> None:
        """Record an enum; silently ignored when name or options are missing."""
        if name is None or options is None:
            return
        values = tuple(str(o) for o in options)
        previous = self._options.get(name)
        if previous is not None and previous != values:
            logger.warning(
                "Enum %s re-registered with different options %s (was %s); keeping the latest",
                name, list(values), list(previous),
            )
        elif previous is None:
            logger.debug("Registered enum %s (%d options)", name, len(values))
        self._options[name] = values
        if description or name not in self._descriptions:
            self._descriptions[name] = description

    def flush_all(self) -> list[EnumDefinition]:
        """Return every registered enum in first-registration order. Call once."""
        if self._flushed:
            raise RuntimeError("EnumRegistry.flush_all() called twice")
        self._flushed = True
        return [
            EnumDefinition(name=name, options=options, description=self._descriptions[name])
            for name, options in self._options.items()
        ]
