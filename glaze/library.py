"""Explicit LUT cache owned by the application layer.

The core itself keeps no state between calls. Applications create one
LutLibrary, load tables through it, and build layers from it. A source
that fails to load is remembered as unavailable and every layer built from
it is a pass-through, so one bad file never aborts compositing.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable

from glaze import defaults
from glaze.cube import load_cube
from glaze.errors import GlazeError
from glaze.types import Layer, LayerStack, LutTable

logger = logging.getLogger(__name__)


class LutLibrary:
    """Tables keyed by source name, loaded on first use.

    Attributes:
        loader: Callable turning a source name into a LutTable
    """

    def __init__(self, loader: Callable[[str], LutTable] = load_cube):
        self.loader = loader
        self._tables: dict[str, LutTable | None] = {}
        self._lock = threading.Lock()

    def register(self, name: str, table: LutTable) -> None:
        """Add an already-built table under name (replaces any entry)."""
        with self._lock:
            self._tables[name] = table

    def get(self, source: str) -> LutTable | None:
        """Return the table for source, loading it on first request.

        Returns:
            The table, or None if it could not be loaded (logged once)
        """
        with self._lock:
            if source in self._tables:
                return self._tables[source]

        logger.debug("Loading LUT %s", source)
        try:
            table = self.loader(source)
        except (GlazeError, OSError) as e:
            logger.warning("Failed to load LUT %s: %s", source, e)
            table = None

        with self._lock:
            # Concurrent first loads keep whichever finished first
            return self._tables.setdefault(source, table)

    def layer(
        self,
        source: str | None,
        opacity: float = defaults.DEFAULT_OPACITY,
        enabled: bool = True,
    ) -> Layer:
        """Layer for source; None or an unavailable source gives a pass-through."""
        table = self.get(source) if source is not None else None
        return Layer(table=table, opacity=opacity, enabled=enabled)

    def stack(self, specs: Iterable[tuple[str | None, float]]) -> LayerStack:
        """LayerStack from (source, opacity) pairs in application order."""
        return LayerStack(tuple(self.layer(source, opacity) for source, opacity in specs))

    def unavailable(self) -> list[str]:
        """Sources that failed to load."""
        with self._lock:
            return [name for name, table in self._tables.items() if table is None]

    def evict(self, source: str) -> None:
        """Forget source so the next get() loads it again."""
        with self._lock:
            self._tables.pop(source, None)

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()

    def __contains__(self, source: str) -> bool:
        with self._lock:
            return source in self._tables

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)
