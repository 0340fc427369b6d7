"""Bounded history of past body positions, drawn as fading dots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

import numpy as np

from .config import TrailConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrailEntry:
    x: float
    y: float
    color: str


class TrailBuffer:
    """Append-only trail with batched eviction.

    Once a push takes the buffer past `cap` entries, the oldest `batch` entries
    are dropped in a single slice deletion rather than one per push.
    """

    def __init__(self, config: TrailConfig = TrailConfig()) -> None:
        self.config = config
        self._entries: List[TrailEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TrailEntry]:
        return iter(self._entries)

    def push(self, entry: TrailEntry) -> None:
        self._entries.append(entry)
        if len(self._entries) > self.config.cap:
            del self._entries[: self.config.batch]
            logger.debug("Trail evicted %d entries (%d kept)", self.config.batch, len(self._entries))

    def record(self, states: Iterable) -> None:
        """Push one entry per body snapshot (anything with .position and .color)."""
        for s in states:
            self.push(TrailEntry(s.position.x, s.position.y, s.color))

    def clear(self) -> None:
        self._entries.clear()

    def as_arrays(self) -> Tuple[np.ndarray, List[str]]:
        """Return (xy, colors) with xy of shape (n, 2), oldest first."""
        xy = np.array([(e.x, e.y) for e in self._entries], dtype=float).reshape(-1, 2)
        return xy, [e.color for e in self._entries]
