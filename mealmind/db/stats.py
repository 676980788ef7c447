"""Impact statistics (money and time saved, recipes generated, ...)."""

from __future__ import annotations

from dataclasses import replace

from ..helpers import now_iso
from ..models import STAT_KEYS, ImpactStats
from .store import USER_STATS, CollectionStore


class StatsRepository:
    """Manages the user_stats record."""

    def __init__(self, store: CollectionStore) -> None:
        self._store = store

    def get(self) -> ImpactStats:
        data = self._store.get(USER_STATS)
        if data is None:
            return ImpactStats(last_updated=now_iso())
        return ImpactStats.from_dict(data)

    def increment(self, key: str, amount: float = 1) -> ImpactStats:
        """Add ``amount`` to one counter and stamp ``last_updated``.

        Raises:
            ValueError: Unknown counter or negative amount.
        """
        if key not in STAT_KEYS:
            raise ValueError(f"Unknown stat: {key!r}")
        if amount < 0:
            raise ValueError("Stats can only be incremented")
        stats = self.get()
        stats = replace(
            stats,
            **{key: getattr(stats, key) + amount},
            last_updated=now_iso(),
        )
        self._store.set(USER_STATS, stats.to_dict())
        return stats

    def reset(self) -> ImpactStats:
        stats = ImpactStats(last_updated=now_iso())
        self._store.set(USER_STATS, stats.to_dict())
        return stats
