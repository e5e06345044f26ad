"""Concurrent fan-out of per-upstream stats fetches.

One asyncio task is started per upstream name, with no concurrency cap, and
all of them are joined before the totals are read. Failures are best-effort:
an upstream whose fetch raises a ``HealthzError`` contributes nothing, is
logged, and is reported in ``AggregateStats.failed`` instead of failing the
whole summary.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable

from nginx_healthz.middleware.error_handler import HealthzError
from nginx_healthz.models.stats import AggregateStats, Stats

logger = logging.getLogger(__name__)

StatsFetcher = Callable[[str], Awaitable[Stats]]


class _Accumulator:
    """Running Total/Up/Down shared by the fan-out tasks."""

    __slots__ = ("stats", "failed", "_lock")

    def __init__(self) -> None:
        self.stats = Stats()
        self.failed: list[str] = []
        self._lock = asyncio.Lock()

    async def add(self, stats: Stats) -> None:
        async with self._lock:
            self.stats = self.stats + stats

    async def fail(self, upstream: str) -> None:
        async with self._lock:
            self.failed.append(upstream)


class StatsAggregator:
    """Merge per-upstream stats fetched concurrently.

    Parameters
    ----------
    fetch_stats:
        Coroutine function returning ``Stats`` for one upstream name, e.g.
        ``NginxClient.get_stats_for``.
    """

    def __init__(self, fetch_stats: StatsFetcher) -> None:
        self._fetch_stats = fetch_stats

    async def aggregate(self, upstreams: Iterable[str]) -> AggregateStats:
        """Fetch every upstream concurrently and sum the successes.

        Blocks until every fetch has finished. Cancelling the caller cancels
        all in-flight fetches.
        """
        names = list(upstreams)
        if not names:
            return AggregateStats()

        acc = _Accumulator()

        async def _collect(upstream: str) -> None:
            try:
                stats = await self._fetch_stats(upstream)
            except HealthzError as exc:
                logger.warning(
                    "Skipping upstream %s: %s",
                    upstream,
                    exc.message,
                    extra={"upstream": upstream},
                )
                await acc.fail(upstream)
                return
            await acc.add(stats)

        await asyncio.gather(*(_collect(name) for name in names))

        result = AggregateStats(stats=acc.stats, upstreams=names, failed=sorted(acc.failed))
        logger.debug(
            "Aggregated %d upstreams: total=%d up=%d down=%d failed=%d",
            len(names),
            result.stats.total,
            result.stats.up,
            result.stats.down,
            len(result.failed),
            extra={"failed_upstreams": result.failed},
        )
        return result
