"""Health summary models returned by the client."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Stats(BaseModel):
    """Up/down peer counts for one or more upstreams.

    ``up + down == total`` holds for a single upstream. Merged values only
    count the upstreams whose fetch succeeded.
    """

    model_config = ConfigDict(frozen=True)

    total: int = Field(default=0, ge=0)
    up: int = Field(default=0, ge=0)
    down: int = Field(default=0, ge=0)

    def __add__(self, other: Stats) -> Stats:
        if not isinstance(other, Stats):
            return NotImplemented
        return Stats(
            total=self.total + other.total,
            up=self.up + other.up,
            down=self.down + other.down,
        )


class AggregateStats(BaseModel):
    """Merged stats plus which upstreams were queried and which failed."""

    stats: Stats = Stats()
    upstreams: list[str] = []
    failed: list[str] = []

    @property
    def succeeded(self) -> list[str]:
        failed = set(self.failed)
        return [name for name in self.upstreams if name not in failed]
