"""Pydantic models for NGINX status API payloads.

Only ``Peer.state`` is load-bearing for health counting. The remaining peer
telemetry is modelled so it is accepted and available to callers, but every
field is optional and unknown fields are tolerated so that newer API versions
decode without changes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator


class PeerSSL(BaseModel):
    """SSL handshake counters for a peer."""

    model_config = ConfigDict(extra="allow")

    handshakes: int = 0
    handshakes_failed: int = 0
    session_reuses: int = 0


class PeerResponses(BaseModel):
    """Response counters by status class; ``codes`` is keyed by status code."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    one_xx: int = Field(default=0, alias="1xx")
    two_xx: int = Field(default=0, alias="2xx")
    three_xx: int = Field(default=0, alias="3xx")
    four_xx: int = Field(default=0, alias="4xx")
    five_xx: int = Field(default=0, alias="5xx")
    codes: dict[str, int] = {}
    total: int = 0


class PeerHealthChecks(BaseModel):
    """Active health check counters."""

    model_config = ConfigDict(extra="allow")

    checks: int = 0
    fails: int = 0
    unhealthy: int = 0
    last_passed: bool | None = None


class Peer(BaseModel):
    """One backend server within an upstream."""

    model_config = ConfigDict(extra="allow")

    id: int | None = None
    server: str = ""
    name: str = ""
    backup: bool = False
    weight: int | None = None
    state: str = ""  # "up", "down", "unavail", "unhealthy", "checking", "draining"
    active: int = 0
    ssl: PeerSSL | None = None
    requests: int = 0
    header_time: int | None = None
    response_time: int | None = None
    responses: PeerResponses | None = None
    sent: int = 0
    received: int = 0
    fails: int = 0
    unavail: int = 0
    health_checks: PeerHealthChecks | None = None
    downtime: int = 0
    selected: datetime | None = None

    @property
    def is_up(self) -> bool:
        return self.state == "up"


class UpstreamSnapshot(BaseModel):
    """Decoded ``/http/upstreams/{name}`` response."""

    model_config = ConfigDict(extra="allow")

    peers: list[Peer] = []
    keepalive: int = 0
    zombies: int = 0
    zone: str = ""


class ZoneEntry(BaseModel):
    """One value of the ``/http/upstreams?fields=zone`` map.

    A non-object entry or a non-string zone decodes to ``zone=None`` instead
    of failing the whole map.
    """

    model_config = ConfigDict(extra="allow")

    zone: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce_non_object(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {}
        return value

    @field_validator("zone", mode="before")
    @classmethod
    def _drop_non_string_zone(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class ZoneMap(RootModel[dict[str, ZoneEntry]]):
    """Upstream name -> zone entry, in response order."""

    def items(self):
        return self.root.items()

    def __len__(self) -> int:
        return len(self.root)
