"""Public models for the healthz client and service."""

from nginx_healthz.models.nginx import (
    Peer,
    PeerHealthChecks,
    PeerResponses,
    PeerSSL,
    UpstreamSnapshot,
    ZoneEntry,
    ZoneMap,
)
from nginx_healthz.models.responses import ApiResponse
from nginx_healthz.models.stats import AggregateStats, Stats

__all__ = [
    "AggregateStats",
    "ApiResponse",
    "Peer",
    "PeerHealthChecks",
    "PeerResponses",
    "PeerSSL",
    "Stats",
    "UpstreamSnapshot",
    "ZoneEntry",
    "ZoneMap",
]
