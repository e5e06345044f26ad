"""Reduce a single upstream snapshot to up/down counts."""

from __future__ import annotations

from nginx_healthz.middleware.error_handler import EmptyUpstreamError
from nginx_healthz.models.nginx import UpstreamSnapshot
from nginx_healthz.models.stats import Stats


def calculate_stats(upstream: str, snapshot: UpstreamSnapshot) -> Stats:
    """Count peers of ``upstream``; anything but state ``"up"`` is down.

    Raises
    ------
    EmptyUpstreamError
        If the upstream has no peers at all.
    """
    if not snapshot.peers:
        raise EmptyUpstreamError(f"no servers in upstream {upstream}", upstream=upstream)

    total = len(snapshot.peers)
    up = sum(1 for peer in snapshot.peers if peer.is_up)
    return Stats(total=total, up=up, down=total - up)
