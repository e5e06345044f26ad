"""Map upstream zones to the hostnames that own them.

Zones are named ``<hostname>-<upstream>`` by convention, e.g.
``bar.example.org-lxr-backend`` belongs to ``bar.example.org``.
"""

from __future__ import annotations

from nginx_healthz.models.nginx import ZoneMap


def hostname_from_zone(zone: str) -> str:
    """Return the part of ``zone`` before its first ``-`` (or all of it)."""
    return zone.split("-", 1)[0]


def hostname_upstreams(hostname: str, zone_map: ZoneMap) -> dict[str, list[str]]:
    """Group the upstreams whose zone belongs to ``hostname``.

    Returns ``{hostname: [upstream, ...]}`` in response order, or an empty
    dict when nothing matches. Entries without a string zone are skipped.
    """
    matches = [
        upstream
        for upstream, entry in zone_map.items()
        if entry.zone is not None and hostname_from_zone(entry.zone) == hostname
    ]
    if not matches:
        return {}
    return {hostname: matches}
