"""Stats reduction, zone resolution and concurrent aggregation."""

from nginx_healthz.services.aggregator import StatsAggregator
from nginx_healthz.services.stats import calculate_stats
from nginx_healthz.services.zones import hostname_from_zone, hostname_upstreams

__all__ = [
    "StatsAggregator",
    "calculate_stats",
    "hostname_from_zone",
    "hostname_upstreams",
]
