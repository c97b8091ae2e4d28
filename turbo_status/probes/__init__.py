"""Network service probes. Each returns a ProbeResult and never raises."""

from typing import List

from turbo_status.config.settings import Settings
from turbo_status.probes.base import ProbeResult, ProbeUnreachable, ServiceProbe
from turbo_status.probes.cache import CACHE_PRIMARY, CACHE_SECONDARY, MemcachedProbe, RedisProbe
from turbo_status.probes.database import DATABASE, DatabaseProbe


def default_probes(settings: Settings) -> List[ServiceProbe]:
    """Database, Redis, Memcached, in probe order, all with the same timeout."""
    timeout = settings.probe_timeout_sec
    return [
        DatabaseProbe(settings.database, timeout),
        RedisProbe(settings.redis, timeout),
        MemcachedProbe(settings.memcached, timeout),
    ]


__all__ = [
    "CACHE_PRIMARY",
    "CACHE_SECONDARY",
    "DATABASE",
    "DatabaseProbe",
    "MemcachedProbe",
    "ProbeResult",
    "ProbeUnreachable",
    "RedisProbe",
    "ServiceProbe",
    "default_probes",
]
