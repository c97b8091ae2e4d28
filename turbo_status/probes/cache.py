"""Cache probes: Redis (cache-primary) and Memcached (cache-secondary).

Each probe opens one client with the probe timeout for both connect and
read, issues a single cheap command, and closes the client on every path.
"""

import logging
from contextlib import closing

from turbo_status.config.settings import CacheEndpoint, DEFAULT_PROBE_TIMEOUT_SEC
from turbo_status.probes.base import ServiceProbe

logger = logging.getLogger(__name__)

CACHE_PRIMARY = "cache-primary"
CACHE_SECONDARY = "cache-secondary"


class _CacheProbe(ServiceProbe):
    def __init__(self, endpoint: CacheEndpoint, timeout_sec: float = DEFAULT_PROBE_TIMEOUT_SEC) -> None:
        super().__init__(timeout_sec)
        self.endpoint = endpoint

    @property
    def target(self) -> str:
        return str(self.endpoint)


class RedisProbe(_CacheProbe):
    """PING the Redis server."""

    service = CACHE_PRIMARY

    def check(self) -> None:
        try:
            import redis
            from redis.backoff import NoBackoff
            from redis.retry import Retry
        except ImportError:
            raise self.unreachable("redis client not installed") from None
        client = redis.Redis(
            host=self.endpoint.host,
            port=self.endpoint.port,
            socket_connect_timeout=self.timeout_sec,
            socket_timeout=self.timeout_sec,
            retry=Retry(NoBackoff(), 0),
        )
        with closing(client):
            try:
                pong = client.ping()
            except (redis.exceptions.RedisError, OSError) as e:
                raise self.unreachable(e) from e
        if not pong:
            raise self.unreachable("unexpected PING reply")
        logger.debug("redis probe ok at %s", self.target)


class MemcachedProbe(_CacheProbe):
    """Request server stats from Memcached."""

    service = CACHE_SECONDARY

    def check(self) -> None:
        try:
            from pymemcache.client.base import Client
            from pymemcache.exceptions import MemcacheError
        except ImportError:
            raise self.unreachable("pymemcache not installed") from None
        client = Client(
            (self.endpoint.host, self.endpoint.port),
            connect_timeout=self.timeout_sec,
            timeout=self.timeout_sec,
        )
        with closing(client):
            try:
                stats = client.stats()
            except (MemcacheError, OSError) as e:
                raise self.unreachable(e) from e
        if not stats:
            raise self.unreachable("empty stats reply")
        logger.debug("memcached probe ok at %s", self.target)
