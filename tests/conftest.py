"""Shared fixtures: a local TCP port nothing listens on, settings pointed at it, a fixed registry."""

import socket

import pytest

from turbo_status.config.settings import CacheEndpoint, DatabaseSettings, Settings
from turbo_status.runtime.capabilities import CapabilityRegistry


@pytest.fixture
def refused_port() -> int:
    """A loopback port that was just free; connecting to it is refused."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def unreachable_settings(refused_port: int) -> Settings:
    return Settings(
        database=DatabaseSettings(host="127.0.0.1", port=refused_port),
        redis=CacheEndpoint("127.0.0.1", refused_port),
        memcached=CacheEndpoint("127.0.0.1", refused_port),
        probe_timeout_sec=1.0,
    )


@pytest.fixture
def registry() -> CapabilityRegistry:
    return CapabilityRegistry(
        modules=frozenset({"zlib", "array", "math", "posix"}),
        bytecode_cache=True,
        object_cache=False,
        debugger=False,
    )
