"""Turbo Stack status page: runtime facts and reachability of database, Redis and Memcached."""

__version__ = "0.1.0"
