"""Relational database probe: open a connection, close it at once.

MySQL/MariaDB through PyMySQL (default) or PostgreSQL through psycopg2,
selected by DatabaseSettings.driver.
"""

import logging
import math
from contextlib import closing
from typing import Any, Dict

from turbo_status.config.settings import DatabaseSettings, DEFAULT_PROBE_TIMEOUT_SEC
from turbo_status.probes.base import ServiceProbe

logger = logging.getLogger(__name__)

DATABASE = "database"


def _get_conn_params(db: DatabaseSettings, timeout_sec: float) -> Dict[str, Any]:
    """Connection kwargs for the configured driver."""
    params: Dict[str, Any] = {
        "host": db.host,
        "port": db.port,
        "user": db.user,
        "password": db.password,
    }
    if db.driver == "postgres":
        # libpq takes whole seconds
        params["connect_timeout"] = max(1, int(math.ceil(timeout_sec)))
        params["dbname"] = "postgres"
    else:
        params["connect_timeout"] = timeout_sec
        params["read_timeout"] = timeout_sec
    return params


class DatabaseProbe(ServiceProbe):
    service = DATABASE

    def __init__(self, settings: DatabaseSettings, timeout_sec: float = DEFAULT_PROBE_TIMEOUT_SEC) -> None:
        super().__init__(timeout_sec)
        self.settings = settings

    @property
    def target(self) -> str:
        return f"{self.settings.driver}://{self.settings.host}:{self.settings.port}"

    def _connect(self) -> Any:
        params = _get_conn_params(self.settings, self.timeout_sec)
        if self.settings.driver == "postgres":
            try:
                import psycopg2
            except ImportError:
                raise self.unreachable("psycopg2 not installed") from None
            try:
                return psycopg2.connect(**params)
            except psycopg2.Error as e:
                raise self.unreachable(e) from e
        try:
            import pymysql
        except ImportError:
            raise self.unreachable("PyMySQL not installed") from None
        try:
            return pymysql.connect(**params)
        except (pymysql.MySQLError, OSError) as e:
            raise self.unreachable(e) from e

    def check(self) -> None:
        with closing(self._connect()):
            logger.debug("database probe connected to %s", self.target)
