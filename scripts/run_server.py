#!/usr/bin/env python3
"""Start the Turbo Stack status server. Settings come from the environment only (DB_HOST, DB_USER, DB_PASSWORD, ...)."""

import logging
import os
import sys

# Project root, so the script runs from a checkout without installing
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)

from turbo_status.config.settings import SettingsError, load_settings  # noqa: E402
from turbo_status.core.logging_utils import setup_logging  # noqa: E402
from turbo_status.runtime.capabilities import build_registry  # noqa: E402

logger = logging.getLogger("run_server")


def main() -> int:
    try:
        settings = load_settings()
    except SettingsError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    setup_logging(settings.log_level)
    # Registry is computed once, before any request
    registry = build_registry()
    logger.info(
        "database=%s:%s user=%s redis=%s memcached=%s",
        settings.database.host,
        settings.database.port,
        settings.database.user,
        settings.redis,
        settings.memcached,
    )
    from turbo_status.status_server.app import run_server

    run_server(settings, registry)
    return 0


if __name__ == "__main__":
    sys.exit(main())
