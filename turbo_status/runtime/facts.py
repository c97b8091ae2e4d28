"""Runtime facts of the hosting interpreter: version, server, OS and process limits."""

import logging
import platform
import sys
from typing import Dict, Optional

try:
    import resource
except ImportError:  # not available on Windows
    resource = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

# Display labels, in render order
PYTHON_VERSION = "Python Version"
WEB_SERVER = "Web Server"
OPERATING_SYSTEM = "Operating System"
MEMORY_LIMIT = "Memory Limit"
MAX_EXECUTION_TIME = "Max Execution Time"
MAX_FILE_SIZE = "Max File Size"

FACT_LABELS = (
    PYTHON_VERSION,
    WEB_SERVER,
    OPERATING_SYSTEM,
    MEMORY_LIMIT,
    MAX_EXECUTION_TIME,
    MAX_FILE_SIZE,
)

UNLIMITED = "unlimited"

_SIZE_UNITS = (("G", 1 << 30), ("M", 1 << 20), ("K", 1 << 10))


def format_size(num_bytes: int) -> str:
    """Bytes as a short size string: 536870912 -> '512M'. Non-exact multiples use the next smaller unit."""
    for suffix, factor in _SIZE_UNITS:
        if num_bytes >= factor and num_bytes % factor == 0:
            return f"{num_bytes // factor}{suffix}"
    for suffix, factor in _SIZE_UNITS:
        if num_bytes >= factor:
            return f"{num_bytes // factor}{suffix}"
    return str(num_bytes)


def _soft_limit(name: str) -> Optional[int]:
    """Soft rlimit by resource name (e.g. 'RLIMIT_AS'); None when unlimited. Raises LookupError/OSError if unreadable."""
    if resource is None:
        raise LookupError("resource module not available")
    which = getattr(resource, name, None)
    if which is None:
        raise LookupError(f"{name} not supported on this platform")
    soft, _hard = resource.getrlimit(which)
    if soft == resource.RLIM_INFINITY or soft < 0:
        return None
    return soft


def _limit_text(name: str, fmt) -> str:
    try:
        soft = _soft_limit(name)
    except (LookupError, OSError, ValueError) as e:
        logger.debug("rlimit %s unreadable: %s", name, e)
        return ""
    return UNLIMITED if soft is None else fmt(soft)


def server_api_name() -> str:
    """Process model label: the ASGI server when loaded, else the framework alone."""
    if "uvicorn" in sys.modules:
        return "Uvicorn + FastAPI"
    return "FastAPI (ASGI)"


def os_description() -> str:
    return " ".join(part for part in (platform.system(), platform.release()) if part)


def collect_runtime_facts() -> Dict[str, str]:
    """Return the six runtime facts in display order. Never raises; unreadable values are ''."""
    return {
        PYTHON_VERSION: platform.python_version(),
        WEB_SERVER: server_api_name(),
        OPERATING_SYSTEM: os_description(),
        MEMORY_LIMIT: _limit_text("RLIMIT_AS", format_size),
        MAX_EXECUTION_TIME: _limit_text("RLIMIT_CPU", lambda sec: f"{sec}s"),
        MAX_FILE_SIZE: _limit_text("RLIMIT_FSIZE", format_size),
    }
