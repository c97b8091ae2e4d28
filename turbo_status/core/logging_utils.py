"""Logging setup and structured key=value lines for probe results and report snapshots."""

import logging
import uuid
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from turbo_status.probes.base import ProbeResult
    from turbo_status.status_server.report import ReportSnapshot

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for the server process. Unknown level names fall back to INFO."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT, level=resolved)


def new_trace_id() -> str:
    return str(uuid.uuid4())[:8]


def _ensure_trace_id(extra: dict) -> str:
    trace_id = extra.get("trace_id")
    if not trace_id:
        trace_id = new_trace_id()
        extra["trace_id"] = trace_id
    return trace_id


def _format(kind: str, extra: dict) -> str:
    return kind + " " + " ".join(f"{k}={v}" for k, v in sorted(extra.items()))


def log_probe_result(
    result: "ProbeResult",
    trace_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log one probe outcome. Failures at WARNING, successes at DEBUG."""
    extra = extra or {}
    if trace_id:
        extra["trace_id"] = trace_id
    _ensure_trace_id(extra)
    extra["service"] = result.service
    extra["reachable"] = result.reachable
    extra["elapsed_ms"] = f"{result.elapsed_ms:.1f}"
    if result.error is not None:
        extra["error"] = repr(result.error.reason)
        logger.warning(_format("probe_result", extra))
    else:
        logger.debug(_format("probe_result", extra))


def log_report_snapshot(
    snapshot: "ReportSnapshot",
    trace_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log a one-line summary of a rendered report."""
    extra = extra or {}
    if trace_id:
        extra["trace_id"] = trace_id
    _ensure_trace_id(extra)
    for name, ok in snapshot.service_status.items():
        extra[name] = ok
    extra["modules"] = len(snapshot.loaded_modules)
    logger.info(_format("report_snapshot", extra))
