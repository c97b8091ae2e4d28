"""Status report and HTTP server (GET /, GET /status)."""

from turbo_status.status_server.report import ReportSnapshot, StatusReporter
from turbo_status.status_server.self_check import derive_self_check

__all__ = ["ReportSnapshot", "StatusReporter", "derive_self_check"]
