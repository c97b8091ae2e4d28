"""Logging helpers shared by the reporter and server."""

from turbo_status.core.logging_utils import log_probe_result, log_report_snapshot, setup_logging

__all__ = ["log_probe_result", "log_report_snapshot", "setup_logging"]
