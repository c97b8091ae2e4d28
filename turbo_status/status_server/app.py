"""FastAPI app: GET / (HTML status page), GET /status (JSON).

Both endpoints always answer 200. The page reports dependency status; it
does not fail because a dependency is down.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from turbo_status.config.settings import Settings
from turbo_status.core.logging_utils import new_trace_id
from turbo_status.runtime.capabilities import CapabilityRegistry, build_registry
from turbo_status.status_server.report import StatusReporter
from turbo_status.status_server.self_check import derive_self_check

logger = logging.getLogger(__name__)

_FALLBACK_HTML = (
    "<!DOCTYPE html><html><body><p>Status report unavailable; see server log.</p>"
    "<a href='/status'>/status</a></body></html>"
)


def create_app(reporter: StatusReporter) -> FastAPI:
    """Build FastAPI app around a reporter built once at startup."""
    app = FastAPI(title="Turbo Stack Status", description="Runtime facts and service reachability")

    @app.get("/", response_class=HTMLResponse)
    def get_page() -> str:
        """Probe all services and render the status page. Never returns 5xx."""
        trace_id = new_trace_id()
        try:
            return reporter.render(reporter.snapshot(trace_id=trace_id))
        except Exception:
            logger.exception("render failed trace_id=%s", trace_id)
            return _FALLBACK_HTML

    @app.get("/status")
    def get_status() -> Dict[str, Any]:
        """Same snapshot as the page, as JSON, plus self_check / status_lamp / block_reasons."""
        trace_id = new_trace_id()
        try:
            snap = reporter.snapshot(trace_id=trace_id)
        except Exception as e:
            logger.warning("get_status failed trace_id=%s: %s", trace_id, e)
            return {
                "self_check": "blocked",
                "block_reasons": ["status_read_error"],
                "status_lamp": "red",
                "runtime_facts": {},
                "loaded_modules": [],
                "service_status": {},
                "probes": [],
                "generated_at": None,
            }
        payload: Dict[str, Any] = dict(derive_self_check(snap.service_status))
        payload.update(snap.to_dict())
        return payload

    return app


def run_server(settings: Settings, registry: Optional[CapabilityRegistry] = None) -> None:
    """Start the status server on settings.server_host:settings.server_port."""
    import uvicorn

    registry = registry or build_registry()
    reporter = StatusReporter(settings, registry)
    app = create_app(reporter)
    logger.info(
        "Status server on %s:%s (database=%s probes=%s timeout=%.1fs modules=%d)",
        settings.server_host,
        settings.server_port,
        settings.database.driver,
        ",".join(p.service for p in reporter.probes),
        settings.probe_timeout_sec,
        len(registry.modules),
    )
    uvicorn.run(app, host=settings.server_host, port=int(settings.server_port), log_level=settings.log_level.lower())
