"""Status Reporter: gather runtime facts, probe services, render the HTML report.

One ReportSnapshot per request; nothing is kept between requests. The
settings and capability registry are built once at startup and passed in.
"""

import logging
import time
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from turbo_status.config.settings import Settings
from turbo_status.core.logging_utils import log_probe_result, log_report_snapshot, new_trace_id
from turbo_status.probes import CACHE_PRIMARY, CACHE_SECONDARY, DATABASE, ProbeResult, ServiceProbe, default_probes
from turbo_status.runtime.capabilities import CapabilityRegistry
from turbo_status.runtime.facts import collect_runtime_facts
from turbo_status.status_server.self_check import derive_self_check

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
TEMPLATE_NAME = "index.html"

BYTECODE_CACHE = "bytecode-cache"
OBJECT_CACHE = "object-cache"
DEBUGGER = "debugger"

CAPABILITY_SERVICES = (BYTECODE_CACHE, OBJECT_CACHE, DEBUGGER)

_DATABASE_LABELS = {"mysql": "Database (MySQL/MariaDB)", "postgres": "Database (PostgreSQL)"}

SERVICE_LABELS = {
    DATABASE: _DATABASE_LABELS["mysql"],
    CACHE_PRIMARY: "Redis Cache",
    CACHE_SECONDARY: "Memcached",
    BYTECODE_CACHE: "Bytecode Cache",
    OBJECT_CACHE: "Object Allocator Cache",
    DEBUGGER: "Debugger",
}


@dataclass(frozen=True)
class ReportSnapshot:
    """Request-scoped report data. Discarded after the response is sent."""

    runtime_facts: Dict[str, str]
    loaded_modules: Tuple[str, ...]
    service_status: Dict[str, bool]
    probe_results: Tuple[ProbeResult, ...] = ()
    generated_at: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "runtime_facts": dict(self.runtime_facts),
            "loaded_modules": list(self.loaded_modules),
            "service_status": dict(self.service_status),
            "probes": [r.to_dict() for r in self.probe_results],
            "generated_at": self.generated_at,
        }


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def _service_rows(snapshot: ReportSnapshot, database_label: str) -> List[Dict[str, Any]]:
    rows = []
    for name, ok in snapshot.service_status.items():
        capability = name in CAPABILITY_SERVICES
        if capability:
            text = "● Enabled" if ok else "○ Disabled"
        else:
            text = "● Connected" if ok else "○ Disconnected"
        rows.append({
            "name": name,
            "label": database_label if name == DATABASE else SERVICE_LABELS.get(name, name),
            "ok": ok,
            "css": "status-ok" if ok else "status-error",
            "text": text,
        })
    return rows


class StatusReporter:
    """Builds and renders a ReportSnapshot on each call."""

    def __init__(
        self,
        settings: Settings,
        registry: CapabilityRegistry,
        probes: Optional[Sequence[ServiceProbe]] = None,
        facts_provider: Callable[[], Dict[str, str]] = collect_runtime_facts,
    ) -> None:
        self.settings = settings
        self.registry = registry
        self.probes = list(probes) if probes is not None else default_probes(settings)
        self._facts_provider = facts_provider

    def _probe_all(self, trace_id: str) -> List[ProbeResult]:
        results = []
        for probe in self.probes:
            result = probe.probe()
            log_probe_result(result, trace_id=trace_id, extra={"target": probe.target})
            results.append(result)
        return results

    def snapshot(self, trace_id: Optional[str] = None) -> ReportSnapshot:
        """Collect facts, run every probe in order, read capability flags."""
        trace_id = trace_id or new_trace_id()
        facts = self._facts_provider()
        results = self._probe_all(trace_id)
        status: Dict[str, bool] = {r.service: r.ok for r in results}
        status[BYTECODE_CACHE] = self.registry.bytecode_cache
        status[OBJECT_CACHE] = self.registry.object_cache
        status[DEBUGGER] = self.registry.debugger
        snap = ReportSnapshot(
            runtime_facts=facts,
            loaded_modules=self.registry.sorted_modules(),
            service_status=status,
            probe_results=tuple(results),
        )
        log_report_snapshot(snap, trace_id=trace_id)
        return snap

    def render(self, snapshot: ReportSnapshot) -> str:
        """Render the snapshot to HTML. All inserted strings are autoescaped."""
        template = _environment().get_template(TEMPLATE_NAME)
        database_label = _DATABASE_LABELS.get(self.settings.database.driver, SERVICE_LABELS[DATABASE])
        return template.render(
            facts=snapshot.runtime_facts,
            services=_service_rows(snapshot, database_label),
            modules=snapshot.loaded_modules,
            self_check=derive_self_check(snapshot.service_status),
            generated_at=time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(snapshot.generated_at)),
        )

    def probe_and_render(self) -> str:
        return self.render(self.snapshot())
