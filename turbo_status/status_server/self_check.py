"""Derive overall self_check and status_lamp from per-service reachability."""

from typing import Any, Dict, Iterable, List, Mapping

from turbo_status.probes import CACHE_PRIMARY, CACHE_SECONDARY, DATABASE

# Only network services count toward the lamp; capability flags are informational
NETWORK_SERVICES = (DATABASE, CACHE_PRIMARY, CACHE_SECONDARY)


def derive_self_check(
    service_status: Mapping[str, bool],
    services: Iterable[str] = NETWORK_SERVICES,
) -> Dict[str, Any]:
    """Compute self_check (ok/degraded/blocked), block_reasons, and status_lamp (green/yellow/red).

    Args:
        service_status: service name -> reachable, as in ReportSnapshot.service_status.
        services: which entries count. A missing entry counts as unreachable.

    Returns:
        {"self_check": "ok"|"degraded"|"blocked", "block_reasons": [...], "status_lamp": "green"|"yellow"|"red"}
    """
    services = tuple(services)
    block_reasons: List[str] = [
        f"{name.replace('-', '_')}_unreachable" for name in services if not service_status.get(name, False)
    ]

    if not block_reasons:
        return {"self_check": "ok", "block_reasons": [], "status_lamp": "green"}

    if len(block_reasons) == len(services):
        return {"self_check": "blocked", "block_reasons": block_reasons, "status_lamp": "red"}

    return {"self_check": "degraded", "block_reasons": block_reasons, "status_lamp": "yellow"}
