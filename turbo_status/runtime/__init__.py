"""Local runtime facts and capability flags (no network access)."""

from turbo_status.runtime.capabilities import CapabilityRegistry, build_registry
from turbo_status.runtime.facts import FACT_LABELS, collect_runtime_facts

__all__ = ["CapabilityRegistry", "FACT_LABELS", "build_registry", "collect_runtime_facts"]
