"""ServiceProbe interface: one connectivity attempt per call, reported as an explicit ProbeResult.

A probe's check() raises ProbeUnreachable on failure; probe() converts that,
and anything else a client library throws, into ProbeResult(reachable=False).
Nothing propagates past probe().
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from turbo_status.config.settings import DEFAULT_PROBE_TIMEOUT_SEC

logger = logging.getLogger(__name__)


class ProbeUnreachable(Exception):
    """A service could not be reached: refused, timed out, protocol error or no client library."""

    def __init__(self, service: str, reason: str) -> None:
        super().__init__(f"{service}: {reason}")
        self.service = service
        self.reason = reason


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single probe."""

    service: str
    reachable: bool
    error: Optional[ProbeUnreachable] = None
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.reachable and self.error is None

    def to_dict(self) -> dict:
        return {
            "service": self.service,
            "reachable": self.reachable,
            "error": self.error.reason if self.error is not None else None,
            "elapsed_ms": round(self.elapsed_ms, 1),
        }


class ServiceProbe(ABC):
    """Abstract probe for one named network service."""

    #: Service key in ReportSnapshot.service_status
    service: str = ""

    def __init__(self, timeout_sec: float = DEFAULT_PROBE_TIMEOUT_SEC) -> None:
        self.timeout_sec = timeout_sec

    @property
    @abstractmethod
    def target(self) -> str:
        """host:port being probed, for logs."""

    @abstractmethod
    def check(self) -> None:
        """Connect, verify and release. Raise ProbeUnreachable on any failure."""

    def unreachable(self, reason: object) -> ProbeUnreachable:
        return ProbeUnreachable(self.service, str(reason) or type(reason).__name__)

    def probe(self) -> ProbeResult:
        """Run check() once and return the result; never raises."""
        start = time.monotonic()
        error: Optional[ProbeUnreachable] = None
        try:
            self.check()
        except ProbeUnreachable as e:
            error = e
        except Exception as e:
            logger.debug("%s probe raised unexpected %s", self.service, type(e).__name__)
            error = self.unreachable(e)
        elapsed_ms = (time.monotonic() - start) * 1000.0
        return ProbeResult(
            service=self.service,
            reachable=error is None,
            error=error,
            elapsed_ms=elapsed_ms,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(target={self.target!r}, timeout_sec={self.timeout_sec})"
