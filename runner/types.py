from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Probe:
    """One request to send and the body it must come back with."""

    method: str
    path: str
    expected_body: str


@dataclass
class ProbeResult:
    """Outcome of sending a probe `repeat` times."""

    probe: Probe
    status_codes: list[int] = field(default_factory=list)
    bodies: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def stable(self) -> bool:
        """All repetitions returned byte-identical bodies."""
        return len(set(self.bodies)) <= 1

    @property
    def passed(self) -> bool:
        return (
            self.error is None
            and bool(self.bodies)
            and all(code == 200 for code in self.status_codes)
            and all(body == self.probe.expected_body for body in self.bodies)
        )


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., server never ready)."""


class ProbeError(SmokeError):
    """Raised when a single probe fails to get any response after retries."""
