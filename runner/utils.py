from __future__ import annotations

from runner.types import ProbeResult


def summarize(results: list[ProbeResult], *, variant: str, base_url: str) -> tuple[dict, int]:
    """Compute summary dict and an exit code from probe results."""
    failures: list[dict] = []
    unstable: list[str] = []
    for res in results:
        if not res.stable:
            unstable.append(f"{res.probe.method} {res.probe.path}")
        if res.passed:
            continue
        failures.append(
            {
                "method": res.probe.method,
                "path": res.probe.path,
                "expected": res.probe.expected_body,
                "got": res.bodies[-1] if res.bodies else None,
                "status_code": res.status_codes[-1] if res.status_codes else None,
                "error": res.error,
            }
        )

    passed = len(results) - len(failures)
    summary = {
        "component": "runner",
        "event": "summary",
        "variant": variant,
        "base_url": base_url,
        "probes": len(results),
        "passed": passed,
        "failed": len(failures),
        "unstable": unstable,
        "failures": failures,
    }
    exit_code = 0 if (results and not failures and not unstable) else 1
    return summary, exit_code
