from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable

import httpx

from app.logging_conf import get_logger
from runner.types import Probe, ProbeError, ProbeResult, SmokeError

logger = get_logger("runner.client")


def _client(
    base_url: str, timeout: float, transport: httpx.AsyncBaseTransport | None
) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)


async def wait_for_ready(
    base_url: str,
    timeout_s: float = 20.0,
    *,
    poll_interval_s: float = 0.25,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Poll GET / until it answers 200 or raise after `timeout_s`.

    Both variants answer / with 200, so this works without knowing which one
    is deployed.
    """
    deadline = time.monotonic() + timeout_s
    async with _client(base_url, 5.0, transport) as client:
        while time.monotonic() < deadline:
            try:
                r = await client.get("/")
                if r.status_code == 200:
                    logger.info("server.ready", extra={"event": "server_ready", "base_url": base_url})
                    return
            except httpx.HTTPError:
                pass
            await asyncio.sleep(poll_interval_s)
    raise SmokeError(f"server at {base_url} did not answer within {timeout_s}s")


async def send_probe(client: httpx.AsyncClient, probe: Probe, *, retries: int = 2) -> httpx.Response:
    """Send one probe request, retrying transport errors."""
    last_err: Exception | None = None
    for attempt in range(retries):
        try:
            return await client.request(probe.method, probe.path)
        except httpx.HTTPError as e:
            last_err = e
            logger.warning(
                "probe.retry",
                extra={
                    "event": "probe_retry",
                    "method": probe.method,
                    "path": probe.path,
                    "attempt": attempt + 1,
                    "error": str(e),
                },
            )
    raise ProbeError(f"{probe.method} {probe.path} failed: {last_err}")


async def run_probe(client: httpx.AsyncClient, probe: Probe, *, repeat: int = 2) -> ProbeResult:
    """Send `probe` `repeat` times in a row and record every answer."""
    result = ProbeResult(probe=probe)
    for _ in range(repeat):
        try:
            r = await send_probe(client, probe)
        except ProbeError as e:
            result.error = str(e)
            break
        result.status_codes.append(r.status_code)
        result.bodies.append(r.text)
    if not result.passed:
        logger.warning(
            "probe.failed",
            extra={
                "event": "probe_failed",
                "method": probe.method,
                "path": probe.path,
                "expected": probe.expected_body,
                "got": result.bodies,
                "status_codes": result.status_codes,
                "error": result.error,
            },
        )
    return result


async def run_probes(
    base_url: str,
    probes: Iterable[Probe],
    *,
    repeat: int = 2,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[ProbeResult]:
    """Run all probes concurrently; ordering of the results follows `probes`."""
    probes = list(probes)
    async with _client(base_url, 10.0, transport) as client:
        results = await asyncio.gather(*(run_probe(client, p, repeat=repeat) for p in probes))
    logger.info(
        "probe.summary",
        extra={
            "event": "probe_summary",
            "requested": len(probes),
            "passed": sum(1 for r in results if r.passed),
        },
    )
    return list(results)
