#!/usr/bin/env python3
"""Smoke runner for a deployed probe server.

Steps:
- wait until the server answers GET /
- send every expected probe for the variant, each repeated to check idempotence
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import sys

import httpx

from app.domain.variants import Variant
from app.logging_conf import get_logger, setup_logging
from runner.cli import parse_args
from runner.client import run_probes, wait_for_ready
from runner.probes import expected_probes
from runner.types import SmokeError
from runner.utils import summarize

logger = get_logger("runner")


async def run_smoke(
    *,
    base_url: str,
    variant: Variant | str,
    prefix: str,
    timeout_s: float = 20.0,
    repeat: int = 2,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    variant = Variant(variant)
    await wait_for_ready(base_url, timeout_s, transport=transport)
    probes = expected_probes(variant, prefix)
    results = await run_probes(base_url, probes, repeat=repeat, transport=transport)
    summary, exit_code = summarize(results, variant=variant.value, base_url=base_url)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    setup_logging(service="hello-probe-smoke")
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        code = asyncio.run(
            run_smoke(
                base_url=args.base_url,
                variant=args.variant,
                prefix=args.prefix,
                timeout_s=args.timeout,
                repeat=args.repeat,
            )
        )
    except SmokeError as e:
        logger.error("runner.aborted", extra={"event": "aborted", "error": str(e)})
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
