from __future__ import annotations

import argparse
import os

from app.domain.variants import Variant


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the smoke runner."""
    parser = argparse.ArgumentParser(description="Probe a running hello-probe server")
    parser.add_argument("--base-url", default=os.getenv("BASE_URL", "http://127.0.0.1:8080"))
    parser.add_argument(
        "--variant",
        type=Variant,
        choices=list(Variant),
        metavar="{a,b}",
        default=os.getenv("VARIANT", Variant.A.value),
    )
    parser.add_argument("--prefix", required=True, help="prefix the server was configured with")
    parser.add_argument("--timeout", type=float, default=20.0)
    parser.add_argument("--repeat", type=_positive_int, default=2, help="times to send each probe")
    return parser.parse_args(argv)
