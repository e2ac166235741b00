from __future__ import annotations

import argparse
import os

from app.domain.variants import Variant


def parse_args(argv: list[str], *, variant: Variant | None = None) -> argparse.Namespace:
    """Parse CLI arguments for a probe server.

    When `variant` is given (the per-variant shortcuts) --variant is not accepted.
    """
    parser = argparse.ArgumentParser(description="Fixed-response HTTP probe server")
    if variant is None:
        parser.add_argument(
            "--variant",
            type=Variant,
            choices=list(Variant),
            metavar="{a,b}",
            default=os.getenv("VARIANT", Variant.A.value),
        )
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--config", default=None, help="path to configs.json (default $CONFIGS_PATH)")
    parser.add_argument("--secrets", default=None, help="path to secrets.json (default $SECRETS_PATH)")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"), dest="log_level")
    args = parser.parse_args(argv)
    if variant is not None:
        args.variant = variant
    return args
