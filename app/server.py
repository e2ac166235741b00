#!/usr/bin/env python3
"""Process entrypoints: load config, build the app, hand it to uvicorn.

The port comes from the variant (A: 8080, B: 8085). A bind failure is left to
uvicorn, which exits non-zero.
"""
from __future__ import annotations

import sys

import uvicorn

from app.cli import parse_args
from app.config import ConfigError, load_config, load_secrets
from app.domain.variants import Variant, get_variant
from app.logging_conf import get_logger, setup_logging
from app.main import create_app

logger = get_logger("server")


def serve(
    variant: Variant | str,
    *,
    host: str = "0.0.0.0",
    config_path: str | None = None,
    secrets_path: str | None = None,
) -> None:
    """Load config and secrets, then block serving the variant's port."""
    spec = get_variant(variant)
    config = load_config(config_path)
    secrets = load_secrets(secrets_path)
    app = create_app(spec, config, secrets)
    logger.info(
        "server.listen",
        extra={"event": "listen", "variant": spec.variant.value, "host": host, "port": spec.port},
    )
    # log_config=None keeps uvicorn from replacing our JSON handler.
    uvicorn.run(app, host=host, port=spec.port, log_config=None)


def main(argv: list[str] | None = None, *, variant: Variant | None = None) -> None:
    args = parse_args(sys.argv[1:] if argv is None else argv, variant=variant)
    setup_logging(args.log_level)
    try:
        serve(
            args.variant,
            host=args.host,
            config_path=args.config,
            secrets_path=args.secrets,
        )
    except ConfigError as e:
        logger.error("server.config_error", extra={"event": "config_error", "error": str(e)})
        raise SystemExit(1) from e


def main_a(argv: list[str] | None = None) -> None:
    main(argv, variant=Variant.A)


def main_b(argv: list[str] | None = None) -> None:
    main(argv, variant=Variant.B)


if __name__ == "__main__":
    main()
