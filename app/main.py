"""FastAPI app factory for the probe servers (variants A and B)."""
from __future__ import annotations

from collections.abc import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse

from app.config import AppConfig, Secrets, load_config, load_secrets
from app.domain.variants import Variant, VariantSpec, get_variant, resolve_body
from app.logging_conf import get_logger, setup_logging

logger = get_logger("app")

# Every method is dispatched the same way; none of them may 405.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]


def _request_path(request: Request) -> str:
    # scope["path"] is the decoded path as sent; request.url.path re-parses it,
    # so an encoded "?" or "#" would cut it short.
    return request.scope["path"]


def _request_url(request: Request) -> str:
    raw = request.scope.get("raw_path")
    url = raw.decode("latin-1") if raw else _request_path(request)
    query = request.scope.get("query_string", b"")
    if query:
        url = f"{url}?{query.decode('latin-1')}"
    return url


def create_app(
    variant: Variant | str | VariantSpec,
    config: AppConfig,
    secrets: Secrets | None = None,
) -> FastAPI:
    spec = variant if isinstance(variant, VariantSpec) else get_variant(variant)
    name = spec.variant.value

    # No docs/openapi routes: every path, /docs included, belongs to the dispatcher.
    app = FastAPI(
        title=f"hello-probe ({name})",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.spec = spec
    app.state.config = config
    app.state.secrets = secrets if secrets is not None else Secrets()

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info(
            "startup",
            extra={"event": "startup", "variant": name, "port": spec.port, "routes": spec.paths},
        )

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        logger.info("shutdown", extra={"event": "shutdown", "variant": name})

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        url = _request_url(request)
        logger.info(
            f"Received request for URL: {url}",
            extra={
                "event": "request_received",
                "variant": name,
                "method": request.method,
                "url": url,
            },
        )
        return await call_next(request)

    @app.api_route("/{full_path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def dispatch(request: Request) -> PlainTextResponse:
        body = resolve_body(spec, config, _request_path(request))
        return PlainTextResponse(content=body, status_code=200)

    return app


def create_variant_a_app() -> FastAPI:
    """uvicorn factory: `uvicorn --factory app.main:create_variant_a_app --port 8080`."""
    setup_logging()
    return create_app(Variant.A, load_config(), load_secrets())


def create_variant_b_app() -> FastAPI:
    """uvicorn factory: `uvicorn --factory app.main:create_variant_b_app --port 8085`."""
    setup_logging()
    return create_app(Variant.B, load_config(), load_secrets())
