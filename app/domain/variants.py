from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from ..config import AppConfig

__all__ = [
    "Variant",
    "Responder",
    "VariantSpec",
    "HEALTH_BODY",
    "NEW_ROUTE_BODY",
    "GREETING_SUFFIX",
    "greeting",
    "resolve_body",
    "VARIANTS",
    "get_variant",
]

HEALTH_BODY = "ok"
NEW_ROUTE_BODY = "new Route!"
GREETING_SUFFIX = " - Hello World!"

Responder = Callable[[AppConfig], str]


class Variant(str, Enum):
    A = "a"
    B = "b"


def greeting(config: AppConfig) -> str:
    """Default body: the configured prefix followed by the greeting."""
    return config.prefix + GREETING_SUFFIX


def _fixed(body: str) -> Responder:
    return lambda _config: body


@dataclass(frozen=True)
class VariantSpec:
    """One server flavour: its port and its exact-path route table.

    Paths not present in `routes` fall through to `default`.
    """

    variant: Variant
    port: int
    routes: Mapping[str, Responder] = field(default_factory=dict)
    default: Responder = greeting

    def __post_init__(self) -> None:
        object.__setattr__(self, "routes", MappingProxyType(dict(self.routes)))

    @property
    def paths(self) -> list[str]:
        return sorted(self.routes)


def resolve_body(spec: VariantSpec, config: AppConfig, path: str) -> str:
    """Pick the response body for `path` by exact match, else the default."""
    responder = spec.routes.get(path, spec.default)
    return responder(config)


VARIANTS: Mapping[Variant, VariantSpec] = MappingProxyType(
    {
        Variant.A: VariantSpec(
            variant=Variant.A,
            port=8080,
            routes={
                "/health": _fixed(HEALTH_BODY),
                "/newroute": _fixed(NEW_ROUTE_BODY),
            },
        ),
        # B intentionally has no special routes and listens on a different port.
        Variant.B: VariantSpec(variant=Variant.B, port=8085),
    }
)


def get_variant(name: str | Variant) -> VariantSpec:
    """Look up a variant by enum or case-insensitive name ("a"/"b")."""
    try:
        key = name if isinstance(name, Variant) else Variant(name.strip().lower())
    except ValueError as e:
        raise ValueError(f"unknown variant: {name!r}") from e
    return VARIANTS[key]
