"""Build the list of expected request/response pairs for a variant.

Expectations come from the same variant registry the server dispatches on,
plus a handful of fallback paths that must land on the greeting.
"""
from __future__ import annotations

from app.config import AppConfig
from app.domain.variants import Variant, get_variant, greeting, resolve_body
from runner.types import Probe

# Paths that no variant routes exactly; they must all get the default body.
FALLBACK_PATHS = ["/", "/foo", "/health/extra", "/newroute/", "/unknown?x=1"]


def expected_probes(variant: Variant | str, prefix: str) -> list[Probe]:
    spec = get_variant(variant)
    config = AppConfig(prefix=prefix)
    probes: list[Probe] = []

    # Exact routes, plus every route A knows about so B is checked for not special-casing them.
    known = sorted(set(spec.paths) | set(get_variant(Variant.A).paths))
    for path in known:
        probes.append(Probe("GET", path, resolve_body(spec, config, path)))

    for path in FALLBACK_PATHS:
        probes.append(Probe("GET", path, greeting(config)))

    # Method must not matter.
    probes.append(Probe("POST", "/", greeting(config)))
    probes.append(Probe("DELETE", "/foo", greeting(config)))
    return probes
