from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from app.config import AppConfig
from app.domain.variants import Variant
from app.main import create_app, create_variant_a_app, create_variant_b_app

from .conftest import GREETING


def test_scenario_from_deployment_check(client_a, client_b):
    r = client_a.get("/health")
    assert (r.status_code, r.text) == (200, "ok")

    r = client_a.get("/unknown")
    assert (r.status_code, r.text) == (200, GREETING)

    r = client_b.get("/anything")
    assert (r.status_code, r.text) == (200, GREETING)


def test_variant_a_newroute(client_a):
    r = client_a.get("/newroute")
    assert r.status_code == 200
    assert r.text == "new Route!"


@pytest.mark.parametrize("path", ["/", "/foo", "/health/extra", "/newroute/x", "/a/b/c"])
def test_variant_a_other_paths_greet(client_a, path):
    r = client_a.get(path)
    assert r.status_code == 200
    assert r.text == GREETING


@pytest.mark.parametrize("path", ["/", "/health", "/newroute", "/docs", "/openapi.json", "/redoc"])
def test_variant_b_ignores_path(client_b, path):
    r = client_b.get(path)
    assert r.status_code == 200
    assert r.text == GREETING


def test_framework_pages_do_not_shadow_dispatch(client_a):
    for path in ("/docs", "/redoc", "/openapi.json"):
        r = client_a.get(path)
        assert (r.status_code, r.text) == (200, GREETING)


def test_query_string_does_not_affect_dispatch(client_a):
    assert client_a.get("/health?verbose=1").text == "ok"
    assert client_a.get("/?health").text == GREETING


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
def test_method_is_ignored(client_a, client_b, method):
    r = client_a.request(method, "/health", content=b"ignored body")
    assert (r.status_code, r.text) == (200, "ok")
    r = client_b.request(method, "/health")
    assert (r.status_code, r.text) == (200, GREETING)


def test_head_is_answered_with_200(client_a):
    r = client_a.head("/newroute")
    assert r.status_code == 200


def test_responses_are_plain_text(client_a):
    r = client_a.get("/health")
    assert r.headers["content-type"].startswith("text/plain")


def test_repeated_requests_are_byte_identical(client_a, client_b):
    for client in (client_a, client_b):
        for path in ("/health", "/newroute", "/x"):
            bodies = {client.get(path).content for _ in range(5)}
            assert len(bodies) == 1


def test_prefix_comes_from_injected_config():
    client = TestClient(create_app("b", AppConfig(prefix="canary")))
    assert client.get("/").text == "canary - Hello World!"


def test_each_request_logs_its_url(client_a, caplog):
    caplog.set_level(logging.INFO, logger="app")
    client_a.get("/foo?x=1")
    client_a.post("/health")

    received = [r for r in caplog.records if getattr(r, "event", None) == "request_received"]
    assert [r.getMessage() for r in received] == [
        "Received request for URL: /foo?x=1",
        "Received request for URL: /health",
    ]
    assert received[0].variant == "a"
    assert received[1].method == "POST"


def test_app_state_carries_config_and_variant(config):
    app = create_app(Variant.A, config)
    assert app.state.config is config
    assert app.state.spec.port == 8080
    assert app.state.secrets.names == []


@pytest.mark.parametrize("path", ["/health%3Fx=1", "/health%23frag", "/newroute%3F"])
def test_encoded_delimiters_stay_in_the_path(client_a, path):
    r = client_a.get(path)
    assert (r.status_code, r.text) == (200, GREETING)


def test_logged_url_is_the_url_as_sent(client_a, caplog):
    caplog.set_level(logging.INFO, logger="app")
    client_a.get("/health%3Fx=1?y=2")

    (record,) = [r for r in caplog.records if getattr(r, "event", None) == "request_received"]
    assert record.url == "/health%3Fx=1?y=2"


@pytest.mark.parametrize(
    "factory, body",
    [(create_variant_a_app, "ok"), (create_variant_b_app, "v9 - Hello World!")],
)
def test_uvicorn_factories_read_env_paths(factory, body, write_json, monkeypatch):
    config = write_json("configs.json", {"prefix": "v9"})
    monkeypatch.setenv("CONFIGS_PATH", str(config))
    monkeypatch.setenv("SECRETS_PATH", str(config.parent / "absent.json"))

    client = TestClient(factory())
    assert client.get("/health").text == body
