from __future__ import annotations

import pytest

from app import server as server_mod
from app.cli import parse_args
from app.domain.variants import Variant


@pytest.fixture
def fake_uvicorn(monkeypatch):
    calls: list[dict] = []

    def _run(app, **kwargs):
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(server_mod.uvicorn, "run", _run)
    return calls


def test_parse_args_defaults(monkeypatch):
    monkeypatch.delenv("VARIANT", raising=False)
    monkeypatch.delenv("HOST", raising=False)
    args = parse_args([])
    assert args.variant is Variant.A
    assert args.host == "0.0.0.0"
    assert args.config is None


def test_parse_args_variant_b():
    assert parse_args(["--variant", "b"]).variant is Variant.B


def test_parse_args_rejects_unknown_variant():
    with pytest.raises(SystemExit):
        parse_args(["--variant", "c"])


def test_shortcut_does_not_take_variant_flag():
    assert parse_args([], variant=Variant.B).variant is Variant.B
    with pytest.raises(SystemExit):
        parse_args(["--variant", "a"], variant=Variant.B)


def test_port_is_not_configurable():
    with pytest.raises(SystemExit):
        parse_args(["--port", "9000"])


@pytest.mark.parametrize("entry, port", [(server_mod.main_a, 8080), (server_mod.main_b, 8085)])
def test_entrypoints_bind_variant_port(entry, port, fake_uvicorn, write_json):
    config = write_json("configs.json", {"prefix": "v2"})
    entry(["--config", str(config), "--secrets", str(config.parent / "absent.json"), "--host", "127.0.0.1"])

    (call,) = fake_uvicorn
    assert call["port"] == port
    assert call["host"] == "127.0.0.1"
    assert call["log_config"] is None
    assert call["app"].state.config.prefix == "v2"


def test_serve_passes_secrets_through(fake_uvicorn, write_json):
    config = write_json("configs.json", {"prefix": "v2"})
    secrets = write_json("secrets.json", {"token": "t"})
    server_mod.serve("b", config_path=str(config), secrets_path=str(secrets))
    assert fake_uvicorn[0]["app"].state.secrets.names == ["token"]


def test_bad_config_exits_nonzero(fake_uvicorn, tmp_path):
    with pytest.raises(SystemExit) as exc:
        server_mod.main(["--variant", "a", "--config", str(tmp_path / "missing.json")])
    assert exc.value.code == 1
    assert fake_uvicorn == []
