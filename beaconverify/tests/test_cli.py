from __future__ import annotations

import json

import httpx
import pytest
import respx
from typer.testing import CliRunner

from beaconverify.cli import EXIT_ERROR, EXIT_INVALID, app

runner = CliRunner()
BASE = "http://cli-beacon.test"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("URL", "CHAIN_HASH", "TIMEOUT_S", "PUBLIC_KEY", "MESSAGE_FORMAT", "DST"):
        monkeypatch.delenv(f"BEACONVERIFY_{name}", raising=False)


def _write_record(tmp_path, record: dict) -> str:
    p = tmp_path / "round.json"
    p.write_text(json.dumps(record), encoding="utf-8")
    return str(p)


def test_verify_valid_record(tmp_path, chain):
    rec = chain.latest()
    path = _write_record(tmp_path, rec.to_dict())
    result = runner.invoke(app, ["verify", path, "--key", chain.public_key.hex()])
    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out == {"valid": True, "round": int(rec.round), "randomness": rec.randomness.hex()}


def test_verify_from_stdin_with_env_key(monkeypatch, chain):
    monkeypatch.setenv("BEACONVERIFY_PUBLIC_KEY", chain.public_key.hex())
    rec = chain.rounds[1]
    result = runner.invoke(app, ["verify", "-", "--no-pretty"], input=json.dumps(rec.to_dict()))
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["round"] == 1


def test_verify_reports_failure_kind(tmp_path, chain):
    payload = chain.latest().to_dict()
    payload["round"] += 1
    path = _write_record(tmp_path, payload)
    result = runner.invoke(app, ["verify", path, "--key", chain.public_key.hex()])
    assert result.exit_code == EXIT_INVALID
    out = json.loads(result.stdout)
    assert out["valid"] is False
    assert out["kind"] == "signature_invalid"


def test_verify_bad_key_is_decode_error(tmp_path, chain):
    path = _write_record(tmp_path, chain.latest().to_dict())
    result = runner.invoke(app, ["verify", path, "--key", "abcd"])
    assert result.exit_code == EXIT_INVALID
    assert json.loads(result.stdout)["kind"] == "decode_error"


def test_verify_requires_key(tmp_path, chain):
    path = _write_record(tmp_path, chain.latest().to_dict())
    result = runner.invoke(app, ["verify", path])
    assert result.exit_code == EXIT_ERROR


def test_verify_rejects_unreadable_record(tmp_path, chain):
    p = tmp_path / "round.json"
    p.write_text("[1, 2, 3]", encoding="utf-8")
    result = runner.invoke(app, ["verify", str(p), "--key", chain.public_key.hex()])
    assert result.exit_code == EXIT_ERROR


@respx.mock
def test_get_fetches_key_and_verifies(chain):
    rec = chain.latest()
    respx.get(f"{BASE}/info").mock(
        return_value=httpx.Response(200, json={"public_key": chain.public_key.hex()})
    )
    respx.get(f"{BASE}/public/latest").mock(return_value=httpx.Response(200, json=rec.to_dict()))
    result = runner.invoke(app, ["get", "--url", BASE])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["randomness"] == rec.randomness.hex()


@respx.mock
def test_get_with_pinned_key_skips_info(chain):
    rec = chain.rounds[1]
    info = respx.get(f"{BASE}/info")
    respx.get(f"{BASE}/public/1").mock(return_value=httpx.Response(200, json=rec.to_dict()))
    result = runner.invoke(
        app, ["get", "--url", BASE, "--round", "1", "--key", chain.public_key.hex()]
    )
    assert result.exit_code == 0, result.output
    assert not info.called


@respx.mock
def test_get_transport_failure(chain):
    respx.get(f"{BASE}/public/latest").mock(return_value=httpx.Response(500))
    result = runner.invoke(app, ["get", "--url", BASE, "--key", chain.public_key.hex()])
    assert result.exit_code == EXIT_ERROR


@respx.mock
def test_info(chain):
    respx.get(f"{BASE}/info").mock(
        return_value=httpx.Response(200, json={"public_key": chain.public_key.hex(), "period": 3})
    )
    result = runner.invoke(app, ["info", "--url", BASE])
    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out["public_key"] == chain.public_key.hex()
    assert out["period"] == 3


def test_invalid_url_option():
    result = runner.invoke(app, ["get", "--url", "not-a-url"])
    assert result.exit_code == EXIT_ERROR


@pytest.mark.parametrize("field,value", [("signature", 123), ("previous_signature", ["ab"])])
def test_verify_non_string_byte_field_is_input_error(tmp_path, chain, field, value):
    payload = chain.latest().to_dict()
    payload[field] = value
    path = _write_record(tmp_path, payload)
    result = runner.invoke(app, ["verify", path, "--key", chain.public_key.hex()])
    assert result.exit_code == EXIT_ERROR
    assert "Invalid round record" in result.output


def test_verify_rejects_malformed_config_section(tmp_path, chain):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("scheme: concat\n", encoding="utf-8")
    path = _write_record(tmp_path, chain.latest().to_dict())
    result = runner.invoke(
        app, ["verify", path, "--key", chain.public_key.hex(), "--config", str(cfg)]
    )
    assert result.exit_code == EXIT_ERROR
    assert "Invalid configuration" in result.output


@pytest.mark.parametrize("level", ["basicconfig", "verbose", "root"])
def test_unknown_log_level_rejected(tmp_path, chain, level):
    path = _write_record(tmp_path, chain.latest().to_dict())
    result = runner.invoke(
        app, ["--log-level", level, "verify", path, "--key", chain.public_key.hex()]
    )
    assert result.exit_code == 2
    assert "--log-level" in result.output


def test_known_log_level_is_case_insensitive(tmp_path, chain):
    path = _write_record(tmp_path, chain.latest().to_dict())
    result = runner.invoke(
        app, ["--log-level", "debug", "verify", path, "--key", chain.public_key.hex()]
    )
    assert result.exit_code == 0, result.output


@respx.mock
def test_get_with_config_pinned_key_skips_info(monkeypatch, chain):
    monkeypatch.setenv("BEACONVERIFY_PUBLIC_KEY", chain.public_key.hex())
    rec = chain.latest()
    info = respx.get(f"{BASE}/info")
    respx.get(f"{BASE}/public/latest").mock(return_value=httpx.Response(200, json=rec.to_dict()))
    result = runner.invoke(app, ["get", "--url", BASE])
    assert result.exit_code == 0, result.output
    assert not info.called
    assert json.loads(result.stdout)["round"] == int(rec.round)
