"""Tests for sessions, config loading and the CLI."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import io
import json

import pytest

from snapshield import (
    ConfigurationError,
    DetectedEntity,
    EntityType,
    PipelineConfig,
    ScrubSession,
    create_session,
    load_config,
    load_from_yaml,
)
from snapshield import cli


# ── Session ──────────────────────────────────────────────────────────

def test_session_is_consistent_across_calls():
    session = ScrubSession.create(config=PipelineConfig(seed=1))
    first = session.scrub_text("Call 555-123-4567")
    second = session.scrub_text("Again: 555-123-4567")
    assert first.split()[-1] == second.split()[-1]
    assert session.stats["mapper_size"] == 1


def test_session_state_transfers():
    session = ScrubSession.create(config=PipelineConfig(seed=2))
    before = session.scrub_text("mail ops@acme.com")

    other = ScrubSession.create(config=PipelineConfig(seed=99))
    assert other.import_state(session.export_state()) == 0
    assert other.scrub_text("mail ops@acme.com") == before


def test_session_process_and_reset():
    session = ScrubSession.create()
    text = "Jane Doe"
    result = session.process(text, {EntityType.PROPER_NOUN: [DetectedEntity(EntityType.PROPER_NOUN, text, 0, 8)]})
    assert len(result) == 1
    assert session.mapper.size == 1

    session.reset()
    assert session.mapper.size == 0
    assert session.stats == {"mapper_size": 0, "redaction_mode": "random", "mappings": {}}


# ── Config ───────────────────────────────────────────────────────────

def test_load_config_nested_and_flat():
    nested = load_config({"snapshield": {
        "redaction_mode": "blackout",
        "enabled_types": ["email", "money"],
        "seed": 4,
    }})
    assert nested.redaction_mode == "blackout"
    assert nested.enabled_types == {EntityType.EMAIL, EntityType.MONEY}
    assert nested.seed == 4

    flat = load_config({"magnitude_variance": 10, "unknown_key": True})
    assert flat.magnitude_variance == 10


@pytest.mark.parametrize("data", [
    {"redaction_mode": "erase"},
    {"enabled_types": ["passport"]},
    {"magnitude_variance": "lots"},
    {"snapshield": ["not", "a", "mapping"]},
])
def test_load_config_errors(data):
    with pytest.raises(ConfigurationError):
        load_config(data)


def test_load_from_yaml(tmp_path):
    path = tmp_path / "snapshield.yaml"
    path.write_text(
        "snapshield:\n"
        "  redaction_mode: random\n"
        "  magnitude_variance: 15\n"
        "  enabled_types: [phone]\n"
    )
    config = load_config(load_from_yaml(path))
    assert config.magnitude_variance == 15
    assert config.enabled_types == {EntityType.PHONE}


def test_load_from_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigurationError):
        load_from_yaml(path)


def test_create_session_variants():
    assert isinstance(create_session(), ScrubSession)
    assert isinstance(create_session(PipelineConfig(seed=1)), ScrubSession)
    assert isinstance(create_session({"seed": 1}), ScrubSession)

    noop = create_session({"snapshield": {"enabled": False}})
    assert noop.scrub_text("Call 555-123-4567") == "Call 555-123-4567"
    assert noop.scrub("x").substitutions == []
    assert noop.stats["mapper_size"] == 0


# ── CLI ──────────────────────────────────────────────────────────────

def run_cli(monkeypatch, capsys, argv, stdin=""):
    monkeypatch.setattr(sys, "stdin", io.StringIO(stdin))
    code = cli.main(argv)
    return code, capsys.readouterr()


def test_cli_scrub_persists_state(monkeypatch, capsys, tmp_path):
    state = str(tmp_path / "state.json")
    code, out = run_cli(monkeypatch, capsys, ["--state", state, "--seed", "3", "scrub"],
                        "Call 555-123-4567")
    assert code == 0
    first = json.loads(out.out)
    assert first["substitutions"][0]["type"] == "phone"
    assert "555-123-4567" not in first["text"]

    code, out = run_cli(monkeypatch, capsys, ["--state", state, "scrub"], "555-123-4567 again")
    second = json.loads(out.out)
    assert second["substitutions"][0]["replacement"] == first["substitutions"][0]["replacement"]

    code, out = run_cli(monkeypatch, capsys, ["--state", state, "dump"])
    assert ["phone:555-123-4567", first["substitutions"][0]["replacement"]] in json.loads(out.out)["mappings"]

    code, out = run_cli(monkeypatch, capsys, ["--state", state, "clear"])
    assert json.loads(open(state).read())["mappings"] == []


def test_cli_recovers_from_non_mapping_state(monkeypatch, capsys, tmp_path):
    state = tmp_path / "state.json"
    state.write_text("[]")
    code, out = run_cli(monkeypatch, capsys, ["--state", str(state), "scrub"], "Call 555-123-4567")
    assert code == 0
    assert json.loads(out.out)["mapper_size"] == 1


def test_cli_blackout_and_types(monkeypatch, capsys, tmp_path):
    state = str(tmp_path / "state.json")
    code, out = run_cli(monkeypatch, capsys,
                        ["--state", state, "--mode", "blackout", "--types", "email", "scrub"],
                        "mail a@b.com or call 555-123-4567")
    result = json.loads(out.out)
    assert result["text"] == "mail ███████ or call 555-123-4567"


def test_cli_reports_config_errors(monkeypatch, capsys, tmp_path):
    code, out = run_cli(monkeypatch, capsys,
                        ["--state", str(tmp_path / "s.json"), "--variance", "500", "scrub"], "x")
    assert code == 1
    assert "magnitude_variance" in out.err
