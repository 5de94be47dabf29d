"""
Integration tests for the select_bullets.py command line interface.
"""

import importlib.util
import json
import sys
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

PROJECT_ROOT = Path(__file__).parent.parent.parent
FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "resume_data.json"

runner = CliRunner()


def _load_cli():
    spec = importlib.util.spec_from_file_location("select_bullets", PROJECT_ROOT / "scripts" / "select_bullets.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.app


app = _load_cli()


@pytest.fixture(autouse=True)
def reset_logger():
    """The select command points loguru at the runner's captured stdout."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.integration
def test_profiles_command():
    result = runner.invoke(app, ["profiles", "--data", str(FIXTURE_PATH)])

    assert result.exit_code == 0
    assert "platform-engineer" in result.output
    assert "engineering-manager" in result.output
    assert "engineering (1.0)" in result.output


@pytest.mark.integration
def test_presets_command():
    result = runner.invoke(app, ["presets"])

    assert result.exit_code == 0
    assert "length_compact: max_bullets=12" in result.output
    assert "diversity_strict: max_per_company=4, max_per_position=2" in result.output


@pytest.mark.integration
def test_count_command():
    result = runner.invoke(app, ["count", "--data", str(FIXTURE_PATH)])

    assert result.exit_code == 0
    assert "Bullets: 10" in result.output
    assert "Position descriptions: 3" in result.output
    assert "Total selectable: 13" in result.output


@pytest.mark.integration
def test_select_writes_payload(tmp_path):
    output = tmp_path / "payload.json"
    result = runner.invoke(
        app,
        [
            "select",
            "platform-engineer",
            "--data",
            str(FIXTURE_PATH),
            "-p",
            "length_compact",
            "-p",
            "diversity_strict",
            "--log-dir",
            str(tmp_path / "logs"),
            "--no-event",
            "-o",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Platform Engineer: 7 of 13 accomplishments" in result.output

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["metadata"]["selectedBulletIds"][0] == "nw-deploy"
    assert len(payload["selectedBullets"]) == 7
    assert (tmp_path / "logs" / "target.log").exists()


@pytest.mark.integration
def test_select_unknown_profile(tmp_path):
    result = runner.invoke(
        app,
        ["select", "data-scientist", "--data", str(FIXTURE_PATH), "--log-dir", str(tmp_path), "--no-event"],
    )

    assert result.exit_code == 1


@pytest.mark.integration
def test_select_unknown_preset(tmp_path):
    result = runner.invoke(
        app,
        ["select", "platform-engineer", "--data", str(FIXTURE_PATH), "-p", "length_huge", "--log-dir", str(tmp_path)],
    )

    assert result.exit_code == 1


@pytest.mark.integration
def test_missing_data_file(tmp_path):
    result = runner.invoke(app, ["count", "--data", str(tmp_path / "missing.json")])
    assert result.exit_code == 1


@pytest.mark.integration
def test_validate_command(tmp_path):
    result = runner.invoke(app, ["validate", "--data", str(FIXTURE_PATH), "--log-dir", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Valid: 3 companies, 13 selectable items, 2 role profiles" in result.output
    assert (tmp_path / "intake.log").exists()


@pytest.mark.integration
def test_validate_reports_duplicates(tmp_path):
    raw = json.loads(FIXTURE_PATH.read_text(encoding="utf-8"))
    raw["experience"][1]["children"][0]["children"][0]["id"] = "nw-deploy"
    data_path = tmp_path / "resume-data.json"
    data_path.write_text(json.dumps(raw), encoding="utf-8")

    result = runner.invoke(app, ["validate", "--data", str(data_path), "--log-dir", str(tmp_path / "logs")])

    assert result.exit_code == 1
    assert "nw-deploy" in result.output


@pytest.mark.integration
def test_select_then_events(tmp_path, monkeypatch):
    events_file = tmp_path / "events.log"
    monkeypatch.setattr("resumate.utils.event_logging.PIPELINE_EVENTS_FILE", events_file)

    select = runner.invoke(
        app,
        ["select", "engineering-manager", "--data", str(FIXTURE_PATH), "--log-dir", str(tmp_path / "logs")],
    )
    assert select.exit_code == 0, select.output

    result = runner.invoke(app, ["events", "--events-file", str(events_file), "--compact"])

    assert result.exit_code == 0
    event = json.loads(result.output.strip().splitlines()[-1])
    assert event["event_type"] == "resume_prepared"
    assert event["role_profile_id"] == "engineering-manager"
    assert event["source"] == "cli"


@pytest.mark.integration
def test_events_empty_log(tmp_path):
    result = runner.invoke(app, ["events", "--events-file", str(tmp_path / "none.log")])
    assert result.exit_code == 1
