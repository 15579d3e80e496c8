"""CLI tests: breakdown, validate-acts, validate-breakdown, export."""
from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

_ACTS = {
    "schema_version": "1.0.0",
    "input": {
        "title": "Launch video",
        "logline": "Four beats to a launch.",
        "tone_and_manner": "creative",
        "development": "narrative",
        "intensity": "medium",
    },
    "acts": [
        {
            "id": f"act_{n}",
            "order": n,
            "title": f"Act {n}",
            "description": "Beat.",
            "duration": 30,
            "key_points": ["logo"],
        }
        for n in range(1, 5)
    ],
}


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _run(*args: str):
    return subprocess.run(
        [sys.executable, "-m", "shot_planner", "--log-level", "WARNING", *args],
        capture_output=True, text=True,
    )


# ---------------------------------------------------------------------------
# breakdown
# ---------------------------------------------------------------------------

class TestBreakdownCommand:

    def test_writes_valid_breakdown(self, tmp_path: Path):
        acts = _write(tmp_path / "acts.json", _ACTS)
        out = tmp_path / "breakdown.json"
        r = _run("breakdown", "--acts", str(acts), "--output", str(out))
        assert r.returncode == 0, r.stdout + r.stderr
        assert r.stdout.startswith("OK: wrote")
        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data["shots"]) == 12
        assert data["created_at"] == "1970-01-01T00:00:00Z"

    def test_output_is_deterministic(self, tmp_path: Path):
        acts = _write(tmp_path / "acts.json", _ACTS)
        first, second = tmp_path / "a.json", tmp_path / "b.json"
        _run("breakdown", "--acts", str(acts), "--output", str(first))
        _run("breakdown", "--acts", str(acts), "--output", str(second))
        assert first.read_bytes() == second.read_bytes()

    def test_options(self, tmp_path: Path):
        acts = _write(tmp_path / "acts.json", _ACTS)
        out = tmp_path / "breakdown.json"
        r = _run("breakdown", "--acts", str(acts), "--output", str(out),
                 "--target-shots", "8", "--no-inserts")
        assert r.returncode == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["distribution"] == [2, 2, 2, 2]
        assert data["insert_shots"] == []

    def test_default_template(self, tmp_path: Path):
        acts = _write(tmp_path / "acts.json", _ACTS)
        out = tmp_path / "breakdown.json"
        r = _run("breakdown", "--acts", str(acts), "--output", str(out), "--default-template")
        assert r.returncode == 0
        assert json.loads(out.read_text(encoding="utf-8"))["breakdown_id"].startswith("tpl_")

    def test_target_below_act_count_fails(self, tmp_path: Path):
        acts = _write(tmp_path / "acts.json", _ACTS)
        out = tmp_path / "breakdown.json"
        r = _run("breakdown", "--acts", str(acts), "--output", str(out), "--target-shots", "3")
        assert r.returncode == 1
        assert "target_shot_count_covers_acts" in r.stdout
        assert not out.exists()

    def test_zero_target_fails(self, tmp_path: Path):
        acts = _write(tmp_path / "acts.json", _ACTS)
        out = tmp_path / "breakdown.json"
        r = _run("breakdown", "--acts", str(acts), "--output", str(out), "--target-shots", "0")
        assert r.returncode == 1
        assert "target_shot_count_positive" in r.stdout
        assert not out.exists()

    def test_missing_acts_file(self, tmp_path: Path):
        r = _run("breakdown", "--acts", str(tmp_path / "nope.json"),
                 "--output", str(tmp_path / "out.json"))
        assert r.returncode == 1
        assert r.stdout.startswith("ERROR:")


# ---------------------------------------------------------------------------
# validate-acts / validate-breakdown
# ---------------------------------------------------------------------------

class TestValidateCommands:

    def test_valid_acts(self, tmp_path: Path):
        r = _run("validate-acts", "--acts", str(_write(tmp_path / "acts.json", _ACTS)))
        assert r.returncode == 0

    def test_three_acts_invalid(self, tmp_path: Path):
        data = dict(_ACTS, acts=_ACTS["acts"][:3])
        r = _run("validate-acts", "--acts", str(_write(tmp_path / "acts.json", data)))
        assert r.returncode == 1
        assert "ERROR: invalid Acts" in r.stdout

    def test_uneven_acts_warn(self, tmp_path: Path):
        acts = [dict(a) for a in _ACTS["acts"]]
        acts[0]["duration"] = 5
        r = _run("validate-acts", "--acts", str(_write(tmp_path / "acts.json", dict(_ACTS, acts=acts))))
        assert r.returncode == 0
        assert r.stdout.startswith("WARNING:")

    def test_contract_violation(self, tmp_path: Path):
        r = _run("validate-acts", "--acts", str(_write(tmp_path / "acts.json", {"acts": []})))
        assert r.returncode == 1

    def test_validate_breakdown_round_trip(self, tmp_path: Path):
        acts = _write(tmp_path / "acts.json", _ACTS)
        out = tmp_path / "breakdown.json"
        _run("breakdown", "--acts", str(acts), "--output", str(out))
        r = _run("validate-breakdown", "--breakdown", str(out))
        assert r.returncode == 0
        assert "OK: Breakdown is valid" in r.stdout

    def test_invalid_breakdown(self, tmp_path: Path):
        bad = _write(tmp_path / "breakdown.json", {"breakdown_id": "bd_x"})
        r = _run("validate-breakdown", "--breakdown", str(bad))
        assert r.returncode == 1
        assert "ERROR: invalid Breakdown" in r.stdout


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------

class TestExportCommand:

    @pytest.mark.parametrize("fmt", ["json", "markdown"])
    def test_export(self, tmp_path: Path, fmt: str):
        acts = _write(tmp_path / "launch.json", _ACTS)
        out = tmp_path / f"project.{fmt}"
        r = _run("export", "--acts", str(acts), "--format", fmt, "--output", str(out))
        assert r.returncode == 0, r.stdout + r.stderr
        text = out.read_text(encoding="utf-8")
        if fmt == "json":
            assert json.loads(text)["project_id"] == "launch"
        else:
            assert text.startswith("---\nmarp: true")

    def test_export_with_existing_breakdown(self, tmp_path: Path):
        acts = _write(tmp_path / "acts.json", _ACTS)
        breakdown = tmp_path / "breakdown.json"
        _run("breakdown", "--acts", str(acts), "--output", str(breakdown), "--no-inserts")
        out = tmp_path / "project.json"
        r = _run("export", "--acts", str(acts), "--breakdown", str(breakdown),
                 "--output", str(out), "--project-id", "p1")
        assert r.returncode == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["project_id"] == "p1"
        assert data["insert_shots"] == []

    def test_export_options(self, tmp_path: Path):
        acts = _write(tmp_path / "acts.json", _ACTS)
        out = tmp_path / "project.json"
        r = _run("export", "--acts", str(acts), "--output", str(out),
                 "--target-shots", "8", "--no-inserts")
        assert r.returncode == 0, r.stdout + r.stderr
        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data["shots"]) == 8
        assert data["insert_shots"] == []

    def test_export_zero_target_fails(self, tmp_path: Path):
        acts = _write(tmp_path / "acts.json", _ACTS)
        out = tmp_path / "project.json"
        r = _run("export", "--acts", str(acts), "--output", str(out), "--target-shots", "0")
        assert r.returncode == 1
        assert not out.exists()


def test_no_command_prints_help():
    r = _run()
    assert r.returncode == 1
