"""Tests for the planning validators."""
from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest

from shot_planner.breakdown.models import (
    Act,
    CameraMovement,
    ContiStyle,
    InsertPurpose,
    InsertShot,
    PlanningInput,
    PlanningProject,
    Shot,
    ShotType,
)
from shot_planner.breakdown.planner import breakdown_story
from shot_planner.validator import (
    read_json_file,
    validate_data_integrity,
    validate_planning_input,
    validate_shots,
    validate_story_acts,
)


def _acts(durations=(30, 30, 30, 30)) -> List[Act]:
    return [
        Act(id=f"act_{n}", order=n, title=f"Act {n}", description="Beat.", duration=d)
        for n, d in enumerate(durations, start=1)
    ]


def _shot(order: int, act_id: str = "act_1", **overrides) -> Shot:
    fields = dict(
        id=f"shot_{order}",
        order=order,
        title=f"Shot {order}",
        description="d",
        duration=5,
        conti_description="c",
        conti_style=ContiStyle.PENCIL,
        act_id=act_id,
        shot_type=ShotType.MEDIUM,
        camera_movement=CameraMovement.STATIC,
    )
    fields.update(overrides)
    return Shot(**fields)


# ---------------------------------------------------------------------------
# Planning input
# ---------------------------------------------------------------------------

class TestPlanningInput:

    def test_valid(self):
        report = validate_planning_input(PlanningInput(title="T", logline="L"))
        assert report.is_valid

    def test_blank_title_and_logline(self):
        report = validate_planning_input(PlanningInput(title="  ", logline=""))
        assert report.codes() == ["TITLE_REQUIRED", "LOGLINE_REQUIRED"]
        assert all(e.step == "input" for e in report.errors)

    def test_lengths(self):
        report = validate_planning_input(PlanningInput(title="t" * 101, logline="l" * 501))
        assert report.codes() == ["TITLE_TOO_LONG", "LOGLINE_TOO_LONG"]

    def test_limits_are_inclusive(self):
        report = validate_planning_input(PlanningInput(title="t" * 100, logline="l" * 500))
        assert report.is_valid

    def test_non_positive_target_duration(self):
        report = validate_planning_input(PlanningInput(title="T", logline="L", target_duration=0))
        assert report.codes() == ["INVALID_TARGET_DURATION"]


# ---------------------------------------------------------------------------
# Story acts
# ---------------------------------------------------------------------------

class TestStoryActs:

    def test_four_valid_acts(self):
        report = validate_story_acts(_acts())
        assert report.is_valid
        assert report.warnings == []

    def test_wrong_count(self):
        assert "INVALID_STORY_STEPS_COUNT" in validate_story_acts(_acts()[:3]).codes()

    def test_missing_text(self):
        acts = _acts()
        acts[1] = acts[1].model_copy(update={"title": "", "description": " "})
        codes = validate_story_acts(acts).codes()
        assert codes == ["STORY_STEP_TITLE_REQUIRED", "STORY_STEP_DESCRIPTION_REQUIRED"]

    def test_order_mismatch(self):
        acts = _acts()
        acts[2] = acts[2].model_copy(update={"order": 7})
        assert validate_story_acts(acts).codes() == ["STORY_STEP_ORDER_MISMATCH"]

    def test_non_positive_duration(self):
        assert validate_story_acts(_acts((30, 0, 30, 30))).codes() == ["INVALID_STORY_STEP_DURATION"]

    def test_unknown_durations_allowed(self):
        assert validate_story_acts(_acts((None, None, None, None))).is_valid

    def test_uneven_durations_warn(self):
        report = validate_story_acts(_acts((10, 31, 10, 10)))
        assert report.is_valid
        assert len(report.warnings) == 1

    def test_three_times_is_not_uneven(self):
        assert validate_story_acts(_acts((10, 30, 10, 10))).warnings == []


# ---------------------------------------------------------------------------
# Shots
# ---------------------------------------------------------------------------

class TestShots:

    def test_generated_breakdown_is_valid(self):
        acts = _acts()
        result = breakdown_story(acts, PlanningInput(), 12)
        report = validate_shots(result.shots, acts)
        assert report.is_valid
        assert report.warnings == []

    def test_too_few(self):
        shots = [_shot(n) for n in range(1, 4)]
        assert validate_shots(shots, _acts()).codes() == ["INSUFFICIENT_SHOTS"]

    def test_too_many(self):
        shots = [_shot(n) for n in range(1, 32)]
        assert validate_shots(shots, _acts()).codes() == ["TOO_MANY_SHOTS"]

    def test_per_shot_errors(self):
        shots = [_shot(n) for n in range(1, 5)]
        shots[0] = _shot(1, title="", description="", conti_description="")
        shots[1] = _shot(2, duration=0)
        shots[2] = _shot(3, duration=61)
        shots[3] = _shot(9, act_id="act_x")
        codes = validate_shots(shots, _acts()).codes()
        assert codes == [
            "SHOT_TITLE_REQUIRED",
            "SHOT_DESCRIPTION_REQUIRED",
            "SHOT_CONTI_DESCRIPTION_REQUIRED",
            "SHOT_DURATION_TOO_SHORT",
            "SHOT_DURATION_TOO_LONG",
            "SHOT_ORDER_MISMATCH",
            "SHOT_STORY_STEP_NOT_FOUND",
        ]

    def test_act_without_shots_warns(self):
        shots = [_shot(n) for n in range(1, 5)]
        report = validate_shots(shots, _acts())
        assert report.is_valid
        assert len(report.warnings) == 3


# ---------------------------------------------------------------------------
# Project integrity
# ---------------------------------------------------------------------------

class TestDataIntegrity:

    def test_clean_project(self):
        acts = _acts()
        result = breakdown_story(acts, PlanningInput(), 12)
        project = PlanningProject(
            project_id="p", acts=acts, shots=result.shots, insert_shots=result.insert_shots
        )
        assert validate_data_integrity(project).is_valid

    def test_duplicates_and_orphans(self):
        acts = _acts()
        acts.append(acts[0])
        project = PlanningProject(
            project_id="p",
            acts=acts,
            shots=[_shot(1), _shot(1), _shot(2, act_id="gone")],
            insert_shots=[
                InsertShot(id="i", shot_id="missing", order=1, description="x",
                           purpose=InsertPurpose.DETAIL),
            ],
        )
        assert validate_data_integrity(project).codes() == [
            "DUPLICATE_STORY_STEP_IDS",
            "DUPLICATE_SHOT_IDS",
            "ORPHANED_SHOT",
            "ORPHANED_INSERT",
        ]


# ---------------------------------------------------------------------------
# read_json_file
# ---------------------------------------------------------------------------

class TestReadJsonFile:

    def test_reads_object(self, tmp_path: Path):
        p = tmp_path / "x.json"
        p.write_text(json.dumps({"a": 1}), encoding="utf-8")
        assert read_json_file(p) == {"a": 1}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ValueError, match="File not found"):
            read_json_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path):
        p = tmp_path / "x.json"
        p.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            read_json_file(p)

    def test_non_object(self, tmp_path: Path):
        p = tmp_path / "x.json"
        p.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            read_json_file(p)
