"""Tests for wizard progress, session restore and reordering."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from shot_planner.breakdown.models import (
    Act,
    PlanningInput,
    PlanningProject,
    ProjectStatus,
    WizardStep,
)
from shot_planner.breakdown.planner import breakdown_story
from shot_planner.wizard import (
    calculate_completion_percentage,
    calculate_total_duration,
    calculate_wizard_progress,
    can_restore_session,
    move_shot,
    reorder_acts,
    reorder_shots,
)


def _acts():
    return [
        Act(id=f"act_{n}", order=n, title=f"Act {n}", description="Beat.", duration=30)
        for n in range(1, 5)
    ]


def _project(**overrides) -> PlanningProject:
    fields = dict(
        project_id="p",
        input=PlanningInput(title="Launch", logline="A launch."),
        acts=_acts(),
    )
    fields.update(overrides)
    return PlanningProject(**fields)


class TestWizardProgress:

    def test_empty_project_starts_at_input(self):
        progress = calculate_wizard_progress(PlanningProject(project_id="p"))
        # tone and development always carry defaults
        assert progress.input_completion == 50.0
        assert progress.current_step == WizardStep.INPUT
        assert progress.completed_steps == []

    def test_story_done_moves_to_shots(self):
        progress = calculate_wizard_progress(_project())
        assert progress.input_completion == 100.0
        assert progress.story_completion == 100.0
        assert progress.shots_completion == 0.0
        assert progress.current_step == WizardStep.SHOTS
        assert progress.completed_steps == [WizardStep.INPUT, WizardStep.STORY]

    def test_input_done_moves_to_story(self):
        progress = calculate_wizard_progress(_project(acts=_acts()[:3]))
        assert progress.story_completion == 0.0
        assert progress.current_step == WizardStep.STORY

    def test_partial_story(self):
        acts = _acts()
        acts[0] = acts[0].model_copy(update={"description": ""})
        assert calculate_wizard_progress(_project(acts=acts)).story_completion == 75.0

    def test_shots_complete(self):
        result = breakdown_story(_acts(), PlanningInput(), 12)
        project = _project(shots=result.shots, status=ProjectStatus.GENERATING)
        progress = calculate_wizard_progress(project)
        assert progress.shots_completion == 100.0
        assert progress.is_generating
        assert calculate_completion_percentage(project) == 100

    def test_explicit_step_wins(self):
        progress = calculate_wizard_progress(_project(current_step=WizardStep.INPUT))
        assert progress.current_step == WizardStep.INPUT

    def test_completion_percentage_rounds(self):
        # (100 + 100 + 0) / 3 = 66.67
        assert calculate_completion_percentage(_project()) == 67


class TestTotalDuration:

    def test_uses_shots_when_present(self):
        result = breakdown_story(_acts(), PlanningInput(), 12)
        assert calculate_total_duration(_project(shots=result.shots)) == 136

    def test_falls_back_to_acts(self):
        assert calculate_total_duration(_project()) == 120

    def test_unknown_act_durations_count_as_zero(self):
        acts = [a.model_copy(update={"duration": None}) for a in _acts()]
        assert calculate_total_duration(_project(acts=acts)) == 0


class TestSessionRestore:

    def test_within_timeout(self):
        now = datetime(2026, 2, 19, 12, 0, 0)
        assert can_restore_session(now - timedelta(hours=23), now)

    def test_expired(self):
        now = datetime(2026, 2, 19, 12, 0, 0)
        assert not can_restore_session(now - timedelta(hours=24), now)

    def test_custom_timeout(self):
        now = datetime(2026, 2, 19, 12, 0, 0)
        assert not can_restore_session(now - timedelta(seconds=61), now, timeout_sec=60)


class TestReordering:

    def test_reorder_acts_renumbers(self):
        acts = _acts()
        shuffled = [acts[2].model_copy(update={"order": 10}), acts[0], acts[1]]
        result = reorder_acts(shuffled)
        assert [a.id for a in result] == ["act_1", "act_2", "act_3"]
        assert [a.order for a in result] == [1, 2, 3]

    def test_reorder_shots_renumbers(self):
        shots = breakdown_story(_acts(), PlanningInput(), 12).shots
        gapped = [s.model_copy(update={"order": s.order * 10}) for s in reversed(shots)]
        result = reorder_shots(gapped)
        assert [s.id for s in result] == [s.id for s in shots]
        assert [s.order for s in result] == list(range(1, 13))

    def test_move_shot(self):
        shots = breakdown_story(_acts(), PlanningInput(), 12).shots
        moved = move_shot(shots, 0, 3)
        assert moved[3].id == shots[0].id
        assert moved[0].id == shots[1].id
        assert [s.order for s in moved] == list(range(1, 13))
        assert shots[0].order == 1

    def test_move_shot_out_of_range(self):
        shots = breakdown_story(_acts(), PlanningInput(), 12).shots
        with pytest.raises(IndexError):
            move_shot(shots, 0, 12)
