"""Wizard progress, session restore, and drag-and-drop reordering.

Pure functions over a PlanningProject.  Timestamps are always passed in; the
module never reads the clock.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from shot_planner.breakdown.models import (
    Act,
    PlanningProject,
    ProjectStatus,
    Shot,
    WizardStep,
)
from shot_planner.breakdown.rules import (
    MAX_STORY_STEPS,
    MIN_SHOT_SEQUENCES,
    SESSION_RESTORE_TIMEOUT_SEC,
)


@dataclass
class WizardProgress:
    current_step: WizardStep
    completed_steps: List[WizardStep] = field(default_factory=list)
    is_generating: bool = False
    last_saved_at: Optional[str] = None
    input_completion: float = 0.0
    story_completion: float = 0.0
    shots_completion: float = 0.0


def _input_completion(project: PlanningProject) -> float:
    planning_input = project.input
    filled = [
        bool(planning_input.title.strip()),
        bool(planning_input.logline.strip()),
        planning_input.tone_and_manner is not None,
        planning_input.development is not None,
    ]
    return 25.0 * sum(filled)


def _story_completion(acts: Sequence[Act]) -> float:
    if len(acts) != MAX_STORY_STEPS:
        return 0.0
    done = sum(1 for act in acts if act.title.strip() and act.description.strip())
    return done / MAX_STORY_STEPS * 100


def _shots_completion(shots: Sequence[Shot]) -> float:
    if len(shots) < MIN_SHOT_SEQUENCES:
        return 0.0
    done = sum(
        1
        for shot in shots
        if shot.title.strip() and shot.description.strip() and shot.conti_description.strip()
    )
    return done / len(shots) * 100


def calculate_wizard_progress(project: PlanningProject) -> WizardProgress:
    """Per-step completion percentages plus the step the user should be on.

    An explicit project.current_step wins over the derived one.
    """
    input_pct = _input_completion(project)
    story_pct = _story_completion(project.acts)
    shots_pct = _shots_completion(project.shots)

    completed: List[WizardStep] = []
    if input_pct == 100:
        completed.append(WizardStep.INPUT)
    if story_pct == 100:
        completed.append(WizardStep.STORY)
    if shots_pct == 100:
        completed.append(WizardStep.SHOTS)

    derived = WizardStep.INPUT
    if input_pct == 100 and story_pct < 100:
        derived = WizardStep.STORY
    if story_pct == 100:
        derived = WizardStep.SHOTS

    return WizardProgress(
        current_step=project.current_step or derived,
        completed_steps=completed,
        is_generating=project.status == ProjectStatus.GENERATING,
        last_saved_at=project.updated_at,
        input_completion=input_pct,
        story_completion=story_pct,
        shots_completion=shots_pct,
    )


def calculate_completion_percentage(project: PlanningProject) -> int:
    progress = calculate_wizard_progress(project)
    mean = (progress.input_completion + progress.story_completion + progress.shots_completion) / 3
    return int(mean + 0.5)


def calculate_total_duration(project: PlanningProject) -> int:
    """Shot durations when shots exist, otherwise the sum of act durations."""
    shot_total = sum(shot.duration for shot in project.shots)
    if shot_total > 0:
        return shot_total
    return sum(act.duration or 0 for act in project.acts)


def can_restore_session(
    last_activity: datetime,
    now: datetime,
    timeout_sec: int = SESSION_RESTORE_TIMEOUT_SEC,
) -> bool:
    return (now - last_activity).total_seconds() < timeout_sec


def reorder_acts(acts: Sequence[Act]) -> List[Act]:
    """Stable-sort by order and renumber 1..N.  Returns new models."""
    ordered = sorted(acts, key=lambda act: act.order)
    return [act.model_copy(update={"order": i + 1}) for i, act in enumerate(ordered)]


def reorder_shots(shots: Sequence[Shot]) -> List[Shot]:
    """Stable-sort by order and renumber 1..N.  Returns new models."""
    ordered = sorted(shots, key=lambda shot: shot.order)
    return [shot.model_copy(update={"order": i + 1}) for i, shot in enumerate(ordered)]


def move_shot(shots: Sequence[Shot], from_index: int, to_index: int) -> List[Shot]:
    """Move one shot (drag and drop) and renumber the sequence.

    Raises:
        IndexError: either index is out of range.
    """
    if not 0 <= from_index < len(shots) or not 0 <= to_index < len(shots):
        raise IndexError(f"cannot move shot {from_index} to {to_index} in {len(shots)} shots")
    items = list(shots)
    moved = items.pop(from_index)
    items.insert(to_index, moved)
    return [shot.model_copy(update={"order": i + 1}) for i, shot in enumerate(items)]
