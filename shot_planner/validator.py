"""Planning validators — input, story acts, shots, and project integrity.

Validators never raise for content problems: they collect PlanningError
entries (and non-fatal warnings) into a ValidationReport.  Only the file
helper raises, for unreadable or non-JSON input.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from shot_planner.breakdown.models import Act, PlanningInput, PlanningProject, Shot
from shot_planner.breakdown.rules import (
    MAX_LOGLINE_LENGTH,
    MAX_SHOT_DURATION,
    MAX_SHOT_SEQUENCES,
    MAX_STORY_STEPS,
    MAX_TITLE_LENGTH,
    MIN_SHOT_DURATION,
    MIN_SHOT_SEQUENCES,
    UNEVEN_DURATION_RATIO,
)


@dataclass(frozen=True)
class PlanningError:
    code: str
    message: str
    step: Optional[str] = None


@dataclass
class ValidationReport:
    errors: List[PlanningError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def codes(self) -> List[str]:
        return [e.code for e in self.errors]

    def add(self, code: str, message: str, step: Optional[str] = None) -> None:
        self.errors.append(PlanningError(code=code, message=message, step=step))


# ── Planning input ────────────────────────────────────────────────────────────


def validate_planning_input(planning_input: PlanningInput) -> ValidationReport:
    report = ValidationReport()

    if not planning_input.title.strip():
        report.add("TITLE_REQUIRED", "title is required", "input")
    elif len(planning_input.title) > MAX_TITLE_LENGTH:
        report.add(
            "TITLE_TOO_LONG",
            f"title must not exceed {MAX_TITLE_LENGTH} characters",
            "input",
        )

    if not planning_input.logline.strip():
        report.add("LOGLINE_REQUIRED", "logline is required", "input")
    elif len(planning_input.logline) > MAX_LOGLINE_LENGTH:
        report.add(
            "LOGLINE_TOO_LONG",
            f"logline must not exceed {MAX_LOGLINE_LENGTH} characters",
            "input",
        )

    if planning_input.target_duration is not None and planning_input.target_duration <= 0:
        report.add("INVALID_TARGET_DURATION", "target duration must be positive", "input")

    return report


# ── Story acts ────────────────────────────────────────────────────────────────


def validate_story_acts(acts: Sequence[Act]) -> ValidationReport:
    """Check the four-act shape: count, required text, contiguous order, durations.

    A warning (not an error) is raised when the longest act is more than
    UNEVEN_DURATION_RATIO times the shortest timed act.
    """
    report = ValidationReport()

    if len(acts) != MAX_STORY_STEPS:
        report.add(
            "INVALID_STORY_STEPS_COUNT",
            f"a story must have exactly {MAX_STORY_STEPS} acts, got {len(acts)}",
            "story",
        )

    for index, act in enumerate(acts):
        n = index + 1
        if not act.title.strip():
            report.add("STORY_STEP_TITLE_REQUIRED", f"act {n} needs a title", "story")
        if not act.description.strip():
            report.add("STORY_STEP_DESCRIPTION_REQUIRED", f"act {n} needs a description", "story")
        if act.order != n:
            report.add(
                "STORY_STEP_ORDER_MISMATCH",
                f"act {n} has order {act.order}, expected {n}",
                "story",
            )
        if act.duration is not None and act.duration <= 0:
            report.add("INVALID_STORY_STEP_DURATION", f"act {n} duration must be positive", "story")

    timed = [act.duration for act in acts if act.duration and act.duration > 0]
    if timed and max(timed) > min(timed) * UNEVEN_DURATION_RATIO:
        report.warnings.append("act durations are unevenly distributed; consider rebalancing")

    return report


# ── Shots ─────────────────────────────────────────────────────────────────────


def validate_shots(shots: Sequence[Shot], acts: Sequence[Act]) -> ValidationReport:
    report = ValidationReport()

    if len(shots) < MIN_SHOT_SEQUENCES:
        report.add("INSUFFICIENT_SHOTS", f"at least {MIN_SHOT_SEQUENCES} shots are required", "shots")
    if len(shots) > MAX_SHOT_SEQUENCES:
        report.add("TOO_MANY_SHOTS", f"at most {MAX_SHOT_SEQUENCES} shots are allowed", "shots")

    act_ids = {act.id for act in acts}

    for index, shot in enumerate(shots):
        n = index + 1
        if not shot.title.strip():
            report.add("SHOT_TITLE_REQUIRED", f"shot {n} needs a title", "shots")
        if not shot.description.strip():
            report.add("SHOT_DESCRIPTION_REQUIRED", f"shot {n} needs a description", "shots")
        if not shot.conti_description.strip():
            report.add("SHOT_CONTI_DESCRIPTION_REQUIRED", f"shot {n} needs a conti description", "shots")
        if shot.duration < MIN_SHOT_DURATION:
            report.add(
                "SHOT_DURATION_TOO_SHORT",
                f"shot {n} must last at least {MIN_SHOT_DURATION}s",
                "shots",
            )
        if shot.duration > MAX_SHOT_DURATION:
            report.add(
                "SHOT_DURATION_TOO_LONG",
                f"shot {n} must not exceed {MAX_SHOT_DURATION}s",
                "shots",
            )
        if shot.order != n:
            report.add("SHOT_ORDER_MISMATCH", f"shot {n} has order {shot.order}", "shots")
        if shot.act_id not in act_ids:
            report.add("SHOT_STORY_STEP_NOT_FOUND", f"shot {n} references unknown act {shot.act_id!r}", "shots")

    counts: Dict[str, int] = {}
    for shot in shots:
        counts[shot.act_id] = counts.get(shot.act_id, 0) + 1
    for act in acts:
        if counts.get(act.id, 0) == 0:
            report.warnings.append(f"act {act.title!r} has no shots")

    return report


# ── Project integrity ─────────────────────────────────────────────────────────


def validate_data_integrity(project: PlanningProject) -> ValidationReport:
    report = ValidationReport()

    act_ids = [act.id for act in project.acts]
    if len(act_ids) != len(set(act_ids)):
        report.add("DUPLICATE_STORY_STEP_IDS", "act ids are not unique")

    shot_ids = [shot.id for shot in project.shots]
    if len(shot_ids) != len(set(shot_ids)):
        report.add("DUPLICATE_SHOT_IDS", "shot ids are not unique")

    valid_act_ids = set(act_ids)
    for shot in project.shots:
        if shot.act_id not in valid_act_ids:
            report.add("ORPHANED_SHOT", f"shot {shot.title!r} references a missing act")

    valid_shot_ids = set(shot_ids)
    for insert in project.insert_shots:
        if insert.shot_id not in valid_shot_ids:
            report.add("ORPHANED_INSERT", f"insert {insert.id!r} references a missing shot")

    return report


# ── File helper ───────────────────────────────────────────────────────────────


def read_json_file(path: Path) -> dict:
    """Load a JSON object from *path*.

    Raises:
        ValueError: if the file is missing, not valid JSON, or not an object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ValueError(f"File not found: {path}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")

    return data
