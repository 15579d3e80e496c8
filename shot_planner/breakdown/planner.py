"""Acts → shot breakdown.

Public entry points
-------------------
    breakdown_story(acts, planning_input, target_shot_count=12, ...) -> BreakdownResult
    default_breakdown(acts, ...) -> BreakdownResult

All sub-stages are pure functions.  No file I/O, no external state, no
randomness.

Determinism guarantees
----------------------
- breakdown_id — "bd_" + SHA-256(act content, target, tone, development,
                 intensity)[:16]
- shot id      — f"{breakdown_id}_shot_{order:03d}"
- insert id    — f"{shot_id}_insert_{n}"
- created_at   — caller-supplied or the fixed epoch constant below; the
                 planner NEVER reads the system clock
"""
from __future__ import annotations

import hashlib
import json
from typing import List, Optional, Sequence

from shot_planner.breakdown.allocator import allocate, check_preconditions, round_half_up
from shot_planner.breakdown.inserts import select_inserts
from shot_planner.breakdown.models import (
    Act,
    BreakdownResult,
    CameraMovement,
    ContiStyle,
    PlanningInput,
    Shot,
    ShotType,
    TransitionType,
)
from shot_planner.breakdown.rules import DEFAULT_ACT_DURATION, DEFAULT_SHOT_COUNT
from shot_planner.breakdown.synthesizer import determine_pacing, synthesize
from shot_planner.breakdown.transitions import optimize_transitions


# ── Public API ────────────────────────────────────────────────────────────────


DEFAULT_CREATED_AT: str = "1970-01-01T00:00:00Z"


def breakdown_story(
    acts: Sequence[Act],
    planning_input: Optional[PlanningInput] = None,
    target_shot_count: int = DEFAULT_SHOT_COUNT,
    *,
    include_inserts: bool = True,
    created_at: str = DEFAULT_CREATED_AT,
) -> BreakdownResult:
    """Break a four-act story into shots and insert shots.

    Args:
        acts:              Ordered acts; only non-emptiness is required here,
                           the four-act shape is the story validator's concern.
        planning_input:    Tone, development and intensity.  Defaults apply
                           when omitted.
        target_shot_count: Requested number of shots.  The actual number may
                           drift from it (see allocator).
        include_inserts:   When False, insert_shots is empty.
        created_at:        ISO 8601 stamp for the artifact.  Defaults to
                           "1970-01-01T00:00:00Z".

    Raises:
        InvalidInputError: a precondition in check_preconditions() failed.
    """
    planning_input = planning_input or PlanningInput()
    check_preconditions(acts, target_shot_count)

    breakdown_id = make_breakdown_id(acts, planning_input, target_shot_count)
    distribution = allocate(acts, target_shot_count)
    shots = build_shots(acts, distribution, planning_input, breakdown_id)
    inserts = select_inserts(shots) if include_inserts else []
    shots = optimize_transitions(shots)

    return BreakdownResult(
        breakdown_id=breakdown_id,
        shots=shots,
        insert_shots=inserts,
        distribution=distribution,
        total_duration=sum(s.duration for s in shots),
        distribution_rationale=distribution_rationale(distribution, acts),
        created_at=created_at,
    )


def default_breakdown(
    acts: Sequence[Act],
    *,
    created_at: str = DEFAULT_CREATED_AT,
) -> BreakdownResult:
    """Template breakdown used when generation is skipped.

    DEFAULT_SHOT_COUNT is split evenly and the last act absorbs the remainder.
    Every shot is a plain medium/static/cut frame with a rough conti.
    """
    check_preconditions(acts, DEFAULT_SHOT_COUNT)

    breakdown_id = "tpl_" + _digest(_act_fingerprint(acts))
    per_act = DEFAULT_SHOT_COUNT // len(acts)
    shots: List[Shot] = []
    distribution: List[int] = []

    for act_index, act in enumerate(acts):
        is_last_act = act_index == len(acts) - 1
        count = DEFAULT_SHOT_COUNT - len(shots) if is_last_act else per_act
        distribution.append(count)
        duration = max(1, round_half_up((act.duration or DEFAULT_ACT_DURATION) / count))
        for i in range(count):
            order = len(shots) + 1
            shots.append(
                Shot(
                    id=_make_shot_id(breakdown_id, order),
                    order=order,
                    title=f"{act.title} - Shot {i + 1}",
                    description=f"Shot {i + 1} of {act.title}.",
                    duration=duration,
                    conti_description="Describe the composition and staging of this shot.",
                    conti_style=ContiStyle.ROUGH,
                    act_id=act.id,
                    shot_type=ShotType.MEDIUM,
                    camera_movement=CameraMovement.STATIC,
                    visual_elements=[],
                    transition_type=TransitionType.CUT,
                )
            )

    return BreakdownResult(
        breakdown_id=breakdown_id,
        shots=shots,
        insert_shots=[],
        distribution=distribution,
        total_duration=sum(s.duration for s in shots),
        distribution_rationale="Used the default even-split template.",
        created_at=created_at,
    )


def distribution_rationale(distribution: Sequence[int], acts: Sequence[Act]) -> str:
    """One-line, human-readable summary of the per-act allocation."""
    total = sum(distribution)
    details = ", ".join(
        f"{act.title}: {count} shots" for act, count in zip(acts, distribution)
    )
    return f"Distributed {total} shots across {len(acts)} acts. {details}."


# ── ID helpers ────────────────────────────────────────────────────────────────


def _digest(payload: object) -> str:
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def _act_fingerprint(acts: Sequence[Act]) -> List[dict]:
    return [act.model_dump(mode="json") for act in acts]


def make_breakdown_id(
    acts: Sequence[Act],
    planning_input: PlanningInput,
    target_shot_count: int,
) -> str:
    """Deterministic breakdown ID: "bd_" + first 16 hex chars of SHA-256.

    Every act field takes part, so two stories that share act ids but differ
    in titles, durations or key points never share an id.
    """
    payload = {
        "acts": _act_fingerprint(acts),
        "target": target_shot_count,
        "tone": planning_input.tone_and_manner.value,
        "development": planning_input.development.value,
        "intensity": planning_input.intensity.value,
    }
    return "bd_" + _digest(payload)


def _make_shot_id(breakdown_id: str, order: int) -> str:
    return f"{breakdown_id}_shot_{order:03d}"


# ── Shot construction ─────────────────────────────────────────────────────────


def build_shots(
    acts: Sequence[Act],
    distribution: Sequence[int],
    planning_input: PlanningInput,
    breakdown_id: str,
) -> List[Shot]:
    pacing = determine_pacing(planning_input.development, planning_input.intensity)
    total_shots = sum(distribution)
    shots: List[Shot] = []

    for act, count in zip(acts, distribution):
        for i in range(count):
            order = len(shots) + 1
            shots.append(
                synthesize(
                    act,
                    i,
                    count,
                    planning_input,
                    pacing,
                    shot_id=_make_shot_id(breakdown_id, order),
                    order=order,
                    is_last_overall=order == total_shots,
                )
            )
    return shots
