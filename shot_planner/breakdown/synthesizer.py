"""Shot synthesis — positional heuristics that turn (act, index) into a Shot.

Pure functions.  Each selector maps closed enums to closed enums; the
first/last position in an act drives framing and duration.
"""
from __future__ import annotations

from typing import Dict, List

from shot_planner.breakdown.allocator import round_half_up
from shot_planner.breakdown.models import (
    Act,
    CameraMovement,
    ContiStyle,
    Development,
    Intensity,
    Pacing,
    PlanningInput,
    Shot,
    ShotType,
    ToneAndManner,
    TransitionType,
)
from shot_planner.breakdown.rules import DEFAULT_ACT_DURATION, MIN_SHOT_DURATION

_CONTI_STYLES: Dict[ToneAndManner, ContiStyle] = {
    ToneAndManner.PROFESSIONAL: ContiStyle.MONOCHROME,
    ToneAndManner.CREATIVE: ContiStyle.COLORED,
    ToneAndManner.CASUAL: ContiStyle.ROUGH,
}

_PACING_MULTIPLIERS: Dict[Pacing, float] = {
    Pacing.FAST: 0.8,
    Pacing.MEDIUM: 1.0,
    Pacing.SLOW: 1.2,
}

_EDGE_MULTIPLIER: float = 1.2
_MAX_VISUAL_ELEMENTS: int = 2


def determine_pacing(development: Development, intensity: Intensity) -> Pacing:
    if intensity == Intensity.HIGH or development == Development.DRAMATIC:
        return Pacing.FAST
    if intensity == Intensity.LOW or development == Development.TUTORIAL:
        return Pacing.SLOW
    return Pacing.MEDIUM


def position_class(index_in_act: int, count_in_act: int) -> str:
    if index_in_act == 0:
        return "start"
    if index_in_act == count_in_act - 1:
        return "end"
    return "middle"


def select_shot_type(index_in_act: int, count_in_act: int) -> ShotType:
    if index_in_act == 0:
        return ShotType.WIDE
    if index_in_act == count_in_act - 1:
        return ShotType.CLOSE_UP
    return ShotType.MEDIUM


def select_camera_movement(development: Development, pacing: Pacing) -> CameraMovement:
    if pacing == Pacing.FAST:
        return CameraMovement.ZOOM
    if development == Development.DRAMATIC:
        return CameraMovement.DOLLY
    return CameraMovement.STATIC


def select_conti_style(tone: ToneAndManner) -> ContiStyle:
    return _CONTI_STYLES.get(tone, ContiStyle.PENCIL)


def calculate_shot_duration(
    avg_shot_duration: float,
    index_in_act: int,
    count_in_act: int,
    pacing: Pacing,
) -> int:
    """Scale the act's average shot length by pacing and position.

    duration = round_half_up(avg * pacing_multiplier * position_multiplier)
    where position_multiplier is 1.2 for the first and last shot of the act.
    Never below MIN_SHOT_DURATION.
    """
    is_edge = index_in_act == 0 or index_in_act == count_in_act - 1
    position_multiplier = _EDGE_MULTIPLIER if is_edge else 1.0
    raw = avg_shot_duration * _PACING_MULTIPLIERS[pacing] * position_multiplier
    return max(MIN_SHOT_DURATION, round_half_up(raw))


def select_visual_elements(act: Act) -> List[str]:
    return list(act.key_points[:_MAX_VISUAL_ELEMENTS])


def select_initial_transition(is_last_overall: bool) -> TransitionType:
    # Provisional; the transition optimizer re-derives every boundary.
    return TransitionType.FADE if is_last_overall else TransitionType.CUT


def _describe(act: Act, index_in_act: int, count_in_act: int) -> str:
    position = position_class(index_in_act, count_in_act)
    text = f"Shot covering the {position} of {act.title}."
    if act.description:
        text = f"{text} {act.description}"
    return text


def _describe_conti(act: Act, index_in_act: int, tone: ToneAndManner) -> str:
    return (
        f"Frame composition and staging for shot {index_in_act + 1} of "
        f"{act.title}, in a {ToneAndManner(tone).value} tone."
    )


def synthesize(
    act: Act,
    index_in_act: int,
    count_in_act: int,
    planning_input: PlanningInput,
    pacing: Pacing,
    *,
    shot_id: str,
    order: int,
    is_last_overall: bool = False,
) -> Shot:
    """Build the shot at *index_in_act* of *act*.

    Args:
        act:            The owning act.
        index_in_act:   0-based position inside the act.
        count_in_act:   Number of shots allocated to the act.
        planning_input: Supplies tone and development.
        pacing:         Derived with determine_pacing().
        shot_id:        Caller-assigned deterministic id.
        order:          1-based position across the whole breakdown.
        is_last_overall: True for the final shot of the breakdown.
    """
    act_duration = act.duration or DEFAULT_ACT_DURATION
    avg_shot_duration = act_duration / count_in_act

    return Shot(
        id=shot_id,
        order=order,
        title=f"{act.title} - Shot {index_in_act + 1}",
        description=_describe(act, index_in_act, count_in_act),
        duration=calculate_shot_duration(avg_shot_duration, index_in_act, count_in_act, pacing),
        conti_description=_describe_conti(act, index_in_act, planning_input.tone_and_manner),
        conti_style=select_conti_style(planning_input.tone_and_manner),
        act_id=act.id,
        shot_type=select_shot_type(index_in_act, count_in_act),
        camera_movement=select_camera_movement(planning_input.development, pacing),
        visual_elements=select_visual_elements(act),
        transition_type=select_initial_transition(is_last_overall),
    )
