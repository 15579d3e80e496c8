"""Transition optimisation — final pass over shot boundaries.

A boundary between two acts dissolves; everything else cuts.  The final shot
has no following boundary and therefore cuts, replacing the provisional fade
the synthesizer put there.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from shot_planner.breakdown.models import Shot, TransitionType


def optimize_transition(shot: Shot, next_shot: Optional[Shot]) -> TransitionType:
    if next_shot is not None and shot.act_id != next_shot.act_id:
        return TransitionType.DISSOLVE
    return TransitionType.CUT


def optimize_transitions(shots: Sequence[Shot]) -> List[Shot]:
    """Return new Shot objects with re-derived transition_type; input is untouched."""
    optimized: List[Shot] = []
    for index, shot in enumerate(shots):
        next_shot = shots[index + 1] if index + 1 < len(shots) else None
        optimized.append(
            shot.model_copy(update={"transition_type": optimize_transition(shot, next_shot)})
        )
    return optimized
