"""Per-act shot allocation.

All functions are pure: no I/O, no external state, no randomness.

Proportional allocation rounds each act independently and never
renormalises, so sum(allocate(...)) may differ from the requested target by up
to one shot per act.  Callers that need the drift surfaced compare the sum
against the target themselves.
"""
from __future__ import annotations

import math
from typing import List, Sequence

from shot_planner.breakdown.models import Act
from shot_planner.errors import InvalidInputError


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 always away from zero for positives."""
    return int(math.floor(value + 0.5))


def check_preconditions(acts: Sequence[Act], target_shot_count: int) -> None:
    """Reject inputs the allocator cannot distribute.

    Raises:
        InvalidInputError: acts is empty, target_shot_count is not positive,
            or target_shot_count is smaller than the number of acts.
    """
    if len(acts) == 0:
        raise InvalidInputError("acts_non_empty", "at least one act is required")
    if target_shot_count <= 0:
        raise InvalidInputError(
            "target_shot_count_positive",
            f"target shot count must be positive, got {target_shot_count}",
        )
    if target_shot_count < len(acts):
        raise InvalidInputError(
            "target_shot_count_covers_acts",
            f"target shot count {target_shot_count} is less than act count {len(acts)}",
        )


def allocate(acts: Sequence[Act], target_shot_count: int) -> List[int]:
    """Return one shot count per act, in act order.

    Unknown durations (total 0):
        even split; the remainder goes one-each to the first acts.
    Known durations:
        max(1, round_half_up(target * duration / total)) per act.
    """
    total_duration = sum(act.duration or 0 for act in acts)

    if total_duration == 0:
        per_act, remainder = divmod(target_shot_count, len(acts))
        return [per_act + 1 if i < remainder else per_act for i in range(len(acts))]

    counts: List[int] = []
    for act in acts:
        ratio = (act.duration or 0) / total_duration
        counts.append(max(1, round_half_up(ratio * target_shot_count)))
    return counts
