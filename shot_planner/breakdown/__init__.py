"""Four-act story → shot breakdown package."""

from shot_planner.breakdown.allocator import allocate, check_preconditions
from shot_planner.breakdown.inserts import select_inserts
from shot_planner.breakdown.models import (
    Act,
    ActsDocument,
    BreakdownResult,
    InsertShot,
    PlanningInput,
    PlanningProject,
    Shot,
)
from shot_planner.breakdown.planner import breakdown_story, default_breakdown
from shot_planner.breakdown.synthesizer import synthesize
from shot_planner.breakdown.transitions import optimize_transitions

__all__ = [
    "allocate",
    "check_preconditions",
    "select_inserts",
    "synthesize",
    "optimize_transitions",
    "breakdown_story",
    "default_breakdown",
    "Act",
    "ActsDocument",
    "BreakdownResult",
    "InsertShot",
    "PlanningInput",
    "PlanningProject",
    "Shot",
]
