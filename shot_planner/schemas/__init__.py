"""Versioned schema loaders and validators."""

from shot_planner.schemas.acts_v1 import dump_acts, load_acts, validate_acts
from shot_planner.schemas.breakdown_v1 import dump_breakdown, load_breakdown, validate_breakdown
from shot_planner.schemas.project_v1 import dump_project, load_project

__all__ = [
    "load_acts",
    "dump_acts",
    "validate_acts",
    "load_breakdown",
    "dump_breakdown",
    "validate_breakdown",
    "load_project",
    "dump_project",
]
