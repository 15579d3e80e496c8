"""PlanningProject v1.0.0: the saved wizard state."""
from __future__ import annotations

from shot_planner.breakdown.models import PlanningProject
from shot_planner.schemas.common import Source, canonical_dumps, read_source


def load_project(source: Source) -> PlanningProject:
    return PlanningProject.model_validate(read_source(source))


def dump_project(project: PlanningProject, *, indent: int = 2) -> str:
    return canonical_dumps(project, indent)
