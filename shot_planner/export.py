"""Project export — canonical JSON and a Marp Markdown slide deck.

The Markdown deck is the source a Marp renderer turns into the PDF planning
document; rendering itself happens outside this package.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from shot_planner.breakdown.models import (
    ActsDocument,
    BreakdownResult,
    InsertShot,
    PlanningProject,
    ProjectStatus,
)
from shot_planner.schemas.project_v1 import dump_project
from shot_planner.wizard import calculate_total_duration

_MARP_FRONT_MATTER = "---\nmarp: true\npaginate: true\n---"
_SLIDE_BREAK = "\n\n---\n\n"


def build_project(
    project_id: str,
    document: ActsDocument,
    breakdown: Optional[BreakdownResult] = None,
    *,
    updated_at: Optional[str] = None,
) -> PlanningProject:
    """Assemble a PlanningProject from an acts document and an optional breakdown."""
    return PlanningProject(
        project_id=project_id,
        input=document.input,
        acts=document.acts,
        shots=breakdown.shots if breakdown else [],
        insert_shots=breakdown.insert_shots if breakdown else [],
        status=ProjectStatus.COMPLETED if breakdown else ProjectStatus.DRAFT,
        updated_at=updated_at or (breakdown.created_at if breakdown else None),
    )


def export_project_json(project: PlanningProject) -> str:
    """Canonical JSON (sort_keys=True, indent=2), byte-stable for equal projects."""
    return dump_project(project)


def _inserts_by_shot(inserts: List[InsertShot]) -> Dict[str, List[InsertShot]]:
    grouped: Dict[str, List[InsertShot]] = {}
    for insert in inserts:
        grouped.setdefault(insert.shot_id, []).append(insert)
    return grouped


def export_project_markdown(project: PlanningProject) -> str:
    """Render the project as a Marp deck: title, one slide per act, one per shot."""
    planning_input = project.input
    title = planning_input.title or project.project_id

    slides: List[str] = []
    cover = [f"# {title}"]
    if planning_input.logline:
        cover.append(f"_{planning_input.logline}_")
    cover.append(
        f"Tone: {planning_input.tone_and_manner.value} · "
        f"Development: {planning_input.development.value} · "
        f"Intensity: {planning_input.intensity.value}"
    )
    cover.append(f"Total duration: {calculate_total_duration(project)}s")
    slides.append("\n\n".join(cover))

    for act in project.acts:
        blocks = [f"## Act {act.order}: {act.title}"]
        if act.description:
            blocks.append(act.description)
        if act.duration:
            blocks.append(f"Duration: {act.duration}s")
        if act.key_points:
            blocks.append("\n".join(f"- {point}" for point in act.key_points))
        slides.append("\n\n".join(blocks))

    inserts = _inserts_by_shot(project.insert_shots)
    for shot in project.shots:
        lines = [
            f"## Shot {shot.order}: {shot.title}",
            shot.description,
            "| Type | Camera | Duration | Transition | Conti |",
            "|---|---|---|---|---|",
            f"| {shot.shot_type.value} | {shot.camera_movement.value} | {shot.duration}s "
            f"| {shot.transition_type.value} | {shot.conti_style.value} |",
            "",
            f"Conti: {shot.conti_description}",
        ]
        if shot.visual_elements:
            lines.append("Visual elements: " + ", ".join(shot.visual_elements))
        for insert in inserts.get(shot.id, []):
            lines.append(f"- Insert {insert.order} ({insert.purpose.value}): {insert.description}")
        slides.append("\n".join(lines))

    return _MARP_FRONT_MATTER + "\n\n" + _SLIDE_BREAK.join(slides) + "\n"
