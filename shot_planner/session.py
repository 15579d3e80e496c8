"""Wizard session auto-save and restore.

A session is one JSON file per project, ``planning_session_<project_id>.json``,
in a caller-chosen directory.  The file holds the canonical project document
plus the wizard step and the moment of the last activity.  Restoring picks
the most recently active session that is still inside the restore timeout.

Timestamps are always passed in; nothing here reads the clock.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from shot_planner.breakdown.models import PlanningProject, WizardStep
from shot_planner.config import get_settings
from shot_planner.schemas.project_v1 import dump_project, load_project
from shot_planner.wizard import can_restore_session

logger = logging.getLogger(__name__)

SESSION_FILE_PREFIX = "planning_session_"


class SessionSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    schema_version: str = "1.0.0"
    session_id: str
    current_step: WizardStep = WizardStep.INPUT
    last_activity: datetime
    project: PlanningProject


def session_path(directory: Path, session_id: str) -> Path:
    return directory / f"{SESSION_FILE_PREFIX}{session_id}.json"


def save_session(
    directory: Path,
    project: PlanningProject,
    *,
    last_activity: datetime,
    current_step: Optional[WizardStep] = None,
) -> Path:
    """Write (or overwrite) the snapshot for *project* and return its path.

    The session id is the project id.  current_step defaults to the project's
    own step, then to ``input``.
    """
    step = current_step or project.current_step or WizardStep.INPUT
    payload = {
        "schema_version": "1.0.0",
        "session_id": project.project_id,
        "current_step": WizardStep(step).value,
        "last_activity": last_activity.isoformat(),
        "project": json.loads(dump_project(project)),
    }
    directory.mkdir(parents=True, exist_ok=True)
    path = session_path(directory, project.project_id)
    path.write_text(json.dumps(payload, sort_keys=True, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("session %s saved at step %s", project.project_id, WizardStep(step).value)
    return path


def load_session(path: Path) -> SessionSnapshot:
    """Read one snapshot file.

    Raises:
        ValueError: the file is not valid JSON or not a session snapshot.
        FileNotFoundError: the file does not exist.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    try:
        project = load_project(data.get("project", {}))
        return SessionSnapshot.model_validate({**data, "project": project})
    except ValidationError as exc:
        raise ValueError(f"{path} is not a session snapshot: {exc}") from exc


def list_sessions(directory: Path) -> List[SessionSnapshot]:
    """Every readable snapshot in *directory*; unreadable files are skipped."""
    snapshots: List[SessionSnapshot] = []
    if not directory.is_dir():
        return snapshots
    for path in sorted(directory.glob(f"{SESSION_FILE_PREFIX}*.json")):
        try:
            snapshots.append(load_session(path))
        except ValueError as exc:
            logger.warning("skipping session file %s: %s", path.name, exc)
    return snapshots


def restore_session(
    directory: Path,
    now: datetime,
    *,
    timeout_sec: Optional[int] = None,
) -> Optional[PlanningProject]:
    """Return the most recently active restorable project, or None.

    The returned project's current_step is the step recorded in the snapshot.
    timeout_sec defaults to the configured ``session_restore_timeout_sec``.
    """
    if timeout_sec is None:
        timeout_sec = get_settings().session_restore_timeout_sec

    candidates = [
        snapshot
        for snapshot in list_sessions(directory)
        if can_restore_session(snapshot.last_activity, now, timeout_sec)
    ]
    if not candidates:
        logger.info("no restorable session in %s", directory)
        return None

    newest = max(candidates, key=lambda snapshot: snapshot.last_activity)
    logger.info("session %s restored at step %s", newest.session_id, newest.current_step.value)
    return newest.project.model_copy(update={"current_step": newest.current_step})


def discard_session(directory: Path, session_id: str) -> bool:
    """Delete a snapshot; returns False when there was none."""
    path = session_path(directory, session_id)
    if not path.exists():
        return False
    path.unlink()
    return True
