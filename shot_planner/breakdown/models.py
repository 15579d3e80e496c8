"""Planning data models — acts in, shots and insert shots out.

schema_version "1.0.0" is embedded in every top-level artifact so files are
self-describing.  extra="ignore" on all models gives forward-compatibility:
unknown fields written by newer versions are dropped rather than rejected.

Every enumerated attribute is a closed ``str`` enum; the breakdown rules match
on members, never on raw strings.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Enumerations ──────────────────────────────────────────────────────────────


class ToneAndManner(str, Enum):
    CASUAL = "casual"
    PROFESSIONAL = "professional"
    CREATIVE = "creative"
    EDUCATIONAL = "educational"


class Development(str, Enum):
    DRAMATIC = "dramatic"
    TUTORIAL = "tutorial"
    NARRATIVE = "narrative"
    DOCUMENTARY = "documentary"


class Intensity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Pacing(str, Enum):
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"


class ContiStyle(str, Enum):
    PENCIL = "pencil"
    ROUGH = "rough"
    MONOCHROME = "monochrome"
    COLORED = "colored"


class ShotType(str, Enum):
    CLOSE_UP = "close_up"
    MEDIUM = "medium"
    WIDE = "wide"
    EXTREME_WIDE = "extreme_wide"


class CameraMovement(str, Enum):
    STATIC = "static"
    PAN = "pan"
    TILT = "tilt"
    ZOOM = "zoom"
    DOLLY = "dolly"


class TransitionType(str, Enum):
    CUT = "cut"
    FADE = "fade"
    DISSOLVE = "dissolve"
    WIPE = "wipe"


class InsertPurpose(str, Enum):
    DETAIL = "detail"
    CONTEXT = "context"
    EMOTION = "emotion"
    TRANSITION = "transition"


class WizardStep(str, Enum):
    INPUT = "input"
    STORY = "story"
    SHOTS = "shots"


class ProjectStatus(str, Enum):
    DRAFT = "draft"
    GENERATING = "generating"
    COMPLETED = "completed"


# ── Input models ──────────────────────────────────────────────────────────────


class PlanningInput(BaseModel):
    """What the user typed on the first wizard step."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    logline: str = ""
    tone_and_manner: ToneAndManner = ToneAndManner.PROFESSIONAL
    development: Development = Development.NARRATIVE
    intensity: Intensity = Intensity.MEDIUM
    target_duration: Optional[int] = None
    additional_notes: Optional[str] = None


class Act(BaseModel):
    """One of the four narrative phases of a story.

    duration is optional; when every act leaves it unset the allocator falls
    back to an even split.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    order: int
    title: str
    description: str = ""
    duration: Optional[int] = None
    key_points: List[str] = []


# ── Output models ─────────────────────────────────────────────────────────────


class Shot(BaseModel):
    """A single storyboard shot.  act_id is a lookup reference, not ownership."""

    model_config = ConfigDict(extra="ignore")

    id: str
    order: int
    title: str
    description: str
    duration: int
    conti_description: str
    conti_style: ContiStyle
    act_id: str
    shot_type: ShotType
    camera_movement: CameraMovement
    visual_elements: List[str] = []
    transition_type: TransitionType = TransitionType.CUT


class InsertShot(BaseModel):
    """A short supplementary shot attached to a primary shot."""

    model_config = ConfigDict(extra="ignore")

    id: str
    shot_id: str
    order: int
    description: str
    purpose: InsertPurpose


class BreakdownResult(BaseModel):
    """Output of one story-to-shot breakdown.

    distribution holds the per-act shot counts exactly as the allocator
    produced them, so drift from the requested target stays visible.
    """

    model_config = ConfigDict(extra="ignore")

    schema_version: str = "1.0.0"
    breakdown_id: str
    shots: List[Shot]
    insert_shots: List[InsertShot] = []
    distribution: List[int]
    total_duration: int
    distribution_rationale: str = ""
    created_at: str  # ISO 8601


class ActsDocument(BaseModel):
    """On-disk input: the four acts plus the planning input they came from."""

    model_config = ConfigDict(extra="ignore")

    schema_version: str = "1.0.0"
    input: PlanningInput = Field(default_factory=PlanningInput)
    acts: List[Act]


class PlanningProject(BaseModel):
    """Everything the wizard holds for one project."""

    model_config = ConfigDict(extra="ignore")

    schema_version: str = "1.0.0"
    project_id: str
    input: PlanningInput = Field(default_factory=PlanningInput)
    acts: List[Act] = []
    shots: List[Shot] = []
    insert_shots: List[InsertShot] = []
    current_step: Optional[WizardStep] = None
    status: ProjectStatus = ProjectStatus.DRAFT
    updated_at: Optional[str] = None
