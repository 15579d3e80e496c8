"""Breakdown workflow — the stateful wrapper around the pure breakdown.

BreakdownWorkflow walks an explicit state machine

    idle → analyzing_story → calculating_distribution → generating_shots
         → creating_inserts → optimizing → completed
                                              ↘ error

reporting a progress percentage at every stage boundary.  Requests are keyed
(by default on the deterministic breakdown id); a key that is already in
flight is refused rather than computed twice.  Each accepted run holds its own
token under that key, so a cancelled run never revives when the same key is
submitted again, and it never removes the newer run's entry.  Cancellation only takes effect
at a stage boundary; the pure computation itself is never interrupted.

Failures are fatal to the run: the state moves to ``error``, the retry
counter increments, and nothing is retried automatically.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from shot_planner.breakdown.allocator import allocate, check_preconditions
from shot_planner.breakdown.inserts import select_inserts
from shot_planner.breakdown.models import Act, BreakdownResult, Pacing, PlanningInput
from shot_planner.breakdown.planner import (
    DEFAULT_CREATED_AT,
    build_shots,
    default_breakdown,
    distribution_rationale,
    make_breakdown_id,
)
from shot_planner.breakdown.synthesizer import determine_pacing
from shot_planner.breakdown.transitions import optimize_transitions
from shot_planner.config import Settings, get_settings
from shot_planner.errors import ShotPlannerError
from shot_planner.validator import validate_story_acts

logger = logging.getLogger(__name__)


class BreakdownStep(str, Enum):
    IDLE = "idle"
    ANALYZING_STORY = "analyzing_story"
    CALCULATING_DISTRIBUTION = "calculating_distribution"
    GENERATING_SHOTS = "generating_shots"
    CREATING_INSERTS = "creating_inserts"
    OPTIMIZING = "optimizing"
    COMPLETED = "completed"
    ERROR = "error"


STEP_PROGRESS: Dict[BreakdownStep, int] = {
    BreakdownStep.IDLE: 0,
    BreakdownStep.ANALYZING_STORY: 15,
    BreakdownStep.CALCULATING_DISTRIBUTION: 30,
    BreakdownStep.GENERATING_SHOTS: 60,
    BreakdownStep.CREATING_INSERTS: 80,
    BreakdownStep.OPTIMIZING: 95,
    BreakdownStep.COMPLETED: 100,
    BreakdownStep.ERROR: 0,
}


@dataclass(frozen=True)
class BreakdownState:
    is_generating: bool = False
    progress: int = 0
    current_step: BreakdownStep = BreakdownStep.IDLE
    last_result: Optional[BreakdownResult] = None
    error: Optional[str] = None
    retry_count: int = 0


@dataclass(frozen=True)
class StoryAnalysis:
    complexity: str
    pacing: Pacing


class BreakdownCancelled(ShotPlannerError):
    """Raised internally when a request key is cancelled between stages."""


def analyze_story(acts: Sequence[Act], planning_input: PlanningInput) -> StoryAnalysis:
    avg_key_points = sum(len(act.key_points) for act in acts) / len(acts)
    if avg_key_points <= 2:
        complexity = "low"
    elif avg_key_points <= 4:
        complexity = "medium"
    else:
        complexity = "high"
    return StoryAnalysis(
        complexity=complexity,
        pacing=determine_pacing(planning_input.development, planning_input.intensity),
    )


StepCallback = Callable[[BreakdownStep, int], None]


class BreakdownWorkflow:
    """Runs breakdowns with progress reporting, dedup, and bounded regeneration."""

    def __init__(
        self,
        *,
        target_shot_count: Optional[int] = None,
        include_inserts: Optional[bool] = None,
        max_retries: Optional[int] = None,
        on_step_change: Optional[StepCallback] = None,
        on_success: Optional[Callable[[BreakdownResult], None]] = None,
        on_error: Optional[Callable[[str], None]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.target_shot_count = (
            target_shot_count if target_shot_count is not None else settings.default_shot_count
        )
        self.include_inserts = (
            include_inserts if include_inserts is not None else settings.include_inserts
        )
        self.max_retries = max_retries if max_retries is not None else settings.max_retries
        self._on_step_change = on_step_change
        self._on_success = on_success
        self._on_error = on_error

        self.state = BreakdownState()
        self._in_flight: Dict[str, object] = {}
        self._lock = threading.Lock()

    # ── State helpers ─────────────────────────────────────────────────────

    @property
    def can_retry(self) -> bool:
        return self.state.retry_count < self.max_retries

    @property
    def in_flight(self) -> List[str]:
        with self._lock:
            return sorted(self._in_flight)

    def _update(self, **changes) -> None:
        self.state = replace(self.state, **changes)

    def _ensure_active(self, key: str, token: object) -> None:
        with self._lock:
            if self._in_flight.get(key) is not token:
                raise BreakdownCancelled(key)

    def _advance(self, step: BreakdownStep, key: str, token: object) -> None:
        self._ensure_active(key, token)
        progress = STEP_PROGRESS[step]
        self._update(current_step=step, progress=progress)
        logger.debug("breakdown %s: %s (%d%%)", key, step.value, progress)
        if self._on_step_change is not None:
            self._on_step_change(step, progress)

    def _fail(self, message: str, *, count_retry: bool) -> None:
        self._update(
            is_generating=False,
            progress=0,
            current_step=BreakdownStep.ERROR,
            error=message,
            retry_count=self.state.retry_count + (1 if count_retry else 0),
        )
        if self._on_error is not None:
            self._on_error(message)

    # ── Public API ────────────────────────────────────────────────────────

    def run(
        self,
        acts: Sequence[Act],
        planning_input: PlanningInput,
        *,
        request_key: Optional[str] = None,
        created_at: str = DEFAULT_CREATED_AT,
    ) -> Optional[BreakdownResult]:
        """Run one breakdown.  Returns None when refused, invalid, cancelled or failed."""
        report = validate_story_acts(acts)
        if not report.is_valid:
            message = report.errors[0].message
            logger.error("story validation failed: %s", "; ".join(report.codes()))
            self._update(error=message)
            if self._on_error is not None:
                self._on_error(message)
            return None
        for warning in report.warnings:
            logger.warning(warning)

        try:
            check_preconditions(acts, self.target_shot_count)
        except ShotPlannerError as exc:
            logger.error("breakdown rejected: %s", exc)
            self._fail(str(exc), count_retry=True)
            return None

        key = request_key or make_breakdown_id(acts, planning_input, self.target_shot_count)
        with self._lock:
            if key in self._in_flight:
                logger.warning("breakdown %s is already in progress; ignoring duplicate request", key)
                return None
            token = object()
            self._in_flight[key] = token

        self._update(
            is_generating=True,
            progress=0,
            current_step=BreakdownStep.ANALYZING_STORY,
            error=None,
            last_result=None,
        )
        try:
            result = self._execute(acts, planning_input, key, token, created_at)
        except BreakdownCancelled:
            logger.info("breakdown %s cancelled", key)
            return None
        except ShotPlannerError as exc:
            logger.error("breakdown %s failed: %s (retry_count=%d)", key, exc, self.state.retry_count)
            self._fail(str(exc), count_retry=True)
            return None
        finally:
            with self._lock:
                if self._in_flight.get(key) is token:
                    del self._in_flight[key]

        self._update(
            is_generating=False,
            progress=STEP_PROGRESS[BreakdownStep.COMPLETED],
            current_step=BreakdownStep.COMPLETED,
            last_result=result,
            retry_count=0,
        )
        if self._on_step_change is not None:
            self._on_step_change(BreakdownStep.COMPLETED, STEP_PROGRESS[BreakdownStep.COMPLETED])
        logger.info(
            "breakdown %s completed: %d shots, %d inserts, %ds total",
            key,
            len(result.shots),
            len(result.insert_shots),
            result.total_duration,
        )
        if self._on_success is not None:
            self._on_success(result)
        return result

    def _execute(
        self,
        acts: Sequence[Act],
        planning_input: PlanningInput,
        key: str,
        token: object,
        created_at: str,
    ) -> BreakdownResult:
        self._advance(BreakdownStep.ANALYZING_STORY, key, token)
        analysis = analyze_story(acts, planning_input)
        logger.debug("story analysis: complexity=%s pacing=%s", analysis.complexity, analysis.pacing.value)

        self._advance(BreakdownStep.CALCULATING_DISTRIBUTION, key, token)
        distribution = allocate(acts, self.target_shot_count)
        if sum(distribution) != self.target_shot_count:
            logger.warning(
                "shot allocation %s sums to %d, requested %d",
                distribution,
                sum(distribution),
                self.target_shot_count,
            )

        self._advance(BreakdownStep.GENERATING_SHOTS, key, token)
        breakdown_id = make_breakdown_id(acts, planning_input, self.target_shot_count)
        shots = build_shots(acts, distribution, planning_input, breakdown_id)

        self._advance(BreakdownStep.CREATING_INSERTS, key, token)
        inserts = select_inserts(shots) if self.include_inserts else []

        self._advance(BreakdownStep.OPTIMIZING, key, token)
        shots = optimize_transitions(shots)
        self._ensure_active(key, token)

        return BreakdownResult(
            breakdown_id=breakdown_id,
            shots=shots,
            insert_shots=inserts,
            distribution=distribution,
            total_duration=sum(s.duration for s in shots),
            distribution_rationale=distribution_rationale(distribution, acts),
            created_at=created_at,
        )

    def regenerate(
        self,
        acts: Sequence[Act],
        planning_input: PlanningInput,
        feedback: Optional[str] = None,
        *,
        created_at: str = DEFAULT_CREATED_AT,
    ) -> Optional[BreakdownResult]:
        """Re-run with optional feedback appended to the planning notes.

        Refused once retry_count has reached max_retries.
        """
        if not self.can_retry:
            message = f"maximum retries ({self.max_retries}) exceeded"
            logger.error(message)
            self._update(error=message)
            if self._on_error is not None:
                self._on_error(message)
            return None

        if feedback and feedback.strip():
            notes = f"{planning_input.additional_notes or ''}\nBreakdown feedback: {feedback.strip()}".strip()
            planning_input = planning_input.model_copy(update={"additional_notes": notes})
        return self.run(acts, planning_input, created_at=created_at)

    def use_default(
        self,
        acts: Sequence[Act],
        *,
        created_at: str = DEFAULT_CREATED_AT,
    ) -> BreakdownResult:
        """Skip generation and install the even-split template breakdown."""
        result = default_breakdown(acts, created_at=created_at)
        self._update(
            is_generating=False,
            progress=100,
            current_step=BreakdownStep.COMPLETED,
            last_result=result,
            error=None,
        )
        logger.info("default breakdown template used: %d shots", len(result.shots))
        if self._on_success is not None:
            self._on_success(result)
        return result

    def cancel(self, request_key: Optional[str] = None) -> None:
        """Drop one request key (or all of them) and return to idle."""
        with self._lock:
            if request_key is None:
                self._in_flight.clear()
            else:
                self._in_flight.pop(request_key, None)
        self._update(is_generating=False, progress=0, current_step=BreakdownStep.IDLE, error=None)
        logger.info("breakdown cancelled")

    def clear_error(self) -> None:
        self._update(error=None, current_step=BreakdownStep.IDLE)

    def reset(self) -> None:
        if self.state.is_generating:
            self.cancel()
        self.state = BreakdownState()
