"""Breakdown artifact v1.0.0."""
from __future__ import annotations

from typing import List

from shot_planner.breakdown.models import BreakdownResult
from shot_planner.schemas.common import Source, canonical_dumps, model_errors, read_source

SCHEMA_VERSION = "1.0.0"


def load_breakdown(source: Source) -> BreakdownResult:
    """Parse a BreakdownResult from a Path, JSON text or dict.

    Raises:
        ValidationError: the data does not fit the BreakdownResult model.
        FileNotFoundError: a Path source does not exist.
    """
    return BreakdownResult.model_validate(read_source(source))


def dump_breakdown(breakdown: BreakdownResult, *, indent: int = 2) -> str:
    """Canonical JSON text; the CLI writes exactly this."""
    return canonical_dumps(breakdown, indent)


def canonical_json_bytes(breakdown: BreakdownResult) -> bytes:
    return dump_breakdown(breakdown).encode("utf-8")


def validate_breakdown(data: dict) -> List[str]:
    return model_errors(BreakdownResult, data)
