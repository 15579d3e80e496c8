"""Acts document v1.0.0: the four acts plus the planning input behind them."""
from __future__ import annotations

from typing import List

from shot_planner.breakdown.models import ActsDocument
from shot_planner.schemas.common import Source, canonical_dumps, model_errors, read_source

SCHEMA_VERSION = "1.0.0"


def load_acts(source: Source) -> ActsDocument:
    """Parse an ActsDocument.

    Raises:
        ValidationError: the data does not fit the ActsDocument model.
        FileNotFoundError: a Path source does not exist.
    """
    return ActsDocument.model_validate(read_source(source))


def dump_acts(document: ActsDocument, *, indent: int = 2) -> str:
    return canonical_dumps(document, indent)


def validate_acts(data: dict) -> List[str]:
    """Model-level check of a raw dict; returns "loc: message" strings, never raises."""
    return model_errors(ActsDocument, data)
