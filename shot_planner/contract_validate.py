import json

import jsonschema

from .schema_loader import load_schema
from .schemas.breakdown_v1 import canonical_json_bytes


def validate_acts_contract(data: dict) -> None:
    """Validate an acts document dict against the Acts.v1.json contract.

    Raises jsonschema.ValidationError if non-conformant.
    """
    jsonschema.validate(data, load_schema("Acts.v1.json"))


def validate_breakdown_contract(data: dict) -> None:
    """Validate a breakdown dict against the Breakdown.v1.json contract.

    Raises jsonschema.ValidationError if non-conformant.
    """
    jsonschema.validate(data, load_schema("Breakdown.v1.json"))


def validate_breakdown_model(breakdown) -> None:
    """Project a BreakdownResult model to canonical JSON and validate it.

    Raises jsonschema.ValidationError if the projected artifact is non-conformant.
    """
    raw = json.loads(canonical_json_bytes(breakdown).decode("utf-8"))
    validate_breakdown_contract(raw)
