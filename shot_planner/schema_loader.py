"""Bundled JSON Schema contracts (shot_planner/contracts/*.json)."""
import json
from functools import lru_cache
from pathlib import Path

CONTRACTS_DIR = Path(__file__).resolve().parent / "contracts"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict:
    """Return the parsed contract called *name*, e.g. ``"Breakdown.v1.json"``.

    Raises FileNotFoundError when no such contract ships with the package.
    """
    schema_path = CONTRACTS_DIR / name
    if not schema_path.is_file():
        raise FileNotFoundError(f"Unknown contract {name!r}; looked in {CONTRACTS_DIR}")
    return json.loads(schema_path.read_text(encoding="utf-8"))
