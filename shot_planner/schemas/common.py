"""Shared helpers for the versioned document modules."""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Type, Union

from pydantic import BaseModel, ValidationError

Source = Union[str, bytes, dict, Path]


def read_source(source: Source) -> dict:
    """Accept a file Path, a JSON string/bytes, or an already-parsed dict."""
    if isinstance(source, Path):
        return json.loads(source.read_text(encoding="utf-8"))
    if isinstance(source, (str, bytes)):
        return json.loads(source)
    return source


def canonical_dumps(model: BaseModel, indent: int = 2) -> str:
    """sort_keys=True, non-ASCII kept; equal models give identical text."""
    raw = json.loads(model.model_dump_json())
    return json.dumps(raw, sort_keys=True, indent=indent, ensure_ascii=False)


def model_errors(model_cls: Type[BaseModel], data: dict) -> List[str]:
    try:
        model_cls.model_validate(data)
    except ValidationError as exc:
        return [f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}" for e in exc.errors()]
    return []
