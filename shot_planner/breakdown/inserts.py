"""Insert shot selection.

Every third shot gets two supplementary inserts.  Pure; ids are derived from
the parent shot id.
"""
from __future__ import annotations

from typing import List, Sequence

from shot_planner.breakdown.models import InsertPurpose, InsertShot, Shot

INSERT_INTERVAL: int = 3
INSERTS_PER_SHOT: int = 2

_PURPOSES = (
    InsertPurpose.DETAIL,
    InsertPurpose.CONTEXT,
    InsertPurpose.EMOTION,
    InsertPurpose.TRANSITION,
)

_PURPOSE_PHRASES = {
    InsertPurpose.DETAIL: "emphasising a detail",
    InsertPurpose.CONTEXT: "establishing context",
    InsertPurpose.EMOTION: "expressing emotion",
    InsertPurpose.TRANSITION: "bridging visually",
}


def select_insert_purpose(index: int) -> InsertPurpose:
    return _PURPOSES[index % len(_PURPOSES)]


def _make_insert_id(shot_id: str, index: int) -> str:
    return f"{shot_id}_insert_{index + 1}"


def select_inserts(shots: Sequence[Shot]) -> List[InsertShot]:
    """Return inserts for shots at 1-based positions 3, 6, 9, ...

    Each selected shot gets exactly INSERTS_PER_SHOT inserts; purposes restart
    at ``detail`` for every shot.
    """
    inserts: List[InsertShot] = []
    for index, shot in enumerate(shots):
        if (index + 1) % INSERT_INTERVAL != 0:
            continue
        for i in range(INSERTS_PER_SHOT):
            purpose = select_insert_purpose(i)
            inserts.append(
                InsertShot(
                    id=_make_insert_id(shot.id, i),
                    shot_id=shot.id,
                    order=i + 1,
                    description=f"Insert for {shot.title}, {_PURPOSE_PHRASES[purpose]}.",
                    purpose=purpose,
                )
            )
    return inserts
