"""Active Workout - Pure functions for recording a session in progress.

A routine is expanded into editable rows of weight/reps text; finishing the
workout turns the filled-in rows into a Create-Session payload.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .models import (
    CreateSessionPayload,
    SessionExercisePayload,
    SetPayload,
    WorkoutRoutine,
)


EMPTY_WORKOUT_MESSAGE = "Please log at least one set before finishing."


@dataclass
class ActiveSet:
    """One editable row: what the user has typed so far."""

    index: int
    weight_text: str = ""
    reps_text: str = ""

    @property
    def has_input(self) -> bool:
        return bool(self.weight_text.strip() or self.reps_text.strip())


@dataclass
class ActiveExercise:
    name: str
    note: Optional[str] = None
    sets: list[ActiveSet] = field(default_factory=list)


def exercises_from_routine(routine: WorkoutRoutine) -> list[ActiveExercise]:
    """Expand a routine's templates into editable rows.

    Each exercise gets max(default_sets, 1) rows, prefilled with the default
    weight (as a whole number) and default reps when the template has them.
    """
    exercises = []
    for template in routine.exercises:
        count = max(template.default_sets or 1, 1)
        weight = str(int(template.default_weight_kg)) if template.default_weight_kg is not None else ""
        reps = str(template.default_reps) if template.default_reps is not None else ""
        exercises.append(
            ActiveExercise(
                name=template.name,
                note=template.description,
                sets=[ActiveSet(index=i + 1, weight_text=weight, reps_text=reps) for i in range(count)],
            )
        )
    return exercises


def add_set(exercise: ActiveExercise) -> ActiveSet:
    """Append an empty row with the next 1-based index."""
    next_index = max((s.index for s in exercise.sets), default=0) + 1
    row = ActiveSet(index=next_index)
    exercise.sets.append(row)
    return row


def _parse_float(text: str) -> Optional[float]:
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_int(text: str) -> Optional[int]:
    try:
        return int(text.strip())
    except ValueError:
        return None


def build_session_payload(
    routine_id: str,
    started_at: datetime,
    finished_at: datetime,
    exercises: list[ActiveExercise],
) -> CreateSessionPayload:
    """Turn the filled-in rows into a Create-Session payload.

    Rows with no input are skipped and exercises left without sets are
    dropped. Text that does not parse is sent as absent.

    Raises:
        ValueError: If no set was logged at all
    """
    payloads = []
    for exercise in exercises:
        sets = [
            SetPayload(
                index=row.index,
                weight_kg=_parse_float(row.weight_text),
                reps=_parse_int(row.reps_text),
            )
            for row in exercise.sets
            if row.has_input
        ]
        if sets:
            payloads.append(SessionExercisePayload(name=exercise.name, sets=sets))

    if not payloads:
        raise ValueError(EMPTY_WORKOUT_MESSAGE)

    return CreateSessionPayload(
        routine_id=routine_id,
        started_at=started_at,
        finished_at=finished_at,
        exercises=payloads,
    )
