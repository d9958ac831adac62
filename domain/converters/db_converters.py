"""
Converters: Database row format <-> domain models.

Provides conversion between Supabase rows (plain dicts) and the domain
models. Repositories deal only in dicts; use cases convert at the boundary.

Database schema:
- exercises: id, name, video_url, movement_type, pattern,
  primary_body_part, secondary_body_part, equipment, is_mastered, notes,
  last_used_date, last_performed_sets (JSONB), created_at, updated_at
- workouts: id, name, date, color, created_at, updated_at
- workout_exercises: id, workout_id, exercise_id, order_index,
  sets (JSONB), draft_snapshot (JSONB, nullable), created_at, updated_at
- workout_templates: id, name, color, created_at, updated_at
- template_exercises: id, template_id, exercise_id, order_index,
  created_at, updated_at

Joined selects embed the related row under ``exercise`` / ``workout``.
"""

import datetime as dt
from typing import Any, Dict, Iterable, List, Optional

from domain.models import (
    DEFAULT_WORKOUT_NAME,
    Exercise,
    HistoricalSession,
    TemplateExercise,
    Workout,
    WorkoutExercise,
    WorkoutSet,
    WorkoutTemplate,
)


def _parse_datetime(value: Any) -> Optional[dt.datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, str):
        try:
            # PostgREST may send a Z suffix
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return dt.datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def parse_date(value: Any) -> Optional[dt.date]:
    """Parse a day-granularity date; timestamps are truncated to their date."""
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def parse_sets(raw: Any) -> List[WorkoutSet]:
    """
    Parse a JSONB set array into WorkoutSet objects.

    Missing set numbers fall back to the array position.

    Args:
        raw: List of set dicts (or None)

    Returns:
        List of WorkoutSet in stored order
    """
    if not raw:
        return []

    sets: List[WorkoutSet] = []
    for index, item in enumerate(raw):
        if isinstance(item, WorkoutSet):
            sets.append(item)
            continue
        reps = item.get("reps")
        sets.append(
            WorkoutSet(
                set_number=item.get("set_number") or index + 1,
                weight=item.get("weight"),
                reps=int(reps) if reps is not None else None,
            )
        )
    return sets


def parse_optional_sets(raw: Any) -> Optional[List[WorkoutSet]]:
    """Like parse_sets, but keeps None (no draft) distinct from []."""
    if raw is None:
        return None
    return parse_sets(raw)


def sets_to_db(sets: Iterable[WorkoutSet]) -> List[Dict[str, Any]]:
    """Serialize sets to the JSONB shape stored on workout_exercises."""
    return [s.model_dump() for s in sets]


def db_row_to_exercise(row: Dict[str, Any]) -> Exercise:
    """Convert an exercises row to a domain Exercise."""
    return Exercise(
        id=row.get("id"),
        name=row.get("name") or "",
        movement_type=row.get("movement_type") or "Unknown",
        pattern=row.get("pattern") or "Unknown",
        primary_body_part=row.get("primary_body_part") or "Unknown",
        secondary_body_part=row.get("secondary_body_part") or "",
        equipment=row.get("equipment") or "Unknown",
        is_mastered=bool(row.get("is_mastered", False)),
        notes=row.get("notes"),
        video_url=row.get("video_url"),
        last_used_date=parse_date(row.get("last_used_date")),
        last_performed_sets=parse_optional_sets(row.get("last_performed_sets")),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def exercise_to_db_row(exercise: Exercise) -> Dict[str, Any]:
    """
    Convert a domain Exercise to an insertable row.

    Identity, timestamps and usage tracking are owned by the database and
    are not included.
    """
    return {
        "name": exercise.name,
        "video_url": exercise.video_url or None,
        "movement_type": exercise.movement_type,
        "pattern": exercise.pattern,
        "primary_body_part": exercise.primary_body_part,
        "secondary_body_part": exercise.secondary_body_part,
        "equipment": exercise.equipment,
        "notes": exercise.notes or None,
        "is_mastered": exercise.is_mastered,
    }


def db_row_to_workout(row: Dict[str, Any]) -> Workout:
    """
    Convert a workouts row to a domain Workout.

    If the row embeds ``workout_exercises`` they are converted and sorted
    by order_index.

    Raises:
        ValueError: If the row has no usable date.
    """
    workout_date = parse_date(row.get("date"))
    if workout_date is None:
        raise ValueError(f"Workout row {row.get('id')} has no valid date")

    exercises = [
        db_row_to_workout_exercise(we) for we in row.get("workout_exercises") or []
    ]
    exercises.sort(key=lambda we: we.order_index)

    return Workout(
        id=row.get("id"),
        name=row.get("name") or DEFAULT_WORKOUT_NAME,
        date=workout_date,
        color=row.get("color"),
        workout_exercises=exercises,
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def db_row_to_workout_exercise(row: Dict[str, Any]) -> WorkoutExercise:
    """Convert a workout_exercises row (optionally with joins) to the domain model."""
    exercise_row = row.get("exercise")
    workout_row = row.get("workout") or {}

    return WorkoutExercise(
        id=row.get("id"),
        workout_id=row.get("workout_id") or workout_row.get("id") or "",
        exercise_id=row.get("exercise_id") or "",
        order_index=row.get("order_index") or 0,
        sets=parse_sets(row.get("sets")),
        draft_snapshot=parse_optional_sets(row.get("draft_snapshot")),
        exercise=db_row_to_exercise(exercise_row) if exercise_row else None,
        workout_name=workout_row.get("name"),
        workout_date=parse_date(workout_row.get("date")),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def db_row_to_template(row: Dict[str, Any]) -> WorkoutTemplate:
    """Convert a workout_templates row (optionally with exercises) to the domain model."""
    exercises = [
        db_row_to_template_exercise(te) for te in row.get("template_exercises") or []
    ]
    exercises.sort(key=lambda te: te.order_index)

    return WorkoutTemplate(
        id=row.get("id"),
        name=row.get("name") or "",
        color=row.get("color"),
        template_exercises=exercises,
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def db_row_to_template_exercise(row: Dict[str, Any]) -> TemplateExercise:
    """Convert a template_exercises row to the domain model."""
    exercise_row = row.get("exercise")
    return TemplateExercise(
        id=row.get("id"),
        template_id=row.get("template_id") or "",
        exercise_id=row.get("exercise_id") or "",
        order_index=row.get("order_index") or 0,
        exercise=db_row_to_exercise(exercise_row) if exercise_row else None,
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def db_rows_to_historical_sessions(rows: Iterable[Dict[str, Any]]) -> List[HistoricalSession]:
    """
    Convert ``{sets, workout_date, workout_id}`` rows to HistoricalSessions.

    Rows without a parseable workout date are skipped; they cannot be
    placed on the timeline.
    """
    sessions: List[HistoricalSession] = []
    for row in rows:
        workout_date = parse_date(row.get("workout_date"))
        if workout_date is None:
            continue
        sessions.append(
            HistoricalSession(
                date=workout_date,
                sets=parse_sets(row.get("sets")),
                workout_id=row.get("workout_id"),
            )
        )
    return sessions
