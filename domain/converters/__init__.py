"""
Domain converters between Supabase rows and domain models.

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import db_row_to_workout_exercise, sets_to_db
    >>> we = db_row_to_workout_exercise({
    ...     "id": "we-1",
    ...     "workout_id": "w-1",
    ...     "exercise_id": "ex-1",
    ...     "order_index": 0,
    ...     "sets": [{"set_number": 1, "weight": 80, "reps": 10}],
    ... })
    >>> sets_to_db(we.sets)
    [{'set_number': 1, 'weight': 80.0, 'reps': 10}]
"""

from domain.converters.db_converters import (
    db_row_to_exercise,
    db_row_to_template,
    db_row_to_template_exercise,
    db_row_to_workout,
    db_row_to_workout_exercise,
    db_rows_to_historical_sessions,
    exercise_to_db_row,
    parse_date,
    parse_optional_sets,
    parse_sets,
    sets_to_db,
)

__all__ = [
    "db_row_to_exercise",
    "db_row_to_template",
    "db_row_to_template_exercise",
    "db_row_to_workout",
    "db_row_to_workout_exercise",
    "db_rows_to_historical_sessions",
    "exercise_to_db_row",
    "parse_date",
    "parse_optional_sets",
    "parse_sets",
    "sets_to_db",
]
