"""
Supabase implementation of WorkoutRepository.

Stores workouts in the ``workouts`` table and their exercises in
``workout_exercises`` (sets and draft_snapshot are JSONB columns).
"""
import logging
from typing import Optional, List, Dict, Any

from supabase import Client

from infrastructure.db.errors import to_persistence_error

logger = logging.getLogger(__name__)

WORKOUT_EXERCISE_WITH_JOINS = "*, exercise:exercises(*), workout:workouts(id, name, date)"


class SupabaseWorkoutRepository:
    """
    Supabase implementation of WorkoutRepository protocol.

    Every method raises PersistenceError when the client fails; lookups
    that match nothing return None or an empty list.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    # =========================================================================
    # Workouts
    # =========================================================================

    def list_workouts(
        self,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        try:
            query = self._client.table("workouts").select("*")
            if start_date:
                query = query.gte("date", start_date)
            if end_date:
                query = query.lte("date", end_date)
            result = query.order("date", desc=True).order("created_at", desc=True).execute()
            return result.data or []
        except Exception as e:
            raise to_persistence_error(e, "list workouts") from e

    def get_workout(self, workout_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("workouts") \
                .select("*, workout_exercises(*, exercise:exercises(*))") \
                .eq("id", workout_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"fetch workout {workout_id}") from e

    def create_workout(
        self,
        name: str,
        date: str,
        *,
        color: Optional[str] = None,
    ) -> Dict[str, Any]:
        try:
            result = self._client.table("workouts").insert({
                "name": name,
                "date": date,
                "color": color,
            }).execute()
        except Exception as e:
            raise to_persistence_error(e, "create workout") from e

        if not result.data:
            raise to_persistence_error(RuntimeError("Insert returned no row"), "create workout")
        logger.info(f"Created workout {result.data[0].get('id')} on {date}")
        return result.data[0]

    def update_workout(
        self,
        workout_id: str,
        fields: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("workouts").update(fields).eq("id", workout_id).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"update workout {workout_id}") from e

    def delete_workout(self, workout_id: str) -> bool:
        try:
            result = self._client.table("workouts").delete().eq("id", workout_id).execute()
            return bool(result.data)
        except Exception as e:
            raise to_persistence_error(e, f"delete workout {workout_id}") from e

    # =========================================================================
    # Workout exercises
    # =========================================================================

    def get_workout_exercise(self, workout_exercise_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("workout_exercises") \
                .select(WORKOUT_EXERCISE_WITH_JOINS) \
                .eq("id", workout_exercise_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"fetch workout exercise {workout_exercise_id}") from e

    def list_workout_exercises(self, workout_id: str) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("workout_exercises") \
                .select("*, exercise:exercises(*)") \
                .eq("workout_id", workout_id) \
                .order("order_index") \
                .execute()
            return result.data or []
        except Exception as e:
            raise to_persistence_error(e, f"list exercises of workout {workout_id}") from e

    def get_max_order_index(self, workout_id: str) -> Optional[int]:
        try:
            result = self._client.table("workout_exercises") \
                .select("order_index") \
                .eq("workout_id", workout_id) \
                .order("order_index", desc=True) \
                .limit(1) \
                .execute()
        except Exception as e:
            raise to_persistence_error(e, f"read order of workout {workout_id}") from e
        if not result.data:
            return None
        return result.data[0].get("order_index")

    def create_workout_exercises(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not rows:
            return []
        try:
            result = self._client.table("workout_exercises").insert(rows).execute()
        except Exception as e:
            raise to_persistence_error(e, "create workout exercises") from e
        return result.data or []

    def delete_workout_exercise(self, workout_exercise_id: str) -> bool:
        try:
            result = self._client.table("workout_exercises") \
                .delete() \
                .eq("id", workout_exercise_id) \
                .execute()
            return bool(result.data)
        except Exception as e:
            raise to_persistence_error(e, f"delete workout exercise {workout_exercise_id}") from e

    def get_latest_workout_exercise_sets(
        self,
        exercise_id: str,
    ) -> Optional[List[Dict[str, Any]]]:
        try:
            result = self._client.table("workout_exercises") \
                .select("sets") \
                .eq("exercise_id", exercise_id) \
                .order("created_at", desc=True) \
                .limit(1) \
                .execute()
        except Exception as e:
            raise to_persistence_error(e, f"fetch latest sets of exercise {exercise_id}") from e
        if not result.data:
            return None
        return result.data[0].get("sets") or []

    def get_workout_exercises_for_exercise(
        self,
        exercise_id: str,
        *,
        on_or_before: Optional[str] = None,
        before: Optional[str] = None,
        exclude_workout_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        try:
            query = self._client.table("workout_exercises") \
                .select("sets, workout_id, workout:workouts!inner(id, date)") \
                .eq("exercise_id", exercise_id)
            if on_or_before:
                query = query.lte("workout.date", on_or_before)
            if before:
                query = query.lt("workout.date", before)
            if exclude_workout_id:
                query = query.neq("workout_id", exclude_workout_id)
            result = query.execute()
        except Exception as e:
            raise to_persistence_error(e, f"fetch history of exercise {exercise_id}") from e

        sessions = []
        for row in result.data or []:
            workout = row.get("workout") or {}
            sessions.append({
                "sets": row.get("sets") or [],
                "workout_date": workout.get("date"),
                "workout_id": row.get("workout_id") or workout.get("id"),
            })
        # Embedded ordering only sorts the embedded rows, so sort here
        sessions.sort(key=lambda s: s["workout_date"] or "", reverse=True)
        return sessions

    def update_sets(
        self,
        workout_exercise_id: str,
        sets: List[Dict[str, Any]],
    ) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("workout_exercises") \
                .update({"sets": sets}) \
                .eq("id", workout_exercise_id) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"update sets of {workout_exercise_id}") from e

    def update_draft_snapshot(
        self,
        workout_exercise_id: str,
        snapshot: Optional[List[Dict[str, Any]]],
    ) -> bool:
        try:
            result = self._client.table("workout_exercises") \
                .update({"draft_snapshot": snapshot}) \
                .eq("id", workout_exercise_id) \
                .execute()
            return bool(result.data)
        except Exception as e:
            raise to_persistence_error(e, f"update draft of {workout_exercise_id}") from e

    def bulk_update_order_index(self, updates: List[Dict[str, Any]]) -> None:
        try:
            for update in updates:
                self._client.table("workout_exercises") \
                    .update({"order_index": update["order_index"]}) \
                    .eq("id", update["id"]) \
                    .execute()
        except Exception as e:
            raise to_persistence_error(e, "update workout exercise order") from e

    def get_next_by_order_index(
        self,
        workout_id: str,
        after_index: int,
    ) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("workout_exercises") \
                .select("*, exercise:exercises(*)") \
                .eq("workout_id", workout_id) \
                .gt("order_index", after_index) \
                .order("order_index") \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"fetch next exercise in workout {workout_id}") from e

    def list_exercise_sets(self) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("workout_exercises").select("exercise_id, sets").execute()
            return result.data or []
        except Exception as e:
            raise to_persistence_error(e, "list workout exercise sets") from e
