"""
Supabase implementation of ExercisesRepository.

Queries the ``exercises`` catalog table, plus the join tables that reference
it when answering usage questions.
"""
import logging
from typing import Optional, List, Dict, Any

from supabase import Client

from infrastructure.db.errors import escape_like, to_persistence_error

logger = logging.getLogger(__name__)


class SupabaseExercisesRepository:
    """
    Supabase implementation of ExercisesRepository protocol.

    Provides catalog CRUD, case-insensitive name lookup and usage counts.
    Every method raises PersistenceError when the client fails.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def list_all(self) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("exercises").select("*").order("name").execute()
            return result.data or []
        except Exception as e:
            raise to_persistence_error(e, "list exercises") from e

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("exercises").select("*").eq("id", exercise_id).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"fetch exercise {exercise_id}") from e

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Find an exercise by exact name match (case-insensitive).

        Args:
            name: The exercise name to search for

        Returns:
            Exercise dictionary or None if not found
        """
        try:
            result = self._client.table("exercises") \
                .select("*") \
                .ilike("name", escape_like(name.strip())) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"find exercise named {name}") from e

    def create(self, row: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = self._client.table("exercises").insert(row).execute()
        except Exception as e:
            raise to_persistence_error(e, "create exercise") from e
        if not result.data:
            raise to_persistence_error(RuntimeError("Insert returned no row"), "create exercise")
        return result.data[0]

    def update(self, exercise_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("exercises").update(fields).eq("id", exercise_id).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"update exercise {exercise_id}") from e

    def delete(self, exercise_id: str) -> bool:
        try:
            result = self._client.table("exercises").delete().eq("id", exercise_id).execute()
            return bool(result.data)
        except Exception as e:
            raise to_persistence_error(e, f"delete exercise {exercise_id}") from e

    def get_usage_counts(self, exercise_id: str) -> Dict[str, int]:
        try:
            workouts_result = self._client.table("workout_exercises") \
                .select("id", count="exact") \
                .eq("exercise_id", exercise_id) \
                .execute()

            templates_result = self._client.table("template_exercises") \
                .select("id", count="exact") \
                .eq("exercise_id", exercise_id) \
                .execute()
        except Exception as e:
            raise to_persistence_error(e, f"count usage of exercise {exercise_id}") from e

        return {
            "workout_count": workouts_result.count or 0,
            "template_count": templates_result.count or 0,
        }

    def get_usage_details(self, exercise_id: str) -> Dict[str, List[Dict[str, Any]]]:
        try:
            workouts_result = self._client.table("workout_exercises") \
                .select("workout:workouts!inner(id, name, date)") \
                .eq("exercise_id", exercise_id) \
                .execute()

            templates_result = self._client.table("template_exercises") \
                .select("template:workout_templates!inner(id, name)") \
                .eq("exercise_id", exercise_id) \
                .execute()
        except Exception as e:
            raise to_persistence_error(e, f"fetch usage of exercise {exercise_id}") from e

        # An exercise can appear more than once in the same workout
        workouts: Dict[str, Dict[str, Any]] = {}
        for row in workouts_result.data or []:
            workout = row.get("workout")
            if workout and workout.get("id") not in workouts:
                workouts[workout["id"]] = {
                    "id": workout["id"],
                    "name": workout.get("name"),
                    "date": workout.get("date"),
                }

        templates: Dict[str, Dict[str, Any]] = {}
        for row in templates_result.data or []:
            template = row.get("template")
            if template and template.get("id") not in templates:
                templates[template["id"]] = {"id": template["id"], "name": template.get("name")}

        return {
            "workouts": sorted(workouts.values(), key=lambda w: w.get("date") or "", reverse=True),
            "templates": sorted(templates.values(), key=lambda t: (t.get("name") or "").casefold()),
        }

    def update_last_used(
        self,
        exercise_id: str,
        last_used_date: str,
        last_performed_sets: List[Dict[str, Any]],
    ) -> None:
        try:
            self._client.table("exercises").update({
                "last_used_date": last_used_date,
                "last_performed_sets": last_performed_sets,
            }).eq("id", exercise_id).execute()
        except Exception as e:
            raise to_persistence_error(e, f"update last used data of exercise {exercise_id}") from e
        logger.info(f"Exercise {exercise_id} last used on {last_used_date}")
