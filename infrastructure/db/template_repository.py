"""
Supabase implementation of TemplateRepository.

This implementation uses the Supabase Python client to interact with the
``workout_templates`` and ``template_exercises`` tables.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from infrastructure.db.errors import to_persistence_error

logger = logging.getLogger(__name__)


class SupabaseTemplateRepository:
    """
    Supabase-backed template repository implementation.

    Template exercises are embedded in template reads; deleting a template
    relies on the foreign key cascade to remove its exercises.
    """

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def list_templates(self) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("workout_templates") \
                .select("*, template_exercises(*)") \
                .order("name") \
                .execute()
            return result.data or []
        except Exception as e:
            raise to_persistence_error(e, "list templates") from e

    def get_template(self, template_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("workout_templates") \
                .select("*, template_exercises(*, exercise:exercises(*))") \
                .eq("id", template_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"fetch template {template_id}") from e

    def create_template(self, name: str, *, color: Optional[str] = None) -> Dict[str, Any]:
        try:
            result = self._client.table("workout_templates").insert({
                "name": name,
                "color": color,
            }).execute()
        except Exception as e:
            raise to_persistence_error(e, "create template") from e
        if not result.data:
            raise to_persistence_error(RuntimeError("Insert returned no row"), "create template")
        logger.info(f"Created template {result.data[0].get('id')}: {name}")
        return result.data[0]

    def update_template(self, template_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("workout_templates") \
                .update(fields) \
                .eq("id", template_id) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"update template {template_id}") from e

    def delete_template(self, template_id: str) -> bool:
        try:
            result = self._client.table("workout_templates").delete().eq("id", template_id).execute()
            return bool(result.data)
        except Exception as e:
            raise to_persistence_error(e, f"delete template {template_id}") from e

    def get_template_exercise(self, template_exercise_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("template_exercises") \
                .select("*, exercise:exercises(*)") \
                .eq("id", template_exercise_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise to_persistence_error(e, f"fetch template exercise {template_exercise_id}") from e

    def list_template_exercises(self, template_id: str) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("template_exercises") \
                .select("*, exercise:exercises(*)") \
                .eq("template_id", template_id) \
                .order("order_index") \
                .execute()
            return result.data or []
        except Exception as e:
            raise to_persistence_error(e, f"list exercises of template {template_id}") from e

    def get_max_order_index(self, template_id: str) -> Optional[int]:
        try:
            result = self._client.table("template_exercises") \
                .select("order_index") \
                .eq("template_id", template_id) \
                .order("order_index", desc=True) \
                .limit(1) \
                .execute()
        except Exception as e:
            raise to_persistence_error(e, f"read order of template {template_id}") from e
        if not result.data:
            return None
        return result.data[0].get("order_index")

    def add_template_exercise(
        self,
        template_id: str,
        exercise_id: str,
        order_index: int,
    ) -> Dict[str, Any]:
        try:
            result = self._client.table("template_exercises").insert({
                "template_id": template_id,
                "exercise_id": exercise_id,
                "order_index": order_index,
            }).execute()
        except Exception as e:
            raise to_persistence_error(e, "add template exercise") from e
        if not result.data:
            raise to_persistence_error(RuntimeError("Insert returned no row"), "add template exercise")
        return result.data[0]

    def delete_template_exercise(self, template_exercise_id: str) -> bool:
        try:
            result = self._client.table("template_exercises") \
                .delete() \
                .eq("id", template_exercise_id) \
                .execute()
            return bool(result.data)
        except Exception as e:
            raise to_persistence_error(e, f"delete template exercise {template_exercise_id}") from e

    def bulk_update_order_index(self, updates: List[Dict[str, Any]]) -> None:
        try:
            for update in updates:
                self._client.table("template_exercises") \
                    .update({"order_index": update["order_index"]}) \
                    .eq("id", update["id"]) \
                    .execute()
        except Exception as e:
            raise to_persistence_error(e, "update template exercise order") from e
