"""
Template Repository Interface (Port).

Abstract interface for workout templates and their ordered exercise slots.
"""
from typing import Protocol, Optional, List, Dict, Any


class TemplateRepository(Protocol):
    """
    Abstract interface for workout template persistence.

    Template exercises follow the same dense order_index rules as workout
    exercises but carry no set data.
    """

    def list_templates(self) -> List[Dict[str, Any]]:
        """
        Get every template with its template exercises embedded.

        Returns:
            Template rows ordered by name
        """
        ...

    def get_template(self, template_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a template with ``template_exercises`` (and their exercises) embedded.

        Returns:
            Template row or None if not found
        """
        ...

    def create_template(self, name: str, *, color: Optional[str] = None) -> Dict[str, Any]:
        """Create an empty template and return the row."""
        ...

    def update_template(self, template_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update template columns (name, color). None if not found."""
        ...

    def delete_template(self, template_id: str) -> bool:
        """Delete a template and its exercises. True if a row was deleted."""
        ...

    def get_template_exercise(self, template_exercise_id: str) -> Optional[Dict[str, Any]]:
        ...

    def list_template_exercises(self, template_id: str) -> List[Dict[str, Any]]:
        """
        List a template's exercises.

        Returns:
            Rows ordered by order_index ascending, with ``exercise`` embedded
        """
        ...

    def get_max_order_index(self, template_id: str) -> Optional[int]:
        ...

    def add_template_exercise(
        self,
        template_id: str,
        exercise_id: str,
        order_index: int,
    ) -> Dict[str, Any]:
        """Insert a template exercise at ``order_index`` and return the row."""
        ...

    def delete_template_exercise(self, template_exercise_id: str) -> bool:
        ...

    def bulk_update_order_index(self, updates: List[Dict[str, Any]]) -> None:
        """
        Persist new positions for sibling template exercises.

        Args:
            updates: ``[{id, order_index}]``
        """
        ...
