"""
Exercises Repository Interface (Port).

This module defines the abstract interface for reading the exercise catalog.
Implementations may use Supabase or other backends.
"""
from typing import Protocol, Optional, List, Dict, Any


class ExercisesRepository(Protocol):
    """
    Abstract interface for querying the exercise catalog.

    Catalog order matters: anchor search during 1RM resolution takes the
    first qualifying exercise in the order returned by get_all().
    """

    def get_all(self, limit: int = 1000) -> List[Dict[str, Any]]:
        """
        Get all exercises in stable catalog order.

        Args:
            limit: Maximum number of exercises to return

        Returns:
            List of exercise dictionaries
        """
        ...

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an exercise by its ID.

        Args:
            exercise_id: The exercise slug (e.g., "barbell-bench-press")

        Returns:
            Exercise dictionary or None if not found
        """
        ...
