"""
Supabase implementation of ExercisesRepository.

This module provides the concrete Supabase implementation for reading
the exercise catalog.
"""
import logging
from typing import Optional, List, Dict, Any

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseExercisesRepository:
    """
    Supabase implementation of ExercisesRepository protocol.

    Rows are ordered by "catalog_position" so that anchor search sees a
    stable catalog order. Exercises are cached per instance; a repository
    is created per request, so the cache never outlives it.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client
        self._exercises_cache: Dict[str, Dict[str, Any]] = {}

    def _cache_result(self, exercise: Dict[str, Any]) -> None:
        """Add exercise to cache."""
        if exercise:
            self._exercises_cache[exercise.get("id", "")] = exercise

    def get_all(self, limit: int = 1000) -> List[Dict[str, Any]]:
        """
        Get all exercises in catalog order.

        Args:
            limit: Maximum number of exercises to return

        Returns:
            List of exercise dictionaries
        """
        try:
            result = (
                self._client.table("exercises")
                .select("*")
                .order("catalog_position")
                .limit(limit)
                .execute()
            )
            exercises = result.data or []
            for exercise in exercises:
                self._cache_result(exercise)
            return exercises
        except Exception:
            logger.exception("Error fetching all exercises")
            return []

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an exercise by its ID.

        Args:
            exercise_id: The exercise slug (e.g., "barbell-bench-press")

        Returns:
            Exercise dictionary or None if not found
        """
        cached = self._exercises_cache.get(exercise_id)
        if cached is not None:
            return cached

        try:
            result = self._client.table("exercises").select("*").eq("id", exercise_id).execute()
            if result.data and len(result.data) > 0:
                self._cache_result(result.data[0])
                return result.data[0]
            return None
        except Exception:
            logger.exception(f"Error fetching exercise by id {exercise_id}")
            return None
