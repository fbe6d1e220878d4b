"""
Reference Rule Repository Interface (Port).

Defines persistence of 1RM reference rules (exercise ID -> fallback policy).
"""
from typing import Protocol, Dict, Any


class ReferenceRuleRepository(Protocol):
    """Abstract interface for the 1RM reference rule set."""

    def get_all(self) -> Dict[str, Dict[str, Any]]:
        """
        Get every configured rule.

        Returns:
            Mapping exercise ID -> rule dictionary with "priority",
            "fallback_to_region" and "fallback_to_group"
        """
        ...

    def upsert(self, exercise_id: str, rule: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert or replace the rule for an exercise.

        Args:
            exercise_id: Exercise the rule applies to
            rule: Rule dictionary

        Returns:
            The saved rule
        """
        ...

    def delete(self, exercise_id: str) -> bool:
        """
        Delete the rule for an exercise.

        Args:
            exercise_id: Exercise the rule applies to

        Returns:
            True if a rule was deleted
        """
        ...
