"""
Supabase implementation of ReferenceRuleRepository.

Rules are stored one row per exercise in "one_rm_reference_rules" with
columns exercise_id, priority (text[]), fallback_to_region, fallback_to_group.
"""
import logging
from typing import Dict, Any

from supabase import Client

logger = logging.getLogger(__name__)

RULE_FIELDS = ("priority", "fallback_to_region", "fallback_to_group")


class SupabaseReferenceRuleRepository:
    """Supabase implementation of ReferenceRuleRepository protocol."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    @staticmethod
    def _to_rule(row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "priority": list(row.get("priority") or []),
            "fallback_to_region": bool(row.get("fallback_to_region")),
            "fallback_to_group": bool(row.get("fallback_to_group")),
        }

    def get_all(self) -> Dict[str, Dict[str, Any]]:
        """Get every configured rule keyed by exercise ID."""
        try:
            result = self._client.table("one_rm_reference_rules").select("*").execute()
            return {row["exercise_id"]: self._to_rule(row) for row in (result.data or [])}
        except Exception:
            logger.exception("Error fetching 1RM reference rules")
            return {}

    def upsert(self, exercise_id: str, rule: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or replace the rule for an exercise."""
        row = {"exercise_id": exercise_id}
        row.update({field: rule.get(field) for field in RULE_FIELDS})
        result = (
            self._client.table("one_rm_reference_rules")
            .upsert(row, on_conflict="exercise_id")
            .execute()
        )
        saved = result.data[0] if result.data else row
        return self._to_rule(saved)

    def delete(self, exercise_id: str) -> bool:
        """Delete the rule for an exercise."""
        result = (
            self._client.table("one_rm_reference_rules")
            .delete()
            .eq("exercise_id", exercise_id)
            .execute()
        )
        return bool(result.data)
