"""
Supabase implementation of AthleteRepository.

Athletes live in the "athletes" table; structured 1RM records in
"one_rm_records" (one row per athlete and exercise). The legacy flat map is
the "one_rm" JSON column of the athlete row.
"""
import logging
from typing import Optional, Dict, Any

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseAthleteRepository:
    """Supabase implementation of AthleteRepository protocol."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get_by_id(self, athlete_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an athlete with its 1RM records.

        Args:
            athlete_id: Athlete ID

        Returns:
            Athlete dictionary or None if not found
        """
        try:
            result = self._client.table("athletes").select("*").eq("id", athlete_id).execute()
            if not result.data:
                return None
            athlete = dict(result.data[0])

            records = (
                self._client.table("one_rm_records")
                .select("*")
                .eq("athlete_id", athlete_id)
                .execute()
            )
            athlete["one_rm_records"] = {
                row["exercise_id"]: row for row in (records.data or [])
            }
            athlete["one_rm"] = athlete.get("one_rm") or {}
            return athlete
        except Exception:
            logger.exception(f"Error fetching athlete {athlete_id}")
            return None

    def save_one_rm_record(
        self,
        athlete_id: str,
        record: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Insert or replace one structured 1RM record.

        Args:
            athlete_id: Athlete ID
            record: Record dictionary keyed by its "exercise_id"

        Returns:
            The saved record, or None if the athlete does not exist
        """
        exists = self._client.table("athletes").select("id").eq("id", athlete_id).execute()
        if not exists.data:
            return None

        row = {**record, "athlete_id": athlete_id}
        result = (
            self._client.table("one_rm_records")
            .upsert(row, on_conflict="athlete_id,exercise_id")
            .execute()
        )
        logger.info(f"Saved 1RM record for athlete {athlete_id}, exercise {record.get('exercise_id')}")
        return result.data[0] if result.data else row
