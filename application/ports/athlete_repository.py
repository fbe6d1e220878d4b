"""
Athlete Repository Interface (Port).

Defines access to athlete snapshots and their recorded 1RMs.
"""
from typing import Protocol, Optional, Dict, Any


class AthleteRepository(Protocol):
    """
    Abstract interface for athlete data and 1RM records.

    Athlete dictionaries carry "one_rm_records" (exercise ID -> record dict)
    and, for older data, a legacy flat "one_rm" mapping (exercise ID -> kg).
    """

    def get_by_id(self, athlete_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an athlete by ID.

        Args:
            athlete_id: Athlete ID

        Returns:
            Athlete dictionary or None if not found
        """
        ...

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
        ...
