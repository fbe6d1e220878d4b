"""
1RM Service.

Business logic on top of the repositories:
- Resolving the 1RM to use for an athlete and exercise
- Load suggestions and reference labels
- Reference rule management
- Recording user-confirmed 1RM values
- Progression recommendations for logged sessions
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from application.ports import (
    AthleteRepository,
    ExercisesRepository,
    ReferenceRuleRepository,
)
from backend.core import one_rm_resolver
from backend.core.load_prescription import (
    LoadSuggestion,
    ReferenceContext,
    describe_resolution,
    suggest_load,
)
from backend.core.one_rm_advisor import OneRMRecommendation, analyze_session_for_one_rm
from backend.core.one_rm_calculator import create_one_rm_record, update_one_rm_record
from backend.settings import Settings, get_settings
from domain.models import (
    Athlete,
    Exercise,
    OneRMRecord,
    OneRMSource,
    ReferenceRule,
    ReferenceRuleSet,
    ResolveResult,
    WorkoutSession,
)

logger = logging.getLogger(__name__)


class OneRMServiceError(Exception):
    """Base class for 1RM service errors."""


class AthleteNotFoundError(OneRMServiceError):
    def __init__(self, athlete_id: str):
        super().__init__(f"Athlete '{athlete_id}' not found")
        self.athlete_id = athlete_id


class ExerciseNotFoundError(OneRMServiceError):
    def __init__(self, exercise_id: str):
        super().__init__(f"Exercise '{exercise_id}' not found")
        self.exercise_id = exercise_id


class OneRMService:
    """
    Service for 1RM resolution and record management.

    The service is constructed per request with injected repositories; it
    holds no state of its own beyond them.
    """

    def __init__(
        self,
        exercises_repo: ExercisesRepository,
        athletes_repo: AthleteRepository,
        rules_repo: ReferenceRuleRepository,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the 1RM service.

        Args:
            exercises_repo: Repository for the exercise catalog
            athletes_repo: Repository for athletes and their 1RM records
            rules_repo: Repository for reference rules
            settings: Settings for rounding and bodyweight defaults
        """
        self._exercises_repo = exercises_repo
        self._athletes_repo = athletes_repo
        self._rules_repo = rules_repo
        self._settings = settings or get_settings()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _load_athlete(self, athlete_id: str) -> Athlete:
        data = self._athletes_repo.get_by_id(athlete_id)
        if data is None:
            raise AthleteNotFoundError(athlete_id)
        return Athlete.model_validate(data)

    def _load_exercise(self, exercise_id: str) -> Exercise:
        data = self._exercises_repo.get_by_id(exercise_id)
        if data is None:
            raise ExerciseNotFoundError(exercise_id)
        return Exercise.model_validate(data)

    def _load_catalog(self) -> List[Exercise]:
        return [Exercise.model_validate(row) for row in self._exercises_repo.get_all()]

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def _resolve(
        self,
        athlete_id: str,
        exercise_id: str,
    ) -> Tuple[Optional[ResolveResult], Exercise, List[Exercise]]:
        athlete = self._load_athlete(athlete_id)
        exercise = self._load_exercise(exercise_id)
        catalog = self._load_catalog()
        rules = self.get_rules()

        result = one_rm_resolver.resolve_one_rm(exercise, athlete, rules, catalog)
        if result is None:
            logger.debug(f"No 1RM resolved for athlete {athlete_id}, exercise {exercise_id}")
        else:
            logger.debug(
                f"Resolved 1RM {result.value} ({result.source.value}) for athlete "
                f"{athlete_id}, exercise {exercise_id}"
            )
        return result, exercise, catalog

    def resolve(self, athlete_id: str, exercise_id: str) -> Optional[ResolveResult]:
        """
        Resolve the 1RM to use for an athlete and exercise.

        Args:
            athlete_id: Athlete ID
            exercise_id: Exercise ID

        Returns:
            ResolveResult, or None when no usable 1RM exists

        Raises:
            AthleteNotFoundError: Unknown athlete
            ExerciseNotFoundError: Unknown exercise
        """
        result, _, _ = self._resolve(athlete_id, exercise_id)
        return result

    def suggest_load(
        self,
        athlete_id: str,
        exercise_id: str,
        target_reps: int,
    ) -> Tuple[Optional[ResolveResult], Optional[LoadSuggestion]]:
        """Resolve the 1RM and derive a working load for target_reps."""
        result, _, _ = self._resolve(athlete_id, exercise_id)
        suggestion = suggest_load(
            result,
            target_reps,
            rounding=self._settings.load_rounding_kg,
        )
        return result, suggestion

    def get_reference_context(self, athlete_id: str, exercise_id: str) -> ReferenceContext:
        """Resolve the 1RM and describe where it came from."""
        result, exercise, catalog = self._resolve(athlete_id, exercise_id)
        return describe_resolution(result, exercise, catalog)

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def get_rules(self) -> ReferenceRuleSet:
        """Get the configured rule set."""
        rules = one_rm_resolver.create_empty_rules()
        for exercise_id, data in self._rules_repo.get_all().items():
            rules = one_rm_resolver.set_rule(rules, exercise_id, data)
        return rules

    def set_rule(self, exercise_id: str, rule: ReferenceRule) -> ReferenceRule:
        """
        Insert or replace the rule for an exercise.

        Raises:
            ExerciseNotFoundError: Unknown exercise
        """
        self._load_exercise(exercise_id)
        saved = self._rules_repo.upsert(exercise_id, rule.model_dump())
        logger.info(
            f"Set 1RM reference rule for {exercise_id}: priority={rule.priority}, "
            f"region={rule.fallback_to_region}, group={rule.fallback_to_group}"
        )
        return ReferenceRule.model_validate(saved)

    def delete_rule(self, exercise_id: str) -> bool:
        """Delete the rule for an exercise; False if there was none."""
        deleted = self._rules_repo.delete(exercise_id)
        if deleted:
            logger.info(f"Deleted 1RM reference rule for {exercise_id}")
        return deleted

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def record_one_rm(
        self,
        athlete_id: str,
        exercise_id: str,
        value: float,
        *,
        source: OneRMSource = OneRMSource.MANUAL,
        session_id: Optional[str] = None,
    ) -> OneRMRecord:
        """
        Record a user-confirmed 1RM value.

        Creates the record or appends to its history.

        Raises:
            AthleteNotFoundError: Unknown athlete
            ExerciseNotFoundError: Unknown exercise
            ValueError: value is not positive
        """
        if value <= 0:
            raise ValueError("1RM value must be positive")

        athlete = self._load_athlete(athlete_id)
        self._load_exercise(exercise_id)

        existing = athlete.one_rm_records.get(exercise_id)
        if existing is None:
            record = create_one_rm_record(exercise_id, value, source, session_id)
        else:
            record = update_one_rm_record(existing, value, source, session_id)

        saved = self._athletes_repo.save_one_rm_record(
            athlete_id, record.model_dump(mode="json")
        )
        if saved is None:
            raise AthleteNotFoundError(athlete_id)

        logger.info(
            f"Recorded 1RM {value} ({source.value}) for athlete {athlete_id}, exercise {exercise_id}"
        )
        return OneRMRecord.model_validate(saved)

    # -------------------------------------------------------------------------
    # Advisor
    # -------------------------------------------------------------------------

    def analyze_session(
        self,
        athlete_id: str,
        session: WorkoutSession,
    ) -> List[OneRMRecommendation]:
        """
        Recommend 1RM changes from a logged session. Nothing is written.

        Entries without an embedded exercise are enriched from the catalog so
        bodyweight exercises are estimated with the athlete's weight.
        """
        athlete = self._load_athlete(athlete_id)

        entries = []
        for entry in session.exercises:
            if entry.exercise is None:
                data = self._exercises_repo.get_by_id(entry.exercise_id)
                if data is not None:
                    entry = entry.model_copy(update={"exercise": Exercise.model_validate(data)})
            entries.append(entry)
        session = session.model_copy(update={"exercises": entries})

        recommendations = analyze_session_for_one_rm(
            session,
            athlete.one_rm_records,
            athlete.current_weight_kg,
            default_bodyweight_kg=self._settings.default_bodyweight_kg,
        )
        logger.info(
            f"Session {session.id} for athlete {athlete_id}: "
            f"{len(recommendations)} 1RM recommendations"
        )
        return recommendations
