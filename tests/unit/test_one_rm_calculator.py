"""
Unit tests for 1RM estimation and record helpers.

Tests cover:
- Epley, Brzycki and Lombardi formulas
- Effective load for bodyweight exercises
- Recommended increments and reverse-Epley working weights
- Non-mutating record helpers
"""
import pytest

from backend.core.one_rm_calculator import (
    can_recommend_one_rm,
    create_one_rm_record,
    effective_load,
    estimate_one_rm,
    estimate_one_rm_average,
    estimate_one_rm_brzycki,
    estimate_one_rm_epley,
    estimate_one_rm_from_set,
    estimate_one_rm_lombardi,
    increment_strength_focus_sessions,
    recommended_increment,
    round_half_up,
    update_one_rm_record,
    weight_for_reps,
)
from domain.models import Exercise, OneRMSource, SetEntry


# =============================================================================
# Formula Tests
# =============================================================================


@pytest.mark.unit
class TestEpleyFormula:
    """Tests for the Epley 1RM formula."""

    def test_single_rep_returns_weight(self):
        """1 rep means the weight IS the 1RM."""
        assert estimate_one_rm_epley(100, 1) == 100.0

    def test_zero_reps_returns_zero(self):
        assert estimate_one_rm_epley(100, 0) == 0.0

    def test_zero_weight_returns_zero(self):
        assert estimate_one_rm_epley(0, 5) == 0.0

    def test_standard_5_reps(self):
        # 100 x (1 + 5/30) = 116.7
        assert estimate_one_rm_epley(100, 5) == 117.0

    def test_above_reliable_reps_returns_weight(self):
        assert estimate_one_rm_epley(60, 15) == 60.0


@pytest.mark.unit
class TestBrzyckiFormula:
    """Tests for the Brzycki 1RM formula."""

    def test_single_rep_returns_weight(self):
        assert estimate_one_rm_brzycki(100, 1) == 100.0

    def test_standard_5_reps(self):
        # 100 x 36 / 32 = 112.5, halves round up
        assert estimate_one_rm_brzycki(100, 5) == 113.0

    def test_10_reps(self):
        # 100 x 36 / 27 = 133.3
        assert estimate_one_rm_brzycki(100, 10) == 133.0

    def test_negative_reps_returns_zero(self):
        assert estimate_one_rm_brzycki(100, -3) == 0.0


@pytest.mark.unit
class TestLombardiFormula:
    """Tests for the Lombardi 1RM formula."""

    def test_standard_5_reps(self):
        # 100 x 5^0.1 = 117.5
        assert estimate_one_rm_lombardi(100, 5) == 117.0

    def test_single_rep_returns_weight(self):
        assert estimate_one_rm_lombardi(80, 1) == 80.0


@pytest.mark.unit
class TestEstimateOneRM:
    """Tests for the conservative combined estimate."""

    def test_uses_more_conservative_formula(self):
        """Brzycki is lower than Epley at 5 reps."""
        assert estimate_one_rm(100, 5) == 113.0

    def test_invalid_input(self):
        assert estimate_one_rm(0, 5) == 0.0
        assert estimate_one_rm(100, 0) == 0.0

    def test_high_reps_return_weight(self):
        assert estimate_one_rm(50, 20) == 50.0

    def test_average_of_all_formulas(self):
        result = estimate_one_rm_average(100, 5)
        assert result["epley"] == 117.0
        assert result["brzycki"] == 113.0
        assert result["lombardi"] == 117.0
        assert result["average"] == 116.0

    def test_average_invalid_input(self):
        assert estimate_one_rm_average(100, 0)["average"] == 0.0


@pytest.mark.unit
class TestRoundHalfUp:
    """Tests for rounding helper."""

    def test_halves_round_up(self):
        assert round_half_up(112.5) == 113.0

    def test_step(self):
        assert round_half_up(81.3, 2.5) == 82.5
        assert round_half_up(78.9, 2.5) == 80.0


# =============================================================================
# Effective Load Tests
# =============================================================================


@pytest.mark.unit
class TestEffectiveLoad:
    """Tests for bodyweight-aware effective load."""

    def test_regular_exercise_unchanged(self):
        assert effective_load(100, False, 80) == 100

    def test_bodyweight_adds_athlete_weight(self):
        assert effective_load(10, True, 80) == 90

    def test_bodyweight_uses_default_when_unknown(self):
        assert effective_load(10, True, None) == 80

    def test_custom_default_bodyweight(self):
        assert effective_load(0, True, None, default_bodyweight_kg=75) == 75

    def test_estimate_from_set_prefers_actual_values(self):
        set_entry = SetEntry(target_weight=80, target_reps=8, actual_weight=100, actual_reps=5)
        assert estimate_one_rm_from_set(set_entry) == 113.0

    def test_estimate_from_set_bodyweight(self):
        pull_up = Exercise(id="weighted-pull-up", is_bodyweight=True)
        set_entry = SetEntry(actual_weight=20, actual_reps=1)
        assert estimate_one_rm_from_set(set_entry, pull_up, 80) == 100.0

    def test_estimate_from_set_without_reps(self):
        assert estimate_one_rm_from_set(SetEntry(actual_weight=100)) == 0.0


# =============================================================================
# Increment and Working Weight Tests
# =============================================================================


@pytest.mark.unit
class TestRecommendedIncrement:
    """Tests for the recommended 1RM step."""

    def test_minimum_increment(self):
        assert recommended_increment(60) == 2.5

    def test_percent_based_increment(self):
        assert recommended_increment(200) == 5.0
        assert recommended_increment(300) == 7.5

    def test_non_positive_current(self):
        assert recommended_increment(0) == 2.5


@pytest.mark.unit
class TestWeightForReps:
    """Tests for reverse-Epley working weight."""

    def test_five_reps(self):
        # 100 / (1 + 5/30) = 85.7 -> 85
        assert weight_for_reps(100, 5) == 85.0

    def test_single_rounded_to_whole_kg(self):
        assert weight_for_reps(100, 1, 90) == 90.0

    def test_intensity_scales_weight(self):
        # 85.7 x 0.9 = 77.1 -> 77.5
        assert weight_for_reps(100, 5, 90) == 77.5

    def test_invalid_input(self):
        assert weight_for_reps(0, 5) == 0.0
        assert weight_for_reps(100, 0) == 0.0


# =============================================================================
# Record Helper Tests
# =============================================================================


@pytest.mark.unit
class TestRecordHelpers:
    """Tests for creating and updating 1RM records."""

    def test_create_record_starts_history(self):
        record = create_one_rm_record("bench", 100, OneRMSource.MANUAL)
        assert record.current_one_rm == 100
        assert len(record.history) == 1
        assert record.history[0].value == 100
        assert record.strength_focus_sessions is None

    def test_create_estimated_record_counts_sessions(self):
        record = create_one_rm_record("bench", 100, OneRMSource.ESTIMATED, session_id="s1")
        assert record.strength_focus_sessions == 0
        assert record.history[0].session_id == "s1"

    def test_update_appends_history_without_mutation(self):
        original = create_one_rm_record("bench", 100, OneRMSource.MANUAL)
        updated = update_one_rm_record(original, 105, OneRMSource.AI_SUGGESTED)

        assert updated.current_one_rm == 105
        assert updated.source == OneRMSource.AI_SUGGESTED
        assert [h.value for h in updated.history] == [100, 105]
        assert original.current_one_rm == 100
        assert len(original.history) == 1

    def test_can_recommend_requires_session(self):
        record = create_one_rm_record("bench", 100, OneRMSource.MANUAL)
        assert can_recommend_one_rm(None) is False
        assert can_recommend_one_rm(record) is False
        assert can_recommend_one_rm(increment_strength_focus_sessions(record)) is True

    def test_increment_sessions(self):
        record = create_one_rm_record("bench", 100, OneRMSource.ESTIMATED)
        bumped = increment_strength_focus_sessions(increment_strength_focus_sessions(record))
        assert bumped.strength_focus_sessions == 2
        assert record.strength_focus_sessions == 0
