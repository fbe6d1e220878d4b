"""
Unit tests for 1RM reference resolution.

Tests cover:
- Effective 1RM map merging (structured records vs legacy flat map)
- Tier order: own -> priority -> region -> group -> None
- Anchor search rules (anchors only, target excluded, catalog order)
- Purity and rule set helpers
"""
import copy

import pytest

from backend.core.one_rm_resolver import (
    create_empty_rules,
    effective_one_rm_map,
    remove_rule,
    resolve_one_rm,
    set_rule,
)
from domain.models import Athlete, Exercise, ReferenceRule, ResolveSource


def _athlete(records=None, legacy=None) -> Athlete:
    return Athlete(
        id="athlete-1",
        one_rm_records={
            exercise_id: {"exercise_id": exercise_id, "current_one_rm": value}
            for exercise_id, value in (records or {}).items()
        },
        one_rm=legacy or {},
    )


@pytest.fixture
def catalog():
    return [
        Exercise(id="bench-press", name="Bench Press", body_region="chest",
                 one_rm_group_id="horizontal_push", is_primary_one_rm=True),
        Exercise(id="incline-press", name="Incline Press", body_region="chest",
                 one_rm_group_id="horizontal_push"),
        Exercise(id="dumbbell-press", name="Dumbbell Press", body_region="chest",
                 one_rm_group_id="horizontal_push", is_primary_one_rm=True),
        Exercise(id="back-squat", name="Back Squat", body_region="legs",
                 one_rm_group_id="squat_pattern", is_primary_one_rm=True),
        Exercise(id="front-squat", name="Front Squat", body_region="legs",
                 one_rm_group_id="squat_pattern"),
        Exercise(id="floor-press", name="Floor Press", body_region="arms",
                 one_rm_group_id="horizontal_push"),
    ]


def _by_id(catalog, exercise_id):
    return next(ex for ex in catalog if ex.id == exercise_id)


# =============================================================================
# Effective map
# =============================================================================


@pytest.mark.unit
class TestEffectiveOneRMMap:
    """Tests for merging structured and legacy 1RM data."""

    def test_structured_wins_on_conflict(self):
        """Structured record beats the legacy value for the same exercise."""
        athlete = _athlete(records={"x": 100}, legacy={"x": 80, "y": 60})
        result = effective_one_rm_map(athlete)
        assert result["x"] == 100
        assert result["y"] == 60

    def test_legacy_only(self):
        """Legacy map alone is used as-is."""
        athlete = _athlete(legacy={"squat": 140})
        assert effective_one_rm_map(athlete) == {"squat": 140.0}

    def test_non_positive_values_dropped(self):
        """Zero and negative values are treated as absent."""
        athlete = _athlete(records={"a": 0, "b": -5, "c": 90}, legacy={"d": 0})
        assert effective_one_rm_map(athlete) == {"c": 90.0}

    def test_invalid_structured_value_filled_from_legacy(self):
        """A structured record with no usable value does not block the legacy value."""
        athlete = _athlete(records={"x": 0}, legacy={"x": 75})
        assert effective_one_rm_map(athlete) == {"x": 75.0}

    def test_accepts_store_snapshot_dict(self):
        """camelCase store snapshots are accepted."""
        snapshot = {
            "id": "athlete-1",
            "oneRMRecords": {"bench": {"exerciseId": "bench", "currentOneRM": 110}},
            "oneRM": {"squat": 150},
        }
        assert effective_one_rm_map(snapshot) == {"bench": 110.0, "squat": 150.0}

    def test_empty_athlete(self):
        assert effective_one_rm_map(_athlete()) == {}


# =============================================================================
# Own tier
# =============================================================================


@pytest.mark.unit
class TestOwnTier:
    """Tests for the athlete's own record."""

    def test_own_value_returned(self, catalog):
        athlete = _athlete(records={"bench-press": 100})
        result = resolve_one_rm(_by_id(catalog, "bench-press"), athlete, {}, catalog)
        assert result is not None
        assert result.value == 100
        assert result.source == ResolveSource.OWN
        assert result.source_exercise_id is None

    def test_own_wins_over_rule(self, catalog):
        """A configured rule never overrides the athlete's own record."""
        athlete = _athlete(records={"incline-press": 70, "bench-press": 100})
        rules = {"incline-press": ReferenceRule(priority=["bench-press"], fallback_to_region=True)}
        result = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        assert result.value == 70
        assert result.source == ResolveSource.OWN

    def test_own_from_legacy_map(self, catalog):
        athlete = _athlete(legacy={"front-squat": 120})
        result = resolve_one_rm(_by_id(catalog, "front-squat"), athlete, {}, catalog)
        assert result.value == 120
        assert result.source == ResolveSource.OWN

    def test_own_found_when_exercise_not_in_catalog(self):
        """The target does not need to be in the catalog to use its own record."""
        athlete = _athlete(records={"hip-thrust": 150})
        result = resolve_one_rm(Exercise(id="hip-thrust"), athlete, {}, [])
        assert result.value == 150

    def test_zero_own_value_falls_through(self, catalog):
        athlete = _athlete(records={"incline-press": 0, "bench-press": 100})
        rules = {"incline-press": ReferenceRule(priority=["bench-press"])}
        result = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        assert result.source == ResolveSource.PRIORITY


# =============================================================================
# Priority tier
# =============================================================================


@pytest.mark.unit
class TestPriorityTier:
    """Tests for the rule priority list."""

    def test_first_listed_value_wins(self, catalog):
        """The first entry with a value wins even if later entries also have one."""
        athlete = _athlete(records={"bench-press": 100, "dumbbell-press": 80})
        rules = {"incline-press": ReferenceRule(priority=["dumbbell-press", "bench-press"])}
        result = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        assert result.value == 80
        assert result.source == ResolveSource.PRIORITY
        assert result.source_exercise_id == "dumbbell-press"

    def test_skips_entries_without_value(self, catalog):
        athlete = _athlete(records={"bench-press": 100})
        rules = {"incline-press": ReferenceRule(priority=["unknown-lift", "dumbbell-press", "bench-press"])}
        result = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        assert result.source_exercise_id == "bench-press"

    def test_priority_may_reference_non_anchor(self, catalog):
        """Priority entries are not restricted to anchors."""
        athlete = _athlete(records={"front-squat": 110, "back-squat": 140})
        rules = {"incline-press": ReferenceRule(priority=["front-squat"])}
        result = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        assert result.value == 110

    def test_priority_checked_before_region(self, catalog):
        athlete = _athlete(records={"bench-press": 100, "dumbbell-press": 80})
        rules = {"incline-press": ReferenceRule(priority=["dumbbell-press"], fallback_to_region=True)}
        result = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        assert result.source == ResolveSource.PRIORITY

    def test_exhausted_priority_without_fallback_returns_none(self, catalog):
        athlete = _athlete(records={"bench-press": 100})
        rules = {"incline-press": ReferenceRule(priority=["dumbbell-press"])}
        assert resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog) is None


# =============================================================================
# Region and group tiers
# =============================================================================


@pytest.mark.unit
class TestAnchorTiers:
    """Tests for region and group anchor fallback."""

    def test_no_rule_means_no_fallback(self, catalog):
        """A same-region anchor is ignored when no rule enables fallback."""
        athlete = _athlete(records={"bench-press": 100})
        assert resolve_one_rm(_by_id(catalog, "incline-press"), athlete, {}, catalog) is None

    def test_region_fallback(self, catalog):
        athlete = _athlete(records={"bench-press": 100})
        rules = {"incline-press": ReferenceRule(priority=[], fallback_to_region=True)}
        result = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        assert result.value == 100
        assert result.source == ResolveSource.REGION
        assert result.source_exercise_id == "bench-press"

    def test_region_first_in_catalog_order(self, catalog):
        """Ties go to the first anchor in catalog order, not the highest value."""
        athlete = _athlete(records={"bench-press": 100, "dumbbell-press": 120})
        rules = {"incline-press": ReferenceRule(fallback_to_region=True)}
        result = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        assert result.source_exercise_id == "bench-press"

        reordered = list(reversed(catalog))
        result = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, reordered)
        assert result.source_exercise_id == "dumbbell-press"

    def test_region_ignores_non_anchors(self, catalog):
        athlete = _athlete(records={"front-squat": 120})
        rules = {"incline-press": ReferenceRule(fallback_to_region=True)}
        assert resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog) is None

    def test_anchor_search_excludes_target(self):
        """An anchor with no own value never resolves to itself."""
        catalog = [
            Exercise(id="bench-press", body_region="chest", is_primary_one_rm=True),
            Exercise(id="dumbbell-press", body_region="chest", is_primary_one_rm=True),
        ]
        athlete = _athlete(records={"dumbbell-press": 80})
        rules = {"bench-press": ReferenceRule(fallback_to_region=True)}
        result = resolve_one_rm(catalog[0], athlete, rules, catalog)
        assert result.source_exercise_id == "dumbbell-press"

    def test_region_requires_body_region(self, catalog):
        athlete = _athlete(records={"bench-press": 100})
        target = Exercise(id="mystery-press", one_rm_group_id="horizontal_push")
        rules = {"mystery-press": ReferenceRule(fallback_to_region=True)}
        assert resolve_one_rm(target, athlete, rules, catalog) is None

    def test_group_fallback(self, catalog):
        """Group fallback matches across body regions."""
        athlete = _athlete(records={"bench-press": 100})
        rules = {"floor-press": ReferenceRule(fallback_to_group=True)}
        result = resolve_one_rm(_by_id(catalog, "floor-press"), athlete, rules, catalog)
        assert result.source == ResolveSource.GROUP
        assert result.source_exercise_id == "bench-press"

    def test_region_before_group(self, catalog):
        athlete = _athlete(records={"back-squat": 140, "bench-press": 100})
        target = Exercise(id="leg-press", body_region="legs", one_rm_group_id="horizontal_push")
        rules = {"leg-press": ReferenceRule(fallback_to_region=True, fallback_to_group=True)}
        result = resolve_one_rm(target, athlete, rules, catalog)
        assert result.source == ResolveSource.REGION
        assert result.source_exercise_id == "back-squat"

    def test_group_used_when_region_misses(self, catalog):
        athlete = _athlete(records={"bench-press": 100})
        rules = {"floor-press": ReferenceRule(fallback_to_region=True, fallback_to_group=True)}
        result = resolve_one_rm(_by_id(catalog, "floor-press"), athlete, rules, catalog)
        assert result.source == ResolveSource.GROUP

    def test_nothing_found_returns_none(self, catalog):
        athlete = _athlete()
        rules = {"incline-press": ReferenceRule(priority=["bench-press"],
                                                fallback_to_region=True, fallback_to_group=True)}
        assert resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog) is None


# =============================================================================
# Null snapshot fields
# =============================================================================


@pytest.mark.unit
class TestNullSnapshotFields:
    """Nulls in store snapshots read as absent data, never as errors."""

    def test_null_legacy_map(self, catalog):
        snapshot = {
            "id": "athlete-1",
            "oneRMRecords": {"bench-press": {"exerciseId": "bench-press", "currentOneRM": 100}},
            "oneRM": None,
        }
        result = resolve_one_rm(_by_id(catalog, "bench-press"), snapshot, {}, catalog)
        assert result.value == 100
        assert result.source == ResolveSource.OWN

    def test_null_structured_records(self, catalog):
        snapshot = {"id": "athlete-1", "oneRMRecords": None, "oneRM": {"bench-press": 100}}
        result = resolve_one_rm(_by_id(catalog, "bench-press"), snapshot, {}, catalog)
        assert result.value == 100
        assert result.source == ResolveSource.OWN

    def test_null_record_value_on_other_exercise(self, catalog):
        snapshot = {
            "id": "athlete-1",
            "oneRMRecords": {
                "back-squat": {"exerciseId": "back-squat", "currentOneRM": None},
                "bench-press": {"exerciseId": "bench-press", "currentOneRM": 100},
            },
        }
        result = resolve_one_rm(_by_id(catalog, "bench-press"), snapshot, {}, catalog)
        assert result.value == 100

    def test_null_record_value_filled_from_legacy(self):
        snapshot = {
            "id": "athlete-1",
            "oneRMRecords": {"bench-press": {"exerciseId": "bench-press", "currentOneRM": None}},
            "oneRM": {"bench-press": 90},
        }
        assert effective_one_rm_map(snapshot) == {"bench-press": 90.0}

    def test_null_legacy_value(self, catalog):
        snapshot = {
            "id": "athlete-1",
            "oneRMRecords": {"bench-press": {"exerciseId": "bench-press", "currentOneRM": 100}},
            "oneRM": {"bench-press": None, "back-squat": None},
        }
        assert effective_one_rm_map(snapshot) == {"bench-press": 100.0}
        result = resolve_one_rm(_by_id(catalog, "bench-press"), snapshot, {}, catalog)
        assert result.value == 100

    def test_null_rule_priority_uses_region(self, catalog):
        athlete = _athlete(records={"bench-press": 100})
        rules = {"incline-press": {"priority": None, "fallback_to_region": True}}
        result = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        assert result.value == 100
        assert result.source == ResolveSource.REGION
        assert result.source_exercise_id == "bench-press"


# =============================================================================
# Purity
# =============================================================================


@pytest.mark.unit
class TestPurity:
    """resolve_one_rm has no side effects and no hidden state."""

    def test_idempotent(self, catalog):
        athlete = _athlete(records={"bench-press": 100})
        rules = {"incline-press": ReferenceRule(fallback_to_region=True)}
        first = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        second = resolve_one_rm(_by_id(catalog, "incline-press"), athlete, rules, catalog)
        assert first == second

    def test_inputs_not_mutated(self):
        athlete = {
            "id": "athlete-1",
            "one_rm_records": {"bench-press": {"exercise_id": "bench-press", "current_one_rm": 100}},
            "one_rm": {"bench-press": 80, "squat": 0},
        }
        catalog = [
            {"id": "bench-press", "body_region": "chest", "is_primary_one_rm": True},
            {"id": "incline-press", "body_region": "chest"},
        ]
        rules = {"incline-press": {"priority": [], "fallback_to_region": True}}
        snapshot = copy.deepcopy((athlete, catalog, rules))

        result = resolve_one_rm(catalog[1], athlete, rules, catalog)

        assert result.value == 100
        assert (athlete, catalog, rules) == snapshot


# =============================================================================
# Rule set helpers
# =============================================================================


@pytest.mark.unit
class TestRuleSetHelpers:
    """Tests for the immutable rule set helpers."""

    def test_create_empty_rules(self):
        assert create_empty_rules() == {}

    def test_set_rule_returns_new_mapping(self):
        rules = create_empty_rules()
        updated = set_rule(rules, "incline-press", ReferenceRule(priority=["bench-press"]))
        assert rules == {}
        assert updated["incline-press"].priority == ["bench-press"]

    def test_set_rule_replaces(self):
        rules = set_rule({}, "x", ReferenceRule(priority=["a"]))
        replaced = set_rule(rules, "x", {"priority": ["b"], "fallbackToGroup": True})
        assert rules["x"].priority == ["a"]
        assert replaced["x"].priority == ["b"]
        assert replaced["x"].fallback_to_group is True

    def test_remove_rule(self):
        rules = set_rule({}, "x", ReferenceRule())
        assert remove_rule(rules, "x") == {}
        assert "x" in rules
