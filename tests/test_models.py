"""Unit tests for the card, filter and result models."""

import pytest
from pydantic import ValidationError

from mealz.models import (
    MAX_BATCH_SIZE,
    BatchMode,
    Card,
    CardFilters,
    DaySlot,
    FilterMode,
    GenerationResult,
    IdeaSchedule,
    MealPlan,
    PlanConstraints,
    WeeklySchedule,
)

# =============================================================================
# Card Tests
# =============================================================================


class TestCard:
    """Tests for the Card model."""

    def test_card_defaults(self):
        """Test a card without optional fields is non-batchable and untagged."""
        card = Card(id=1, name="Tacos")

        assert card.max_batch_size == 1
        assert card.tags == set()
        assert card.ingredients == set()
        assert not card.is_batchable
        assert not card.is_joker

    def test_name_is_stripped(self):
        assert Card(id=1, name="  Tacos ").name == "Tacos"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Card(id=1, name="   ")

    def test_entries_are_cleaned(self):
        """Test tag/ingredient entries are stripped and blanks dropped."""
        card = Card(id=1, name="Tacos", tags=[" mexican ", "", " "], ingredients=["beans", "beans"])

        assert card.tags == {"mexican"}
        assert card.ingredients == {"beans"}

    def test_single_string_tags_rejected(self):
        with pytest.raises(ValidationError):
            Card(id=1, name="Tacos", tags="mexican")

    def test_batch_size_capped(self):
        assert Card(id=1, name="Tacos", max_batch_size=MAX_BATCH_SIZE).max_batch_size == 255

        with pytest.raises(ValidationError):
            Card(id=1, name="Tacos", max_batch_size=MAX_BATCH_SIZE + 1)

    def test_batch_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            Card(id=1, name="Tacos", max_batch_size=0)

    def test_id_is_immutable(self):
        card = Card(id=1, name="Tacos")

        with pytest.raises(ValidationError):
            card.id = 2
        assert card.id == 1

    def test_joker_and_batchable_flags(self):
        card = Card(id=1, name="Surprise", tags={"joker"}, max_batch_size=3)

        assert card.is_joker
        assert card.is_batchable

    def test_json_dump_sorts_sets(self):
        card = Card(id=1, name="Tacos", tags={"b", "a", "c"})

        assert card.model_dump(mode="json")["tags"] == ["a", "b", "c"]

    def test_str(self):
        assert str(Card(id=7, name="Tacos")) == "[7] Tacos"


# =============================================================================
# Filter and Constraint Tests
# =============================================================================


class TestCardFilters:
    """Tests for filter defaults."""

    def test_defaults(self):
        filters = CardFilters()

        assert filters.name_contains == ""
        assert filters.tag_filters == set()
        assert filters.tag_mode == FilterMode.ANY
        assert filters.ingredient_filters == set()
        assert filters.ingredient_mode == FilterMode.ANY
        assert filters.allow_jokers is False
        assert filters.batch_mode == BatchMode.ALLOW

    def test_modes_accept_values(self):
        filters = CardFilters.model_validate({"tag_mode": "all", "batch_mode": "prevent"})

        assert filters.tag_mode == FilterMode.ALL
        assert filters.batch_mode == BatchMode.PREVENT

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            CardFilters.model_validate({"batch_mode": "sometimes"})


class TestPlanConstraints:
    """Tests for plan constraint defaults and bounds."""

    def test_defaults(self):
        constraints = PlanConstraints()

        assert constraints.number_of_meals == 0
        assert constraints.filters == CardFilters()
        assert constraints.no_consecutive is False
        assert constraints.max_repeats_per_plan == 0

    @pytest.mark.parametrize("field", ["number_of_meals", "max_repeats_per_plan"])
    def test_negative_values_rejected(self, field):
        with pytest.raises(ValidationError):
            PlanConstraints.model_validate({field: -1})


# =============================================================================
# Schedule Tests
# =============================================================================


class TestSchedules:
    """Tests for plan schedule shapes."""

    def test_day_slots_cover_a_week(self):
        assert len(DaySlot) == 14

    def test_result_ideas(self):
        card = Card(id=1, name="Tacos")
        result = GenerationResult(plan=MealPlan(schedule=IdeaSchedule(cards=[card])))

        assert result.ideas == [card]
        assert result.warnings == []

    def test_weekly_schedule_has_no_ideas(self):
        card = Card(id=1, name="Tacos")
        result = GenerationResult(
            plan=MealPlan(schedule=WeeklySchedule(slots={DaySlot.MONDAY_LUNCH: card}))
        )

        assert result.ideas == []

    def test_schedule_discriminated_by_kind(self):
        plan = MealPlan.model_validate(
            {"schedule": {"kind": "weekly", "slots": {"friday_dinner": {"id": 1, "name": "Tacos"}}}}
        )

        assert isinstance(plan.schedule, WeeklySchedule)
        assert plan.schedule.slots[DaySlot.FRIDAY_DINNER].name == "Tacos"
