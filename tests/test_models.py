"""Tests for lifesim.models."""

import pytest
from pydantic import ValidationError

from lifesim.models import (
    BackstoryResult,
    CharacterState,
    Choice,
    OutcomeResult,
    ParentRecord,
    Relationship,
    RelationshipRecord,
    ScenarioResult,
    StatDelta,
)

NEUTRAL = StatDelta(health=3, intelligence=3, charisma=3, happiness=3, fitness=3, creativity=3)


class TestStatDelta:
    def test_populate_by_field_name(self) -> None:
        assert NEUTRAL.health == 3

    def test_populate_by_wire_key(self) -> None:
        d = StatDelta.model_validate({
            "Health": 1, "Intelligence": 2, "Charisma": 3,
            "Happiness": 4, "Fitness": 5, "Creativity": 3,
        })
        assert (d.health, d.fitness) == (1, 5)

    def test_dump_by_alias_uses_wire_keys(self) -> None:
        assert set(NEUTRAL.model_dump(by_alias=True)) == {
            "Health", "Intelligence", "Charisma", "Happiness", "Fitness", "Creativity",
        }

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            NEUTRAL.happiness = 5


class TestScenarioResult:
    def test_exactly_three_choices(self) -> None:
        choices = tuple(Choice(choice_text=t, delta=NEUTRAL) for t in "abc")
        assert len(ScenarioResult(scenario_text="s", choices=choices).choices) == 3

    @pytest.mark.parametrize("count", [0, 2, 4])
    def test_wrong_choice_count_rejected(self, count: int) -> None:
        choices = tuple(Choice(choice_text="x", delta=NEUTRAL) for _ in range(count))
        with pytest.raises(ValidationError):
            ScenarioResult(scenario_text="s", choices=choices)

    def test_empty_scenario_text_rejected(self) -> None:
        choices = tuple(Choice(choice_text="x", delta=NEUTRAL) for _ in range(3))
        with pytest.raises(ValidationError):
            ScenarioResult(scenario_text="", choices=choices)

    def test_empty_choice_text_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Choice(choice_text="", delta=NEUTRAL)


class TestOutcomeResult:
    def test_lists_default_empty(self) -> None:
        o = OutcomeResult(summary="s", outcome="o", notable_life_event=False)
        assert o.new_relationships == ()
        assert o.removed_relationships == ()
        assert o.life_event_summary is None

    def test_relationship_status_range(self) -> None:
        with pytest.raises(ValidationError):
            RelationshipRecord(
                name="A", age=3, gender="male", relationship_type="friend",
                relationship_status=11,
            )

    def test_serialise_roundtrip(self) -> None:
        o = OutcomeResult(
            summary="s", outcome="o", notable_life_event=True, life_event_summary="e",
            new_relationships=(RelationshipRecord(
                name="A", age=3, gender="male", relationship_type="friend",
                relationship_status=7,
            ),),
        )
        assert OutcomeResult.model_validate_json(o.model_dump_json()) == o


class TestBackstoryResult:
    def test_gender_restricted(self) -> None:
        parent = ParentRecord(name="P", age=30, relationship_status=8)
        with pytest.raises(ValidationError):
            BackstoryResult(
                name="N", gender="other", location="L", situation="S",
                mother=parent, father=parent,
            )


class TestCharacterState:
    def test_defaults(self) -> None:
        c = CharacterState()
        assert c.name == "Unknown"
        assert c.age == 0
        assert c.stats.health == 50
        assert c.life_events == []
        assert c.backstory is None

    def test_stats_bounded(self) -> None:
        with pytest.raises(ValidationError):
            CharacterState.model_validate({"stats": {"health": 101}})

    def test_relationship_status_bounded(self) -> None:
        with pytest.raises(ValidationError):
            Relationship(name="Mom", relationship="mother", relationship_status=0)
