"""Core domain models.

Result records (StatDelta … BackstoryResult) are produced by the assemblers in
lifesim.parsing and are frozen: each attempt builds fresh ones and the caller
owns them after return. CharacterState and Relationship are caller input used
to fill the prompts.

Pydantic is used for validation and serialisation at every data boundary.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Gender = Literal["male", "female"]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Scenario
# ---------------------------------------------------------------------------

class StatDelta(_Record):
    """Effect of a choice on each stat: 1 significant decrease … 3 none … 5 significant increase.

    Validated from the provider's JSON by wire key ("Health", …); strict, so
    bools, floats and numeric strings are rejected rather than coerced.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    health: int = Field(alias="Health", ge=1, le=5, strict=True)
    intelligence: int = Field(alias="Intelligence", ge=1, le=5, strict=True)
    charisma: int = Field(alias="Charisma", ge=1, le=5, strict=True)
    happiness: int = Field(alias="Happiness", ge=1, le=5, strict=True)
    fitness: int = Field(alias="Fitness", ge=1, le=5, strict=True)
    creativity: int = Field(alias="Creativity", ge=1, le=5, strict=True)


class Choice(_Record):
    choice_text: str = Field(min_length=1)
    delta: StatDelta


class ScenarioResult(_Record):
    """A scenario and its three choices, in the order the provider gave them."""

    scenario_text: str = Field(min_length=1)
    choices: tuple[Choice, ...] = Field(min_length=3, max_length=3)


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------

class RelationshipRecord(_Record):
    """A new person in the character's life.

    gender is "male"/"female" when the provider followed instructions,
    otherwise its free text. relationship_status is 1 (hatred) … 10 (pure love).
    """

    name: str = Field(min_length=1)
    age: int = Field(ge=0)
    gender: str
    relationship_type: str
    relationship_status: int = Field(ge=1, le=10)


class RelationshipRemoval(_Record):
    """A relationship the provider wants dropped.

    name must match an existing relationship; that check belongs to the caller.
    """

    name: str = Field(min_length=1)
    reason: str


class OutcomeResult(_Record):
    summary: str
    outcome: str
    notable_life_event: bool
    life_event_summary: str | None = None  # only set when notable_life_event
    new_relationships: tuple[RelationshipRecord, ...] = ()
    removed_relationships: tuple[RelationshipRemoval, ...] = ()


# ---------------------------------------------------------------------------
# Backstory
# ---------------------------------------------------------------------------

class ParentRecord(_Record):
    name: str = Field(min_length=1)
    age: int = Field(ge=0)
    relationship_status: int = Field(ge=1, le=10)


class SiblingRecord(_Record):
    name: str = Field(min_length=1)
    age: int = Field(ge=0)
    gender: str
    relationship_status: int = Field(ge=1, le=10)


class BackstoryResult(_Record):
    """Birth circumstances of a new character.

    gender is chosen before generation and siblings has exactly the length
    requested in the prompt.
    """

    name: str
    gender: Gender
    location: str
    situation: str
    mother: ParentRecord
    father: ParentRecord
    siblings: tuple[SiblingRecord, ...] = ()


# ---------------------------------------------------------------------------
# Caller-supplied game state
# ---------------------------------------------------------------------------

class Stats(BaseModel):
    """Current character attributes, each on a 0–100 scale."""

    health: int = Field(50, ge=0, le=100)
    intelligence: int = Field(50, ge=0, le=100)
    charisma: int = Field(50, ge=0, le=100)
    happiness: int = Field(50, ge=0, le=100)
    fitness: int = Field(50, ge=0, le=100)
    creativity: int = Field(50, ge=0, le=100)


class Relationship(BaseModel):
    """An existing relationship, as the game currently tracks it."""

    name: str
    relationship: str  # "mother", "friend", "coworker", …
    relationship_status: int = Field(ge=1, le=10)


class CharacterState(BaseModel):
    name: str = "Unknown"
    age: int = Field(0, ge=0)
    stats: Stats = Field(default_factory=Stats)
    net_worth: int = 0
    history: str = ""
    life_events: list[str] = Field(default_factory=list)
    backstory: BackstoryResult | None = None
