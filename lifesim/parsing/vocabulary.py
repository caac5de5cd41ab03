"""Tag vocabulary shared by the prompt templates and the assemblers.

This is the wire contract with the text provider. Renaming or restructuring
any tag here is a breaking change: bump TAG_PROTOCOL_VERSION and update the
templates in lifesim.prompts together with the assemblers.
"""

TAG_PROTOCOL_VERSION = 1

CHOICE_COUNT = 3

# ── Scenario ────────────────────────────────────────────────

SCENARIO = "scenario"


def choice_tag(index: int) -> str:
    return f"choice{index}"


def choice_stats_tag(index: int) -> str:
    return f"choice{index}Stats"


# Wire keys inside a choiceNStats JSON object → StatDelta field names.
STAT_KEYS: dict[str, str] = {
    "Health": "health",
    "Intelligence": "intelligence",
    "Charisma": "charisma",
    "Happiness": "happiness",
    "Fitness": "fitness",
    "Creativity": "creativity",
}

# ── Outcome ─────────────────────────────────────────────────

SUMMARY = "summary"
OUTCOME = "outcome"
NOTABLE_LIFE_EVENT = "notableLifeEvent"
# The evaluation prompt has always named this tag two ways; accept both.
LIFE_EVENT_SUMMARY = ("lifeEventSummary", "lifeEventsummary")

NEW_RELATIONSHIPS = "newRelationships"
RELATIONSHIP_END = "</relationship>"
REMOVED_RELATIONSHIPS = "removedRelationships"
REMOVED_RELATIONSHIP_END = "</removedRelationship>"

# Fields inside one <relationship> / <removedRelationship> block
NAME = "name"
AGE = "age"
GENDER = "gender"
RELATIONSHIP_TYPE = "relationshipType"
RELATIONSHIP_STATUS = "relationshipStatus"
REASON = "reason"

# ── Backstory ───────────────────────────────────────────────

LOCATION = "location"
SITUATION = "situation"
MOTHER = "mother"
MOTHER_AGE = "motherAge"
MOTHER_RELATIONSHIP = "motherRelationship"
FATHER = "father"
FATHER_AGE = "fatherAge"
FATHER_RELATIONSHIP = "fatherRelationship"


def sibling_tags(index: int) -> tuple[str, str, str, str]:
    """(name, age, gender, relationship) tag names for the 1-based sibling index."""
    return (
        f"sibling{index}",
        f"siblingAge{index}",
        f"siblingGender{index}",
        f"siblingRelationship{index}",
    )
