"""Handlebars prompt rendering for the three provider requests.

Each template asks for the tag format the matching assembler in
lifesim.parsing reads; keep the two in step (see parsing/vocabulary.py).
Values supplied by the caller are inserted with triple-stash {{{…}}} so
Handlebars does not HTML-escape them.
"""

from collections.abc import Callable
from typing import Any

import pybars

from lifesim.models import CharacterState, Choice, Gender, Relationship

_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


class PromptError(Exception):
    """Raised when a Handlebars template fails to compile or render."""


def render_prompt(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a Handlebars template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return str(compiled(context))
    except Exception as e:
        raise PromptError(f"Template error: {e}") from e


# ── Templates ────────────────────────────────────────────


SCENARIO_TEMPLATE = """
Generate an age-appropriate scenario and three choices for a life simulation game. Here are the current stats of the character:
Name: {{{name}}}
Age: {{age}}
Health: {{stats.health}} / 100 (100 is perfect health)
Intelligence: {{stats.intelligence}} / 100
Charisma: {{stats.charisma}} / 100
Happiness: {{stats.happiness}} / 100
Fitness: {{stats.fitness}} / 100
Creativity: {{stats.creativity}} / 100
Net Worth: {{net_worth}}

Here is the character's life so far:
{{{history}}}

{{#if has_life_events}}Here are their current notable life events:
{{#each life_events}}{{{this}}}
{{/each}}{{/if}}
Here are their current relationships (relationship status is on a scale of 1-10, with 10 being pure love and 1 being hatred):
{{#each relationships}} {{{relationship}}}: {{{name}}} - Relationship status: {{relationship_status}}
{{/each}}
{{{stage_context}}}

Always refer to the character as "you" in the scenario.

For each choice, provide the consequences of the choice on each of the character's stats as a JSON object where each stat is a value between 1 and 5:
  - 1 indicates a significant decrease in the stat
  - 2 indicates a moderate decrease in the stat
  - 3 indicates the choice had no effect on the stat
  - 4 indicates a moderate increase in the stat
  - 5 indicates a significant increase in the stat

Match the gravity of the choice to the life situation, age and circumstances of the character.

Provide your response using the following XML-style tags:
<scenario>Description of the scenario</scenario>
<choice1>Choice 1</choice1>
<choice1Stats>JSON object with the change in stats for choice 1</choice1Stats>
<choice2>Choice 2</choice2>
<choice2Stats>JSON object with the change in stats for choice 2</choice2Stats>
<choice3>Choice 3</choice3>
<choice3Stats>JSON object with the change in stats for choice 3</choice3Stats>

Always include all 6 stats in each choice's stats object, for example:
<choice1Stats>{"Health": 3, "Intelligence": 3, "Charisma": 3, "Happiness": 3, "Fitness": 3, "Creativity": 3}</choice1Stats> (no effect on any stat)
<choice2Stats>{"Health": 3, "Intelligence": 3, "Charisma": 3, "Happiness": 1, "Fitness": 4, "Creativity": 3}</choice2Stats> (a significant decrease in happiness and a moderate increase in fitness)

Now create the scenario, choices, and choice stats in the XML format above for {{{name}}} who is {{age}} years old.
"""


OUTCOME_TEMPLATE = """
You are part of a life simulation game where you are evaluating the choices of a character.

Here are the current stats of the character:
Name: {{{name}}}
Age: {{age}}
Health: {{stats.health}} / 100 (100 is perfect health)
Intelligence: {{stats.intelligence}} / 100
Charisma: {{stats.charisma}} / 100
Happiness: {{stats.happiness}} / 100
Fitness: {{stats.fitness}} / 100
Creativity: {{stats.creativity}} / 100
Net Worth: {{net_worth}}

Here is the character's life so far:
{{{history}}}

Here are their current notable life events:
{{#each life_events}}{{{this}}}
{{/each}}
Here are their current relationships:
{{#each relationships}} {{{relationship}}}: {{{name}}} - Relationship status: {{relationship_status}}
{{/each}}
Here is the scenario that the character is in:
{{{scenario}}}

Here is the choice that was made:
{{{choice_text}}}

Here are the effects of the choice on each of the character's stats (1 significant decrease, 2 moderate decrease, 3 no change, 4 moderate increase, 5 significant increase):
{{{choice_json}}}

Write a very concise summary of the scenario and the choice, and then a short outcome of the choice that was made by the character.
Evaluate whether this choice resulted in or was part of a notable life event for the character.
If it was, put <notableLifeEvent>true</notableLifeEvent> in the response, otherwise put <notableLifeEvent>false</notableLifeEvent>.
If it was a notable life event, provide a brief, concise summary of the event and its impact on the character's life in <lifeEventSummary> tags.

Also evaluate whether any new notable people should be added to the character's relationships. Only add someone the character interacts with on a regular basis.
Also evaluate whether any relationships should be removed. Only remove someone the character no longer interacts with on a regular basis.

For the summary, refer to the character by their name, and for the outcome, refer to the character as "you".

Provide your response using the following XML-style tags:
<summary>Summary of the scenario and choice</summary>
<outcome>Outcome of the choice</outcome>
<notableLifeEvent>true or false</notableLifeEvent>
<lifeEventSummary>Summary of the notable life event</lifeEventSummary> (only if notableLifeEvent is true)
<newRelationships>New relationships to add to the character</newRelationships> (optional)
<removedRelationships>Relationships to remove from the character</removedRelationships> (optional)

There can be multiple relationships in the <newRelationships> tags, formatted like this:
<relationship>
  <name>Name of the person</name>
  <age>Age of the person</age>
  <gender>Gender of the person (male or female)</gender>
  <relationshipType>Type of relationship (i.e. grandfather, girlfriend, friend, coworker, etc.)</relationshipType>
  <relationshipStatus>Relationship to the character (on a scale of 1-10, 1 being hatred and 10 being pure love)</relationshipStatus>
</relationship>

The <removedRelationships> tags should be formatted like this:
<removedRelationship>
  <name>Name of the person</name>
  <reason>Reason for removal of the relationship</reason>
</removedRelationship>
Only remove a person who is in the relationships listed above, and use their name exactly as it appears there.
"""


BACKSTORY_TEMPLATE = """
Generate a random backstory for a character in a life simulation game. Include:
1. A name
2. A location of birth (city, country{{#if has_siblings}} (should be in the USA or Canada){{else}} (should be an English-speaking country){{/if}})
3. A brief description of their family situation or early life circumstances (in the present tense)
{{#if has_siblings}}4. The names and ages of their mother, father and siblings. They should have {{sibling_count}} older {{sibling_noun}}.
{{else}}4. The names and ages of their mother and father. They have no siblings.
{{/if}}
This character should be a {{gender}}.
Do not include the character's state of mind or motivations, simply describe the situation they are born into in the present tense.

Provide the response using the following XML-style tags:
<name>Character's full name (should be a {{gender}})</name>
<location>Place of birth</location>
<situation>Brief description of family and life circumstances they are born into, as well as relationships to other characters</situation>
<mother>Name of the mother</mother>
<motherAge>Age of the mother</motherAge>
<motherRelationship>State of relationship with mother (on a scale of 1-10)</motherRelationship>
<father>Name of the father</father>
<fatherAge>Age of the father</fatherAge>
<fatherRelationship>State of relationship with father (on a scale of 1-10)</fatherRelationship>
{{#each siblings}}<sibling{{index}}>Name of sibling</sibling{{index}}>
<siblingAge{{index}}>Age of sibling</siblingAge{{index}}>
<siblingGender{{index}}>Gender of sibling (male or female)</siblingGender{{index}}>
<siblingRelationship{{index}}>State of relationship with sibling (on a scale of 1-10)</siblingRelationship{{index}}>
{{/each}}
Ages and relationship states must be plain whole numbers.
"""


# ── Context builders ─────────────────────────────────────


def age_stage(name: str, age: int) -> str:
    """One line telling the model which life stage the scenario should fit."""
    if age <= 2:
        return (
            f"{name} is {age} years old and in the early childhood development stage. "
            "Present a choice that is relevant to the early childhood development stage, "
            "such as a choice between toys, first words, etc."
        )
    if age <= 5:
        return (
            f"{name} is {age} years old and in the preschool years. Present choices for "
            "the player as a decision that will cover the entire years for age 3-5."
        )
    if age <= 12:
        return (
            f"{name} is {age} years old and in the elementary school years. Present choices "
            "for the player as a decision that will cover the entire years for age 6-12."
        )
    return f"{name} is {age} years old."


def _character_context(
    character: CharacterState, relationships: list[Relationship]
) -> dict[str, Any]:
    return {
        "name": character.name,
        "age": character.age,
        "stats": character.stats.model_dump(),
        "net_worth": character.net_worth,
        "history": character.history,
        "has_life_events": bool(character.life_events),
        "life_events": list(character.life_events),
        "relationships": [r.model_dump() for r in relationships],
    }


def scenario_prompt(character: CharacterState, relationships: list[Relationship]) -> str:
    ctx = _character_context(character, relationships)
    ctx["stage_context"] = age_stage(character.name, character.age)
    return render_prompt(SCENARIO_TEMPLATE, ctx)


def outcome_prompt(
    choice: Choice,
    scenario_text: str,
    character: CharacterState,
    relationships: list[Relationship],
) -> str:
    ctx = _character_context(character, relationships)
    ctx["scenario"] = scenario_text
    ctx["choice_text"] = choice.choice_text
    ctx["choice_json"] = choice.model_dump_json(by_alias=True)
    return render_prompt(OUTCOME_TEMPLATE, ctx)


def backstory_prompt(gender: Gender, sibling_count: int) -> str:
    """Backstory request asking for exactly sibling_count sibling tag groups."""
    ctx = {
        "gender": gender,
        "has_siblings": sibling_count > 0,
        "sibling_count": sibling_count,
        "sibling_noun": "sibling" if sibling_count == 1 else "siblings",
        "siblings": [{"index": i} for i in range(1, sibling_count + 1)],
    }
    return render_prompt(BACKSTORY_TEMPLATE, ctx)
