"""Scenario response → ScenarioResult.

Expected tags:

    <scenario>…</scenario>
    <choice1>…</choice1>  <choice1Stats>{"Health": 3, …}</choice1Stats>
    <choice2>…</choice2>  <choice2Stats>{…}</choice2Stats>
    <choice3>…</choice3>  <choice3Stats>{…}</choice3Stats>

All eight are required. The first missing or invalid one fails the whole
response; a scenario with fewer than three choices is never returned.
"""

from pydantic import ValidationError

from lifesim.models import Choice, ScenarioResult

from . import vocabulary as v
from .errors import ShapeError
from .fields import decode_stat_delta
from .tags import TagReader


def assemble_scenario(text: str) -> ScenarioResult:
    reader = TagReader(text)
    scenario_text = reader.required(v.SCENARIO)

    choices: list[Choice] = []
    for index in range(1, v.CHOICE_COUNT + 1):
        choice_text = reader.required(v.choice_tag(index))
        stats_tag = v.choice_stats_tag(index)
        delta = decode_stat_delta(reader.required(stats_tag), stats_tag)
        choices.append(Choice(choice_text=choice_text, delta=delta))

    try:
        return ScenarioResult(scenario_text=scenario_text, choices=tuple(choices))
    except ValidationError as e:
        raise ShapeError(f"Scenario did not assemble: {e}") from e
