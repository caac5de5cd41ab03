"""Game operations — one provider request each, wrapped in the retry policy.

    generate_scenario  — scenario + three choices for the character's age.
    evaluate_choice    — outcome of the chosen option, life event flag and
                         relationship changes.
    generate_backstory — birth circumstances; gender and sibling count are
                         drawn here before the prompt is rendered.

Every attempt is "render prompt once → call llm → assemble". Each returns the
typed result, or a TerminalFailure once max_attempts attempts have failed.
"""

from __future__ import annotations

import logging
import random

from lifesim.llm import LLM
from lifesim.models import (
    BackstoryResult,
    CharacterState,
    Choice,
    Gender,
    OutcomeResult,
    Relationship,
    ScenarioResult,
)
from lifesim.parsing import BlockPolicy, assemble_backstory, assemble_outcome, assemble_scenario
from lifesim.prompts import backstory_prompt, outcome_prompt, scenario_prompt
from lifesim.retry import DEFAULT_MAX_ATTEMPTS, TerminalFailure, with_retry

logger = logging.getLogger(__name__)


# (sibling count, weight in percent). The 3% tail is shared equally by 5, 6, 8 and 10.
SIBLING_COUNT_WEIGHTS: tuple[tuple[int, float], ...] = (
    (0, 10.0),
    (1, 20.0),
    (2, 40.0),
    (3, 20.0),
    (4, 7.0),
    (5, 0.75),
    (6, 0.75),
    (8, 0.75),
    (10, 0.75),
)


def draw_sibling_count(
    rng: random.Random | None = None,
    table: tuple[tuple[int, float], ...] = SIBLING_COUNT_WEIGHTS,
) -> int:
    """Weighted draw over (count, weight) pairs."""
    rng = rng or random.Random()
    counts = [count for count, _ in table]
    weights = [weight for _, weight in table]
    return rng.choices(counts, weights=weights, k=1)[0]


def draw_gender(rng: random.Random | None = None) -> Gender:
    rng = rng or random.Random()
    return "male" if rng.random() < 0.5 else "female"


async def generate_scenario(
    *,
    llm: LLM,
    character: CharacterState,
    relationships: list[Relationship],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    timeout: float | None = None,
) -> ScenarioResult | TerminalFailure:
    prompt = scenario_prompt(character, relationships)
    logger.info("Generating scenario name=%s age=%d", character.name, character.age)

    async def attempt() -> ScenarioResult:
        return assemble_scenario(await llm("scenario", prompt))

    return await with_retry(attempt, max_attempts, timeout=timeout, label="scenario")


async def evaluate_choice(
    *,
    llm: LLM,
    choice: Choice,
    scenario_text: str,
    character: CharacterState,
    relationships: list[Relationship],
    policy: BlockPolicy = "skip",
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    timeout: float | None = None,
) -> OutcomeResult | TerminalFailure:
    """Evaluate the chosen option.

    Removed relationships are returned as the provider named them; checking
    that each name matches an existing relationship is left to the caller.
    """
    prompt = outcome_prompt(choice, scenario_text, character, relationships)
    logger.info("Evaluating choice name=%s choice=%r", character.name, choice.choice_text)

    async def attempt() -> OutcomeResult:
        return assemble_outcome(await llm("outcome", prompt), policy)

    return await with_retry(attempt, max_attempts, timeout=timeout, label="outcome")


async def generate_backstory(
    *,
    llm: LLM,
    rng: random.Random | None = None,
    sibling_count: int | None = None,
    gender: Gender | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    timeout: float | None = None,
) -> BackstoryResult | TerminalFailure:
    """Generate a backstory. sibling_count and gender are drawn when not given.

    Both are fixed for all attempts: a retry re-asks for the same family
    shape.
    """
    rng = rng or random.Random()
    if sibling_count is None:
        sibling_count = draw_sibling_count(rng)
    if gender is None:
        gender = draw_gender(rng)
    prompt = backstory_prompt(gender, sibling_count)
    logger.info("Generating backstory gender=%s siblings=%d", gender, sibling_count)

    async def attempt() -> BackstoryResult:
        return assemble_backstory(await llm("backstory", prompt), gender, sibling_count)

    return await with_retry(attempt, max_attempts, timeout=timeout, label="backstory")
