"""FastAPI endpoints for the three game requests.

    POST /generate-scenario   {character, relationships}        → ScenarioResult
    POST /evaluate-choice     {choice, scenario, character, relationships}
                                                                 → OutcomeResult
    GET  /generate-backstory                                     → BackstoryResult

The LLM client and Settings live on app.state (see app.create_app). A request
whose attempts all fail answers 502 with the TerminalFailure detail.
"""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from lifesim import game
from lifesim.models import CharacterState, Choice, Relationship
from lifesim.retry import TerminalFailure

router = APIRouter()


class ScenarioBody(BaseModel):
    character: CharacterState
    relationships: list[Relationship] = Field(default_factory=list)


class EvaluateBody(BaseModel):
    choice: Choice
    scenario: str
    character: CharacterState
    relationships: list[Relationship] = Field(default_factory=list)


def _unwrap(result):
    if isinstance(result, TerminalFailure):
        raise HTTPException(502, result.detail)
    return result


@router.get("/")
async def root():
    return "lifesim is running"


@router.post("/generate-scenario")
async def generate_scenario(body: ScenarioBody, request: Request):
    """Generate a scenario with three choices for the character."""
    settings = request.app.state.settings
    result = await game.generate_scenario(
        llm=request.app.state.llm,
        character=body.character,
        relationships=body.relationships,
        max_attempts=settings.max_attempts,
    )
    return _unwrap(result)


@router.post("/evaluate-choice")
async def evaluate_choice(body: EvaluateBody, request: Request):
    """Evaluate the chosen option of a scenario."""
    settings = request.app.state.settings
    result = await game.evaluate_choice(
        llm=request.app.state.llm,
        choice=body.choice,
        scenario_text=body.scenario,
        character=body.character,
        relationships=body.relationships,
        policy=settings.block_policy,
        max_attempts=settings.max_attempts,
    )
    return _unwrap(result)


@router.get("/generate-backstory")
async def generate_backstory(request: Request):
    """Generate a backstory for a new character."""
    settings = request.app.state.settings
    result = await game.generate_backstory(
        llm=request.app.state.llm,
        max_attempts=settings.max_attempts,
    )
    return _unwrap(result)
