"""Shared test helpers: StubLLM and canned provider responses."""

import json

WALLET_STATS = {
    "Health": 3, "Intelligence": 3, "Charisma": 2,
    "Happiness": 4, "Fitness": 3, "Creativity": 3,
}
NEUTRAL_STATS = {key: 3 for key in WALLET_STATS}


class StubLLM:
    """Replays canned responses in order and records every call.

    An Exception instance in the response list is raised instead of returned.
    """

    def __init__(self, responses: list) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, str]] = []

    async def __call__(self, stage: str, prompt: str) -> str:
        self.calls.append((stage, prompt))
        if not self.responses:
            raise AssertionError(f"StubLLM ran out of responses at call {len(self.calls)}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def scenario_response(
    stats: list[dict] | None = None,
    choices: tuple[str, str, str] = ("Keep it", "Hand it to the police", "Ask around"),
    scenario: str = "You find a wallet.",
) -> str:
    stats = stats or [WALLET_STATS, NEUTRAL_STATS, NEUTRAL_STATS]
    parts = [f"<scenario>{scenario}</scenario>"]
    for i, (text, delta) in enumerate(zip(choices, stats), start=1):
        parts.append(f"<choice{i}>{text}</choice{i}>")
        parts.append(f"<choice{i}Stats>{json.dumps(delta)}</choice{i}Stats>")
    return "\n".join(parts)


def relationship_block(
    name: str = "Ana", age: str = "7", gender: str = "female",
    kind: str = "friend", status: str = "8",
) -> str:
    return (
        "<relationship>\n"
        f"  <name>{name}</name>\n"
        f"  <age>{age}</age>\n"
        f"  <gender>{gender}</gender>\n"
        f"  <relationshipType>{kind}</relationshipType>\n"
        f"  <relationshipStatus>{status}</relationshipStatus>\n"
        "</relationship>\n"
    )


def outcome_response(
    notable: str = "false",
    life_event: str | None = None,
    new: list[str] | None = None,
    removed: list[tuple[str, str]] | None = None,
) -> str:
    parts = [
        "<summary>Sam found a wallet and kept it.</summary>",
        "<outcome>You feel a little guilty but richer.</outcome>",
        f"<notableLifeEvent>{notable}</notableLifeEvent>",
    ]
    if life_event is not None:
        parts.append(f"<lifeEventSummary>{life_event}</lifeEventSummary>")
    if new is not None:
        parts.append("<newRelationships>\n" + "".join(new) + "</newRelationships>")
    if removed is not None:
        blocks = "".join(
            f"<removedRelationship><name>{n}</name><reason>{r}</reason></removedRelationship>\n"
            for n, r in removed
        )
        parts.append("<removedRelationships>\n" + blocks + "</removedRelationships>")
    return "\n".join(parts)


def backstory_response(siblings: int = 0) -> str:
    parts = [
        "<name>Sarah Johnson</name>",
        "<location>Tacoma, Washington</location>",
        "<situation>Sarah is born into a middle-class family in Tacoma.</situation>",
        "<mother>Emily Johnson</mother>",
        "<motherAge>32</motherAge>",
        "<motherRelationship>10</motherRelationship>",
        "<father>Michael Johnson</father>",
        "<fatherAge>37</fatherAge>",
        "<fatherRelationship>9</fatherRelationship>",
    ]
    for i in range(1, siblings + 1):
        parts += [
            f"<sibling{i}>Sibling {i} Johnson</sibling{i}>",
            f"<siblingAge{i}>{i + 1}</siblingAge{i}>",
            f"<siblingGender{i}>{'Male' if i % 2 else 'Female'}</siblingGender{i}>",
            f"<siblingRelationship{i}>{10 - i % 10}</siblingRelationship{i}>",
        ]
    return "\n".join(parts)
