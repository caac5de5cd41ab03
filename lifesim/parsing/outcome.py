"""Choice evaluation response → OutcomeResult.

Expected tags:

    <summary>…</summary>                    required
    <outcome>…</outcome>                    required
    <notableLifeEvent>true|false</notableLifeEvent>   required
    <lifeEventSummary>…</lifeEventSummary>  required only when the flag is true
    <newRelationships>                      optional container
      <relationship>
        <name/> <age/> <gender/> <relationshipType/> <relationshipStatus/>
      </relationship> …
    </newRelationships>
    <removedRelationships>                  optional container
      <removedRelationship><name/> <reason/></removedRelationship> …
    </removedRelationships>

Malformed relationship blocks follow a BlockPolicy:

    "skip"    drop the whole block and keep the rest (default). A record is
              never returned with some of its fields missing.
    "strict"  any malformed block fails the response.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Literal, TypeVar

from lifesim.models import OutcomeResult, RelationshipRecord, RelationshipRemoval

from . import vocabulary as v
from .errors import ExtractionError
from .fields import decode_age, decode_flag, decode_relationship_status, normalize_gender
from .tags import TagReader, split_blocks

logger = logging.getLogger(__name__)

BlockPolicy = Literal["skip", "strict"]

T = TypeVar("T")


def parse_relationship(block: str) -> RelationshipRecord:
    """One <relationship> block. Every field is required."""
    reader = TagReader(block)
    return RelationshipRecord(
        name=reader.required(v.NAME),
        age=decode_age(reader.required(v.AGE), v.AGE),
        gender=normalize_gender(reader.required(v.GENDER)),
        relationship_type=reader.required(v.RELATIONSHIP_TYPE),
        relationship_status=decode_relationship_status(
            reader.required(v.RELATIONSHIP_STATUS), v.RELATIONSHIP_STATUS
        ),
    )


def parse_removal(block: str) -> RelationshipRemoval:
    """One <removedRelationship> block."""
    reader = TagReader(block)
    return RelationshipRemoval(
        name=reader.required(v.NAME),
        reason=reader.required(v.REASON),
    )


def _parse_blocks(
    blocks: list[str],
    parse: Callable[[str], T],
    policy: BlockPolicy,
    kind: str,
) -> list[T]:
    records: list[T] = []
    for i, block in enumerate(blocks, start=1):
        try:
            records.append(parse(block))
        except ExtractionError as e:
            if policy == "strict":
                raise
            logger.warning("Skipping malformed %s block %d: %s", kind, i, e)
    return records


def assemble_outcome(text: str, policy: BlockPolicy = "skip") -> OutcomeResult:
    reader = TagReader(text)
    summary = reader.required(v.SUMMARY)
    outcome = reader.required(v.OUTCOME)
    notable = decode_flag(reader.required(v.NOTABLE_LIFE_EVENT), v.NOTABLE_LIFE_EVENT)

    life_event_summary = None
    if notable:
        life_event_summary = reader.required(*v.LIFE_EVENT_SUMMARY)

    new_relationships = _parse_blocks(
        split_blocks(reader.optional(v.NEW_RELATIONSHIPS), v.RELATIONSHIP_END),
        parse_relationship, policy, "relationship",
    )
    removed_relationships = _parse_blocks(
        split_blocks(reader.optional(v.REMOVED_RELATIONSHIPS), v.REMOVED_RELATIONSHIP_END),
        parse_removal, policy, "removedRelationship",
    )

    return OutcomeResult(
        summary=summary,
        outcome=outcome,
        notable_life_event=notable,
        life_event_summary=life_event_summary,
        new_relationships=tuple(new_relationships),
        removed_relationships=tuple(removed_relationships),
    )
