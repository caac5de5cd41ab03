"""Backstory response → BackstoryResult.

The sibling count and the character's gender are decided before the prompt is
rendered, so they are inputs here rather than something read from the text.
For a count of N the response must contain complete sibling1..siblingN tag
groups; anything beyond N is ignored.
"""

from lifesim.models import BackstoryResult, Gender, ParentRecord, SiblingRecord

from . import vocabulary as v
from .errors import ShapeError, TagMissing
from .fields import decode_age, decode_relationship_status, normalize_gender
from .tags import TagReader


def _parent(reader: TagReader, name_tag: str, age_tag: str, relationship_tag: str) -> ParentRecord:
    return ParentRecord(
        name=reader.required(name_tag),
        age=decode_age(reader.required(age_tag), age_tag),
        relationship_status=decode_relationship_status(
            reader.required(relationship_tag), relationship_tag
        ),
    )


def _sibling(reader: TagReader, index: int) -> SiblingRecord:
    name_tag, age_tag, gender_tag, relationship_tag = v.sibling_tags(index)
    try:
        name = reader.required(name_tag)
        age = reader.required(age_tag)
        gender = reader.required(gender_tag)
        relationship = reader.required(relationship_tag)
    except TagMissing as e:
        raise ShapeError(f"Sibling {index} is incomplete: {e}") from e
    return SiblingRecord(
        name=name,
        age=decode_age(age, age_tag),
        gender=normalize_gender(gender),
        relationship_status=decode_relationship_status(relationship, relationship_tag),
    )


def assemble_backstory(text: str, gender: Gender, sibling_count: int) -> BackstoryResult:
    if sibling_count < 0:
        raise ValueError(f"sibling_count must be >= 0, got {sibling_count}")

    reader = TagReader(text)
    return BackstoryResult(
        name=reader.required(v.NAME),
        gender=gender,
        location=reader.required(v.LOCATION),
        situation=reader.required(v.SITUATION),
        mother=_parent(reader, v.MOTHER, v.MOTHER_AGE, v.MOTHER_RELATIONSHIP),
        father=_parent(reader, v.FATHER, v.FATHER_AGE, v.FATHER_RELATIONSHIP),
        siblings=tuple(_sibling(reader, i) for i in range(1, sibling_count + 1)),
    )
