"""Scalar decoders for tag contents.

Each decoder takes the stripped text of one tag plus the tag name (for the
error message) and either returns a typed value or raises FieldDecodeError.
Nothing is clamped or defaulted: a value that does not decode fails.
"""

import json
import logging
import re

from pydantic import ValidationError

from lifesim.models import StatDelta

from .errors import FieldDecodeError
from .vocabulary import STAT_KEYS

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?\d+")
_OUT_OF_TEN = "/10"


def _strip_code_fence(text: str) -> str:
    """Drop a ```json … ``` wrapper some models put around JSON."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def decode_stat_delta(raw: str, tag: str = "choiceStats") -> StatDelta:
    """Decode the JSON object inside a choiceNStats tag.

    All six capitalised keys must be present with integer values in [1, 5].
    Unknown extra keys are ignored.
    """
    try:
        data = json.loads(_strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise FieldDecodeError(tag, f"not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise FieldDecodeError(tag, f"expected a JSON object, got {type(data).__name__}")
    # Only the capitalised wire keys count; "health" is not "Health".
    wire = {key: data[key] for key in STAT_KEYS if key in data}
    try:
        return StatDelta.model_validate(wire)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise FieldDecodeError(tag, problems) from e


def decode_flag(raw: str, tag: str) -> bool:
    """Literal "true"/"false", case-insensitive."""
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise FieldDecodeError(tag, f"expected true or false, got {raw!r}")


def decode_age(raw: str, tag: str) -> int:
    """A non-negative integer literal."""
    value = raw.strip()
    if not _INT_RE.fullmatch(value):
        raise FieldDecodeError(tag, f"age is not an integer: {raw!r}")
    age = int(value)
    if age < 0:
        raise FieldDecodeError(tag, f"age is negative: {age}")
    return age


def decode_relationship_status(raw: str | int, tag: str) -> int:
    """Normalise a 1–10 relationship score to int.

    The provider sends either a bare number or a numeric string, sometimes
    written "7/10". Whitespace and a trailing "/10" are dropped; what remains
    must be an integer literal in 1..10.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = str(raw)
    else:
        value = str(raw).strip()
        if value.endswith(_OUT_OF_TEN):
            value = value[: -len(_OUT_OF_TEN)].strip()
    if not _INT_RE.fullmatch(value):
        raise FieldDecodeError(tag, f"relationship status is not an integer: {raw!r}")
    status = int(value)
    if not 1 <= status <= 10:
        raise FieldDecodeError(tag, f"relationship status {status} outside 1..10")
    return status


def normalize_gender(raw: str) -> str:
    """Lower-case "male"/"female"; any other text passes through unchanged."""
    value = raw.strip()
    if value.lower() in ("male", "female"):
        return value.lower()
    logger.debug("Non-standard gender passed through: %r", value)
    return value
