"""Provider text → typed records.

The provider answers every request in the tag format listed in
vocabulary.py. Parsing is split into:

  tags        — extract_tag / split_blocks primitives and TagReader.
  fields      — scalar decoders: stat-delta JSON, true/false flag, ages,
                1–10 relationship scores, gender.
  scenario    — <scenario> + three <choiceN>/<choiceNStats> → ScenarioResult.
  outcome     — evaluation tags + relationship lists → OutcomeResult.
  backstory   — parents + a pre-chosen number of siblings → BackstoryResult.

Every assembler either returns a complete record or raises an
ExtractionError subclass (TagMissing, FieldDecodeError, ShapeError); the
retry policy in lifesim.retry treats each of those as a failed attempt.
"""

from .backstory import assemble_backstory  # noqa: F401
from .errors import (  # noqa: F401
    ExtractionError,
    FieldDecodeError,
    ShapeError,
    TagMissing,
)
from .fields import decode_flag, decode_stat_delta  # noqa: F401
from .outcome import BlockPolicy, assemble_outcome  # noqa: F401
from .scenario import assemble_scenario  # noqa: F401
from .tags import TagReader, extract_tag, split_blocks  # noqa: F401
