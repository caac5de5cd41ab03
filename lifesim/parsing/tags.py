"""Tag scanning over provider output.

The provider answers in flat `<tag>…</tag>` regions. This is not XML: there
are no attributes, no escaping, and at most one level of nesting (a container
tag holding a run of uniformly-tagged blocks). Two primitives cover it:

    extract_tag   — inner text of the first <tag>…</tag>, or None if absent.
    split_blocks  — cut a container's inner text into raw blocks on a literal
                    closing tag, then read each block with extract_tag.

split_blocks is only correct while blocks never nest and no field value
contains the terminator string itself. The prompts never ask for either, but
nothing stops a model from producing it; such a response yields a malformed
block, which the outcome assembler handles through its block policy.
"""

from __future__ import annotations

from .errors import FieldDecodeError, TagMissing


def extract_tag(text: str, tag: str) -> str | None:
    """Return the stripped inner text of the first <tag>…</tag> in text.

    Matching is case-sensitive and non-greedy: the region ends at the first
    closing tag after the opening one. Returns None when either the opening or
    the matching closing tag is missing, so callers can tell "absent" from
    "present but empty".
    """
    open_tag = f"<{tag}>"
    start = text.find(open_tag)
    if start == -1:
        return None
    start += len(open_tag)
    end = text.find(f"</{tag}>", start)
    if end == -1:
        return None
    return text[start:end].strip()


def split_blocks(container: str | None, terminator: str) -> list[str]:
    """Split a container's inner text into one raw segment per block.

    A terminal delimiter leaves a trailing blank segment, which is dropped.
    Blank or missing input yields no blocks.
    """
    if container is None or not container.strip():
        return []
    blocks = container.split(terminator)
    if not blocks[-1].strip():
        blocks.pop()
    return blocks


class TagReader:
    """Read named fields out of one response text.

    Wraps extract_tag with the required/optional distinction the assemblers
    need. Reading is stateless, so the order fields are requested in does not
    matter.
    """

    def __init__(self, text: str) -> None:
        self.text = text

    def optional(self, tag: str) -> str | None:
        return extract_tag(self.text, tag)

    def first_of(self, *tags: str) -> str | None:
        """Value of the first tag name that is present, for tags with aliases."""
        for tag in tags:
            value = extract_tag(self.text, tag)
            if value is not None:
                return value
        return None

    def required(self, tag: str, *aliases: str) -> str:
        """Non-empty value of a required tag.

        Raises TagMissing if absent, FieldDecodeError if present but blank.
        """
        value = self.first_of(tag, *aliases)
        if value is None:
            raise TagMissing(tag)
        if not value:
            raise FieldDecodeError(tag, "empty value")
        return value
