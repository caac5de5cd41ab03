"""Extraction failures raised by the tag parsers and assemblers.

Every subclass of ExtractionError counts as one failed attempt for the retry
policy. None of them ever carries a partial result.
"""


class ExtractionError(ValueError):
    """Base class: the provider text could not be turned into a typed record."""


class TagMissing(ExtractionError):
    """A required tag is absent from the response."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Required tag <{tag}> not found")
        self.tag = tag


class FieldDecodeError(ExtractionError):
    """A tag is present but its content fails type or range validation."""

    def __init__(self, tag: str, reason: str) -> None:
        super().__init__(f"<{tag}>: {reason}")
        self.tag = tag
        self.reason = reason


class ShapeError(ExtractionError):
    """A repeated structure has the wrong number of complete items."""
