"""Bounded retry around one provider call plus parse.

The provider is unreliable: it times out, errors, or answers with tags
missing. with_retry runs an attempt — call the provider, assemble the typed
result — up to max_attempts times, immediately and one after another. A fresh
call is made every time; the same text is never reparsed.

Failures that count as an attempt:
  ExtractionError (TagMissing, FieldDecodeError, ShapeError)
  ProviderError   (transport, HTTP status, unexpected body, timeout)

Anything else is a bug and propagates. Cancelling the surrounding task
propagates too, so no further attempts are started.

After the last failed attempt the caller gets a TerminalFailure value rather
than an exception or a fabricated result.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from lifesim.llm import ProviderError
from lifesim.parsing.errors import ExtractionError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class TerminalFailure:
    """Every attempt failed. last_error is the failure of the final attempt."""

    label: str
    attempts: int
    last_error: Exception | None

    @property
    def detail(self) -> str:
        what = self.label or "request"
        return f"{what} failed after {self.attempts} attempt(s): {self.last_error}"


async def with_retry(
    attempt: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    *,
    timeout: float | None = None,
    label: str = "",
) -> T | TerminalFailure:
    """Run attempt until it succeeds or max_attempts attempts have failed.

    timeout, when set, bounds each attempt separately; an attempt that runs
    over it counts as a ProviderError.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    last_error: Exception | None = None
    for number in range(1, max_attempts + 1):
        try:
            if timeout is None:
                return await attempt()
            return await asyncio.wait_for(attempt(), timeout)
        except asyncio.TimeoutError:
            last_error = ProviderError(f"attempt timed out after {timeout}s")
        except (ExtractionError, ProviderError) as e:
            last_error = e
        logger.warning(
            "%s attempt %d/%d failed: %s",
            label or "request", number, max_attempts, last_error,
        )

    failure = TerminalFailure(label=label, attempts=max_attempts, last_error=last_error)
    logger.error(failure.detail)
    return failure
