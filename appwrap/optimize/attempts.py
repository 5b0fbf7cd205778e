from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Tuple, TypeVar

from appwrap.errors import AppwrapError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Attempt(Generic[T]):
    name: str
    action: Callable[[], T]


class AttemptsExhausted(AppwrapError):
    """Every attempt in a chain failed; ``failures`` keeps them in order."""

    def __init__(self, failures: List[Tuple[str, AppwrapError]]):
        self.failures = failures
        if failures:
            detail = "\n".join(f"[{name}] {exc}" for name, exc in failures)
        else:
            detail = "no attempts were configured"
        super().__init__(f"All attempts failed:\n{detail}")


def run_attempts(attempts: Iterable[Attempt[T]]) -> Tuple[str, T]:
    """Run ``attempts`` in order and return the first success as (name, result).

    Only ``AppwrapError`` counts as a failed attempt; anything else propagates
    immediately.
    """

    failures: List[Tuple[str, AppwrapError]] = []

    for attempt in attempts:
        try:
            result = attempt.action()
        except AppwrapError as exc:
            logger.warning("Attempt '%s' failed, trying next", attempt.name)
            logger.debug("Attempt '%s' failure: %s", attempt.name, exc)
            failures.append((attempt.name, exc))
            continue
        return attempt.name, result

    raise AttemptsExhausted(failures)
