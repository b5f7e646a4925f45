"""Optimistic-concurrency retry for commands that rewrite a whole aggregate.

Aggregates carry a version that is checked on save. When two requests load
the same cart and both write it back, the second write fails with
``ExpectedVersionError`` instead of silently losing the first update. The
losing command is simply processed again against freshly loaded state.
"""

from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

MAX_CONFLICT_RETRIES = 3


def process_with_retry(command, attempts=MAX_CONFLICT_RETRIES):
    """Process ``command`` synchronously, re-running it on version conflicts.

    The last ``ExpectedVersionError`` propagates once ``attempts`` is exhausted.
    """
    for attempt in range(1, attempts + 1):
        try:
            return current_domain.process(command, asynchronous=False)
        except ExpectedVersionError:
            if attempt == attempts:
                logger.error(
                    "command_conflict_retries_exhausted",
                    command=command.__class__.__name__,
                    attempts=attempts,
                )
                raise
            logger.warning(
                "command_version_conflict",
                command=command.__class__.__name__,
                attempt=attempt,
            )
