"""Generic polling loop for long-running Edge Add-ons operations."""

import time
from typing import Callable, Optional

from .operation import PollOutcome

DEFAULT_MAX_ATTEMPTS = 10
BASE_DELAY_SECONDS = 1.0
DELAY_STEP_SECONDS = 2.0

StatusCheck = Callable[[int], PollOutcome]


def backoff_delay(attempt: int) -> float:
    """Seconds to wait before the given 0-indexed attempt: 1, 3, 5, ..."""
    return BASE_DELAY_SECONDS + attempt * DELAY_STEP_SECONDS


class OperationPoller:
    """
    Repeatedly invokes a status check with a fixed linear backoff.

    A check returns PollOutcome.PENDING to keep polling or
    PollOutcome.COMPLETED to stop. Anything it raises propagates at once,
    without further attempts or waiting.

    Example:
        poller = OperationPoller()
        outcome = poller.poll(lambda i: check(operation_id))
        if outcome is None:
            raise PollingExhaustedError("Upload failed")
    """

    def __init__(self, sleep: Optional[Callable[[float], None]] = None) -> None:
        self._sleep = sleep or time.sleep

    def poll(self, status_check: StatusCheck, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Optional[PollOutcome]:
        """
        Run the polling loop.

        Args:
            status_check: Called with the attempt index
            max_attempts: Number of checks before giving up

        Returns:
            PollOutcome.COMPLETED, or None if every attempt was still pending
        """
        for attempt in range(max_attempts):
            self._sleep(backoff_delay(attempt))
            outcome = status_check(attempt)
            if outcome is PollOutcome.COMPLETED:
                return outcome
        return None
