"""Tests for the long-running operation poller."""

import unittest

from edge_addon_action._publish import DEFAULT_MAX_ATTEMPTS, OperationPoller, PollOutcome, backoff_delay
from edge_addon_action.exceptions import OperationFailedError
from edge_addon_action._publish.operation import Operation


class RecordingSleep:
    """Collects requested delays instead of sleeping."""

    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


class ScriptedCheck:
    """Returns PENDING for the first `pending` calls, then COMPLETED."""

    def __init__(self, pending):
        self.pending = pending
        self.attempts = []

    def __call__(self, attempt):
        self.attempts.append(attempt)
        if len(self.attempts) <= self.pending:
            return PollOutcome.PENDING
        return PollOutcome.COMPLETED


class TestBackoffDelay(unittest.TestCase):
    def test_linear_schedule(self):
        """Delays grow by two seconds per attempt starting at one second."""
        self.assertEqual([backoff_delay(i) for i in range(4)], [1.0, 3.0, 5.0, 7.0])

    def test_tenth_attempt_waits_nineteen_seconds(self):
        self.assertEqual(backoff_delay(9), 19.0)

    def test_worst_case_total_is_one_hundred_seconds(self):
        total = sum(backoff_delay(i) for i in range(DEFAULT_MAX_ATTEMPTS))
        self.assertEqual(total, 100.0)


class TestOperationPoller(unittest.TestCase):
    def setUp(self):
        self.sleep = RecordingSleep()
        self.poller = OperationPoller(sleep=self.sleep)

    def test_completes_on_first_attempt(self):
        check = ScriptedCheck(pending=0)
        outcome = self.poller.poll(check)
        self.assertIs(outcome, PollOutcome.COMPLETED)
        self.assertEqual(check.attempts, [0])
        self.assertEqual(self.sleep.delays, [1.0])

    def test_pending_k_times_then_completed(self):
        """k pending results mean k+1 calls and sum(1 + 2i) seconds of waiting."""
        for k in range(DEFAULT_MAX_ATTEMPTS):
            with self.subTest(k=k):
                sleep = RecordingSleep()
                check = ScriptedCheck(pending=k)

                outcome = OperationPoller(sleep=sleep).poll(check)

                self.assertIs(outcome, PollOutcome.COMPLETED)
                self.assertEqual(len(check.attempts), k + 1)
                self.assertEqual(check.attempts, list(range(k + 1)))
                expected_ms = sum(1000 + i * 2000 for i in range(k + 1))
                self.assertEqual(sum(sleep.delays) * 1000, expected_ms)

    def test_always_pending_exhausts_budget(self):
        check = ScriptedCheck(pending=1000)
        outcome = self.poller.poll(check)
        self.assertIsNone(outcome)
        self.assertEqual(len(check.attempts), DEFAULT_MAX_ATTEMPTS)
        self.assertEqual(len(self.sleep.delays), DEFAULT_MAX_ATTEMPTS)

    def test_custom_max_attempts(self):
        check = ScriptedCheck(pending=1000)
        self.assertIsNone(self.poller.poll(check, max_attempts=3))
        self.assertEqual(check.attempts, [0, 1, 2])
        self.assertEqual(self.sleep.delays, [1.0, 3.0, 5.0])

    def test_failure_on_first_call_propagates_immediately(self):
        calls = []
        failed = Operation(id="op-1", status="Failed", message="bad manifest", error_code="E1")

        def check(attempt):
            calls.append(attempt)
            raise OperationFailedError(failed)

        with self.assertRaises(OperationFailedError) as ctx:
            self.poller.poll(check)

        self.assertIs(ctx.exception.operation, failed)
        self.assertEqual(calls, [0])
        # Only the delay before the first attempt; nothing after the failure
        self.assertEqual(self.sleep.delays, [1.0])

    def test_failure_after_pending_stops_polling(self):
        calls = []

        def check(attempt):
            calls.append(attempt)
            if attempt < 2:
                return PollOutcome.PENDING
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            self.poller.poll(check)
        self.assertEqual(calls, [0, 1, 2])
        self.assertEqual(self.sleep.delays, [1.0, 3.0, 5.0])


if __name__ == "__main__":
    unittest.main()
