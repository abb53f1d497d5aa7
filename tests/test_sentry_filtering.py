"""Test Sentry error filtering for user vs system errors."""

import os
import unittest
from unittest.mock import patch

import sentry_sdk

from edge_addon_action._publish import Operation
from edge_addon_action.cli.main import initialize_sentry
from edge_addon_action.exceptions import (
    APIError,
    ConfigurationError,
    OperationFailedError,
)

TEST_DSN = "https://public@sentry.example.com/1"


class TestSentryFiltering(unittest.TestCase):
    def _before_send(self):
        with patch.dict(os.environ, {"SENTRY_DSN": TEST_DSN}):
            initialize_sentry()
        client = sentry_sdk.get_client()
        return client.options.get("before_send")

    def tearDown(self):
        sentry_sdk.init()

    def test_sentry_filters_configuration_errors(self):
        before_send = self._before_send()
        error = ConfigurationError("PRODUCT_ID is required")
        hint = {"exc_info": (ConfigurationError, error, None)}
        self.assertIsNone(before_send({"exception": {}}, hint))

    def test_sentry_filters_operation_failures(self):
        before_send = self._before_send()
        error = OperationFailedError(Operation(id="op-1", status="Failed"))
        hint = {"exc_info": (OperationFailedError, error, None)}
        self.assertIsNone(before_send({"exception": {}}, hint))

    def test_sentry_allows_api_errors(self):
        before_send = self._before_send()
        event = {"exception": {"values": [{"type": "APIError"}]}}
        error = APIError("POST failed. [500]", status_code=500)
        hint = {"exc_info": (APIError, error, None)}
        self.assertEqual(before_send(event, hint), event)

    def test_sentry_allows_events_without_exception(self):
        before_send = self._before_send()
        event = {"message": "hello"}
        self.assertEqual(before_send(event, {}), event)

    def test_no_dsn_skips_initialization(self):
        with patch.dict(os.environ, {}, clear=False), patch.object(sentry_sdk, "init") as mock_init:
            os.environ.pop("SENTRY_DSN", None)
            initialize_sentry()
        mock_init.assert_not_called()


if __name__ == "__main__":
    unittest.main()
