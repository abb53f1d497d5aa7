"""
Unit tests for the public publish API and SubmissionResult.

Tests cover:
- SubmissionResult construction
- create_credential_provider scheme selection
- publish_addon end to end against a fake API
"""

import unittest
from unittest.mock import patch

from edge_addon_action._publish import ApiKeyProvider, ClientCredentialsProvider, Operation, SubmissionResult
from edge_addon_action.exceptions import ConfigurationError
from edge_addon_action.publish import create_credential_provider, publish_addon

from .fakes import FakeEdgeApi


class TestSubmissionResult(unittest.TestCase):
    def test_success_result(self):
        result = SubmissionResult.success_result(
            product_id="prod-1",
            upload_operation_id="op-1",
            publish_operation_id="op-2",
        )
        self.assertTrue(result.success)
        self.assertTrue(result.published)
        self.assertIsNone(result.error_message)
        self.assertEqual(result.metadata, {})

    def test_failure_result_with_operation(self):
        operation = Operation(id="op-1", status="Failed", message="bad")
        result = SubmissionResult.failure_result(
            product_id="prod-1",
            error_message="Operation op-1 ended with status Failed",
            operation=operation,
        )
        self.assertFalse(result.success)
        self.assertFalse(result.published)
        self.assertIs(result.operation, operation)

    def test_success_with_error_message_raises(self):
        with self.assertRaises(ValueError):
            SubmissionResult(success=True, product_id="p", error_message="nope")

    def test_failure_without_error_message_raises(self):
        with self.assertRaises(ValueError):
            SubmissionResult(success=False, product_id="p")


class TestCreateCredentialProvider(unittest.TestCase):
    def test_client_credentials(self):
        provider = create_credential_provider(
            client_id="cid",
            access_token_url="https://login.example/token",
            client_secret="secret",
        )
        self.assertIsInstance(provider, ClientCredentialsProvider)

    def test_api_key(self):
        provider = create_credential_provider(client_id="cid", api_key="key")
        self.assertIsInstance(provider, ApiKeyProvider)

    def test_api_key_wins_when_both_given(self):
        provider = create_credential_provider(
            client_id="cid",
            access_token_url="https://login.example/token",
            client_secret="secret",
            api_key="key",
        )
        self.assertIsInstance(provider, ApiKeyProvider)

    def test_missing_client_id(self):
        with self.assertRaises(ConfigurationError):
            create_credential_provider(client_id=None, api_key="key")

    def test_incomplete_client_credentials(self):
        with self.assertRaises(ConfigurationError):
            create_credential_provider(client_id="cid", access_token_url="https://login.example/token")


class TestPublishAddon(unittest.TestCase):
    @patch("edge_addon_action._publish.poller.time.sleep")
    @patch("edge_addon_action._publish.transport.requests.request")
    def test_publish_addon_success(self, mock_request, mock_sleep):
        api = FakeEdgeApi()
        mock_request.side_effect = api

        result = publish_addon(
            archive=b"PK\x03\x04",
            product_id="prod-1",
            client_id="cid",
            api_key="key",
            notes="hi",
        )

        self.assertTrue(result.success)
        self.assertEqual(result.upload_operation_id, "op-1")
        self.assertEqual(result.publish_operation_id, "op-2")
        self.assertEqual(mock_sleep.call_count, 2)

    @patch("edge_addon_action._publish.poller.time.sleep")
    @patch("edge_addon_action._publish.transport.requests.request")
    def test_publish_addon_failure_result(self, mock_request, mock_sleep):
        mock_request.side_effect = FakeEdgeApi(upload_statuses=[{"status": "Failed", "errorCode": "E1"}])

        result = publish_addon(archive=b"PK", product_id="prod-1", client_id="cid", api_key="key")

        self.assertFalse(result.success)
        self.assertEqual(result.operation.error_code, "E1")

    @patch("edge_addon_action._publish.transport.requests.request")
    def test_empty_archive_returns_failure_result(self, mock_request):
        result = publish_addon(archive=b"", product_id="prod-1", client_id="cid", api_key="key")

        self.assertFalse(result.success)
        self.assertEqual(result.error_message, "Archive bytes are empty")
        mock_request.assert_not_called()

    @patch("edge_addon_action._publish.transport.requests.request")
    def test_missing_product_id_fails_before_network(self, mock_request):
        with self.assertRaises(ConfigurationError):
            publish_addon(archive=b"PK", product_id="", client_id="cid", api_key="key")
        mock_request.assert_not_called()


if __name__ == "__main__":
    unittest.main()
