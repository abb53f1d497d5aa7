"""Edge Add-ons submission lifecycle.

This module uploads an extension package to the Microsoft Edge Add-ons
store and publishes it:
- Credential providers (OAuth2 client credentials or static API key)
- An authenticated request layer
- A generic poller for long-running operations
- The orchestrator that sequences upload and publish

Usage:
    from edge_addon_action._publish import (
        ClientCredentialsProvider,
        SubmissionOrchestrator,
    )

    orchestrator = SubmissionOrchestrator(
        product_id="...",
        credentials=ClientCredentialsProvider(
            access_token_url="https://login.microsoftonline.com/.../token",
            client_id="...",
            client_secret="...",
        ),
    )
    result = orchestrator.run("extension.zip", notes="Release notes")
"""

from .credentials import ApiKeyProvider, ClientCredentialsProvider
from .operation import STATUS_IN_PROGRESS, STATUS_SUCCEEDED, Operation, PollOutcome
from .orchestrator import PHASE_PUBLISH, PHASE_UPLOAD, PhaseContext, SubmissionOrchestrator
from .poller import DEFAULT_MAX_ATTEMPTS, OperationPoller, backoff_delay
from .protocol import EDGE_ADDONS_API, ArchiveInput, ArchiveSource, CredentialProvider
from .result import SubmissionResult
from .transport import EdgeAddonsClient

__all__ = [
    # Core types
    "ArchiveInput",
    "ArchiveSource",
    "CredentialProvider",
    "Operation",
    "PollOutcome",
    "SubmissionResult",
    "STATUS_IN_PROGRESS",
    "STATUS_SUCCEEDED",
    "EDGE_ADDONS_API",
    # Credential providers
    "ClientCredentialsProvider",
    "ApiKeyProvider",
    # Transport, polling and orchestration
    "EdgeAddonsClient",
    "OperationPoller",
    "backoff_delay",
    "DEFAULT_MAX_ATTEMPTS",
    "SubmissionOrchestrator",
    "PHASE_UPLOAD",
    "PHASE_PUBLISH",
    "PhaseContext",
]
