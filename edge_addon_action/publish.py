"""
Public API for publishing an extension to Microsoft Edge Add-ons.

Authentication:
- client-credentials: pass access_token_url, client_id and client_secret.
  A token is exchanged once and reused for every request of the run.
- api-key: pass api_key and client_id. No token exchange happens.

Usage:
    from edge_addon_action.publish import publish_addon

    result = publish_addon(
        archive="extension.zip",
        product_id="00000000-0000-0000-0000-000000000000",
        client_id="...",
        api_key="...",
        notes="Bug fixes",
    )
    if not result.success:
        print(result.error_message)
"""

from typing import Optional

from ._publish import (
    ApiKeyProvider,
    ArchiveSource,
    ClientCredentialsProvider,
    CredentialProvider,
    SubmissionOrchestrator,
    SubmissionResult,
)
from .exceptions import ConfigurationError


def create_credential_provider(
    client_id: Optional[str],
    access_token_url: Optional[str] = None,
    client_secret: Optional[str] = None,
    api_key: Optional[str] = None,
) -> CredentialProvider:
    """
    Pick the credential provider for the given settings.

    An API key wins over client credentials when both are supplied.

    Raises:
        ConfigurationError: If neither scheme is fully configured
    """
    if not client_id:
        raise ConfigurationError("CLIENT_ID is required")
    if api_key:
        return ApiKeyProvider(api_key=api_key, client_id=client_id)
    if access_token_url and client_secret:
        return ClientCredentialsProvider(
            access_token_url=access_token_url,
            client_id=client_id,
            client_secret=client_secret,
        )
    raise ConfigurationError("Either API_KEY or both ACCESS_TOKEN_URL and CLIENT_SECRET are required")


def publish_addon(
    archive: ArchiveSource,
    product_id: str,
    client_id: str,
    access_token_url: Optional[str] = None,
    client_secret: Optional[str] = None,
    api_key: Optional[str] = None,
    notes: str = "",
) -> SubmissionResult:
    """
    Upload an extension package and publish it.

    Args:
        archive: Path to the zip file or its bytes
        product_id: Edge Add-ons product id
        client_id: API client id
        access_token_url: OAuth2 token endpoint (client-credentials scheme)
        client_secret: OAuth2 client secret (client-credentials scheme)
        api_key: API key (api-key scheme)
        notes: Notes for the certification reviewers

    Returns:
        SubmissionResult with success status and operation ids

    Raises:
        ConfigurationError: If product_id or credentials are missing
    """
    if not product_id:
        raise ConfigurationError("PRODUCT_ID is required")

    credentials = create_credential_provider(
        client_id=client_id,
        access_token_url=access_token_url,
        client_secret=client_secret,
        api_key=api_key,
    )
    orchestrator = SubmissionOrchestrator(product_id=product_id, credentials=credentials)

    return orchestrator.submit(archive, notes=notes)


# Re-export key types for convenience
__all__ = [
    "publish_addon",
    "create_credential_provider",
    "SubmissionResult",
]
