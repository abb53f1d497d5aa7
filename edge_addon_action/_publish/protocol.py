"""Credential protocol and archive input types for Edge Add-ons submissions.

This module defines the core protocol and types shared by the transport
and the orchestrator.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Protocol, Union

from edge_addon_action.exceptions import ConfigurationError, FileProcessingError

# Default Edge Add-ons API
EDGE_ADDONS_API = "https://api.addons.microsoftedge.microsoft.com"

# An archive is either a path to a zip file or its raw bytes
ArchiveSource = Union[str, Path, bytes]


class CredentialProvider(Protocol):
    """
    Protocol defining how authorization headers are obtained.

    The transport and orchestrator depend only on this protocol, never on
    a concrete provider, so adding another auth scheme does not touch the
    polling or sequencing logic.

    Example:
        class StaticProvider:
            name = "static"

            def get_auth_headers(self) -> Dict[str, str]:
                return {"Authorization": "ApiKey ..."}
    """

    @property
    def name(self) -> str:
        """
        Human-readable name of this provider.

        Used for logging only. Examples: "client-credentials", "api-key"
        """
        ...

    def get_auth_headers(self) -> Dict[str, str]:
        """
        Return the headers that authorize a request.

        Implementations may perform a network exchange on first use and
        must reuse the result for the rest of the run.

        Returns:
            Mapping of header name to value

        Raises:
            AuthenticationError: If credentials cannot be obtained
        """
        ...


@dataclass(frozen=True)
class ArchiveInput:
    """
    The extension package to upload.

    Attributes:
        source: Path to a zip file, or the zip contents already in memory
    """

    source: ArchiveSource

    def __post_init__(self) -> None:
        """Validate input parameters."""
        if isinstance(self.source, (bytes, bytearray)):
            if not self.source:
                raise ConfigurationError("Archive bytes are empty")
        elif not str(self.source):
            raise ConfigurationError("Archive path is required")

    @property
    def description(self) -> str:
        """Short label for logs."""
        if isinstance(self.source, (bytes, bytearray)):
            return f"<in-memory archive, {len(self.source)} bytes>"
        return str(self.source)

    def read(self) -> bytes:
        """
        Return the archive contents.

        Raises:
            FileProcessingError: If the archive file cannot be read
        """
        if isinstance(self.source, (bytes, bytearray)):
            return bytes(self.source)
        try:
            with Path(self.source).open("rb") as f:
                return f.read()
        except FileNotFoundError:
            raise FileProcessingError(f"Archive file not found: {self.source}")
        except IOError as e:
            raise FileProcessingError(f"Failed to read archive file: {e}")
