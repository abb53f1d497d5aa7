"""Submission orchestrator: upload a package, then publish it."""

from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Dict, Optional

import requests

from edge_addon_action.exceptions import (
    APIError,
    EdgeAddonError,
    OperationFailedError,
    PollingExhaustedError,
)
from edge_addon_action.logging_config import logger

from .operation import Operation, PollOutcome
from .poller import DEFAULT_MAX_ATTEMPTS, OperationPoller
from .protocol import ArchiveInput, ArchiveSource, CredentialProvider
from .result import SubmissionResult
from .transport import EdgeAddonsClient

PHASE_UPLOAD = "upload"
PHASE_PUBLISH = "publish"

ProgressCallback = Callable[[str, str, int], None]
PhaseContext = Callable[[str], ContextManager[Any]]


def _operation_id_from(response: requests.Response, method: str, path: str) -> str:
    """
    Extract the operation id from an accepted response.

    Raises:
        APIError: If the status is not 202 or the location header is missing
    """
    if response.status_code != 202:
        raise APIError(
            f"{method} {path} returned {response.status_code}, expected 202",
            status_code=response.status_code,
            body=response.text,
        )
    operation_id = response.headers.get("location")
    if not operation_id:
        raise APIError(
            f"{method} {path} returned 202 without a location header",
            status_code=response.status_code,
            body=response.text,
        )
    return operation_id


class SubmissionOrchestrator:
    """
    Sequences a package upload and a publish request for one product.

    Each phase starts a long-running operation and polls it until the store
    reports Succeeded. Publish is never started unless upload succeeded, and
    any failure aborts the run.

    Example:
        orchestrator = SubmissionOrchestrator(
            product_id="...",
            credentials=ClientCredentialsProvider(token_url, client_id, secret),
        )
        orchestrator.run("extension.zip", notes="Bug fixes")
    """

    def __init__(
        self,
        product_id: str,
        credentials: Optional[CredentialProvider] = None,
        client: Optional[EdgeAddonsClient] = None,
        poller: Optional[OperationPoller] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        """
        Initialize the SubmissionOrchestrator.

        Args:
            product_id: Edge Add-ons product id
            credentials: Credential provider (ignored if client is given)
            client: Optional preconfigured request layer
            poller: Optional poller (e.g. with a fake sleep for tests)
            max_attempts: Polling budget per phase
            on_progress: Called with (phase, operation_id, attempt) before each check
        """
        if client is None:
            if credentials is None:
                raise ValueError("Either credentials or client is required")
            client = EdgeAddonsClient(credentials)
        self._product_id = product_id
        self._client = client
        self._poller = poller or OperationPoller()
        self._max_attempts = max_attempts
        self._on_progress = on_progress
        self._upload_operation_id: Optional[str] = None
        self._publish_operation_id: Optional[str] = None

    @property
    def product_id(self) -> str:
        return self._product_id

    @property
    def client(self) -> EdgeAddonsClient:
        return self._client

    @property
    def upload_operation_id(self) -> Optional[str]:
        """Id of the upload operation started by the current run, if any."""
        return self._upload_operation_id

    @property
    def publish_operation_id(self) -> Optional[str]:
        """Id of the publish operation started by the current run, if any."""
        return self._publish_operation_id

    # Upload phase

    def upload(self, archive: ArchiveInput) -> str:
        """Upload the package and return the validation operation id."""
        body = archive.read()
        path = f"/v1/products/{self._product_id}/submissions/draft/package"
        logger.info(f"Uploading {archive.description} ({len(body)} bytes) to product {self._product_id}")
        response = self._client.request(
            path,
            method="POST",
            headers={"Content-Type": "application/zip"},
            data=body,
        )
        return _operation_id_from(response, "POST", path)

    def check_upload(self, operation_id: str) -> Operation:
        return self._get_operation(
            f"/v1/products/{self._product_id}/submissions/draft/package/operations/{operation_id}",
            operation_id,
        )

    # Publish phase

    def publish(self, notes: str = "") -> str:
        """Submit the draft for review and return the publish operation id."""
        path = f"/v1/products/{self._product_id}/submissions"
        logger.info(f"Publishing product {self._product_id}")
        response = self._client.request(
            path,
            method="POST",
            headers={"Content-Type": "application/json"},
            json={"notes": notes},
        )
        return _operation_id_from(response, "POST", path)

    def check_publish(self, operation_id: str) -> Operation:
        return self._get_operation(
            f"/v1/products/{self._product_id}/submissions/operations/{operation_id}",
            operation_id,
        )

    # Sequencing

    def upload_result(self, archive: ArchiveInput) -> Operation:
        """Upload and wait for validation. Returns the final operation."""
        operation_id = self.upload(archive)
        self._upload_operation_id = operation_id
        return self._wait(PHASE_UPLOAD, operation_id, self.check_upload, "Upload failed")

    def publish_result(self, notes: str = "") -> Operation:
        """Publish and wait for the review request to complete. Returns the final operation."""
        operation_id = self.publish(notes)
        self._publish_operation_id = operation_id
        return self._wait(PHASE_PUBLISH, operation_id, self.check_publish, "Publish failed")

    def run(
        self,
        archive: ArchiveSource,
        notes: str = "",
        phase_context: Optional[PhaseContext] = None,
    ) -> SubmissionResult:
        """
        Upload the archive, then publish it.

        Args:
            archive: Path to the zip file or its bytes
            notes: Notes for the certification reviewers
            phase_context: Optional factory called with the phase name; the
                phase runs inside the context manager it returns

        Returns:
            A successful SubmissionResult

        Raises:
            EdgeAddonError: Any failure, which aborts the run
        """
        self._upload_operation_id = None
        self._publish_operation_id = None
        archive_input = archive if isinstance(archive, ArchiveInput) else ArchiveInput(archive)

        with self._phase(phase_context, PHASE_UPLOAD):
            uploaded = self.upload_result(archive_input)
        logger.info(f"Upload operation {uploaded.id} succeeded")

        with self._phase(phase_context, PHASE_PUBLISH):
            published = self.publish_result(notes)
        logger.info(f"Publish operation {published.id} succeeded")

        logger.info(f"Product {self._product_id} submitted for publication")
        return SubmissionResult.success_result(
            product_id=self._product_id,
            upload_operation_id=uploaded.id,
            publish_operation_id=published.id,
            metadata={"upload": uploaded.raw, "publish": published.raw},
        )

    def submit(self, archive: ArchiveSource, notes: str = "") -> SubmissionResult:
        """
        Like run(), but report failures as a failed SubmissionResult.

        The failed result keeps the ids of the operations started so far and
        the last operation status the store reported.
        """
        try:
            return self.run(archive, notes)
        except (OperationFailedError, PollingExhaustedError) as e:
            return self._failure_result(
                e,
                operation=e.operation,
                metadata={"operation": e.operation.raw} if e.operation else None,
            )
        except APIError as e:
            return self._failure_result(
                e,
                status_code=e.status_code,
                metadata={"body": e.body} if e.body else None,
            )
        except EdgeAddonError as e:
            return self._failure_result(e)

    def _failure_result(self, error: EdgeAddonError, **kwargs: Any) -> SubmissionResult:
        logger.error(str(error))
        return SubmissionResult.failure_result(
            product_id=self._product_id,
            error_message=str(error),
            upload_operation_id=self._upload_operation_id,
            publish_operation_id=self._publish_operation_id,
            **kwargs,
        )

    @staticmethod
    def _phase(phase_context: Optional[PhaseContext], phase: str) -> ContextManager[Any]:
        return phase_context(phase) if phase_context else nullcontext()

    def _wait(
        self,
        phase: str,
        operation_id: str,
        check: Callable[[str], Operation],
        exhausted_message: str,
    ) -> Operation:
        last: Dict[str, Operation] = {}

        def status_check(attempt: int) -> PollOutcome:
            logger.info(f"Check {phase}: {operation_id} (attempt {attempt + 1}/{self._max_attempts})")
            if self._on_progress:
                self._on_progress(phase, operation_id, attempt)
            operation = check(operation_id)
            last["operation"] = operation
            return operation.to_outcome()

        if self._poller.poll(status_check, max_attempts=self._max_attempts) is None:
            raise PollingExhaustedError(exhausted_message, operation=last.get("operation"))
        return last["operation"]

    def _get_operation(self, path: str, operation_id: str) -> Operation:
        response = self._client.request(path)
        try:
            data: Any = response.json()
        except ValueError:
            raise APIError(
                f"GET {path} returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            )
        if not isinstance(data, dict):
            raise APIError(
                f"GET {path} returned an unexpected payload",
                status_code=response.status_code,
                body=response.text,
            )
        return Operation.from_dict(data, operation_id=operation_id)
