"""SubmissionResult dataclass for the outcome of a publish run."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .operation import Operation


@dataclass
class SubmissionResult:
    """
    Result of a full upload-and-publish run.

    Attributes:
        success: Whether both phases completed
        product_id: Edge Add-ons product id
        upload_operation_id: Operation id of the package upload, if one was started
        publish_operation_id: Operation id of the publish request, if one was started
        error_message: Error message if the run failed
        operation: Last operation state the store reported before a failure or timeout
        status_code: HTTP status of the failing response, if any
        metadata: Additional data (e.g. the final operation payloads)
    """

    success: bool
    product_id: str
    upload_operation_id: Optional[str] = None
    publish_operation_id: Optional[str] = None
    error_message: Optional[str] = None
    operation: Optional[Operation] = None
    status_code: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate result state."""
        if self.success and self.error_message:
            raise ValueError("Successful result should not have error_message")
        if not self.success and not self.error_message:
            raise ValueError("Failed result must have error_message")

    @property
    def published(self) -> bool:
        """Check if the publish phase was reached and completed."""
        return self.success and self.publish_operation_id is not None

    @classmethod
    def success_result(
        cls,
        product_id: str,
        upload_operation_id: str,
        publish_operation_id: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "SubmissionResult":
        """Create a successful submission result."""
        return cls(
            success=True,
            product_id=product_id,
            upload_operation_id=upload_operation_id,
            publish_operation_id=publish_operation_id,
            error_message=None,
            metadata=metadata or {},
        )

    @classmethod
    def failure_result(
        cls,
        product_id: str,
        error_message: str,
        upload_operation_id: Optional[str] = None,
        publish_operation_id: Optional[str] = None,
        operation: Optional[Operation] = None,
        status_code: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "SubmissionResult":
        """Create a failed submission result."""
        return cls(
            success=False,
            product_id=product_id,
            upload_operation_id=upload_operation_id,
            publish_operation_id=publish_operation_id,
            error_message=error_message,
            operation=operation,
            status_code=status_code,
            metadata=metadata or {},
        )
