"""Operation model and status classification for Edge Add-ons long-running operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from edge_addon_action.exceptions import OperationFailedError

STATUS_IN_PROGRESS = "InProgress"
STATUS_SUCCEEDED = "Succeeded"


class PollOutcome(Enum):
    """Result of a single status check. Failures are raised, not returned."""

    PENDING = "pending"
    COMPLETED = "completed"


@dataclass
class Operation:
    """
    A vendor-side asynchronous task (package validation or publish review).

    Attributes:
        id: Opaque operation id
        status: "InProgress", "Succeeded" or a vendor failure value
        message: Human-readable status message
        error_code: Vendor error code, if any
        created_time: Creation timestamp as reported by the store
        last_updated_time: Last update timestamp as reported by the store
        errors: Detailed error entries attached to a failed operation
        raw: The full JSON payload as received
    """

    id: str
    status: str
    message: Optional[str] = None
    error_code: Optional[str] = None
    created_time: Optional[str] = None
    last_updated_time: Optional[str] = None
    errors: List[Any] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], operation_id: str = "") -> "Operation":
        """Build an Operation from the JSON status payload."""
        return cls(
            id=data.get("id") or operation_id,
            status=str(data.get("status", "")),
            message=data.get("message"),
            error_code=data.get("errorCode"),
            created_time=data.get("createdTime"),
            last_updated_time=data.get("lastUpdatedTime"),
            errors=data.get("errors") or [],
            raw=data,
        )

    @property
    def is_in_progress(self) -> bool:
        return self.status == STATUS_IN_PROGRESS

    @property
    def is_succeeded(self) -> bool:
        return self.status == STATUS_SUCCEEDED

    def to_outcome(self) -> PollOutcome:
        """
        Classify this operation for the poller.

        Raises:
            OperationFailedError: If the status is neither InProgress nor Succeeded
        """
        if self.is_in_progress:
            return PollOutcome.PENDING
        if self.is_succeeded:
            return PollOutcome.COMPLETED
        raise OperationFailedError(self)
