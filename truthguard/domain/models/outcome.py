"""Result type returned by claim lifecycle operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .claim import Claim
from .notification import Notification


class OutcomeError(str, Enum):
    """Expected failure conditions of a lifecycle operation."""

    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"


@dataclass
class ClaimOutcome:
    """Result of a lifecycle operation.

    Exactly one of ``claim`` and ``error`` is set. Expected conditions such as
    a missing claim are reported here instead of being raised.
    """

    claim: Optional[Claim] = None
    error: Optional[OutcomeError] = None
    message: Optional[str] = None
    merged: bool = False
    notifications: List[Notification] = field(default_factory=list)

    def __post_init__(self):
        """Validate that the outcome is either a success or a failure."""
        if (self.claim is None) == (self.error is None):
            raise ValueError("Outcome must carry either a claim or an error")

    @property
    def ok(self) -> bool:
        """Check if the operation succeeded."""
        return self.error is None

    @classmethod
    def not_found(cls, claim_id: str) -> "ClaimOutcome":
        """Build the outcome for a claim id absent from the store."""
        return cls(error=OutcomeError.NOT_FOUND, message=f"Claim {claim_id} not found")

    @classmethod
    def invalid(cls, message: str) -> "ClaimOutcome":
        """Build the outcome for a rejected input."""
        return cls(error=OutcomeError.INVALID_INPUT, message=message)
