"""Domain model for submitted claims."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Set
from uuid import uuid4

from pydantic import BaseModel, Field


class ClaimStatus(str, Enum):
    """Fact-check status of a claim."""

    PENDING = "pending"
    TRUE = "true"
    FALSE = "false"
    MISLEADING = "misleading"
    SATIRE = "satire"
    NEEDS_CONTEXT = "needs-context"


class ClaimPriority(str, Enum):
    """Review priority of a claim."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ClaimCategory(str, Enum):
    """Topic a claim belongs to."""

    ELECTIONS = "elections"
    GOVERNANCE = "governance"
    HEALTH = "health"
    SECURITY = "security"
    ECONOMY = "economy"
    EDUCATION = "education"
    ENVIRONMENT = "environment"
    SOCIAL = "social"
    TECHNOLOGY = "technology"
    OTHER = "other"


# Fields an update on a primary claim propagates to its duplicate cluster
CASCADE_FIELDS = ("status", "verdict", "explanation", "references", "approved")


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Claim(BaseModel):
    """Represents one fact-checkable assertion submitted by a user."""

    id: str = Field(default_factory=_new_id, description="Unique claim identifier")
    content: str = Field(..., description="The claim text as submitted")
    status: ClaimStatus = Field(default=ClaimStatus.PENDING, description="Fact-check status")
    category: ClaimCategory = Field(default=ClaimCategory.OTHER, description="Claim topic")
    submitted_by: str = Field(..., description="User id of the submitter")
    submitted_at: datetime = Field(default_factory=_utcnow, description="When the claim was submitted")
    verified_by: Optional[str] = Field(None, description="Admin who verified the claim")
    priority: ClaimPriority = Field(default=ClaimPriority.MEDIUM, description="Review priority")
    verdict: Optional[str] = Field(None, description="Short verdict text")
    explanation: Optional[str] = Field(None, description="Longer explanation of the verdict")
    references: List[str] = Field(default_factory=list, description="Ordered reference list")
    sources: List[str] = Field(default_factory=list, description="Sources cited by the submitter")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")
    source_url: Optional[str] = Field(None, description="Where the claim was seen")
    approved: bool = Field(default=False, description="Authorized for public feeds")
    ai_analyzed: bool = Field(default=False, description="Simulated analysis has run")
    ai_pending_approval: bool = Field(default=False, description="Analysis awaits human sign-off")
    published_to_feed: bool = Field(default=False, description="Visible in the public feed")
    duplicate_of: Optional[str] = Field(None, description="Primary claim id when this is a duplicate")
    duplicate_count: int = Field(default=1, ge=1, description="1 + submissions merged into this claim")
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    shares: int = Field(default=0, ge=0)
    trending: bool = False
    bookmarked_by: Set[str] = Field(default_factory=set, description="Users who bookmarked the claim")

    @property
    def is_primary(self) -> bool:
        """Whether this claim heads its duplicate cluster."""
        return self.duplicate_of is None

    class Config:
        """Pydantic model configuration."""
        validate_assignment = True
        json_schema_extra = {
            "example": {
                "content": "Kenya's GDP grew by 15% last quarter",
                "category": "economy",
                "submitted_by": "user2",
                "status": "pending",
                "priority": "high",
            }
        }


class ClaimUpdate(BaseModel):
    """Partial update applied to a claim.

    Only fields explicitly provided by the caller are written; a field set to
    ``None`` or ``False`` is still a provided value. Use ``provided()`` to get
    exactly the fields present in the payload.
    """

    status: Optional[ClaimStatus] = None
    verdict: Optional[str] = None
    explanation: Optional[str] = None
    references: Optional[List[str]] = None
    approved: Optional[bool] = None
    verified_by: Optional[str] = None
    priority: Optional[ClaimPriority] = None
    category: Optional[ClaimCategory] = None
    sources: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    ai_analyzed: Optional[bool] = None
    ai_pending_approval: Optional[bool] = None
    published_to_feed: Optional[bool] = None
    trending: Optional[bool] = None
    views: Optional[int] = Field(None, ge=0)
    likes: Optional[int] = Field(None, ge=0)
    shares: Optional[int] = Field(None, ge=0)
    bookmarked_by: Optional[Set[str]] = None

    class Config:
        """Pydantic model configuration."""
        extra = "forbid"

    def provided(self) -> dict:
        """Return the explicitly provided fields and their values."""
        return {name: getattr(self, name) for name in self.model_fields_set}

    def cascaded(self) -> dict:
        """Return the provided fields that propagate to duplicate claims."""
        return {
            name: value
            for name, value in self.provided().items()
            if name in CASCADE_FIELDS
        }

    def has(self, name: str) -> bool:
        """Check whether a field was explicitly provided."""
        return name in self.model_fields_set
