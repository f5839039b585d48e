"""Domain model for user notifications."""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


class NotificationType(str, Enum):
    """Kinds of user-facing events."""

    VERDICT_PUBLISHED = "verdict_published"
    CLAIM_APPROVED = "claim_approved"
    CLAIM_REJECTED = "claim_rejected"
    TRENDING = "trending"


class Notification(BaseModel):
    """Represents one event delivered to one user."""

    id: str = Field(default_factory=lambda: uuid4().hex, description="Notification identifier")
    user_id: str = Field(..., description="Recipient user id")
    claim_id: str = Field(..., description="Claim the event is about")
    type: NotificationType = Field(..., description="Event kind")
    title: str = Field(..., description="Short title")
    message: str = Field(..., description="Body text")
    read: bool = Field(default=False, description="Whether the recipient has seen it")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the notification was emitted",
    )
