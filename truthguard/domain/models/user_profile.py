"""Domain model for user profiles."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Roles a user can hold."""

    USER = "user"
    ADMIN = "admin"
    FACT_CHECKER = "fact-checker"


class UserProfile(BaseModel):
    """Profile of a registered user. Only the role matters to the engine."""

    id: str
    name: str = "User"
    email: str = ""
    role: UserRole = UserRole.USER
    points: int = 0
    badges: List[str] = Field(default_factory=lambda: ["Rookie"])
    claims_submitted: int = 0
    claims_verified: int = 0
    joined_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_admin(self) -> bool:
        """Check if the user belongs to the admin cohort."""
        return self.role == UserRole.ADMIN


class UserProfileUpdate(BaseModel):
    """Partial profile update. Only provided fields are written."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    points: Optional[int] = Field(None, ge=0)
    badges: Optional[List[str]] = None
    claims_submitted: Optional[int] = Field(None, ge=0)
    claims_verified: Optional[int] = Field(None, ge=0)

    class Config:
        """Pydantic model configuration."""
        extra = "forbid"

    def provided(self) -> dict:
        """Return the explicitly provided, non-null fields."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }
