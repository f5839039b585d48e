"""Port for claim, notification and user profile storage."""

from typing import List, Protocol

from ..models.claim import Claim
from ..models.notification import Notification
from ..models.user_profile import UserProfile


class ClaimStore(Protocol):
    """Protocol for the keyed storage the engine reads and writes.

    Collections are read and replaced whole. Implementations hand out copies,
    so callers mutate what they read and write it back with ``put_claims``.
    Storage failures are raised as-is; the engine never retries them.
    """

    def list_claims(self) -> List[Claim]:
        """Return every claim, newest submission first."""
        ...

    def put_claims(self, claims: List[Claim]) -> None:
        """Replace the whole claim collection."""
        ...

    def delete_claim(self, claim_id: str) -> bool:
        """Remove a claim. Returns False when it did not exist."""
        ...

    def list_notifications(self, user_id: str) -> List[Notification]:
        """Return a user's notifications, newest first."""
        ...

    def append_notification(self, notification: Notification) -> None:
        """Store a new notification."""
        ...

    def mark_notification_read(self, notification_id: str) -> bool:
        """Flag a notification as read. Returns False when it did not exist."""
        ...

    def list_user_profiles(self) -> List[UserProfile]:
        """Return every user profile."""
        ...

    def put_user_profiles(self, profiles: List[UserProfile]) -> None:
        """Replace the whole user profile collection."""
        ...
