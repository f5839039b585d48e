"""Service emitting user notifications for claim lifecycle events."""

import logging
from typing import Iterable, List

from ..models.claim import Claim
from ..models.notification import Notification, NotificationType
from ..ports.claim_store import ClaimStore

logger = logging.getLogger(__name__)


class NotificationFanout:
    """Turns lifecycle transitions into one notification per affected user.

    Emission is not idempotent: every call appends new notifications, so
    callers decide when a transition warrants notifying.
    """

    def __init__(self, store: ClaimStore):
        """Initialize the service.

        Args:
            store: Store the notifications are appended to
        """
        self._store = store

    def notify(
        self,
        user_id: str,
        claim_id: str,
        type: NotificationType,
        title: str,
        message: str,
    ) -> Notification:
        """Append one unread notification for a user.

        Args:
            user_id: Recipient
            claim_id: Claim the event is about
            type: Event kind
            title: Short title
            message: Body text

        Returns:
            The stored notification
        """
        notification = Notification(
            user_id=user_id,
            claim_id=claim_id,
            type=type,
            title=title,
            message=message,
        )
        self._store.append_notification(notification)
        logger.info(f"🔔 Notified {user_id} about claim {claim_id}: {title}")
        return notification

    def notify_admins(self, claim_id: str, title: str, message: str) -> List[Notification]:
        """Notify every user with the admin role.

        Args:
            claim_id: Claim the event is about
            title: Short title
            message: Body text

        Returns:
            One notification per admin
        """
        admins = [p for p in self._store.list_user_profiles() if p.is_admin]
        if not admins:
            logger.warning(f"⚠️ No admin profiles to notify about claim {claim_id}")
        return [
            self.notify(admin.id, claim_id, NotificationType.CLAIM_APPROVED, title, message)
            for admin in admins
        ]

    def notify_submitters(
        self,
        claims: Iterable[Claim],
        type: NotificationType,
        title: str,
        message: str,
    ) -> List[Notification]:
        """Notify the submitter of each claim in a cluster.

        Args:
            claims: Cluster members, one notification each
            type: Event kind
            title: Short title
            message: Body text

        Returns:
            The stored notifications
        """
        return [
            self.notify(claim.submitted_by, claim.id, type, title, message)
            for claim in claims
        ]

    def list_for_user(self, user_id: str) -> List[Notification]:
        """Get a user's notifications, newest first."""
        return self._store.list_notifications(user_id)

    def mark_read(self, notification_id: str) -> bool:
        """Mark a notification as read.

        Returns:
            False if the notification does not exist
        """
        found = self._store.mark_notification_read(notification_id)
        if not found:
            logger.warning(f"Notification not found: {notification_id}")
        return found
