"""Key-value adapter implementation of the claim store port."""

import logging
import threading
from typing import List, MutableMapping, Optional

from pydantic import TypeAdapter

from ...domain.models.claim import Claim
from ...domain.models.notification import Notification
from ...domain.models.user_profile import UserProfile
from ...domain.ports.claim_store import ClaimStore

logger = logging.getLogger(__name__)

CLAIMS_KEY = "truthguard_claims"
NOTIFICATIONS_KEY = "truthguard_notifications"
USER_PROFILES_KEY = "truthguard_user_profiles"

_claims_adapter = TypeAdapter(List[Claim])
_notifications_adapter = TypeAdapter(List[Notification])
_profiles_adapter = TypeAdapter(List[UserProfile])


class KeyValueClaimStore(ClaimStore):
    """Claim store keeping one JSON document per collection.

    Any ``MutableMapping[str, str]`` can back the store; an in-memory dict is
    used when none is given. Every read decodes a fresh copy of the
    collection, so callers never share model instances with the store.
    """

    def __init__(self, backend: Optional[MutableMapping[str, str]] = None):
        """Initialize the store.

        Args:
            backend: Mapping holding the serialized collections
        """
        self._backend = backend if backend is not None else {}
        self._lock = threading.RLock()

    def _read(self, key: str, adapter: TypeAdapter) -> list:
        raw = self._backend.get(key)
        if not raw:
            return []
        return adapter.validate_json(raw)

    def _write(self, key: str, adapter: TypeAdapter, items: list) -> None:
        self._backend[key] = adapter.dump_json(items).decode()

    def list_claims(self) -> List[Claim]:
        """Return every claim, newest submission first."""
        with self._lock:
            return self._read(CLAIMS_KEY, _claims_adapter)

    def put_claims(self, claims: List[Claim]) -> None:
        """Replace the whole claim collection."""
        with self._lock:
            self._write(CLAIMS_KEY, _claims_adapter, list(claims))
        logger.debug(f"💾 Stored {len(claims)} claims")

    def delete_claim(self, claim_id: str) -> bool:
        """Remove a claim. Returns False when it did not exist."""
        with self._lock:
            claims = self._read(CLAIMS_KEY, _claims_adapter)
            remaining = [c for c in claims if c.id != claim_id]
            if len(remaining) == len(claims):
                return False
            self._write(CLAIMS_KEY, _claims_adapter, remaining)
        logger.info(f"🗑️ Deleted claim {claim_id}")
        return True

    def list_notifications(self, user_id: str) -> List[Notification]:
        """Return a user's notifications, newest first."""
        with self._lock:
            notifications = self._read(NOTIFICATIONS_KEY, _notifications_adapter)
        return [n for n in notifications if n.user_id == user_id]

    def append_notification(self, notification: Notification) -> None:
        """Store a new notification at the head of the collection."""
        with self._lock:
            notifications = self._read(NOTIFICATIONS_KEY, _notifications_adapter)
            notifications.insert(0, notification)
            self._write(NOTIFICATIONS_KEY, _notifications_adapter, notifications)

    def mark_notification_read(self, notification_id: str) -> bool:
        """Flag a notification as read. Returns False when it did not exist."""
        with self._lock:
            notifications = self._read(NOTIFICATIONS_KEY, _notifications_adapter)
            found = False
            for notification in notifications:
                if notification.id == notification_id:
                    notification.read = True
                    found = True
            if found:
                self._write(NOTIFICATIONS_KEY, _notifications_adapter, notifications)
        return found

    def list_user_profiles(self) -> List[UserProfile]:
        """Return every user profile."""
        with self._lock:
            return self._read(USER_PROFILES_KEY, _profiles_adapter)

    def put_user_profiles(self, profiles: List[UserProfile]) -> None:
        """Replace the whole user profile collection."""
        with self._lock:
            self._write(USER_PROFILES_KEY, _profiles_adapter, list(profiles))
