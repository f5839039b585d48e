"""Domain service for user profile lookup and upsert."""

import logging
import threading
from typing import Optional

from ..models.user_profile import UserProfile, UserProfileUpdate
from ..ports.claim_store import ClaimStore

logger = logging.getLogger(__name__)


class UserProfileService:
    """Reads and writes the user profiles the notification fan-out relies on.

    Admin notifications go to every profile with the admin role, so this is
    the way admins come into existence in a running engine.
    """

    def __init__(self, store: ClaimStore):
        """Initialize the service.

        Args:
            store: Store holding the profile collection
        """
        self._store = store
        self._lock = threading.RLock()

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get a profile by user id, or None if it does not exist."""
        return next((p for p in self._store.list_user_profiles() if p.id == user_id), None)

    def upsert_profile(self, user_id: str, update: UserProfileUpdate) -> UserProfile:
        """Merge an update into a profile, creating the profile if needed.

        Args:
            user_id: Profile owner
            update: Fields to write; omitted fields keep their value, or the
                profile default for a new profile

        Returns:
            The stored profile
        """
        fields = update.provided()
        with self._lock:
            profiles = self._store.list_user_profiles()
            for index, profile in enumerate(profiles):
                if profile.id == user_id:
                    profiles[index] = profile.model_copy(update=fields)
                    break
            else:
                profiles.append(UserProfile(id=user_id, **fields))
                logger.info(f"👤 Created profile for {user_id}")
                index = len(profiles) - 1

            self._store.put_user_profiles(profiles)

        logger.info(f"✏️ Saved profile {user_id} ({', '.join(sorted(fields)) or 'no fields'})")
        return profiles[index]
