"""Test configuration and common fixtures."""

from typing import Callable

import pytest

from truthguard.domain.models.claim import Claim
from truthguard.domain.models.user_profile import UserProfile, UserRole
from truthguard.domain.services.analysis_scheduler import AnalysisScheduler
from truthguard.domain.services.claim_lifecycle import ClaimLifecycle
from truthguard.domain.services.duplicate_grouper import DuplicateGrouper
from truthguard.domain.services.notification_fanout import NotificationFanout
from truthguard.domain.services.similarity_matcher import SimilarityMatcher
from truthguard.infrastructure.storage.key_value_store import KeyValueClaimStore


@pytest.fixture
def make_claim() -> Callable[..., Claim]:
    """Provide a factory for claims with sensible defaults."""
    def _make(content: str, submitted_by: str = "user1", **fields) -> Claim:
        return Claim(content=content, submitted_by=submitted_by, **fields)
    return _make


@pytest.fixture
def store() -> KeyValueClaimStore:
    """Provide an in-memory store with two admins and two regular users."""
    store = KeyValueClaimStore()
    store.put_user_profiles([
        UserProfile(id="admin-1", name="CRECO Admin", role=UserRole.ADMIN),
        UserProfile(id="admin-2", name="Night Shift Admin", role=UserRole.ADMIN),
        UserProfile(id="user1", name="Wanjiku"),
        UserProfile(id="checker-1", name="Checker", role=UserRole.FACT_CHECKER),
    ])
    return store


@pytest.fixture
def matcher() -> SimilarityMatcher:
    """Provide a matcher with the default threshold."""
    return SimilarityMatcher()


@pytest.fixture
def grouper(matcher: SimilarityMatcher) -> DuplicateGrouper:
    """Provide a duplicate grouper."""
    return DuplicateGrouper(matcher)


@pytest.fixture
def fanout(store: KeyValueClaimStore) -> NotificationFanout:
    """Provide a notification fan-out service bound to the test store."""
    return NotificationFanout(store)


@pytest.fixture
def lifecycle(
    store: KeyValueClaimStore,
    fanout: NotificationFanout,
    grouper: DuplicateGrouper,
) -> ClaimLifecycle:
    """Provide a claim lifecycle service bound to the test store."""
    return ClaimLifecycle(store, fanout, grouper)


@pytest.fixture
def scheduler(lifecycle: ClaimLifecycle, fanout: NotificationFanout) -> AnalysisScheduler:
    """Provide a scheduler with a short delay."""
    return AnalysisScheduler(lifecycle, fanout, delay=0.01)
