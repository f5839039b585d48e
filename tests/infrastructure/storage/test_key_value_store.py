"""Tests for the key-value claim store."""

import json

from truthguard.domain.models.claim import ClaimStatus
from truthguard.domain.models.notification import Notification, NotificationType
from truthguard.infrastructure.storage.key_value_store import (
    CLAIMS_KEY,
    NOTIFICATIONS_KEY,
    KeyValueClaimStore,
)


def make_notification(user_id: str, claim_id: str = "1") -> Notification:
    return Notification(
        user_id=user_id,
        claim_id=claim_id,
        type=NotificationType.CLAIM_APPROVED,
        title="Claim Submitted",
        message="Your claim has been submitted for review",
    )


def test_empty_store():
    """Test reads from a fresh store."""
    store = KeyValueClaimStore()
    assert store.list_claims() == []
    assert store.list_notifications("user1") == []
    assert store.list_user_profiles() == []


def test_claims_are_persisted_as_json(make_claim):
    """Test that collections live as JSON documents in the backend."""
    backend = {}
    store = KeyValueClaimStore(backend)
    claim = make_claim("Kenya's GDP grew by 15% last quarter", id="2",
                       status=ClaimStatus.FALSE, bookmarked_by={"user5"})

    store.put_claims([claim])

    document = json.loads(backend[CLAIMS_KEY])
    assert document[0]["id"] == "2"
    assert document[0]["status"] == "false"
    assert KeyValueClaimStore(backend).list_claims() == [claim]


def test_reads_return_copies(make_claim):
    """Test that mutating a read claim does not change the store."""
    store = KeyValueClaimStore()
    store.put_claims([make_claim("Free laptops for every student", id="1")])

    claim = store.list_claims()[0]
    claim.views = 50

    assert store.list_claims()[0].views == 0


def test_put_claims_replaces_collection(make_claim):
    """Test whole-collection replacement keeps the given order."""
    store = KeyValueClaimStore()
    store.put_claims([make_claim("first", id="1")])
    store.put_claims([make_claim("second", id="2"), make_claim("third", id="3")])

    assert [c.id for c in store.list_claims()] == ["2", "3"]


def test_delete_claim(make_claim):
    """Test deletion of existing and unknown claims."""
    store = KeyValueClaimStore()
    store.put_claims([make_claim("first", id="1"), make_claim("second", id="2")])

    assert store.delete_claim("1") is True
    assert store.delete_claim("1") is False
    assert [c.id for c in store.list_claims()] == ["2"]


def test_notifications_newest_first_per_user():
    """Test notification ordering and recipient filtering."""
    backend = {}
    store = KeyValueClaimStore(backend)
    first = make_notification("user1", "1")
    other = make_notification("user2", "1")
    second = make_notification("user1", "2")

    for notification in (first, other, second):
        store.append_notification(notification)

    assert [n.id for n in store.list_notifications("user1")] == [second.id, first.id]
    assert [n.id for n in store.list_notifications("user2")] == [other.id]
    assert len(json.loads(backend[NOTIFICATIONS_KEY])) == 3


def test_mark_notification_read():
    """Test flagging notifications as read."""
    store = KeyValueClaimStore()
    notification = make_notification("user1")
    store.append_notification(notification)

    assert store.mark_notification_read(notification.id) is True
    assert store.list_notifications("user1")[0].read is True
    assert store.mark_notification_read("missing") is False
