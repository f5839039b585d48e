"""Domain service driving claim submission, review and duplicate cascades."""

import copy
import logging
import threading
from typing import Iterable, List, Optional

from ..models.claim import Claim, ClaimCategory, ClaimPriority, ClaimStatus, ClaimUpdate
from ..models.notification import NotificationType
from ..models.outcome import ClaimOutcome
from ..ports.claim_store import ClaimStore
from .duplicate_grouper import DuplicateGrouper
from .notification_fanout import NotificationFanout

logger = logging.getLogger(__name__)

# Claim fields an update may explicitly clear
_NULLABLE_FIELDS = {"verdict", "explanation", "verified_by"}


def _find(claims: Iterable[Claim], claim_id: str) -> Optional[Claim]:
    return next((c for c in claims if c.id == claim_id), None)


class ClaimLifecycle:
    """Domain service for the claim state machine.

    Owns the rules for merging duplicate submissions, applying fact-check
    updates to a primary claim and its duplicate cluster, and approving or
    rejecting simulated AI analyses. Each operation is a read-modify-write
    of the claim collection performed under one lock, so notification
    decisions always see the state right before that operation.
    """

    def __init__(
        self,
        store: ClaimStore,
        fanout: NotificationFanout,
        grouper: Optional[DuplicateGrouper] = None,
    ):
        """Initialize the service.

        Args:
            store: Claim store port implementation
            fanout: Notification service for lifecycle events
            grouper: Duplicate detector; a default one is used when omitted
        """
        self._store = store
        self._fanout = fanout
        self._grouper = grouper or DuplicateGrouper()
        self._lock = threading.RLock()

    @property
    def grouper(self) -> DuplicateGrouper:
        """Duplicate detector used by this service."""
        return self._grouper

    def submit(
        self,
        content: str,
        category: ClaimCategory,
        submitted_by: str,
        *,
        priority: ClaimPriority = ClaimPriority.MEDIUM,
        source_url: Optional[str] = None,
        sources: Optional[List[str]] = None,
        tags: Optional[List[str]] = None,
    ) -> ClaimOutcome:
        """Submit a claim, merging it into an existing one when similar.

        Args:
            content: Claim text
            category: Claim topic
            submitted_by: Submitting user id
            priority: Review priority of a newly created claim
            source_url: Where the claim was seen
            sources: Sources cited by the submitter
            tags: Free-form tags

        Returns:
            Outcome holding the new claim, or the existing claim with
            ``merged`` set when the submission was a duplicate
        """
        if not content or not content.strip():
            logger.warning("⚠️ Rejected submission with empty content")
            return ClaimOutcome.invalid("Claim content cannot be empty")
        if not submitted_by:
            return ClaimOutcome.invalid("Submitter id is required")

        content = content.strip()
        logger.info(f"📝 Submission from {submitted_by}: {content[:100]}...")

        with self._lock:
            claims = self._store.list_claims()
            similar = self._grouper.find_similar(content, claims)

            if similar:
                original = similar[0]
                # Merge counts belong on the cluster's primary
                if not original.is_primary:
                    original = _find(claims, original.duplicate_of) or original
                original.duplicate_count = original.duplicate_count + 1
                self._store.put_claims(claims)

                notification = self._fanout.notify(
                    submitted_by,
                    original.id,
                    NotificationType.CLAIM_APPROVED,
                    "Similar Claim Found",
                    "Your claim was similar to an existing one. "
                    "You'll be notified when it's reviewed.",
                )
                logger.info(
                    f"🔁 Merged submission into claim {original.id} "
                    f"(duplicate_count={original.duplicate_count})"
                )
                return ClaimOutcome(claim=original, merged=True, notifications=[notification])

            claim = Claim(
                content=content,
                category=category,
                submitted_by=submitted_by,
                priority=priority,
                source_url=source_url,
                sources=sources or [],
                tags=tags or [],
            )
            claims.insert(0, claim)
            self._store.put_claims(claims)

            notification = self._fanout.notify(
                submitted_by,
                claim.id,
                NotificationType.CLAIM_APPROVED,
                "Claim Submitted",
                "Your claim has been submitted for review",
            )

        logger.info(f"✅ Created claim {claim.id}")
        return ClaimOutcome(claim=claim, notifications=[notification])

    def apply_update(self, primary_id: str, update: ClaimUpdate) -> ClaimOutcome:
        """Apply an update to a primary claim and cascade it to its duplicates.

        Every provided field is written to the primary. Claims similar to the
        primary receive the provided subset of status, verdict, explanation,
        references and approved, and are marked as duplicates of the primary;
        a duplicate left pending by the cascade loses its approval.
        When this update publishes the first verdict of a pending claim, the
        submitter of every cluster member is notified. Publishing requires a
        non-empty verdict and a non-pending status after the update; an
        update without a status keeps the prior one, so a verdict alone on a
        pending claim publishes nothing.

        Args:
            primary_id: Claim receiving the update
            update: Partial update payload

        Returns:
            Outcome holding the updated primary claim
        """
        provided = update.provided()
        for name, value in provided.items():
            if value is None and name not in _NULLABLE_FIELDS:
                return ClaimOutcome.invalid(f"Field '{name}' cannot be null")

        with self._lock:
            claims = self._store.list_claims()
            primary = _find(claims, primary_id)
            if primary is None:
                logger.warning(f"Claim not found: {primary_id}")
                return ClaimOutcome.not_found(primary_id)

            prior_status = primary.status
            # Without a status in the update the claim keeps its prior status
            new_status = provided.get("status", prior_status)
            new_approved = provided.get("approved", primary.approved)
            if (
                new_approved
                and new_status == ClaimStatus.PENDING
                and (update.has("status") or update.has("approved"))
            ):
                return ClaimOutcome.invalid("An approved claim cannot be pending")

            # Cluster is computed before anything changes
            similar = [
                claim for claim in self._grouper.find_similar(primary.content, claims)
                if claim.id != primary_id
            ]

            for name, value in provided.items():
                setattr(primary, name, copy.deepcopy(value))

            cascaded = update.cascaded()
            touches_approval = "status" in cascaded or "approved" in cascaded
            for claim in similar:
                for name, value in cascaded.items():
                    setattr(claim, name, copy.deepcopy(value))
                # A pending duplicate cannot stay approved
                if touches_approval and claim.approved and claim.status == ClaimStatus.PENDING:
                    claim.approved = False
                claim.duplicate_of = primary_id

            self._store.put_claims(claims)
            logger.info(
                f"✏️ Updated claim {primary_id} ({', '.join(sorted(provided)) or 'no fields'}), "
                f"cascaded to {len(similar)} duplicates"
            )

            notifications = []
            if (
                provided.get("verdict")
                and new_status != ClaimStatus.PENDING
                and prior_status == ClaimStatus.PENDING
            ):
                notifications = self._fanout.notify_submitters(
                    [primary, *similar],
                    NotificationType.VERDICT_PUBLISHED,
                    "Verdict Published",
                    f"A claim similar to yours has been fact-checked: {ClaimStatus(new_status).value}",
                )
                logger.info(f"📣 Verdict for claim {primary_id} sent to {len(notifications)} submitters")

        return ClaimOutcome(claim=primary, notifications=notifications)

    def approve_ai_analysis(self, claim_id: str, admin_id: str) -> ClaimOutcome:
        """Approve a claim's AI analysis and publish it to the feed.

        Only the target claim changes; duplicates are left alone.

        Args:
            claim_id: Claim awaiting approval
            admin_id: Approving admin

        Returns:
            Outcome holding the approved claim
        """
        with self._lock:
            claims = self._store.list_claims()
            claim = _find(claims, claim_id)
            if claim is None:
                logger.warning(f"Claim not found: {claim_id}")
                return ClaimOutcome.not_found(claim_id)

            claim.approved = True
            claim.published_to_feed = True
            claim.ai_pending_approval = False
            claim.verified_by = admin_id
            self._store.put_claims(claims)

            notification = self._fanout.notify(
                claim.submitted_by,
                claim_id,
                NotificationType.VERDICT_PUBLISHED,
                "AI Analysis Approved",
                "Your claim has been verified and published",
            )

        logger.info(f"👍 AI analysis of claim {claim_id} approved by {admin_id}")
        return ClaimOutcome(claim=claim, notifications=[notification])

    def reject_ai_analysis(self, claim_id: str) -> ClaimOutcome:
        """Send a claim's AI analysis back for manual review."""
        logger.info(f"👎 Rejecting AI analysis of claim {claim_id}")
        return self.apply_update(
            claim_id,
            ClaimUpdate(ai_pending_approval=False, status=ClaimStatus.PENDING, approved=False),
        )

    def toggle_bookmark(self, claim_id: str, user_id: str) -> ClaimOutcome:
        """Add or remove a user's bookmark on one claim."""
        if not user_id:
            return ClaimOutcome.invalid("User id is required")

        with self._lock:
            claims = self._store.list_claims()
            claim = _find(claims, claim_id)
            if claim is None:
                return ClaimOutcome.not_found(claim_id)

            bookmarked_by = set(claim.bookmarked_by)
            if user_id in bookmarked_by:
                bookmarked_by.discard(user_id)
            else:
                bookmarked_by.add(user_id)
            claim.bookmarked_by = bookmarked_by
            self._store.put_claims(claims)

        return ClaimOutcome(claim=claim)

    def get_claim(self, claim_id: str) -> Optional[Claim]:
        """Get a claim by id, or None if it does not exist."""
        return _find(self._store.list_claims(), claim_id)

    def list_claims(self) -> List[Claim]:
        """Get every claim, newest first."""
        return self._store.list_claims()

    def ai_pending_claims(self) -> List[Claim]:
        """Get claims whose AI analysis awaits admin approval."""
        return [c for c in self._store.list_claims() if c.ai_pending_approval and not c.approved]

    def claims_by_category(self, category: ClaimCategory) -> List[Claim]:
        """Get claims of one category."""
        return [c for c in self._store.list_claims() if c.category == category]

    def search_claims(self, query: str) -> List[Claim]:
        """Case-insensitive substring search over content, verdict and tags."""
        needle = query.lower()
        return [
            c for c in self._store.list_claims()
            if needle in c.content.lower()
            or (c.verdict and needle in c.verdict.lower())
            or any(needle in tag.lower() for tag in c.tags)
        ]

    def find_similar(self, text: str, threshold: Optional[float] = None) -> List[Claim]:
        """Get stored claims similar to a text."""
        return self._grouper.find_similar(text, self._store.list_claims(), threshold)

    def group_by_similarity(self, threshold: Optional[float] = None) -> List[List[Claim]]:
        """Cluster every stored claim by similarity."""
        return self._grouper.group_by_similarity(self._store.list_claims(), threshold)

    def similarity(self, text_a: str, text_b: str) -> float:
        """Score the similarity of two texts."""
        return self._grouper.matcher.similarity(text_a, text_b)
