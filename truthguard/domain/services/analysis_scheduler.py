"""Domain service running the simulated AI analysis of new claims."""

import asyncio
import logging
from typing import Dict, Optional

from ..models.claim import Claim, ClaimStatus, ClaimUpdate
from .claim_lifecycle import ClaimLifecycle
from .notification_fanout import NotificationFanout

logger = logging.getLogger(__name__)

DEFAULT_ANALYSIS_DELAY = 3.0

AI_VERDICT = "AI Analysis: This claim requires fact-checking review"
AI_EXPLANATION = (
    "AI has analyzed this claim and flagged it for expert review based on "
    "content patterns and source credibility."
)


class AnalysisScheduler:
    """Schedules the delayed analysis step for newly submitted claims.

    Each claim gets its own background task. When the delay elapses the
    claim is fetched again by id; a deleted or already analyzed claim is
    skipped without updating anything or notifying anyone.
    """

    def __init__(
        self,
        lifecycle: ClaimLifecycle,
        fanout: NotificationFanout,
        delay: float = DEFAULT_ANALYSIS_DELAY,
    ):
        """Initialize the scheduler.

        Args:
            lifecycle: Lifecycle service applying the analysis update
            fanout: Notification service used to alert admins
            delay: Seconds between scheduling and analysis
        """
        if delay < 0:
            raise ValueError("Analysis delay cannot be negative")
        self._lifecycle = lifecycle
        self._fanout = fanout
        self._delay = delay
        self._tasks: Dict[str, asyncio.Task] = {}

    def schedule(self, claim_id: str) -> asyncio.Task:
        """Schedule the analysis of a claim.

        Must be called from a running event loop. Scheduling a claim whose
        analysis is still in flight returns the existing task.

        Args:
            claim_id: Claim to analyze

        Returns:
            Background task resolving to the analyzed claim, or None if skipped
        """
        task = self._tasks.get(claim_id)
        if task and not task.done():
            logger.info(f"⏳ Analysis already scheduled for claim {claim_id}")
            return task

        task = asyncio.create_task(self._run_analysis(claim_id))
        self._tasks[claim_id] = task
        task.add_done_callback(lambda t: self._forget(claim_id, t))
        logger.info(f"🕒 Scheduled AI analysis of claim {claim_id} in {self._delay}s")
        return task

    def _forget(self, claim_id: str, task: asyncio.Task) -> None:
        if self._tasks.get(claim_id) is task:
            del self._tasks[claim_id]

    async def _run_analysis(self, claim_id: str) -> Optional[Claim]:
        """Wait out the delay, then flag the claim for admin review.

        Args:
            claim_id: Claim to analyze

        Returns:
            The analyzed claim, or None if there was nothing to do or the
            analysis failed
        """
        try:
            await asyncio.sleep(self._delay)
        except asyncio.CancelledError:
            logger.info(f"🛑 Analysis of claim {claim_id} cancelled")
            raise

        try:
            claim = self._lifecycle.get_claim(claim_id)
            if claim is None:
                logger.info(f"Claim {claim_id} no longer exists, skipping analysis")
                return None
            if claim.ai_analyzed:
                logger.info(f"Claim {claim_id} already analyzed, skipping")
                return None

            outcome = self._lifecycle.apply_update(
                claim_id,
                ClaimUpdate(
                    ai_analyzed=True,
                    ai_pending_approval=True,
                    verdict=AI_VERDICT,
                    explanation=AI_EXPLANATION,
                    status=ClaimStatus.PENDING,
                ),
            )
            if not outcome.ok:
                logger.warning(f"⚠️ Analysis update of claim {claim_id} failed: {outcome.message}")
                return None

            self._fanout.notify_admins(
                claim_id,
                "AI Analysis Complete",
                "A claim requires admin approval after AI analysis",
            )
            logger.info(f"🤖 AI analysis of claim {claim_id} complete")
            return outcome.claim

        except Exception as e:
            logger.error(f"❌ AI analysis of claim {claim_id} failed: {e}", exc_info=True)
            return None

    async def shutdown(self) -> None:
        """Cancel every in-flight analysis."""
        logger.info("🔄 Shutting down analysis scheduler...")
        tasks = list(self._tasks.values())
        for task in tasks:
            if not task.done():
                task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        logger.info("✅ Analysis scheduler shutdown completed")

    @property
    def delay(self) -> float:
        """Seconds between scheduling and analysis."""
        return self._delay

    @property
    def pending_count(self) -> int:
        """Number of analyses still waiting to fire."""
        return sum(1 for task in self._tasks.values() if not task.done())
