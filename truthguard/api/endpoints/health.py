"""Health check endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...domain.services.analysis_scheduler import AnalysisScheduler
from ...domain.services.claim_lifecycle import ClaimLifecycle
from ...infrastructure.dependencies import get_analysis_scheduler, get_claim_lifecycle

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
    scheduler: AnalysisScheduler = Depends(get_analysis_scheduler),
) -> Dict[str, Any]:
    """Check the health of the engine.

    Returns:
        Service status with claim and scheduler statistics
    """
    return {
        "status": "healthy",
        "version": "0.1.0",
        "claims": len(lifecycle.list_claims()),
        "ai_pending": len(lifecycle.ai_pending_claims()),
        "scheduled_analyses": scheduler.pending_count,
        "analysis_delay": scheduler.delay,
        "similarity_threshold": lifecycle.grouper.matcher.threshold,
    }
