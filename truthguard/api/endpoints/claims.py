"""Claim submission and review API endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from ...domain.models.claim import Claim, ClaimCategory, ClaimPriority, ClaimUpdate
from ...domain.models.notification import Notification
from ...domain.models.outcome import ClaimOutcome, OutcomeError
from ...domain.ports.claim_store import ClaimStore
from ...domain.services.analysis_scheduler import AnalysisScheduler
from ...domain.services.claim_lifecycle import ClaimLifecycle
from ...infrastructure.dependencies import (
    get_analysis_scheduler,
    get_claim_lifecycle,
    get_claim_store,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/claims", tags=["claims"])


class SubmitClaimRequest(BaseModel):
    """Request model for claim submission."""

    content: str = Field(..., description="Claim text")
    category: ClaimCategory = Field(default=ClaimCategory.OTHER, description="Claim topic")
    submitted_by: str = Field(..., description="Submitting user id")
    priority: ClaimPriority = Field(default=ClaimPriority.MEDIUM)
    source_url: Optional[str] = None
    sources: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class ClaimResponse(BaseModel):
    """Response model for operations changing a claim."""

    claim: Claim
    merged: bool = False
    notifications: List[Notification] = Field(default_factory=list)


class SimilarRequest(BaseModel):
    """Request model for finding stored claims similar to a text."""

    text: str
    threshold: Optional[float] = Field(None, ge=0.0, le=1.0)


class SimilarityRequest(BaseModel):
    """Request model for scoring two texts."""

    text_a: str
    text_b: str
    threshold: Optional[float] = Field(None, ge=0.0, le=1.0)


class SimilarityResponse(BaseModel):
    """Response model for a similarity score."""

    similarity: float
    is_duplicate: bool


class ApprovalRequest(BaseModel):
    """Request model for approving an AI analysis."""

    admin_id: str


class BookmarkRequest(BaseModel):
    """Request model for toggling a bookmark."""

    user_id: str


def _to_response(outcome: ClaimOutcome) -> ClaimResponse:
    """Convert a lifecycle outcome into a response, raising on failure."""
    if outcome.error == OutcomeError.NOT_FOUND:
        raise HTTPException(status_code=404, detail=outcome.message)
    if outcome.error == OutcomeError.INVALID_INPUT:
        raise HTTPException(status_code=422, detail=outcome.message)
    return ClaimResponse(
        claim=outcome.claim,
        merged=outcome.merged,
        notifications=outcome.notifications,
    )


@router.post("", response_model=ClaimResponse, status_code=201)
async def submit_claim(
    request: SubmitClaimRequest,
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
    scheduler: AnalysisScheduler = Depends(get_analysis_scheduler),
) -> ClaimResponse:
    """Submit a claim and schedule its analysis when it is new.

    Args:
        request: Submission request

    Returns:
        The created claim, or the existing claim it was merged into
    """
    outcome = lifecycle.submit(
        request.content,
        request.category,
        request.submitted_by,
        priority=request.priority,
        source_url=request.source_url,
        sources=request.sources,
        tags=request.tags,
    )
    response = _to_response(outcome)
    if outcome.merged:
        logger.info(f"Submission merged into claim {outcome.claim.id}, no analysis scheduled")
    else:
        scheduler.schedule(outcome.claim.id)
    return response


@router.get("", response_model=List[Claim])
async def list_claims(
    category: Optional[ClaimCategory] = None,
    q: Optional[str] = Query(None, description="Search text"),
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
) -> List[Claim]:
    """List claims, optionally filtered by category and search text."""
    claims = lifecycle.search_claims(q) if q else lifecycle.list_claims()
    if category is not None:
        claims = [c for c in claims if c.category == category]
    return claims


@router.get("/groups", response_model=List[List[Claim]])
async def group_claims(
    threshold: Optional[float] = Query(None, ge=0.0, le=1.0),
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
) -> List[List[Claim]]:
    """Cluster all claims by similarity."""
    return lifecycle.group_by_similarity(threshold)


@router.get("/ai-pending", response_model=List[Claim])
async def list_ai_pending(
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
) -> List[Claim]:
    """List claims whose AI analysis awaits approval."""
    return lifecycle.ai_pending_claims()


@router.post("/similar", response_model=List[Claim])
async def find_similar(
    request: SimilarRequest,
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
) -> List[Claim]:
    """Find stored claims similar to a text."""
    return lifecycle.find_similar(request.text, request.threshold)


@router.post("/similarity", response_model=SimilarityResponse)
async def score_similarity(
    request: SimilarityRequest,
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
) -> SimilarityResponse:
    """Score the similarity of two texts."""
    matcher = lifecycle.grouper.matcher
    return SimilarityResponse(
        similarity=matcher.similarity(request.text_a, request.text_b),
        is_duplicate=matcher.is_duplicate(request.text_a, request.text_b, request.threshold),
    )


@router.get("/{claim_id}", response_model=Claim)
async def get_claim(
    claim_id: str,
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
) -> Claim:
    """Get one claim."""
    claim = lifecycle.get_claim(claim_id)
    if claim is None:
        raise HTTPException(status_code=404, detail=f"Claim {claim_id} not found")
    return claim


@router.patch("/{claim_id}", response_model=ClaimResponse)
async def update_claim(
    claim_id: str,
    update: ClaimUpdate,
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
) -> ClaimResponse:
    """Apply a fact-check update to a claim and its duplicates."""
    return _to_response(lifecycle.apply_update(claim_id, update))


@router.delete("/{claim_id}", status_code=204)
async def delete_claim(
    claim_id: str,
    store: ClaimStore = Depends(get_claim_store),
) -> None:
    """Delete a claim from the store."""
    if not store.delete_claim(claim_id):
        raise HTTPException(status_code=404, detail=f"Claim {claim_id} not found")


@router.post("/{claim_id}/ai-approval", response_model=ClaimResponse)
async def approve_ai_analysis(
    claim_id: str,
    request: ApprovalRequest,
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
) -> ClaimResponse:
    """Approve a claim's AI analysis and publish it."""
    return _to_response(lifecycle.approve_ai_analysis(claim_id, request.admin_id))


@router.post("/{claim_id}/ai-rejection", response_model=ClaimResponse)
async def reject_ai_analysis(
    claim_id: str,
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
) -> ClaimResponse:
    """Send a claim's AI analysis back for manual review."""
    return _to_response(lifecycle.reject_ai_analysis(claim_id))


@router.post("/{claim_id}/bookmark", response_model=ClaimResponse)
async def toggle_bookmark(
    claim_id: str,
    request: BookmarkRequest,
    lifecycle: ClaimLifecycle = Depends(get_claim_lifecycle),
) -> ClaimResponse:
    """Toggle a user's bookmark on a claim."""
    return _to_response(lifecycle.toggle_bookmark(claim_id, request.user_id))
