"""
Score API routes
================

API endpoints để score items cho user bằng logistic blend.
"""

import logging

from fastapi import APIRouter, HTTPException, Request

from hybrid.recommender.logistic_scorer import LogisticItemScorer
from hybrid.web.schemas import HealthResponse, ScoredItemResponse, ScoreRequest, ScoreResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/score", tags=["score"])
health_router = APIRouter(tags=["health"])


def get_scorer(request: Request) -> LogisticItemScorer:
    """Lấy scorer đã gắn vào app.state; 503 nếu chưa có model."""
    scorer = getattr(request.app.state, "scorer", None)
    if scorer is None:
        raise HTTPException(status_code=503, detail="Logistic model is not loaded")
    return scorer


@router.post(
    "/",
    response_model=ScoreResponse,
    summary="Score items for user",
    description="""
    Score các items cho user bằng logistic blend:
    baseline + popularity + subsidiary recommenders.
    """
)
def score_items(body: ScoreRequest, request: Request):
    """
    Score và rank items cho user.

    Args:
        body: ScoreRequest
        request: FastAPI request (để lấy scorer)

    Returns:
        ScoreResponse
    """
    scorer = get_scorer(request)

    try:
        ranked = scorer.rank(body.user_id, body.item_ids, top_n=body.top_n)
    except Exception as e:
        logger.error(f"Error scoring items for user {body.user_id}: {e}")
        raise HTTPException(status_code=500, detail="Error scoring items") from e

    logger.info(f"Scored {len(ranked)} items for user {body.user_id}")
    return ScoreResponse(
        user_id=body.user_id,
        items=[
            ScoredItemResponse(item_id=str(item.item_id), score=item.score, rank=item.rank_position)
            for item in ranked
        ],
        total=len(ranked)
    )


@health_router.get("/health", response_model=HealthResponse)
def health(request: Request):
    return HealthResponse(
        status="ok",
        model_loaded=getattr(request.app.state, "scorer", None) is not None
    )
