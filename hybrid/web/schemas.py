"""
Schemas cho Score API.
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class ScoreRequest(BaseModel):
    """
    Request schema để score items cho một user.
    """
    user_id: str = Field(..., description="User ID")
    item_ids: List[str] = Field(..., description="Item IDs cần score")
    top_n: Optional[int] = Field(None, ge=1, description="Chỉ trả về top-N items (None = tất cả)")


class ScoredItemResponse(BaseModel):
    """
    Response schema cho một item đã score.
    """
    item_id: str = Field(..., description="Item ID")
    score: float = Field(..., description="Logistic blend score")
    rank: int = Field(..., description="Rank position (1-based)")


class ScoreResponse(BaseModel):
    """
    Response schema cho score API.
    """
    user_id: str = Field(..., description="User ID")
    items: List[ScoredItemResponse] = Field(..., description="Items sorted by score DESC")
    total: int = Field(..., description="Number of scored items")


class HealthResponse(BaseModel):
    status: str
    model_loaded: bool
