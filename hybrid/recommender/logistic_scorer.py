"""
Logistic Item Scorer
====================

Score items cho một user bằng logistic blend đã train.

Input: user_id, items
Output: Dict item_id -> score (xác suất user đã tương tác với item)

Mỗi subsidiary recommender chỉ được gọi MỘT lần cho cả batch (score_batch),
không gọi từng item.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional

import numpy as np

from hybrid.recommender.collaborators import BiasModel, RatingSummary, RecommenderList
from hybrid.recommender.feature_builder import (
    build_features,
    collect_subsidiary_scores,
    feature_count,
)
from hybrid.recommender.logistic_model import LogisticModel

logger = logging.getLogger(__name__)


@dataclass
class RankedItem:
    """
    Item đã được rank.

    Attributes:
        item_id: Item ID
        score: Score từ logistic model
        rank_position: Vị trí trong ranking (1-based)
    """
    item_id: Hashable
    score: float
    rank_position: int


class LogisticItemScorer:
    """
    Scorer dùng logistic model và các collaborators đã dùng lúc train.

    Không giữ state thay đổi sau khi khởi tạo nên có thể gọi đồng thời từ
    nhiều request.
    """

    def __init__(
        self,
        model: LogisticModel,
        bias_model: BiasModel,
        recommenders: RecommenderList,
        rating_summary: RatingSummary
    ):
        expected = feature_count(recommenders.count())
        if model.n_features != expected:
            logger.warning(
                f"Logistic model has {model.n_features} weights but recommender list "
                f"produces {expected} features; scoring will fail"
            )

        self.model = model
        self.bias_model = bias_model
        self.recommenders = recommenders
        self.rating_summary = rating_summary

    def batch_features(self, user: Hashable, items: List[Hashable]) -> Dict[Hashable, np.ndarray]:
        """Feature vectors cho cả batch, mỗi recommender được gọi một lần."""
        scorer_results = [
            scorer.score_batch(user, items)
            for scorer in self.recommenders.ordered_scorers()
        ]

        features = {}
        for item in items:
            subsidiary_scores = [result.get(item) for result in scorer_results]
            features[item] = build_features(
                user, item, self.bias_model, self.rating_summary, subsidiary_scores
            )
        return features

    def score_batch(self, user: Hashable, items: Iterable[Hashable]) -> Dict[Hashable, float]:
        """
        Score một batch items cho user.

        Args:
            user: User ID
            items: Các item IDs cần score

        Returns:
            Dict item_id -> score, một entry cho mỗi item được yêu cầu
        """
        items = list(items)
        if not items:
            return {}

        features = self.batch_features(user, items)
        return {
            item: self.model.evaluate(1, vector)
            for item, vector in features.items()
        }

    def score_single(self, user: Hashable, item: Hashable) -> float:
        """Score một item, dùng score() từng recommender thay vì score_batch()."""
        subsidiary_scores = collect_subsidiary_scores(user, item, self.recommenders)
        features = build_features(
            user, item, self.bias_model, self.rating_summary, subsidiary_scores
        )
        return self.model.evaluate(1, features)

    def rank(
        self,
        user: Hashable,
        items: Iterable[Hashable],
        top_n: Optional[int] = None
    ) -> List[RankedItem]:
        """
        Score rồi sắp xếp items theo score DESC.

        Args:
            user: User ID
            items: Candidate item IDs
            top_n: Chỉ trả về top-N (None = tất cả)

        Returns:
            List RankedItem, rank_position bắt đầu từ 1
        """
        scores = self.score_batch(user, items)
        if not scores:
            logger.warning(f"No items to rank for user {user}")
            return []

        ordered = sorted(scores.items(), key=lambda kv: kv[1], reverse=True)
        if top_n is not None:
            ordered = ordered[:top_n]

        ranked = [
            RankedItem(item_id=item, score=score, rank_position=i + 1)
            for i, (item, score) in enumerate(ordered)
        ]
        logger.debug(f"Ranked {len(ranked)} of {len(scores)} items for user {user}")
        return ranked


def score_items(
    user: Hashable,
    items: Iterable[Hashable],
    model: LogisticModel,
    bias_model: BiasModel,
    rating_summary: RatingSummary,
    recommenders: RecommenderList
) -> Dict[Hashable, float]:
    """
    Convenience function để score một batch items.

    Returns:
        Dict item_id -> score
    """
    scorer = LogisticItemScorer(model, bias_model, recommenders, rating_summary)
    return scorer.score_batch(user, items)
