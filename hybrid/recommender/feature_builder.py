"""
Feature Builder
===============

Xây dựng feature vector cho (user, item). Dùng CHUNG cho training và serving.

Feature order (PHẢI giống nhau giữa training và serving):
0. baseline_score: intercept + user_bias + item_bias
1. popularity: log10(rating_count), 0 nếu count = 0
2..K+1. subsidiary score - baseline_score, 0 nếu recommender không có score
"""

import math
from typing import Hashable, List, Optional, Sequence

import numpy as np

from hybrid.recommender.collaborators import BiasModel, RatingSummary, RecommenderList

BASELINE_INDEX = 0
POPULARITY_INDEX = 1
SUBSIDIARY_OFFSET = 2


def feature_count(recommender_count: int) -> int:
    """Độ dài feature vector = 2 + K."""
    return SUBSIDIARY_OFFSET + recommender_count


def feature_names(recommenders: RecommenderList) -> List[str]:
    """Tên feature theo đúng thứ tự index (dùng để log / in coefficients)."""
    names = ['baseline_score', 'log_popularity']
    for i, scorer in enumerate(recommenders.ordered_scorers()):
        names.append(f"delta_{i}_{getattr(scorer, 'name', type(scorer).__name__)}")
    return names


def baseline_score(bias_model: BiasModel, user: Hashable, item: Hashable) -> float:
    return bias_model.intercept() + bias_model.user_bias(user) + bias_model.item_bias(item)


def popularity_feature(rating_summary: RatingSummary, item: Hashable) -> float:
    count = rating_summary.item_rating_count(item)
    return math.log10(count) if count > 0 else 0.0


def collect_subsidiary_scores(
    user: Hashable,
    item: Hashable,
    recommenders: RecommenderList
) -> List[Optional[float]]:
    """Hỏi từng subsidiary recommender đúng một lần cho một (user, item)."""
    return [scorer.score(user, item) for scorer in recommenders.ordered_scorers()]


def build_features(
    user: Hashable,
    item: Hashable,
    bias_model: BiasModel,
    rating_summary: RatingSummary,
    subsidiary_scores: Sequence[Optional[float]]
) -> np.ndarray:
    """
    Xây dựng feature vector cho (user, item).

    Args:
        user: User ID
        item: Item ID
        bias_model: Bias model cho baseline
        rating_summary: Rating counts cho popularity
        subsidiary_scores: Score của từng recommender theo thứ tự
            RecommenderList; None nghĩa là recommender không có ý kiến

    Returns:
        Feature vector độ dài 2 + len(subsidiary_scores)
    """
    baseline = baseline_score(bias_model, user, item)

    features = np.zeros(feature_count(len(subsidiary_scores)), dtype=np.float64)
    features[BASELINE_INDEX] = baseline
    features[POPULARITY_INDEX] = popularity_feature(rating_summary, item)

    for i, score in enumerate(subsidiary_scores):
        if score is not None:
            features[SUBSIDIARY_OFFSET + i] = float(score) - baseline

    return features
