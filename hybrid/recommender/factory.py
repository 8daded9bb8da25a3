"""
Composition cho logistic blend.

Tất cả collaborators được truyền vào tường minh, không có container hay
registry toàn cục.
"""

from typing import Optional

import numpy as np

from hybrid.recommender.collaborators import (
    BiasModel,
    RatingSummary,
    RecommenderList,
    TrainingSplit,
)
from hybrid.recommender.logistic_model import LogisticModel
from hybrid.recommender.logistic_scorer import LogisticItemScorer
from hybrid.recommender.logistic_trainer import (
    DEFAULT_EPOCH_COUNT,
    DEFAULT_LEARNING_RATE,
    LogisticTrainer,
    TrainingObserver,
)


def build_trainer(
    training_split: TrainingSplit,
    bias_model: BiasModel,
    recommenders: RecommenderList,
    rating_summary: RatingSummary,
    random_source: np.random.Generator,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    epoch_count: int = DEFAULT_EPOCH_COUNT,
    observer: Optional[TrainingObserver] = None
) -> LogisticTrainer:
    return LogisticTrainer(
        training_split=training_split,
        bias_model=bias_model,
        recommenders=recommenders,
        rating_summary=rating_summary,
        random_source=random_source,
        learning_rate=learning_rate,
        epoch_count=epoch_count,
        observer=observer
    )


def build_scorer(
    model: LogisticModel,
    bias_model: BiasModel,
    recommenders: RecommenderList,
    rating_summary: RatingSummary
) -> LogisticItemScorer:
    """Scorer phải dùng cùng RecommenderList (cùng thứ tự) với lúc train."""
    return LogisticItemScorer(model, bias_model, recommenders, rating_summary)
