"""
Core logistic blend.

- logistic_model.py: LogisticModel bất biến + hàm evaluate
- feature_builder.py: feature vector dùng chung cho train và serve
- logistic_trainer.py: online SGD trainer
- logistic_scorer.py: score batch items cho một user
- factory.py: composition tường minh
"""

from hybrid.recommender.collaborators import (
    BiasModel,
    ItemScorer,
    RatingSummary,
    RecommenderList,
    StaticBiasModel,
    StaticRatingSummary,
    StaticTrainingSplit,
    TrainingExample,
    TrainingSplit,
)
from hybrid.recommender.errors import BlendError, FeatureDimensionError, MissingFeaturesError
from hybrid.recommender.factory import build_scorer, build_trainer
from hybrid.recommender.feature_builder import build_features
from hybrid.recommender.logistic_model import LogisticModel
from hybrid.recommender.logistic_scorer import LogisticItemScorer, RankedItem, score_items
from hybrid.recommender.logistic_trainer import (
    LoggingTrainingObserver,
    LogisticTrainer,
    TrainingObserver,
    train_logistic_model,
)
