"""
Logistic Trainer
================

Train logistic blend bằng online SGD (update từng example một).

Pipeline:
1. Feature cache: build feature vector một lần cho mỗi training example
   (subsidiary recommenders chỉ được hỏi một lần, không lặp lại qua các epoch)
2. SGD: epoch_count epochs, mỗi epoch shuffle examples bằng random source
   được truyền vào, rồi update model theo đúng thứ tự đó

Không có regularization, mini-batch hay early stopping.
"""

import logging
from typing import Dict, Hashable, Optional, Sequence

import numpy as np

from hybrid.recommender.collaborators import (
    BiasModel,
    RatingSummary,
    RecommenderList,
    StaticTrainingSplit,
    TrainingExample,
    TrainingSplit,
)
from hybrid.recommender.errors import MissingFeaturesError
from hybrid.recommender.feature_builder import (
    build_features,
    collect_subsidiary_scores,
    feature_count,
)
from hybrid.recommender.logistic_model import LogisticModel

logger = logging.getLogger(__name__)

DEFAULT_LEARNING_RATE = 0.00005
DEFAULT_EPOCH_COUNT = 100

FeatureCache = Dict[Hashable, np.ndarray]


class TrainingObserver:
    """
    Observer nhận thông báo tiến độ training. Mặc định không làm gì.

    Override các hook cần dùng.
    """

    def on_cache_built(self, count: int) -> None:
        pass

    def on_epoch_end(self, epoch: int, model: LogisticModel) -> None:
        pass

    def on_training_finished(self, model: LogisticModel) -> None:
        pass


class LoggingTrainingObserver(TrainingObserver):
    """Log tiến độ training sau mỗi `period` epochs."""

    def __init__(self, epoch_count: int, period: int = 5, log: Optional[logging.Logger] = None):
        self.epoch_count = epoch_count
        self.period = max(1, period)
        self.log = log or logger

    def on_cache_built(self, count: int) -> None:
        self.log.info(f"Logistic feature cache built: {count} examples")

    def on_epoch_end(self, epoch: int, model: LogisticModel) -> None:
        done = epoch + 1
        if done % self.period == 0 or done == self.epoch_count:
            self.log.info(
                f"Logistic training: epoch {done}/{self.epoch_count}, "
                f"intercept={model.intercept:.6f}"
            )

    def on_training_finished(self, model: LogisticModel) -> None:
        self.log.info(f"Trained logistic model: {model}")


class LogisticTrainer:
    """
    Trainer cho logistic blend.

    Label của mỗi example được dùng trực tiếp làm y trong SGD update; bên
    tạo training split chịu trách nhiệm về domain của label (±1 hoặc rating).
    """

    def __init__(
        self,
        training_split: TrainingSplit,
        bias_model: BiasModel,
        recommenders: RecommenderList,
        rating_summary: RatingSummary,
        random_source: np.random.Generator,
        learning_rate: float = DEFAULT_LEARNING_RATE,
        epoch_count: int = DEFAULT_EPOCH_COUNT,
        observer: Optional[TrainingObserver] = None
    ):
        """
        Khởi tạo LogisticTrainer.

        Args:
            training_split: Nguồn training examples
            bias_model: Bias model cho baseline feature
            recommenders: Subsidiary recommenders (thứ tự = feature index)
            rating_summary: Rating counts cho popularity feature
            random_source: Generator dùng để shuffle, dùng lại qua mọi epoch
            learning_rate: Learning rate cố định
            epoch_count: Số epochs
            observer: Observer nhận tiến độ (optional)
        """
        if epoch_count < 0:
            raise ValueError(f"epoch_count must be >= 0, got {epoch_count}")

        self.training_split = training_split
        self.bias_model = bias_model
        self.recommenders = recommenders
        self.rating_summary = rating_summary
        self.random_source = random_source
        self.learning_rate = learning_rate
        self.epoch_count = epoch_count
        self.observer = observer or TrainingObserver()
        self.parameter_count = feature_count(recommenders.count())

    def build_feature_cache(self, examples: Sequence[TrainingExample]) -> FeatureCache:
        """
        Build feature vector cho mọi example, key = example_id.

        Mỗi subsidiary recommender được hỏi đúng một lần cho mỗi example.

        Raises:
            ValueError: Nếu hai examples có cùng example_id
        """
        logger.info(f"Precomputing features for {len(examples)} logistic training examples")

        cache: FeatureCache = {}
        for example in examples:
            if example.example_id in cache:
                raise ValueError(f"Duplicate training example_id: {example.example_id!r}")
            scores = collect_subsidiary_scores(example.user_id, example.item_id, self.recommenders)
            cache[example.example_id] = build_features(
                example.user_id,
                example.item_id,
                self.bias_model,
                self.rating_summary,
                scores
            )

        self.observer.on_cache_built(len(cache))
        return cache

    def run_epochs(
        self,
        examples: Sequence[TrainingExample],
        cache: FeatureCache,
        initial: Optional[LogisticModel] = None
    ) -> LogisticModel:
        """
        Chạy SGD trên feature cache đã build.

        Args:
            examples: Training examples
            cache: example_id -> feature vector
            initial: Model ban đầu (mặc định: toàn 0)

        Returns:
            Model sau example cuối cùng của epoch cuối cùng

        Raises:
            MissingFeaturesError: Nếu một example không có trong cache
        """
        current = initial if initial is not None else LogisticModel.zeros(self.parameter_count)
        if not examples:
            logger.warning("No logistic training examples, returning initial model")
            return current

        examples = list(examples)
        for epoch in range(self.epoch_count):
            order = self.random_source.permutation(len(examples))

            for idx in order:
                example = examples[idx]
                try:
                    features = cache[example.example_id]
                except KeyError:
                    raise MissingFeaturesError(example.example_id) from None

                y = example.label
                step = self.learning_rate * y * current.evaluate(-y, features)
                current = current.updated(step, features)

            self.observer.on_epoch_end(epoch, current)

        return current

    def train(self) -> LogisticModel:
        """Build feature cache rồi chạy SGD. Trả về model cuối cùng."""
        examples = list(self.training_split.tuning_examples())
        cache = self.build_feature_cache(examples)
        model = self.run_epochs(examples, cache)
        self.observer.on_training_finished(model)
        return model


def train_logistic_model(
    examples: Sequence[TrainingExample],
    bias_model: BiasModel,
    rating_summary: RatingSummary,
    recommenders: RecommenderList,
    random_source: np.random.Generator,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    epoch_count: int = DEFAULT_EPOCH_COUNT,
    observer: Optional[TrainingObserver] = None
) -> LogisticModel:
    """
    Convenience function để train logistic blend từ list examples.

    Args:
        examples: Training examples
        bias_model: Bias model
        rating_summary: Rating summary
        recommenders: Subsidiary recommenders
        random_source: numpy Generator (ví dụ np.random.default_rng(seed))
        learning_rate: Learning rate
        epoch_count: Số epochs
        observer: Observer nhận tiến độ (optional)

    Returns:
        Trained LogisticModel
    """
    trainer = LogisticTrainer(
        training_split=StaticTrainingSplit(examples),
        bias_model=bias_model,
        recommenders=recommenders,
        rating_summary=rating_summary,
        random_source=random_source,
        learning_rate=learning_rate,
        epoch_count=epoch_count,
        observer=observer
    )
    return trainer.train()
