"""
Logistic Blend Pipeline
=======================

Ghép các bước: load artifacts -> train logistic blend -> evaluate -> scorer.

Artifacts layout (trong settings.artifacts_dir):
- logistic/tune_examples.parquet
- bias/bias_model.json
- popularity/item_rating_counts.parquet
- mf*/ : mỗi thư mục là một subsidiary recommender (sắp xếp theo tên)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
from sklearn.metrics import roc_auc_score

from hybrid.config import Settings, settings as default_settings
from hybrid.data.loaders import load_bias_model, load_rating_summary, load_training_split
from hybrid.recommender.collaborators import (
    BiasModel,
    RatingSummary,
    RecommenderList,
    TrainingSplit,
)
from hybrid.recommender.factor_scorer import load_factor_scorer
from hybrid.recommender.factory import build_scorer, build_trainer
from hybrid.recommender.logistic_model import LogisticModel
from hybrid.recommender.logistic_scorer import LogisticItemScorer
from hybrid.recommender.logistic_trainer import LoggingTrainingObserver, TrainingObserver

logger = logging.getLogger(__name__)


@dataclass
class BlendArtifacts:
    """Các collaborators dùng chung giữa training và serving."""
    training_split: TrainingSplit
    bias_model: BiasModel
    rating_summary: RatingSummary
    recommenders: RecommenderList


def load_artifacts(artifacts_dir: Optional[Path] = None) -> BlendArtifacts:
    """
    Load toàn bộ artifacts cho logistic blend.

    Args:
        artifacts_dir: Thư mục artifacts (nếu None, dùng settings)

    Returns:
        BlendArtifacts
    """
    if artifacts_dir is None:
        artifacts_dir = default_settings.artifacts_dir
    artifacts_dir = Path(artifacts_dir)

    if not artifacts_dir.exists():
        raise FileNotFoundError(f"Artifacts directory not found: {artifacts_dir}")

    training_split = load_training_split(artifacts_dir / "logistic" / "tune_examples.parquet")
    bias_model = load_bias_model(artifacts_dir / "bias" / "bias_model.json")
    rating_summary = load_rating_summary(artifacts_dir / "popularity" / "item_rating_counts.parquet")

    # Thứ tự sorted -> feature index ổn định giữa các lần chạy
    mf_dirs = sorted(p for p in artifacts_dir.glob("mf*") if p.is_dir())
    recommenders = RecommenderList([load_factor_scorer(p) for p in mf_dirs])
    logger.info(f"Subsidiary recommenders: {recommenders}")

    return BlendArtifacts(
        training_split=training_split,
        bias_model=bias_model,
        rating_summary=rating_summary,
        recommenders=recommenders
    )


def train_from_artifacts(
    artifacts: BlendArtifacts,
    settings: Optional[Settings] = None,
    observer: Optional[TrainingObserver] = None
) -> LogisticModel:
    """Train logistic blend với hyperparameters từ settings."""
    settings = settings or default_settings
    if observer is None:
        observer = LoggingTrainingObserver(settings.epoch_count, period=settings.progress_period)

    trainer = build_trainer(
        training_split=artifacts.training_split,
        bias_model=artifacts.bias_model,
        recommenders=artifacts.recommenders,
        rating_summary=artifacts.rating_summary,
        random_source=np.random.default_rng(settings.random_seed),
        learning_rate=settings.learning_rate,
        epoch_count=settings.epoch_count,
        observer=observer
    )
    return trainer.train()


def scorer_from_artifacts(model: LogisticModel, artifacts: BlendArtifacts) -> LogisticItemScorer:
    return build_scorer(
        model,
        artifacts.bias_model,
        artifacts.recommenders,
        artifacts.rating_summary
    )


def evaluate_model(model: LogisticModel, artifacts: BlendArtifacts) -> Dict[str, Any]:
    """
    Đánh giá model trên training split.

    Returns:
        Dict với n_examples, mean_score và roc_auc (None nếu label không
        phải nhị phân hoặc chỉ có một class)
    """
    scorer = scorer_from_artifacts(model, artifacts)
    examples = artifacts.training_split.tuning_examples()
    if not examples:
        return {'n_examples': 0, 'mean_score': None, 'roc_auc': None}

    scores = np.array([scorer.score_single(ex.user_id, ex.item_id) for ex in examples])
    labels = np.array([ex.label for ex in examples])

    roc_auc = None
    classes = np.unique(labels)
    if len(classes) == 2:
        roc_auc = float(roc_auc_score(labels == classes.max(), scores))
    else:
        logger.info(f"Labels have {len(classes)} distinct values, skipping ROC-AUC")

    return {
        'n_examples': len(examples),
        'mean_score': float(scores.mean()),
        'roc_auc': roc_auc
    }
