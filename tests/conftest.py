import json
from typing import Dict, Hashable, Iterable, Optional

import numpy as np
import polars as pl
import pytest

from hybrid.recommender.collaborators import (
    ItemScorer,
    RecommenderList,
    StaticBiasModel,
    StaticRatingSummary,
    TrainingExample,
)


class DictItemScorer(ItemScorer):
    """Subsidiary recommender từ dict (user, item) -> score, đếm số lần được gọi."""

    def __init__(self, scores: Dict[tuple, float]):
        self.scores = scores
        self.score_calls = 0
        self.batch_calls = 0

    def score(self, user: Hashable, item: Hashable) -> Optional[float]:
        self.score_calls += 1
        return self.scores.get((user, item))

    def score_batch(self, user: Hashable, items: Iterable[Hashable]) -> Dict[Hashable, Optional[float]]:
        self.batch_calls += 1
        return {item: self.scores.get((user, item)) for item in items}


@pytest.fixture
def bias_model():
    return StaticBiasModel(
        intercept=1.5,
        user_biases={'u1': 0.25, 'u2': -0.5},
        item_biases={'i1': 0.25, 'i2': 0.5, 'i3': -0.25}
    )


@pytest.fixture
def rating_summary():
    return StaticRatingSummary({'i1': 100, 'i2': 10, 'i3': 1})


@pytest.fixture
def mf_scorer():
    return DictItemScorer({
        ('u1', 'i1'): 3.0,
        ('u1', 'i2'): 2.5,
        ('u2', 'i1'): 1.0,
        ('u2', 'i3'): 4.0,
    })


@pytest.fixture
def content_scorer():
    return DictItemScorer({
        ('u1', 'i2'): 4.5,
        ('u1', 'i3'): 1.0,
        ('u2', 'i2'): 0.5,
    })


@pytest.fixture
def recommenders(mf_scorer, content_scorer):
    return RecommenderList([mf_scorer, content_scorer])


@pytest.fixture
def examples():
    return [
        TrainingExample('e1', 'u1', 'i1', 1.0),
        TrainingExample('e2', 'u1', 'i2', -1.0),
        TrainingExample('e3', 'u1', 'i3', 1.0),
        TrainingExample('e4', 'u2', 'i1', -1.0),
        TrainingExample('e5', 'u2', 'i2', 1.0),
        TrainingExample('e6', 'u2', 'i3', 1.0),
    ]


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def artifacts_dir(tmp_path):
    """Artifacts layout đầy đủ: tuning split, bias model, rating counts, một MF dir."""
    (tmp_path / "logistic").mkdir()
    pl.DataFrame({
        'user_id': ['u1', 'u1', 'u2', 'u2', 'u1', 'u2'],
        'item_id': ['i1', 'i2', 'i1', 'i3', 'i3', 'i2'],
        'label': [1.0, -1.0, 1.0, -1.0, 1.0, -1.0],
    }).write_parquet(tmp_path / "logistic" / "tune_examples.parquet")

    (tmp_path / "bias").mkdir()
    (tmp_path / "bias" / "bias_model.json").write_text(json.dumps({
        'intercept': 3.0,
        'user_biases': {'u1': 0.2, 'u2': -0.1},
        'item_biases': {'i1': 0.3, 'i2': -0.4},
    }), encoding='utf-8')

    (tmp_path / "popularity").mkdir()
    pl.DataFrame({
        'item_id': ['i1', 'i2', 'i3'],
        'rating_number': [1000, 10, 0],
    }).write_parquet(tmp_path / "popularity" / "item_rating_counts.parquet")

    mf_dir = tmp_path / "mf_als"
    mf_dir.mkdir()
    np.save(mf_dir / "user_factors.npy", np.array([[1.0, 0.5], [0.2, 1.0]]))
    np.save(mf_dir / "item_factors.npy", np.array([[2.0, 1.0], [0.5, 0.5]]))
    (mf_dir / "user2idx.json").write_text(json.dumps({'u1': 0, 'u2': 1}), encoding='utf-8')
    (mf_dir / "idx2item.json").write_text(json.dumps({'0': 'i1', '1': 'i2'}), encoding='utf-8')

    return tmp_path
