"""
Artifact Loaders
================

Đọc các output đã tính sẵn của collaborators bên ngoài:
- Training split (parquet): user_id, item_id, label (hoặc rating), example_id (optional)
- Rating counts (parquet): item_id, rating_number
- Bias model (json): intercept, user_biases, item_biases
"""

import json
import logging
from pathlib import Path
from typing import List

import polars as pl

from hybrid.recommender.collaborators import (
    StaticBiasModel,
    StaticRatingSummary,
    StaticTrainingSplit,
    TrainingExample,
)

logger = logging.getLogger(__name__)


def _read_parquet(path: Path, required_cols: List[str]) -> pl.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Artifact not found: {path}")

    df = pl.read_parquet(str(path))
    missing_cols = [col for col in required_cols if col not in df.columns]
    if missing_cols:
        raise ValueError(f"{path.name} is missing columns: {missing_cols}")
    return df


def load_training_split(path: Path) -> StaticTrainingSplit:
    """
    Load training split cho logistic blend.

    Cột label được ưu tiên; nếu không có thì dùng cột rating. Nếu không có
    cột example_id thì dùng row index.

    Args:
        path: Đường dẫn đến parquet

    Returns:
        StaticTrainingSplit
    """
    df = _read_parquet(path, ['user_id', 'item_id'])

    if 'label' in df.columns:
        label_col = 'label'
    elif 'rating' in df.columns:
        label_col = 'rating'
    else:
        raise ValueError(f"{Path(path).name} has neither 'label' nor 'rating' column")

    # ID luôn là string: bias model, MF index (JSON) và API đều dùng string key
    df = df.with_columns(pl.col('user_id').cast(pl.Utf8), pl.col('item_id').cast(pl.Utf8))

    if 'example_id' not in df.columns:
        df = df.with_row_index('example_id')

    if df['example_id'].n_unique() != len(df):
        raise ValueError(f"{Path(path).name} has duplicate example_id values")

    examples = [
        TrainingExample(
            example_id=row['example_id'],
            user_id=row['user_id'],
            item_id=row['item_id'],
            label=float(row[label_col])
        )
        for row in df.select(['example_id', 'user_id', 'item_id', label_col]).iter_rows(named=True)
    ]

    logger.info(f"Loaded {len(examples):,} training examples from {path} (label column: {label_col})")
    return StaticTrainingSplit(examples)


def load_rating_summary(path: Path) -> StaticRatingSummary:
    """Load item_id (string) -> rating_number."""
    df = _read_parquet(path, ['item_id', 'rating_number'])
    df = df.filter(pl.col('rating_number').is_not_null())
    df = df.with_columns(pl.col('item_id').cast(pl.Utf8))

    counts = dict(zip(df['item_id'].to_list(), df['rating_number'].cast(pl.Int64).to_list()))
    logger.info(f"Loaded rating counts for {len(counts):,} items from {path}")
    return StaticRatingSummary(counts)


def load_bias_model(path: Path) -> StaticBiasModel:
    """
    Load bias model từ JSON.

    Format:
        {"intercept": 3.5, "user_biases": {"u1": 0.1}, "item_biases": {"i1": -0.2}}
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Artifact not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if 'intercept' not in data:
        raise ValueError(f"{path.name} is missing 'intercept'")

    model = StaticBiasModel(
        intercept=data['intercept'],
        user_biases={str(k): v for k, v in data.get('user_biases', {}).items()},
        item_biases={str(k): v for k, v in data.get('item_biases', {}).items()}
    )
    logger.info(f"Loaded bias model from {path}: {model}")
    return model
