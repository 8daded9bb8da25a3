"""
Train Logistic Blend
====================

Huấn luyện logistic blend (baseline + popularity + subsidiary recommenders)
bằng online SGD.

Input:
- artifacts/logistic/tune_examples.parquet
- artifacts/bias/bias_model.json
- artifacts/popularity/item_rating_counts.parquet
- artifacts/mf*/

Output:
- In ra coefficients và kết quả đánh giá
- Không lưu model

Usage:
    python -m hybrid.scripts.train_logistic_blend --epochs 100 --seed 42
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from hybrid.config import Settings
from hybrid.pipeline import evaluate_model, load_artifacts, train_from_artifacts
from hybrid.recommender.feature_builder import feature_names
from hybrid.recommender.logistic_model import LogisticModel

logger = logging.getLogger(__name__)


def coefficients_table(model: LogisticModel, names: List[str]) -> pd.DataFrame:
    """Bảng coefficients, sắp xếp theo absolute value."""
    df = pd.DataFrame({
        'feature': ['intercept'] + names,
        'coefficient': [model.intercept] + model.weights.tolist(),
    })
    df['abs_value'] = df['coefficient'].abs()
    return df.sort_values('abs_value', ascending=False).reset_index(drop=True)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    defaults = Settings()
    parser = argparse.ArgumentParser(description="Train logistic blend recommender")
    parser.add_argument("--artifacts-dir", type=Path, default=defaults.artifacts_dir)
    parser.add_argument("--epochs", type=int, default=defaults.epoch_count)
    parser.add_argument("--learning-rate", type=float, default=defaults.learning_rate)
    parser.add_argument("--seed", type=int, default=defaults.random_seed)
    parser.add_argument("--progress-period", type=int, default=defaults.progress_period)
    return parser.parse_args(argv)


def run_training(argv: Optional[List[str]] = None) -> LogisticModel:
    """
    Train logistic blend theo command-line args, in coefficients và metrics.
    """
    args = parse_args(argv)

    run_settings = Settings()
    run_settings.artifacts_dir = args.artifacts_dir
    run_settings.epoch_count = args.epochs
    run_settings.learning_rate = args.learning_rate
    run_settings.random_seed = args.seed
    run_settings.progress_period = args.progress_period

    print("=" * 80)
    print("TRAIN LOGISTIC BLEND")
    print("=" * 80)
    print(f"  Artifacts: {run_settings.artifacts_dir}")
    print(f"  Epochs: {run_settings.epoch_count}")
    print(f"  Learning rate: {run_settings.learning_rate}")
    print(f"  Seed: {run_settings.random_seed}")

    try:
        artifacts = load_artifacts(run_settings.artifacts_dir)
        model = train_from_artifacts(artifacts, run_settings)
        metrics = evaluate_model(model, artifacts)
    except Exception as e:
        logger.error(f"Logistic blend training failed: {e}")
        raise

    print("\n" + "=" * 80)
    print("COEFFICIENTS")
    print("=" * 80)
    table = coefficients_table(model, feature_names(artifacts.recommenders))
    print(table.to_string(index=False))

    print("\n" + "=" * 80)
    print("ĐÁNH GIÁ")
    print("=" * 80)
    print(f"  Examples: {metrics['n_examples']:,}")
    if metrics['mean_score'] is not None:
        print(f"  Mean score: {metrics['mean_score']:.4f}")
    if metrics['roc_auc'] is not None:
        print(f"  ROC-AUC: {metrics['roc_auc']:.4f}")

    return model


def main(argv: Optional[List[str]] = None) -> None:
    """
    Hàm chính để train logistic blend.
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    run_training(argv)


if __name__ == "__main__":
    main(sys.argv[1:])
