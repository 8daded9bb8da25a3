"""
Factor Item Scorer
==================

Subsidiary recommender dựa trên MF artifacts: score = dot(user_vector, item_vector).

Artifacts (trong mf_dir):
- user_factors.npy: shape (n_users, k)
- item_factors.npy: shape (n_items, k)
- user2idx.json: user_id -> index
- idx2item.json: index -> item_id
"""

import json
import logging
from pathlib import Path
from typing import Dict, Hashable, Iterable, Mapping, Optional

import numpy as np

from hybrid.recommender.collaborators import ItemScorer

logger = logging.getLogger(__name__)


class FactorItemScorer(ItemScorer):
    """
    Score bằng latent factors. User hoặc item chưa biết -> None.
    """

    def __init__(
        self,
        user_factors: np.ndarray,
        item_factors: np.ndarray,
        user2idx: Mapping[Hashable, int],
        item2idx: Mapping[Hashable, int],
        name: str = "mf"
    ):
        if user_factors.shape[1] != item_factors.shape[1]:
            raise ValueError(
                f"Factor dimension mismatch: users={user_factors.shape[1]}, "
                f"items={item_factors.shape[1]}"
            )
        self.user_factors = user_factors
        self.item_factors = item_factors
        self.user2idx = dict(user2idx)
        self.item2idx = dict(item2idx)
        self.name = name

    def score(self, user: Hashable, item: Hashable) -> Optional[float]:
        user_idx = self.user2idx.get(user)
        item_idx = self.item2idx.get(item)
        if user_idx is None or item_idx is None:
            return None
        return float(np.dot(self.user_factors[user_idx], self.item_factors[item_idx]))

    def score_batch(
        self,
        user: Hashable,
        items: Iterable[Hashable]
    ) -> Dict[Hashable, Optional[float]]:
        items = list(items)
        user_idx = self.user2idx.get(user)
        if user_idx is None:
            return {item: None for item in items}

        known = [item for item in items if item in self.item2idx]
        results: Dict[Hashable, Optional[float]] = {item: None for item in items}
        if known:
            indices = np.array([self.item2idx[item] for item in known])
            # Tính một lần cho cả batch
            scores = self.item_factors[indices] @ self.user_factors[user_idx]
            for item, score in zip(known, scores):
                results[item] = float(score)
        return results

    def __repr__(self):
        return (
            f"FactorItemScorer(name={self.name!r}, users={len(self.user2idx)}, "
            f"items={len(self.item2idx)}, k={self.user_factors.shape[1]})"
        )


def load_factor_scorer(mf_dir: Path) -> FactorItemScorer:
    """
    Load FactorItemScorer từ thư mục MF artifacts.

    Args:
        mf_dir: Thư mục chứa user_factors.npy, item_factors.npy,
            user2idx.json, idx2item.json

    Returns:
        FactorItemScorer

    Raises:
        FileNotFoundError: Nếu thiếu file artifact
    """
    mf_dir = Path(mf_dir)
    paths = {
        'user_factors': mf_dir / "user_factors.npy",
        'item_factors': mf_dir / "item_factors.npy",
        'user2idx': mf_dir / "user2idx.json",
        'idx2item': mf_dir / "idx2item.json",
    }
    for path in paths.values():
        if not path.exists():
            raise FileNotFoundError(f"MF artifact not found: {path}")

    user_factors = np.load(str(paths['user_factors']))
    item_factors = np.load(str(paths['item_factors']))

    with open(paths['user2idx'], 'r', encoding='utf-8') as f:
        user2idx = {str(uid): int(idx) for uid, idx in json.load(f).items()}
    with open(paths['idx2item'], 'r', encoding='utf-8') as f:
        idx2item = {int(idx): str(iid) for idx, iid in json.load(f).items()}
    item2idx = {iid: idx for idx, iid in idx2item.items()}

    logger.info(
        f"Loaded MF artifacts from {mf_dir}: user_factors={user_factors.shape}, "
        f"item_factors={item_factors.shape}"
    )
    return FactorItemScorer(user_factors, item_factors, user2idx, item2idx, name=mf_dir.name)
