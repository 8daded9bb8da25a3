"""
Collaborators của logistic blend
================================

Các interface mà blend tiêu thụ (bias model, rating summary, subsidiary
recommenders, training split) cùng với các implementation đơn giản dựa trên
lookup table đã tính sẵn.

Việc fit bias model, train subsidiary recommenders và đếm rating KHÔNG nằm ở
đây: module này chỉ đọc kết quả đã có.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrainingExample:
    """
    Một example để train logistic blend.

    Attributes:
        example_id: ID duy nhất, dùng làm key của feature cache
        user_id: User ID
        item_id: Item ID
        label: Target y dùng trực tiếp trong SGD update. Domain (±1 hay
            rating) do bên tạo training split quyết định.
    """
    example_id: Hashable
    user_id: Hashable
    item_id: Hashable
    label: float


class BiasModel(ABC):
    """Baseline: intercept + user bias + item bias."""

    @abstractmethod
    def intercept(self) -> float:
        ...

    @abstractmethod
    def user_bias(self, user: Hashable) -> float:
        """Bias của user, 0 nếu user chưa biết."""

    @abstractmethod
    def item_bias(self, item: Hashable) -> float:
        """Bias của item, 0 nếu item chưa biết."""


class StaticBiasModel(BiasModel):
    """BiasModel đọc từ các dict đã fit sẵn."""

    def __init__(
        self,
        intercept: float = 0.0,
        user_biases: Optional[Mapping[Hashable, float]] = None,
        item_biases: Optional[Mapping[Hashable, float]] = None
    ):
        self._intercept = float(intercept)
        self._user_biases = dict(user_biases or {})
        self._item_biases = dict(item_biases or {})

    def intercept(self) -> float:
        return self._intercept

    def user_bias(self, user: Hashable) -> float:
        return float(self._user_biases.get(user, 0.0))

    def item_bias(self, item: Hashable) -> float:
        return float(self._item_biases.get(item, 0.0))

    def __repr__(self):
        return (
            f"StaticBiasModel(intercept={self._intercept:.4f}, "
            f"users={len(self._user_biases)}, items={len(self._item_biases)})"
        )


class RatingSummary(ABC):
    """Số lượng rating của từng item."""

    @abstractmethod
    def item_rating_count(self, item: Hashable) -> int:
        """Số rating (>= 0), 0 nếu item chưa biết."""


class StaticRatingSummary(RatingSummary):
    """RatingSummary đọc từ dict item_id -> rating_number."""

    def __init__(self, counts: Optional[Mapping[Hashable, int]] = None):
        self._counts = dict(counts or {})

    def item_rating_count(self, item: Hashable) -> int:
        return int(self._counts.get(item, 0))

    def __len__(self):
        return len(self._counts)


class ItemScorer(ABC):
    """
    Subsidiary recommender.

    Implementation phải an toàn khi đọc đồng thời (scorer dùng chung giữa
    các request).
    """

    @abstractmethod
    def score(self, user: Hashable, item: Hashable) -> Optional[float]:
        """Score cho một item, None nếu recommender không có ý kiến."""

    def score_batch(
        self,
        user: Hashable,
        items: Iterable[Hashable]
    ) -> Dict[Hashable, Optional[float]]:
        """
        Score cho cả batch items trong một lần gọi.

        Implementation mặc định gọi score() cho từng item; subclass nên
        override khi có cách tính batch hiệu quả hơn.
        """
        return {item: self.score(user, item) for item in items}


class RecommenderList:
    """
    Danh sách subsidiary recommenders có thứ tự cố định.

    Thứ tự trong list quyết định index của feature: recommender thứ i
    ứng với feature index i + 2.
    """

    def __init__(self, scorers: Sequence[ItemScorer] = ()):
        self._scorers: Tuple[ItemScorer, ...] = tuple(scorers)

    def ordered_scorers(self) -> Tuple[ItemScorer, ...]:
        return self._scorers

    def count(self) -> int:
        return len(self._scorers)

    def __len__(self):
        return len(self._scorers)

    def __iter__(self):
        return iter(self._scorers)

    def __repr__(self):
        names = [type(s).__name__ for s in self._scorers]
        return f"RecommenderList({names})"


class TrainingSplit(ABC):
    """Nguồn training examples cho logistic blend (tuning split)."""

    @abstractmethod
    def tuning_examples(self) -> Sequence[TrainingExample]:
        ...


class StaticTrainingSplit(TrainingSplit):
    """TrainingSplit bọc một list examples có sẵn."""

    def __init__(self, examples: Iterable[TrainingExample]):
        self._examples: List[TrainingExample] = list(examples)

    def tuning_examples(self) -> Sequence[TrainingExample]:
        return tuple(self._examples)

    def __len__(self):
        return len(self._examples)
