"""
Logistic Model
==============

Value object bất biến cho logistic blend: intercept + weight vector.

Hàm evaluate dùng cho hai việc:
- Prediction: evaluate(1, features)
- Gradient term khi train: evaluate(-label, features)
"""

from dataclasses import dataclass, field
from typing import Sequence, Union

import numpy as np

from hybrid.recommender.errors import FeatureDimensionError

FeatureInput = Union[np.ndarray, Sequence[float]]


@dataclass(frozen=True, eq=False)
class LogisticModel:
    """
    Logistic model bất biến.

    Attributes:
        intercept: Hệ số tự do
        weights: Weight vector (read-only), độ dài = độ dài feature vector
    """
    intercept: float
    weights: np.ndarray = field(repr=False)

    def __post_init__(self):
        weights = np.array(self.weights, dtype=np.float64)
        weights.setflags(write=False)
        object.__setattr__(self, 'intercept', float(self.intercept))
        object.__setattr__(self, 'weights', weights)

    @classmethod
    def zeros(cls, n_features: int) -> "LogisticModel":
        """Model ban đầu: intercept = 0, mọi weight = 0."""
        return cls(0.0, np.zeros(n_features))

    @property
    def n_features(self) -> int:
        return len(self.weights)

    def linear_term(self, features: FeatureInput) -> float:
        """intercept + Σ_j weight_j * features_j"""
        x = np.asarray(features, dtype=np.float64)
        if x.shape != self.weights.shape:
            raise FeatureDimensionError(len(self.weights), len(x))
        return self.intercept + float(np.dot(self.weights, x))

    def evaluate(self, coefficient: float, features: FeatureInput) -> float:
        """
        Tính 1 / (1 + exp(coefficient * (intercept + w·x))).

        Args:
            coefficient: 1 để predict, -label để tính gradient
            features: Feature vector (độ dài = số weights)

        Returns:
            Giá trị trong [0, 1]

        Raises:
            FeatureDimensionError: Nếu độ dài feature vector khác số weights
        """
        exponent = coefficient * self.linear_term(features)
        # exp tràn số -> 1/(1+inf) = 0, đúng giới hạn của sigmoid
        with np.errstate(over='ignore'):
            return float(1.0 / (1.0 + np.exp(exponent)))

    def updated(self, step: float, features: np.ndarray) -> "LogisticModel":
        """
        Trả về model MỚI sau một bước SGD: intercept += step, w_j += step * x_j.

        Model hiện tại không bị thay đổi.
        """
        x = np.asarray(features, dtype=np.float64)
        if x.shape != self.weights.shape:
            raise FeatureDimensionError(len(self.weights), len(x))
        return LogisticModel(self.intercept + step, self.weights + step * x)

    def to_dict(self) -> dict:
        """State (intercept, weights) cho persistence layer bên ngoài."""
        return {
            'intercept': self.intercept,
            'weights': self.weights.tolist(),
        }

    def __eq__(self, other):
        if not isinstance(other, LogisticModel):
            return NotImplemented
        return (
            self.intercept == other.intercept
            and np.array_equal(self.weights, other.weights)
        )

    __hash__ = None

    def __repr__(self):
        weights = ", ".join(f"{w:.6f}" for w in self.weights)
        return f"LogisticModel(intercept={self.intercept:.6f}, weights=[{weights}])"
