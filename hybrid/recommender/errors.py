"""
Các lỗi của logistic blend.

Thiếu tín hiệu (không có score, không có bias, không có popularity) KHÔNG phải
lỗi, được thay bằng 0. Chỉ các vi phạm cấu trúc mới được raise.
"""


class BlendError(Exception):
    """Base class cho mọi lỗi của logistic blend."""


class FeatureDimensionError(BlendError, ValueError):
    """
    Feature vector có độ dài khác số weights của model.

    Thường là do RecommenderList đã thay đổi giữa lúc train và lúc serve.
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Feature vector length mismatch: model expects {expected}, got {actual}"
        )


class MissingFeaturesError(BlendError, LookupError):
    """Training example không có feature vector trong cache."""

    def __init__(self, example_id):
        self.example_id = example_id
        super().__init__(f"No cached features for training example {example_id!r}")
