"""
Hybrid logistic blend recommender.

Cấu trúc:
- recommender/: logistic model, feature builder, trainer, scorer
- data/: đọc artifacts (training split, bias model, rating counts)
- web/: FastAPI app để serve scores
- scripts/: script train
"""

__version__ = "1.0.0"
