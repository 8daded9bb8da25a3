import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hybrid import __version__
from hybrid.config import settings
from hybrid.recommender.logistic_scorer import LogisticItemScorer
from hybrid.web.routes import health_router, router

logger = logging.getLogger(__name__)


def create_app(scorer: Optional[LogisticItemScorer] = None) -> FastAPI:
    """
    Tạo FastAPI app.

    Args:
        scorer: LogisticItemScorer đã train (None -> score API trả về 503)

    Returns:
        FastAPI app
    """
    app = FastAPI(
        title="Logistic Blend Recommender API",
        description="API score items bằng logistic blend",
        version=__version__
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.scorer = scorer
    app.include_router(router)
    app.include_router(health_router)

    if scorer is None:
        logger.warning("App created without a scorer, score API will return 503")
    return app
