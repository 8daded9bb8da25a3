"""
Script để train logistic blend và chạy FastAPI application.

Model không được lưu nên mỗi lần khởi động sẽ train lại từ artifacts.

Usage:
    python -m hybrid.web.run
"""
import logging

import uvicorn

from hybrid.config import settings
from hybrid.pipeline import load_artifacts, scorer_from_artifacts, train_from_artifacts
from hybrid.web.main import create_app


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    is_development = settings.environment.lower() == "development"

    print("\n" + "=" * 60)
    if is_development:
        print("Đang train logistic blend và khởi động API (Development)...")
    else:
        print("Đang train logistic blend và khởi động API (Production)...")
    print("=" * 60 + "\n")

    artifacts = load_artifacts(settings.artifacts_dir)
    model = train_from_artifacts(artifacts, settings)
    app = create_app(scorer_from_artifacts(model, artifacts))

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="info"
    )


if __name__ == "__main__":
    main()
