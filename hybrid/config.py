import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

logger = logging.getLogger(__name__)

# Load .env file if exists
env_path = BASE_DIR / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
    logger.debug(f"Loaded .env file from {env_path}")


class Settings:
    # Artifacts: training split, bias model, rating counts, MF factors
    artifacts_dir: Path = Path(os.getenv("HYBRID_ARTIFACTS_DIR", str(BASE_DIR / "artifacts")))

    # Logistic blend training
    learning_rate: float = float(os.getenv("HYBRID_LEARNING_RATE", "0.00005"))
    epoch_count: int = int(os.getenv("HYBRID_EPOCH_COUNT", "100"))
    random_seed: int = int(os.getenv("HYBRID_RANDOM_SEED", "42"))
    progress_period: int = int(os.getenv("HYBRID_PROGRESS_PERIOD", "5"))

    # CORS Settings
    cors_origins: List[str] = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")

    # Server
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    environment: str = os.getenv("ENVIRONMENT", "development")


settings = Settings()
