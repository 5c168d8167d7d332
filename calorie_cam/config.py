from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the calorie tracking backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        data_root_default = base_dir.parent / "data"

        self.data_root: Path = Path(
            os.environ.get("CALCAM_DATA_ROOT") or data_root_default
        ).expanduser()
        self.db_path: Path = Path(
            os.environ.get("CALCAM_DB_PATH") or (self.data_root / "calorie_cam.db")
        ).expanduser()
        # "sqlite" for the on-disk document store, "memory" for demos/tests.
        self.store_backend: str = (os.environ.get("CALCAM_STORE") or "sqlite").strip().lower()

        # In production you MUST set CALCAM_JWT_SECRET.
        self.jwt_secret: str = os.environ.get("CALCAM_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("CALCAM_TOKEN_TTL_DAYS") or "30")
        self.cookie_secure: bool = (os.environ.get("CALCAM_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}

        # Calendar days are computed in this zone (local midnight to local midnight).
        self.timezone: str = os.environ.get("CALCAM_TIMEZONE") or "Europe/Lisbon"
        self.daily_calorie_goal: float = float(os.environ.get("CALCAM_DAILY_GOAL") or "2000")

        self.max_image_bytes: int = int(os.environ.get("CALCAM_MAX_IMAGE_BYTES") or "8000000")
        self.image_max_width: int = int(os.environ.get("CALCAM_IMAGE_MAX_WIDTH") or "800")

        self.vision_api_key: str | None = os.environ.get("VISION_API_KEY")
        self.vision_api_url: str = os.environ.get(
            "VISION_API_URL", "https://vision.googleapis.com/v1/images:annotate"
        )
        self.vision_timeout: float = float(os.environ.get("CALCAM_VISION_TIMEOUT") or "30")
        self.vision_max_results: int = int(os.environ.get("CALCAM_VISION_MAX_RESULTS") or "5")

        cors = os.environ.get("CALCAM_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
