from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the supplement tracker backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("SUPTRACK_DATA_ROOT") or data_root_default
        ).expanduser()
        self.default_water_goal_ml: int = int(
            os.environ.get("SUPTRACK_DEFAULT_WATER_GOAL_ML") or "2000"
        )
        self.log_level: str = (os.environ.get("SUPTRACK_LOG_LEVEL") or "INFO").upper()
        self.host: str = os.environ.get("SUPTRACK_HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("SUPTRACK_PORT") or "8000")

        cors = os.environ.get("SUPTRACK_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
