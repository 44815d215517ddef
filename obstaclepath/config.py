from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OBSTACLEPATH_", env_file=".env", extra="ignore")

    # ------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------
    environment: str = "development"  # development | test | production

    # ------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    # Embedding front ends that own the root logger can turn this off
    log_configure: bool = True

    # ------------------------------------------------------------
    # Sketching
    # ------------------------------------------------------------
    # A click this close to the first sketch point closes the polygon
    # (twice the 4-unit marker radius drawn by the front end).
    snap_radius: float = Field(default=8.0, gt=0)

    # ------------------------------------------------------------
    # Query endpoints
    # ------------------------------------------------------------
    reject_endpoints_inside_obstacles: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def validate_runtime(self) -> None:
        """Fail fast on config the logging layer cannot use."""
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise RuntimeError(f"Unknown log level: {self.log_level!r}")


settings = Settings()
settings.validate_runtime()
