# app/core/settings.py
import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # === Algemene app settings ===
    APP_NAME: str = "onboarding-intake"
    ENVIRONMENT: str = "local"  # local | development | production
    PORT: int = 3001

    # --- Storage ---
    STORAGE_BACKEND: str = Field("s3", description="s3 | local")
    S3_BUCKET: str = Field("onboardingformbucket", description="Bucket voor onboarding uploads")
    S3_REGION: str = "ap-south-1"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    LOCAL_STORAGE_ROOT: str = "./.local_storage"

    # Root folder krijgt een timestamp-suffix zodat herhaalde inzendingen niet overschrijven
    ROOT_TIMESTAMP_SUFFIX: bool = True

    # --- HTTP ---
    ALLOWED_ORIGINS: list[str] = ["*"]
    MAX_BODY_MB: int = 150

    # === Logging ===
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def max_body_bytes(self) -> int:
        return self.MAX_BODY_MB * 1024 * 1024

    def has_aws_credentials(self) -> bool:
        return bool(self.AWS_ACCESS_KEY_ID and self.AWS_SECRET_ACCESS_KEY)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance met simpele env-overrides."""
    s = Settings()

    env = os.getenv("ENVIRONMENT", s.ENVIRONMENT).lower()
    if env == "production":
        s.LOG_LEVEL = "WARNING"
    elif env == "development":
        s.LOG_LEVEL = "DEBUG"

    return s
