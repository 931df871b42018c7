# app/services/storage.py
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Request

from app.aws.s3_errors import describe_s3_error, s3_error_message
from app.core.exceptions import StorageWriteFailure
from app.core.settings import Settings, get_settings
from app.infra.s3_client import build_s3_client

logger = logging.getLogger(__name__)


# =========================
# Abstracte Storage
# =========================
class Storage(ABC):
    """Schrijf-only object storage: de pipeline leest nooit terug."""

    @abstractmethod
    def put_object(self, key: str, data: bytes, content_type: str) -> None:
        """Sla bytes op onder `key`; faalt met StorageWriteFailure."""

    @abstractmethod
    def folder_url(self, root: str) -> str:
        """URL-achtige locatie van de root folder van een inzending."""


# =========================
# Local Storage
# =========================
class LocalStorage(Storage):
    """Lokale bestandsopslag, handig in development zonder AWS."""

    def __init__(self, base_path: str = "./.local_storage"):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _full_path(self, key: str) -> Path:
        return self.base_path / key

    def put_object(self, key: str, data: bytes, content_type: str) -> None:
        file_path = self._full_path(key)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)
        except OSError as e:
            logger.error("Lokaal opslaan mislukt key=%s: %s", key, e)
            raise StorageWriteFailure(f"Local write failed: {e}", key=key) from e
        logger.info("Bestand opgeslagen: %s (%s, %d bytes)", file_path, content_type, len(data))

    def folder_url(self, root: str) -> str:
        return f"file://{self._full_path(root).resolve()}/"


# =========================
# S3 Storage
# =========================
class S3Storage(Storage):
    """Amazon S3 bestandsopslag implementatie."""

    def __init__(self, bucket: str, region: str, s3_client=None, settings: Optional[Settings] = None):
        self.bucket = bucket
        self.region = region
        self.settings = settings
        self._client = s3_client

    @property
    def s3_client(self):
        # boto3 clients zijn thread-safe; één client per storage instance
        if self._client is None:
            self._client = build_s3_client(self.settings or get_settings())
        return self._client

    def put_object(self, key: str, data: bytes, content_type: str) -> None:
        try:
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            info = describe_s3_error(e)
            logger.error(
                "S3 upload mislukt key=%s code=%s hint=%s request_id=%s",
                key, info.get("code"), info.get("hint"), info.get("aws_request_id"),
            )
            raise StorageWriteFailure(f"S3 upload failed: {s3_error_message(e)}", key=key) from e
        logger.info("Bestand geüpload naar S3: %s", key)

    def folder_url(self, root: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{root}/"


# =========================
# Factory
# =========================
def build_storage(settings: Settings) -> Storage:
    """
    Kies de storage backend op basis van STORAGE_BACKEND.
    """
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "s3":
        if not settings.S3_BUCKET:
            raise ValueError("S3_BUCKET is vereist voor S3 storage")
        return S3Storage(bucket=settings.S3_BUCKET, region=settings.S3_REGION, settings=settings)

    if backend == "local":
        return LocalStorage(base_path=settings.LOCAL_STORAGE_ROOT)

    raise ValueError(f"Onbekende storage backend: {backend}")


def get_storage(request: Request) -> Storage:
    """FastAPI dependency: de storage die create_app uit de app-settings heeft gebouwd."""
    return request.app.state.storage
