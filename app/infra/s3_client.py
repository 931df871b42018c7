# app/infra/s3_client.py

import logging
import boto3
from botocore.config import Config

from app.core.settings import Settings

logger = logging.getLogger(__name__)


def build_s3_client(settings: Settings):
    """Nieuwe boto3 S3 client; credentials uit settings, anders de standaard boto3-keten."""
    cfg = Config(
        region_name=settings.S3_REGION,
        signature_version="s3v4",
    )
    kwargs = {}
    if settings.has_aws_credentials():
        kwargs.update({
            "aws_access_key_id": settings.AWS_ACCESS_KEY_ID,
            "aws_secret_access_key": settings.AWS_SECRET_ACCESS_KEY,
        })
    client = boto3.client("s3", config=cfg, **kwargs)
    logger.info("S3 client initialized region=%s bucket=%s", settings.S3_REGION, settings.S3_BUCKET)
    return client
