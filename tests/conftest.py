import base64
import os

# Dummy env zodat settings/boto3 niet zeuren
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-south-1")
os.environ.setdefault("STORAGE_BACKEND", "s3")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import StorageWriteFailure
from app.core.settings import Settings
from app.main import create_app
from app.services.storage import Storage, get_storage


class RecordingStorage(Storage):
    """In-memory storage die elke write vastlegt; kan op de N-de write falen."""

    def __init__(self, fail_on=None):
        self.writes = []
        self.fail_on = fail_on
        self.attempts = 0

    def put_object(self, key, data, content_type):
        self.attempts += 1
        if self.fail_on is not None and self.attempts == self.fail_on:
            raise StorageWriteFailure("S3 upload failed: AccessDenied: Access Denied", key=key)
        self.writes.append((key, data, content_type))

    def folder_url(self, root):
        return f"https://onboardingformbucket.s3.ap-south-1.amazonaws.com/{root}/"

    @property
    def keys(self):
        return [w[0] for w in self.writes]


def b64(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


def file_payload(name: str, content: str = "hello", mime: str = "application/pdf") -> dict:
    return {"data": b64(content), "name": name, "type": mime}


@pytest.fixture
def fixed_now():
    return datetime(2026, 1, 15, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    return Settings(STORAGE_BACKEND="s3", ROOT_TIMESTAMP_SUFFIX=False)


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def make_storage():
    return RecordingStorage


@pytest.fixture
def app_factory(storage):
    def _build(settings=None, storage_override=None):
        app = create_app(settings or Settings())
        app.dependency_overrides[get_storage] = lambda: storage_override or storage
        return app
    return _build


@pytest.fixture
def client(app_factory):
    return TestClient(app_factory())


@pytest.fixture
def acme_body():
    """Acme met één KYC-document en één client met alleen een factuur."""
    return {
        "businessData": {
            "businessName": "Acme",
            "entity": "Private Limited",
            "industry": "Manufacturing",
            "businessAge": 7,
            "registeredOffice": "1 Main Road, Pune",
            "headOffice": "2 Ring Road, Mumbai",
        },
        "kycData": {"PAN": file_payload("pan.pdf", "pan-card")},
        "financialFiles": {},
        "clientData": [
            {
                "clientName": "Beta Corp",
                "clientType": "Enterprise",
                "invoiceSize": 125000,
                "paymentCycle": 45,
                "startDate": "2025-04-01",
                "endDate": "2026-03-31",
                "invoiceUpload": file_payload("inv-001.pdf", "invoice"),
            }
        ],
    }
