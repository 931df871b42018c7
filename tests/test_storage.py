import boto3
import pytest
from moto import mock_aws

from app.core.exceptions import StorageWriteFailure
from app.core.settings import Settings
from app.services.storage import LocalStorage, S3Storage, build_storage

BUCKET = "onboardingformbucket"
REGION = "ap-south-1"


@pytest.fixture
def s3():
    with mock_aws():
        client = boto3.client("s3", region_name=REGION)
        client.create_bucket(Bucket=BUCKET, CreateBucketConfiguration={"LocationConstraint": REGION})
        yield client


def test_s3_put_object_stores_bytes_and_content_type(s3):
    storage = S3Storage(bucket=BUCKET, region=REGION, s3_client=s3)
    storage.put_object("Acme/Acme_KYCDetails/Acme_PAN_pan.pdf", b"%PDF-1.4", "application/pdf")

    obj = s3.get_object(Bucket=BUCKET, Key="Acme/Acme_KYCDetails/Acme_PAN_pan.pdf")
    assert obj["Body"].read() == b"%PDF-1.4"
    assert obj["ContentType"] == "application/pdf"


def test_s3_client_error_becomes_storage_write_failure(s3):
    storage = S3Storage(bucket="missing-bucket", region=REGION, s3_client=s3)
    with pytest.raises(StorageWriteFailure) as exc:
        storage.put_object("Acme/x/y.pdf", b"data", "application/pdf")

    assert "NoSuchBucket" in exc.value.message
    assert exc.value.key == "Acme/x/y.pdf"
    assert exc.value.status_code == 500


def test_s3_folder_url():
    storage = S3Storage(bucket=BUCKET, region=REGION, s3_client=object())
    assert storage.folder_url("Acme") == "https://onboardingformbucket.s3.ap-south-1.amazonaws.com/Acme/"


def test_local_storage_writes_file(tmp_path):
    storage = LocalStorage(base_path=str(tmp_path))
    storage.put_object("Acme/Acme_KYCDetails/Acme_PAN_pan.pdf", b"pan", "application/pdf")

    assert (tmp_path / "Acme" / "Acme_KYCDetails" / "Acme_PAN_pan.pdf").read_bytes() == b"pan"
    assert storage.folder_url("Acme").startswith("file://")
    assert storage.folder_url("Acme").endswith("/Acme/")


def test_local_storage_os_error_becomes_storage_write_failure(tmp_path):
    (tmp_path / "Acme").write_text("a file where a folder should be")
    storage = LocalStorage(base_path=str(tmp_path))
    with pytest.raises(StorageWriteFailure):
        storage.put_object("Acme/sub/file.pdf", b"x", "application/pdf")


def test_build_storage_backends(tmp_path):
    assert isinstance(build_storage(Settings(STORAGE_BACKEND="local", LOCAL_STORAGE_ROOT=str(tmp_path))), LocalStorage)

    s3_storage = build_storage(Settings(STORAGE_BACKEND="s3", S3_BUCKET="b", S3_REGION=REGION))
    assert isinstance(s3_storage, S3Storage)
    assert (s3_storage.bucket, s3_storage.region) == ("b", REGION)
    assert s3_storage.settings.S3_BUCKET == "b"

    with pytest.raises(ValueError):
        build_storage(Settings(STORAGE_BACKEND="ftp"))
