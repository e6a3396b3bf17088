import io

import boto3
import pytest
from moto import mock_aws

from src.utils.s3_handler import S3Handler, StorageError


@mock_aws
def test_upload_streams_file_object(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_ENDPOINT_URL_S3", raising=False)

    s3 = boto3.client("s3", region_name="us-east-1")
    s3.create_bucket(Bucket="policy-free-artifacts")

    handler = S3Handler(region_name="us-east-1")
    handler.upload("policy-free-artifacts", "build-abc.zip", io.BytesIO(b"zip-bytes"), content_type="application/zip")

    obj = s3.get_object(Bucket="policy-free-artifacts", Key="build-abc.zip")
    assert obj["Body"].read() == b"zip-bytes"
    assert obj["ContentType"] == "application/zip"


@mock_aws
def test_upload_to_missing_bucket_raises(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_ENDPOINT_URL_S3", raising=False)

    handler = S3Handler(region_name="us-east-1")
    with pytest.raises(StorageError):
        handler.upload("does-not-exist", "build-abc.zip", io.BytesIO(b"zip-bytes"))
