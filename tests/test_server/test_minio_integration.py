"""Integration tests for the S3 binary store against MinIO.

These tests verify that the PDF storage backend works against a real
S3-compatible server, for example MinIO started with Docker Compose.
"""
import os
from typing import Final

import boto3
import pytest
from botocore.client import BaseClient
from botocore.exceptions import ClientError
from django.core.files.base import ContentFile

from pdfshelf.apps.documents.exceptions import BinaryNotFoundError
from pdfshelf.apps.documents.infrastructure.storage import (
    BinaryStore,
    PdfStorage,
)

_TEST_BUCKET: Final = 'pdf-shelf'
_TEST_CONTENT: Final = b'%PDF-1.4\nHello from MinIO integration test!'

_ENDPOINT: Final = os.getenv('MINIO_ENDPOINT', 'http://minio:9000')
_ACCESS_KEY: Final = os.getenv('MINIO_ROOT_USER', 'minioadmin')
_SECRET_KEY: Final = os.getenv('MINIO_ROOT_PASSWORD', 'minioadmin')


@pytest.fixture
def s3_client() -> BaseClient:
    """Create S3 client for MinIO.

    Returns:
        Configured boto3 S3 client for MinIO.
    """
    return boto3.client(
        's3',
        endpoint_url=_ENDPOINT,
        aws_access_key_id=_ACCESS_KEY,
        aws_secret_access_key=_SECRET_KEY,
        region_name='us-east-1',
    )


@pytest.fixture
def minio_store(s3_client: BaseClient) -> BinaryStore:
    """Binary store on a MinIO bucket, created if missing.

    Args:
        s3_client: boto3 S3 client.

    Returns:
        BinaryStore backed by PdfStorage.
    """
    try:
        s3_client.head_bucket(Bucket=_TEST_BUCKET)
    except ClientError:
        s3_client.create_bucket(Bucket=_TEST_BUCKET)

    return BinaryStore(
        PdfStorage(
            bucket_name=_TEST_BUCKET,
            endpoint_url=_ENDPOINT,
            access_key=_ACCESS_KEY,
            secret_key=_SECRET_KEY,
            region_name='us-east-1',
            file_overwrite=False,
        ),
    )


@pytest.mark.integration
def test_save_sets_pdf_headers(
    minio_store: BinaryStore,
    s3_client: BaseClient,
) -> None:
    """Test objects are stored with PDF content headers."""
    storage_key = minio_store.save('headers.pdf', ContentFile(_TEST_CONTENT))

    response = s3_client.head_object(Bucket=_TEST_BUCKET, Key=storage_key)
    assert response['ContentType'] == 'application/pdf'
    assert response['ContentLength'] == len(_TEST_CONTENT)

    minio_store.delete(storage_key)


@pytest.mark.integration
def test_round_trip(minio_store: BinaryStore) -> None:
    """Test bytes survive save, open and delete."""
    storage_key = minio_store.save('round-trip.pdf', ContentFile(_TEST_CONTENT))

    assert storage_key in minio_store.keys()
    with minio_store.open(storage_key) as binary:
        assert binary.read() == _TEST_CONTENT

    assert minio_store.delete(storage_key) is True
    with pytest.raises(BinaryNotFoundError):
        minio_store.open(storage_key)


@pytest.mark.integration
def test_delete_missing_is_tolerated(minio_store: BinaryStore) -> None:
    """Test deleting an absent object."""
    assert minio_store.delete('never-stored.pdf') is False
