"""Shared fixtures for documents app tests."""

from collections.abc import Callable
from typing import Final

import boto3
import pytest
from django.apps import apps
from django.core.files.storage import FileSystemStorage
from moto import mock_aws

from pdfshelf.apps.documents.infrastructure.records import MetadataStore
from pdfshelf.apps.documents.infrastructure.storage import (
    BinaryStore,
    PdfStorage,
)

_TEST_BUCKET: Final = 'pdf-shelf'
_PDF_HEADER: Final = b'%PDF-1.4\n'


@pytest.fixture
def mock_s3():
    """Mock S3 service with pdf-shelf bucket.

    Yields:
        boto3 S3 resource with pdf-shelf bucket created.
    """
    with mock_aws():
        # Create S3 resource
        conn = boto3.resource('s3', region_name='us-east-1')

        # Create bucket
        conn.create_bucket(Bucket=_TEST_BUCKET)

        yield conn


@pytest.fixture
def binary_store(tmp_path):
    """Binary store on a temporary directory.

    Returns:
        BinaryStore backed by FileSystemStorage.
    """
    return BinaryStore(FileSystemStorage(location=tmp_path))


@pytest.fixture
def s3_binary_store(mock_s3):
    """Binary store on the mocked S3 bucket.

    Returns:
        BinaryStore backed by PdfStorage.
    """
    return BinaryStore(
        PdfStorage(
            bucket_name=_TEST_BUCKET,
            access_key='testing',
            secret_key='testing',
            region_name='us-east-1',
            file_overwrite=False,
        ),
    )


@pytest.fixture
def metadata_store(db):
    """Metadata store on the test database.

    Returns:
        MetadataStore instance.
    """
    return MetadataStore()


@pytest.fixture
def documents_config(monkeypatch, binary_store, metadata_store):
    """Point the documents app at the test stores.

    Returns:
        DocumentsConfig with test stores installed.
    """
    config = apps.get_app_config('documents')
    monkeypatch.setattr(config, 'binary_store', binary_store)
    monkeypatch.setattr(config, 'metadata_store', metadata_store)
    return config


@pytest.fixture
def make_pdf() -> Callable[[int], bytes]:
    """Factory for PDF-looking content of an exact size.

    Returns:
        Function building ``size`` bytes starting with a PDF header.
    """
    def factory(size: int = 1024) -> bytes:
        return _PDF_HEADER + b'0' * (size - len(_PDF_HEADER))
    return factory
