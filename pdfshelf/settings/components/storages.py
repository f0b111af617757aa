"""Django storage configuration for uploaded documents.

The ``default`` storage holds the PDF binaries. Two backends are supported:
- ``local``: a directory on disk, served back under ``/uploads/``
- ``s3``: any S3-compatible bucket (MinIO for development, R2 or AWS S3
  in production) through django-storages

Both backends refuse to overwrite an existing object.
"""

from typing import Any, Final

from pdfshelf.settings.components import BASE_DIR, config

DOCUMENTS_STORAGE_BACKEND: Final = config(
    'DOCUMENTS_STORAGE_BACKEND',
    default='local',
)

_LOCAL_STORAGE: Final[dict[str, Any]] = {
    'BACKEND': 'django.core.files.storage.FileSystemStorage',
    'OPTIONS': {
        'location': config(
            'DOCUMENTS_UPLOAD_ROOT',
            default=str(BASE_DIR.joinpath('uploads')),
        ),
        'base_url': '/uploads/',
    },
}


def _s3_storage() -> dict[str, Any]:
    return {
        'BACKEND': 'pdfshelf.apps.documents.infrastructure.storage.PdfStorage',
        'OPTIONS': {
            'bucket_name': config('AWS_STORAGE_BUCKET_NAME'),
            'access_key': config('AWS_ACCESS_KEY_ID'),
            'secret_key': config('AWS_SECRET_ACCESS_KEY'),
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='auto',
            ),
            'file_overwrite': False,  # Prevent accidental overwrites
            'default_acl': None,  # Inherit bucket ACL
        },
    }


# Uses the configured backend for documents, local storage for static files
STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': (
        _s3_storage() if DOCUMENTS_STORAGE_BACKEND == 's3' else _LOCAL_STORAGE
    ),
    'staticfiles': {
        # Keep static files separate from uploaded documents
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
