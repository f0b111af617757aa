"""HTTP views for documents app.

JSON endpoints for upload, listing and deletion, plus the route the
viewer fetches PDF bytes from.
"""

import logging
from typing import Any, Final

from django.apps import apps
from django.http import FileResponse, HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from pdfshelf.apps.documents.apps import DocumentsConfig
from pdfshelf.apps.documents.exceptions import (
    DocumentError,
    InvalidFileTypeError,
    NotFoundError,
)
from pdfshelf.apps.documents.logic.document_operations import (
    delete_document,
    list_documents,
    open_document,
    upload_document,
)
from pdfshelf.apps.documents.models import Document

logger = logging.getLogger(__name__)

# Multipart field carrying the uploaded file
UPLOAD_FIELD: Final = 'pdf'

# Checked in order, first match wins
_ERROR_STATUSES: Final = (
    (NotFoundError, 404),
    (InvalidFileTypeError, 400),
    (DocumentError, 500),
)


def _documents_config() -> DocumentsConfig:
    return apps.get_app_config('documents')  # type: ignore[return-value]


def serialize_document(document: Document) -> dict[str, Any]:
    """Build the JSON shape of a document record.

    Args:
        document: Document instance.

    Returns:
        JSON-serializable dictionary.
    """
    return {
        'id': str(document.id),
        'original_name': document.original_name,
        'storage_key': document.storage_key,
        'size_bytes': document.size_bytes,
        'uploaded_at': document.uploaded_at.isoformat(),
        'url': document.get_url(),
    }


def _error_response(error: DocumentError) -> JsonResponse:
    status = next(
        code for error_type, code in _ERROR_STATUSES
        if isinstance(error, error_type)
    )
    return JsonResponse({'error': str(error)}, status=status)


@csrf_exempt
@require_http_methods(['POST'])
def upload_view(request: HttpRequest) -> JsonResponse:
    """Accept a PDF from the ``pdf`` multipart field."""
    uploaded = request.FILES.get(UPLOAD_FIELD)
    if uploaded is None:
        return JsonResponse({'error': 'No file uploaded'}, status=400)

    config = _documents_config()
    try:
        document = upload_document(
            config.binary_store,
            config.metadata_store,
            uploaded,
            uploaded.name or '',
            uploaded.content_type,
        )
    except DocumentError as error:
        logger.warning('Upload rejected or failed: %s', error)
        return _error_response(error)

    return JsonResponse(
        {
            'message': 'PDF uploaded successfully',
            'pdf': serialize_document(document),
        },
    )


@require_http_methods(['GET'])
def list_view(request: HttpRequest) -> JsonResponse:
    """List all documents, newest first."""
    try:
        documents = list_documents(_documents_config().metadata_store)
    except DocumentError as error:
        return _error_response(error)

    return JsonResponse(
        [serialize_document(document) for document in documents],
        safe=False,
    )


@csrf_exempt
@require_http_methods(['DELETE'])
def delete_view(request: HttpRequest, document_id: str) -> JsonResponse:
    """Delete a document's binary and record."""
    config = _documents_config()
    try:
        delete_document(
            config.binary_store,
            config.metadata_store,
            document_id,
        )
    except DocumentError as error:
        return _error_response(error)

    return JsonResponse({'message': 'PDF deleted successfully'})


@require_http_methods(['GET', 'HEAD'])
def binary_view(
    request: HttpRequest,
    storage_key: str,
) -> FileResponse | JsonResponse:
    """Stream the stored bytes of a PDF for the in-browser viewer."""
    try:
        binary = open_document(_documents_config().binary_store, storage_key)
    except DocumentError as error:
        return _error_response(error)

    return FileResponse(
        binary,
        content_type='application/pdf',
        filename=storage_key,
    )
