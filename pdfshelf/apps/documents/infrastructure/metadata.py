"""Inspection utilities for uploaded files."""

import mimetypes
import secrets
from datetime import UTC, datetime
from pathlib import Path
from typing import BinaryIO, Final

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.core.files.base import File as DjangoFile
from django.utils.text import get_valid_filename

from pdfshelf.apps.documents.exceptions import InvalidFileTypeError

PDF_MIME_TYPE: Final = 'application/pdf'

_PDF_SIGNATURE: Final = b'%PDF-'
_DEFAULT_SIGNATURE_WINDOW: Final = 1024
_TOKEN_BYTES: Final = 4  # 8 hex chars
_MAX_STEM_LENGTH: Final = 100
_FALLBACK_STEM: Final = 'document'


def detect_mime_type(filename: str) -> str:
    """Guess MIME type from filename extension.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return 'application/octet-stream'
    return mime_type


def normalize_mime_type(mime_type: str | None) -> str:
    """Strip parameters and case from a declared MIME type.

    Example: 'Application/PDF; charset=binary' -> 'application/pdf'
    """
    if not mime_type:
        return ''
    return mime_type.split(';', 1)[0].strip().lower()


def has_pdf_signature(file_obj: BinaryIO | DjangoFile) -> bool:
    """Check the leading bytes of a file for the PDF header.

    Readers accept the ``%PDF-`` marker anywhere in the first kilobyte,
    so the whole window is scanned. Resets file pointer afterwards.

    Args:
        file_obj: File-like object to inspect.

    Returns:
        True if the header was found.
    """
    window = getattr(
        settings,
        'DOCUMENTS_SIGNATURE_WINDOW',
        _DEFAULT_SIGNATURE_WINDOW,
    )
    file_obj.seek(0)
    head = file_obj.read(window)
    file_obj.seek(0)
    return _PDF_SIGNATURE in head


def get_file_size(file_obj: BinaryIO | DjangoFile) -> int:
    """Get file size from file object.

    Args:
        file_obj: File-like object.

    Returns:
        File size in bytes.
    """
    if hasattr(file_obj, 'size'):
        return file_obj.size
    file_obj.seek(0)
    file_size = len(file_obj.read())
    file_obj.seek(0)
    return file_size


def validate_pdf(
    file_obj: BinaryIO | DjangoFile,
    original_name: str,
    declared_mime_type: str | None,
) -> None:
    """Reject anything that is not a non-empty PDF.

    Both the MIME type declared by the client and the content itself
    have to agree.

    Args:
        file_obj: Uploaded content.
        original_name: Filename supplied by the client.
        declared_mime_type: Content type supplied by the client.

    Raises:
        InvalidFileTypeError: If the declared type or the content is not PDF.
    """
    # Fall back to the filename when the client declared nothing
    mime_type = (
        normalize_mime_type(declared_mime_type)
        or detect_mime_type(original_name)
    )
    if mime_type != PDF_MIME_TYPE:
        raise InvalidFileTypeError(original_name, mime_type or 'unknown')

    if get_file_size(file_obj) == 0:
        raise InvalidFileTypeError(original_name, 'empty file')

    if not has_pdf_signature(file_obj):
        # Declared PDF, content disagrees
        raise InvalidFileTypeError(original_name, 'application/octet-stream')


def generate_storage_key(original_name: str) -> str:
    """Generate a unique storage key for an upload.

    The key combines a UTC timestamp with microseconds, a random token
    and a sanitized form of the original filename, so two simultaneous
    uploads with identical names never map to the same key.

    Args:
        original_name: Filename supplied by the client (e.g., 'report.pdf').

    Returns:
        Storage key (e.g., '20260131T143052123456-9f2c01ab-report.pdf').
    """
    # Drop any client-side directories before sanitizing
    stem = Path(Path(original_name).name).stem
    try:
        safe_stem = get_valid_filename(stem)
    except SuspiciousFileOperation:
        safe_stem = _FALLBACK_STEM

    timestamp = datetime.now(tz=UTC).strftime('%Y%m%dT%H%M%S%f')
    token = secrets.token_hex(_TOKEN_BYTES)
    return f'{timestamp}-{token}-{safe_stem[:_MAX_STEM_LENGTH]}.pdf'

