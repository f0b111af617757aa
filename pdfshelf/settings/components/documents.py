"""Settings for the documents app."""

from pdfshelf.settings.components import config

# How many leading bytes are scanned for the ``%PDF-`` signature
DOCUMENTS_SIGNATURE_WINDOW = config(
    'DOCUMENTS_SIGNATURE_WINDOW',
    cast=int,
    default=1024,
)

# Binaries younger than this are never treated as orphans by cleanup
DOCUMENTS_ORPHAN_MIN_AGE_MINUTES = config(
    'DOCUMENTS_ORPHAN_MIN_AGE_MINUTES',
    cast=int,
    default=60,
)
