"""Infrastructure layer for documents app.

This package contains integrations with external systems:
- Binary storage backends (local filesystem, S3/MinIO/R2)
- The metadata store over the Django ORM
- Inspection of uploads (MIME type, PDF signature, storage keys)

Keep infrastructure concerns separate from business logic.
"""
