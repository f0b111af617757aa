"""Business logic layer for documents app.

This package contains the document lifecycle:
- Upload (binary write, then metadata insert, with rollback)
- Listing, newest first
- Retrieval of the stored binary for viewing
- Deletion (metadata read, binary delete, metadata delete)

Stores are passed in explicitly, never looked up from module state.
"""
