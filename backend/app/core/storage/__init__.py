"""Storage module: database handle and blob stores."""

from app.core.storage.blob_store import BlobNotFoundError, BlobStore, StoredBlob, create_blob_store

__all__ = ["BlobNotFoundError", "BlobStore", "StoredBlob", "create_blob_store"]
