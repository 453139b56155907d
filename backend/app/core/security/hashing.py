"""Content hashing for per-owner deduplication."""

import hashlib


def compute_content_hash(data: bytes) -> str:
    """Return the SHA-256 hex digest of ``data``."""
    return hashlib.sha256(data).hexdigest()
