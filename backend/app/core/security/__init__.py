"""Security module."""

from app.core.security.hashing import compute_content_hash
from app.core.security.identity import IdentityProvider, VerifiedIdentity
from app.core.security.passwords import hash_password, verify_password
from app.core.security.signing import UrlSigner
from app.core.security.tokens import issue_share_token

__all__ = [
    "IdentityProvider",
    "UrlSigner",
    "VerifiedIdentity",
    "compute_content_hash",
    "hash_password",
    "issue_share_token",
    "verify_password",
]
