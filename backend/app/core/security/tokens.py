"""Share token generation."""

import secrets

# 32 bytes = 256 bits of randomness, 43 characters once base64url-encoded
SHARE_TOKEN_BYTES = 32


def issue_share_token() -> str:
    """Generate an unguessable, URL-safe share token."""
    return secrets.token_urlsafe(SHARE_TOKEN_BYTES)
