"""HMAC signatures for time-limited blob URLs served by this API."""

import base64
import time

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac


class UrlSigner:
    """Sign and verify ``(path, expires)`` pairs with HMAC-SHA256."""

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Signing secret must not be empty")
        self._key = secret.encode()

    def _mac(self) -> hmac.HMAC:
        return hmac.HMAC(self._key, hashes.SHA256())

    def signature(self, path: str, expires: int) -> str:
        mac = self._mac()
        mac.update(f"{path}:{expires}".encode())
        return base64.urlsafe_b64encode(mac.finalize()).decode().rstrip("=")

    def sign(self, path: str, ttl_seconds: int) -> tuple[int, str]:
        """
        Sign a path for ``ttl_seconds``.

        Returns:
            Tuple of (expiry unix timestamp, signature)
        """
        expires = int(time.time()) + ttl_seconds
        return expires, self.signature(path, expires)

    def verify(self, path: str, expires: int, signature: str) -> bool:
        """Return True when the signature matches and has not expired."""
        if expires < int(time.time()):
            return False

        mac = self._mac()
        mac.update(f"{path}:{expires}".encode())
        try:
            mac.verify(base64.urlsafe_b64decode(signature + "=" * (-len(signature) % 4)))
            return True
        except (InvalidSignature, ValueError):
            return False
