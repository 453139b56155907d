"""Salted one-way hashing for share passwords using scrypt."""

import base64
import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

ALGORITHM = "scrypt"
SALT_BYTES = 16
KEY_LENGTH = 32
# Interactive-login cost parameters
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1


def _kdf(salt: bytes, n: int = SCRYPT_N, r: int = SCRYPT_R, p: int = SCRYPT_P) -> Scrypt:
    return Scrypt(salt=salt, length=KEY_LENGTH, n=n, r=r, p=p)


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode().rstrip("=")


def _unb64(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


def hash_password(password: str) -> str:
    """
    Hash a share password.

    Args:
        password: Plaintext password, must be non-empty

    Returns:
        Encoded hash ``scrypt$n$r$p$salt$key``
    """
    if not password:
        raise ValueError("Cannot hash empty password")

    salt = os.urandom(SALT_BYTES)
    key = _kdf(salt).derive(password.encode())
    return f"{ALGORITHM}${SCRYPT_N}${SCRYPT_R}${SCRYPT_P}${_b64(salt)}${_b64(key)}"


def verify_password(password: str | None, encoded: str) -> bool:
    """Check ``password`` against an encoded hash in constant time."""
    if not password:
        return False

    try:
        algorithm, n, r, p, salt, key = encoded.split("$")
        if algorithm != ALGORITHM:
            return False
        kdf = _kdf(_unb64(salt), int(n), int(r), int(p))
        kdf.verify(password.encode(), _unb64(key))
        return True
    except InvalidKey:
        return False
    except ValueError:
        # Malformed stored hash
        return False
