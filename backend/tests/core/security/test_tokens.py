"""Tests for share tokens and content hashing."""

import hashlib
import re

import pytest

from app.core.security.hashing import compute_content_hash
from app.core.security.tokens import issue_share_token


@pytest.mark.unit
class TestShareTokens:
    """Test cases for issue_share_token."""

    def test_token_is_url_safe(self):
        """Test that tokens only use base64url characters."""
        token = issue_share_token()
        assert re.fullmatch(r"[A-Za-z0-9_-]+", token)

    def test_token_length(self):
        """Test that tokens carry 256 bits of randomness."""
        assert len(issue_share_token()) == 43

    def test_tokens_are_unique(self):
        """Test that tokens do not repeat."""
        tokens = {issue_share_token() for _ in range(1000)}
        assert len(tokens) == 1000


@pytest.mark.unit
class TestContentHash:
    """Test cases for compute_content_hash."""

    def test_sha256_hex(self):
        """Test that the hash is the SHA-256 hex digest."""
        assert compute_content_hash(b"hello") == hashlib.sha256(b"hello").hexdigest()

    def test_same_bytes_same_hash(self):
        """Test that identical content hashes identically."""
        assert compute_content_hash(b"abc") == compute_content_hash(b"abc")
        assert compute_content_hash(b"abc") != compute_content_hash(b"abd")
