"""Identity provider interface.

Bearer credentials are verified outside this service; the API only consumes
the resulting ``VerifiedIdentity``.
"""

import importlib
from abc import ABC, abstractmethod

from pydantic import BaseModel


class VerifiedIdentity(BaseModel):
    """Identity returned by the provider for a valid credential."""

    user_id: str
    email: str


class IdentityProvider(ABC):
    """Verifies bearer credentials."""

    @abstractmethod
    async def verify(self, credential: str) -> VerifiedIdentity:
        """
        Verify a bearer credential.

        Raises:
            AuthInvalidError: If the credential is missing, malformed or rejected
        """
        pass


def load_identity_provider(import_path: str) -> IdentityProvider:
    """
    Instantiate an identity provider from a ``module:ClassName`` path.

    Args:
        import_path: Import path of a zero-argument ``IdentityProvider`` factory

    Returns:
        IdentityProvider instance
    """
    module_name, _, attr = import_path.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Invalid identity provider path: {import_path!r}")

    factory = getattr(importlib.import_module(module_name), attr)
    provider = factory()
    if not isinstance(provider, IdentityProvider):
        raise TypeError(f"{import_path} did not produce an IdentityProvider")
    return provider
