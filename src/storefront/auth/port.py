"""Identity verifier port (abstract interface).

Identity is owned by an external provider. The storefront only needs one
capability from it: turn a bearer credential into a stable subject id plus
profile claims, or refuse it. Adapters implement that for tests, for
shared-secret JWTs and for Firebase ID tokens.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class Unauthorized(Exception):
    """The credential is missing, malformed, expired or otherwise invalid."""


class Forbidden(Exception):
    """The caller is authenticated but may not perform the operation."""


@dataclass(frozen=True)
class VerifiedIdentity:
    """Result of a successful verification."""

    subject_id: str
    email: str | None = None
    name: str | None = None
    claims: dict = field(default_factory=dict)


class IdentityVerifier(ABC):
    """Abstract identity verifier interface."""

    @abstractmethod
    def verify(self, credential: str) -> VerifiedIdentity:
        """Verify a bearer credential.

        Raises:
            Unauthorized: if the credential cannot be verified.
        """
        ...
