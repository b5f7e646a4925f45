"""In-memory identity verifier for development and testing.

Tokens are registered up front and map directly to identities, so tests can
authenticate as any number of customers without a real identity provider.
"""

from uuid import uuid4

from storefront.auth.port import IdentityVerifier, Unauthorized, VerifiedIdentity


class FakeIdentityVerifier(IdentityVerifier):
    """Token -> identity lookup table."""

    def __init__(self) -> None:
        self._identities: dict[str, VerifiedIdentity] = {}
        self.calls: list[str] = []

    def register(self, subject_id: str, email: str | None = None, name: str | None = None, token: str | None = None) -> str:
        """Register an identity and return the token that verifies to it."""
        token = token or f"fake-token-{uuid4().hex[:12]}"
        self._identities[token] = VerifiedIdentity(
            subject_id=subject_id,
            email=email,
            name=name,
            claims={"uid": subject_id, "email": email, "name": name},
        )
        return token

    def revoke(self, token: str) -> None:
        self._identities.pop(token, None)

    def verify(self, credential: str) -> VerifiedIdentity:
        self.calls.append(credential)
        try:
            return self._identities[credential]
        except KeyError:
            raise Unauthorized("Invalid or expired token") from None
