"""Identity verification.

``verifier_from_env()`` builds the adapter selected by ``AUTH_PROVIDER``:

- ``fake``: FakeIdentityVerifier (default; development and tests)
- ``jwt``: JWTIdentityVerifier using ``AUTH_JWT_SECRET``,
  ``AUTH_JWT_AUDIENCE`` and ``AUTH_JWT_ISSUER``
- ``firebase``: FirebaseIdentityVerifier using ``FIREBASE_PROJECT_ID``

The application builds one verifier at start-up and hands it to request
handlers through FastAPI dependencies.

Adapters are imported from their own modules, never from this package:
``storefront.init()`` loads each adapter module by file path, before this
package has finished importing.
"""

import os

from storefront.auth.port import Forbidden, IdentityVerifier, Unauthorized, VerifiedIdentity

__all__ = [
    "Forbidden",
    "IdentityVerifier",
    "Unauthorized",
    "VerifiedIdentity",
    "verifier_from_env",
]


def verifier_from_env() -> IdentityVerifier:
    provider = os.getenv("AUTH_PROVIDER", "fake").lower()

    if provider == "fake":
        from storefront.auth.fake_adapter import FakeIdentityVerifier

        return FakeIdentityVerifier()
    if provider == "jwt":
        from storefront.auth.jwt_adapter import JWTIdentityVerifier

        return JWTIdentityVerifier(
            secret=os.getenv("AUTH_JWT_SECRET", ""),
            audience=os.getenv("AUTH_JWT_AUDIENCE"),
            issuer=os.getenv("AUTH_JWT_ISSUER"),
        )
    if provider == "firebase":
        from storefront.auth.firebase_adapter import FirebaseIdentityVerifier

        return FirebaseIdentityVerifier(project_id=os.getenv("FIREBASE_PROJECT_ID", ""))

    raise ValueError(f"Unknown AUTH_PROVIDER: {provider}")
