"""Shared-secret JWT identity verifier.

Verifies HS256 tokens minted by a trusted issuer (an auth gateway, or the
load-test harness). The ``sub`` claim is the subject id.
"""

from jose import ExpiredSignatureError, JWTError, jwt

from storefront.auth.port import IdentityVerifier, Unauthorized, VerifiedIdentity

ALGORITHM = "HS256"


class JWTIdentityVerifier(IdentityVerifier):
    def __init__(self, secret: str, audience: str | None = None, issuer: str | None = None) -> None:
        if not secret:
            raise ValueError("A JWT secret is required")
        self.secret = secret
        self.audience = audience
        self.issuer = issuer

    def verify(self, credential: str) -> VerifiedIdentity:
        try:
            payload = jwt.decode(
                credential,
                self.secret,
                algorithms=[ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except ExpiredSignatureError:
            raise Unauthorized("Token has expired") from None
        except JWTError:
            raise Unauthorized("Invalid or expired token") from None

        subject_id = payload.get("sub")
        if not subject_id:
            raise Unauthorized("Token has no subject")

        return VerifiedIdentity(
            subject_id=subject_id,
            email=payload.get("email"),
            name=payload.get("name"),
            claims=payload,
        )

    def issue(self, subject_id: str, expires_in: int = 3600, **claims) -> str:
        """Mint a token for ``subject_id``. Used by tooling, never by request handlers."""
        from datetime import UTC, datetime, timedelta

        now = datetime.now(UTC)
        to_encode = {"sub": subject_id, "iat": now, "exp": now + timedelta(seconds=expires_in), **claims}
        if self.audience:
            to_encode["aud"] = self.audience
        if self.issuer:
            to_encode["iss"] = self.issuer
        return jwt.encode(to_encode, self.secret, algorithm=ALGORITHM)
