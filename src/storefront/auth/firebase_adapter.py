"""Firebase ID token verifier.

Firebase ID tokens are RS256 JWTs signed with rotating Google keys published
as X.509 certificates. The token header names the signing key (``kid``); the
audience is the Firebase project id and the issuer is
``https://securetoken.google.com/<project id>``.
"""

import re
import time

import requests
from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JOSEError

from storefront.auth.port import IdentityVerifier, Unauthorized, VerifiedIdentity
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CERTIFICATES_URL = "https://www.googleapis.com/robot/v1/metadata/x509/securetoken@system.gserviceaccount.com"
DEFAULT_CERT_TTL = 3600

_MAX_AGE = re.compile(r"max-age=(\d+)")


def fetch_certificates(timeout: float = 5.0) -> tuple[dict[str, str], int]:
    """Download Google's signing certificates and their cache lifetime in seconds."""
    response = requests.get(CERTIFICATES_URL, timeout=timeout)
    response.raise_for_status()

    match = _MAX_AGE.search(response.headers.get("Cache-Control", ""))
    ttl = int(match.group(1)) if match else DEFAULT_CERT_TTL
    return response.json(), ttl


class FirebaseIdentityVerifier(IdentityVerifier):
    def __init__(self, project_id: str, certificate_fetcher=fetch_certificates) -> None:
        if not project_id:
            raise ValueError("A Firebase project id is required")
        self.project_id = project_id
        self.issuer = f"https://securetoken.google.com/{project_id}"
        self._fetch = certificate_fetcher
        self._certificates: dict[str, str] = {}
        self._expires_at = 0.0

    def _certificate_for(self, kid: str) -> str:
        if time.monotonic() >= self._expires_at or kid not in self._certificates:
            try:
                self._certificates, ttl = self._fetch()
            except requests.RequestException as exc:
                logger.error("firebase_certificate_fetch_failed", error=str(exc))
                raise Unauthorized("Unable to verify token at this time") from exc
            self._expires_at = time.monotonic() + ttl

        try:
            return self._certificates[kid]
        except KeyError:
            raise Unauthorized("Token signed with an unknown key") from None

    def verify(self, credential: str) -> VerifiedIdentity:
        try:
            header = jwt.get_unverified_header(credential)
        except JWTError:
            raise Unauthorized("Malformed token") from None

        kid = header.get("kid")
        if header.get("alg") != "RS256" or not kid:
            raise Unauthorized("Token is not a Firebase ID token")

        try:
            payload = jwt.decode(
                credential,
                self._certificate_for(kid),
                algorithms=["RS256"],
                audience=self.project_id,
                issuer=self.issuer,
                options={"verify_at_hash": False},
            )
        except ExpiredSignatureError:
            raise Unauthorized("ID Token has expired") from None
        except JOSEError:
            raise Unauthorized("Invalid ID Token") from None

        subject_id = payload.get("sub")
        if not subject_id:
            raise Unauthorized("Token has no subject")

        return VerifiedIdentity(
            subject_id=subject_id,
            email=payload.get("email"),
            name=payload.get("name"),
            claims=payload,
        )
