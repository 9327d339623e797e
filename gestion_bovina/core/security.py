"""Password & Token Utility — Argon2 password hashing and signed bearer tokens.

Invariants:
    - hash_password never reuses a salt: 16 fresh random bytes per call
    - verify_password never raises on bad input; mismatch and malformed hash are both False
    - Tokens are compact JWS (HS256): base64url(header).base64url(claims).base64url(sig)
    - verify_token checks structure, algorithm, signature, then `exp` if the claim exists
    - verify_token never looks up the user — the caller re-resolves the subject

Design Decisions:
    - argon2-cffi PasswordHasher with an explicit salt: the salt is persisted next to
      the hash so the user record carries both, while the encoded hash stays self-describing
    - Signature compared with hmac.compare_digest (constant time)
    - No `exp` unless expires_minutes is configured: tokens never expire by default,
      matching the deployed API; operators opt in through settings
"""

import base64
import hashlib
import hmac
import json
import secrets
import time
from uuid import UUID

from argon2 import PasswordHasher, exceptions as argon_exc

from gestion_bovina.core.domain_types import UserId
from gestion_bovina.core.errors import UnauthorizedError

_ph = PasswordHasher()
_SALT_BYTES = 16
_DIGESTS = {"HS256": hashlib.sha256, "HS384": hashlib.sha384, "HS512": hashlib.sha512}


# ─── Passwords ───────────────────────────────────────────────────

def hash_password(password: str) -> tuple[str, str]:
    """Hash a password with a fresh salt. Returns (encoded_hash, salt_hex)."""
    salt = secrets.token_bytes(_SALT_BYTES)
    return _ph.hash(password, salt=salt), salt.hex()


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a plain password against a stored Argon2 hash."""
    if not password_hash:
        return False
    try:
        return _ph.verify(password_hash, password)
    except (
        argon_exc.VerifyMismatchError,
        argon_exc.VerificationError,
        argon_exc.InvalidHashError,
    ):
        return False


# ─── Tokens ──────────────────────────────────────────────────────

def _b64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64_url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str, algorithm: str) -> bytes:
    digest = _DIGESTS.get(algorithm)
    if digest is None:
        raise ValueError(f"Unsupported token algorithm: {algorithm}")
    return hmac.new(secret.encode("utf-8"), message, digest).digest()


def _encode_segment(obj: dict) -> str:
    return _b64_url_encode(
        json.dumps(obj, separators=(",", ":"), sort_keys=True).encode("utf-8"),
    )


def issue_token(
    user_id: UUID,
    secret: str,
    algorithm: str = "HS256",
    expires_minutes: int | None = None,
) -> str:
    """Create a signed token whose `sub` claim is the user id."""
    now = int(time.time())
    claims: dict = {"sub": str(user_id), "iat": now}
    if expires_minutes:
        claims["exp"] = now + expires_minutes * 60
    signing_input = (
        f"{_encode_segment({'alg': algorithm, 'typ': 'JWT'})}.{_encode_segment(claims)}"
    )
    signature = _sign(signing_input.encode("ascii"), secret, algorithm)
    return f"{signing_input}.{_b64_url_encode(signature)}"


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> UserId:
    """Validate a token and return the user id it carries.

    Raises UnauthorizedError for every failure mode; the reason stays in the
    message but the client always sees a 401.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise UnauthorizedError("Malformed token")
    header_b64, claims_b64, signature_b64 = parts
    try:
        header = json.loads(_b64_url_decode(header_b64))
        claims = json.loads(_b64_url_decode(claims_b64))
        signature = _b64_url_decode(signature_b64)
    except (ValueError, UnicodeDecodeError):
        raise UnauthorizedError("Malformed token")
    if not isinstance(header, dict) or not isinstance(claims, dict):
        raise UnauthorizedError("Malformed token")

    # Only the configured algorithm is accepted, whatever the header claims
    if header.get("alg") != algorithm:
        raise UnauthorizedError("Invalid token")
    expected = _sign(f"{header_b64}.{claims_b64}".encode("ascii"), secret, algorithm)
    if not hmac.compare_digest(expected, signature):
        raise UnauthorizedError("Invalid token")

    exp = claims.get("exp")
    if exp is not None:
        try:
            expired = int(exp) < int(time.time())
        except (TypeError, ValueError):
            raise UnauthorizedError("Malformed token")
        if expired:
            raise UnauthorizedError("Token expired")

    try:
        return UserId(UUID(str(claims["sub"])))
    except (KeyError, ValueError):
        raise UnauthorizedError("Invalid token subject")
