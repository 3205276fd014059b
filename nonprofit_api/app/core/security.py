"""
Password hashing, bearer tokens and request classification.

Tokens are JSON Web Tokens signed with HMAC-SHA256 and base64url
encoded by hand; passwords are hashed with PBKDF2-HMAC-SHA256.  Both
primitives live on ``CredentialService``, which is built from an
explicit ``CredentialConfig`` so tests can construct one without
touching process-wide settings.  ``credentials`` is the instance the
application uses, built once from ``core.config.settings``.

The second half of the module is the access gate.  Each request is
classified exactly once by ``resolve_identity`` as anonymous, rejected
or authenticated, and the FastAPI dependencies below turn that into a
resolved user dictionary or a 401/403 response.
"""

import base64
import enum
import hashlib
import hmac
import json
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, settings
from .errors import AuthorizationError
from .storage import Storage

HASH_SCHEME = "pbkdf2_sha256"


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


@dataclass(frozen=True)
class CredentialConfig:
    """Everything the credential service needs, passed explicitly."""

    secret_key: str
    token_ttl_seconds: int = 7 * 24 * 60 * 60
    hash_iterations: int = 100_000

    @classmethod
    def from_settings(cls, source: Settings) -> "CredentialConfig":
        return cls(
            secret_key=source.secret_key,
            token_ttl_seconds=source.access_token_expire_minutes * 60,
            hash_iterations=source.password_hash_iterations,
        )


class CredentialService:
    """Hash and verify passwords; issue and verify bearer tokens."""

    def __init__(self, config: CredentialConfig) -> None:
        self.config = config

    # -- passwords -----------------------------------------------------

    def hash_password(self, password: str) -> str:
        """Hash a password with a fresh 16-byte salt.

        The result has the form ``pbkdf2_sha256$<iterations>$<salt>$<hash>``
        (salt and hash in hex), so the work factor used is stored with
        the hash and verification does not depend on current settings.
        """
        salt = os.urandom(16)
        iterations = self.config.hash_iterations
        dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
        return f"{HASH_SCHEME}${iterations}${salt.hex()}${dk.hex()}"

    def verify_password(self, password: str, hashed_password: str) -> bool:
        """Check a password against a stored hash.

        Returns ``False`` for any malformed input instead of raising.
        """
        try:
            scheme, iterations, salt_hex, hash_hex = hashed_password.split("$", 3)
            if scheme != HASH_SCHEME:
                return False
            dk = hashlib.pbkdf2_hmac(
                "sha256", password.encode("utf-8"), bytes.fromhex(salt_hex), int(iterations)
            )
            return hmac.compare_digest(dk, bytes.fromhex(hash_hex))
        except (AttributeError, TypeError, ValueError):
            return False

    # -- tokens --------------------------------------------------------

    def _sign(self, message: bytes) -> bytes:
        return hmac.new(self.config.secret_key.encode("utf-8"), message, hashlib.sha256).digest()

    def issue_token(self, user_id: int, now: Optional[float] = None) -> str:
        """Create a signed token for ``user_id`` valid for the configured TTL.

        ``now`` is a UNIX timestamp and defaults to the current time.
        """
        issued_at = int(now if now is not None else time.time())
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.config.token_ttl_seconds,
        }
        header = {"alg": "HS256", "typ": "JWT"}
        header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
        payload_b64 = _b64_url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
        signature = self._sign(f"{header_b64}.{payload_b64}".encode("utf-8"))
        return f"{header_b64}.{payload_b64}.{_b64_url_encode(signature)}"

    def verify_token(self, token: str, now: Optional[float] = None) -> Optional[int]:
        """Return the user id carried by a valid token, else ``None``.

        Invalid tokens are an ordinary outcome for callers (the gate
        treats them as a failed login attempt), so nothing is raised.
        """
        try:
            header_b64, payload_b64, signature_b64 = token.split(".")
            expected = self._sign(f"{header_b64}.{payload_b64}".encode("utf-8"))
            if not hmac.compare_digest(expected, _b64_url_decode(signature_b64)):
                return None
            payload = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
            current = now if now is not None else time.time()
            if int(payload["exp"]) <= current:
                return None
            return int(payload["sub"])
        except (AttributeError, KeyError, TypeError, ValueError):
            # ValueError also covers binascii, unicode and JSON decode errors.
            return None


credentials = CredentialService(CredentialConfig.from_settings(settings))


# ---------------------------------------------------------------------------
# Access gate
# ---------------------------------------------------------------------------


class IdentityStatus(str, enum.Enum):
    ANONYMOUS = "anonymous"
    REJECTED = "rejected"
    AUTHENTICATED = "authenticated"


@dataclass
class Identity:
    """Outcome of classifying one request."""

    status: IdentityStatus
    user: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None


def resolve_identity(
    bearer: Optional[HTTPAuthorizationCredentials],
    service: Optional[CredentialService] = None,
) -> Identity:
    """Classify a request from its bearer credentials.

    No ``Authorization`` header, or one with a scheme other than
    ``Bearer``, is anonymous.  A bearer token that does not verify, or
    whose user has since been removed, is rejected.  Anything else is
    authenticated and carries the user row (without its password).
    """
    if bearer is None or bearer.scheme.lower() != "bearer":
        return Identity(IdentityStatus.ANONYMOUS)
    user_id = (service or credentials).verify_token(bearer.credentials)
    if user_id is None:
        return Identity(IdentityStatus.REJECTED, reason="Invalid or expired token")
    user = Storage.get_user(user_id)
    if user is None:
        return Identity(IdentityStatus.REJECTED, reason="User not found")
    user.pop("password", None)
    return Identity(IdentityStatus.AUTHENTICATED, user=user)


security = HTTPBearer(auto_error=False)


def get_identity(bearer: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> Identity:
    return resolve_identity(bearer)


def get_optional_user(identity: Identity = Depends(get_identity)) -> Optional[Dict[str, Any]]:
    """Dependency for routes open to anonymous callers.

    A presented but invalid token is still refused: the caller tried to
    authenticate and failed.
    """
    if identity.status is IdentityStatus.REJECTED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=identity.reason,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity.user


def get_current_user(identity: Identity = Depends(get_identity)) -> Dict[str, Any]:
    """Dependency that requires an authenticated caller."""
    if identity.status is IdentityStatus.ANONYMOUS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if identity.status is IdentityStatus.REJECTED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=identity.reason,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity.user


def require_roles(*roles: str) -> Callable[[Dict[str, Any]], Dict[str, Any]]:
    """Dependency factory restricting a route to the given roles.

    Use as ``Depends(require_roles("admin"))``.  Authentication
    failures still produce 401; an authenticated caller with another
    role gets 403.
    """

    allowed = {getattr(role, "value", role) for role in roles}

    def _role_dependency(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if current_user.get("role") not in allowed:
            raise AuthorizationError(
                "Admin access required" if allowed == {"admin"} else "Insufficient permissions"
            )
        return current_user

    return _role_dependency
