# futurehire/core/security.py
"""
Password hashing and bearer token issuance/verification.

Both objects are built once at startup from ``Settings`` and shared by every
request; neither holds mutable state after construction.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from futurehire.core.config import Settings
from futurehire.core.errors import ConfigurationError, ExpiredToken, InvalidToken

# PBKDF2-HMAC-SHA256 (avoids bcrypt backend issues)
PASSWORD_SCHEME = "pbkdf2_sha256"


class PasswordHasher:
    """Salted, deliberately slow one-way hashing of passwords."""

    def __init__(self, rounds: int = 100_000):
        self._context = CryptContext(
            schemes=[PASSWORD_SCHEME],
            deprecated="auto",
            **{f"{PASSWORD_SCHEME}__default_rounds": rounds},
        )

    def hash(self, plaintext: str) -> str:
        # passlib draws a fresh random salt for every call
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, hashed: Optional[str]) -> bool:
        if not hashed:
            return False
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError):
            # malformed stored hash
            return False

    def dummy_verify(self) -> None:
        """Spend the same time as a real verification (unknown-email logins)."""
        self._context.dummy_verify()


class TokenService:
    """
    Issues and verifies signed, self-contained bearer tokens.

    A token binds ``sub`` (the identity id) and ``iat``; when an expiry is
    configured it also carries ``exp``. Verification needs nothing but the
    signing secret, so a token cannot be revoked before it expires.
    """

    def __init__(self, secret: Optional[str], algorithm: str = "HS256",
                 expire_minutes: Optional[int] = None):
        if not secret:
            raise ConfigurationError("SECRET_KEY is not set; refusing to start without a token signing secret")
        self._secret = secret
        self._algorithm = algorithm
        self._expires = timedelta(minutes=expire_minutes) if expire_minutes else None

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(settings.SECRET_KEY, settings.JWT_ALGORITHM, settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def issue(self, identity_id: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {"sub": str(identity_id), "iat": issued_at}
        if self._expires is not None:
            claims["exp"] = issued_at + self._expires
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        """Return the identity id bound to ``token``.

        Raises ``ExpiredToken`` past expiry and ``InvalidToken`` for anything
        else that does not verify (bad signature, malformed, missing claims).
        """
        options = {"require_sub": True, "require_iat": True, "require_exp": self._expires is not None}
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm], options=options)
        except ExpiredSignatureError as exc:
            raise ExpiredToken(str(exc)) from exc
        except JWTError as exc:
            raise InvalidToken(str(exc)) from exc
        sub = payload.get("sub")
        if not sub:
            raise InvalidToken("empty subject")
        return sub
