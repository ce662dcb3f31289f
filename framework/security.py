import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from functools import lru_cache
from typing import Callable, Optional
from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as ClaimsValidationError
from framework.config import settings
from framework.exceptions.handler import AuthError, InternalError
from framework.logging.logger import get_logger

logger = get_logger("security")

# 1. Password hashing (BCrypt, fixed cost)
BCRYPT_ROUNDS = 12
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

DEFAULT_TOKEN_LIFETIME = timedelta(days=30)

# "30d", "12h", "15m", "90s"
_EXPIRATION_PATTERN = re.compile(r"^(\d+)([smhd])$")
_EXPIRATION_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}

# --- Core models ---

class Role(str, Enum):
    """Closed set of user roles. No ordering between them."""
    ADMIN = "admin"
    WORKER = "worker"
    USER = "user"


class Identity(BaseModel):
    """Authenticated caller, as proven by a verified token."""
    model_config = ConfigDict(frozen=True)

    subject_id: int
    role: Role


class TokenClaims(BaseModel):
    """JWT payload"""
    sub: str
    role: Role
    iat: int
    exp: int

    def to_identity(self) -> Identity:
        try:
            subject_id = int(self.sub)
        except ValueError:
            raise AuthError("Invalid user ID in token")
        return Identity(subject_id=subject_id, role=self.role)


class TokenConfig(BaseModel):
    """Immutable signing configuration, read once per process."""
    model_config = ConfigDict(frozen=True)

    secret: str = Field(repr=False)
    expires_in: timedelta = DEFAULT_TOKEN_LIFETIME
    algorithm: str = "HS256"

    @classmethod
    def from_settings(cls, app_settings=None) -> "TokenConfig":
        app_settings = app_settings or settings
        if not app_settings.JWT_SECRET:
            raise InternalError("JWT_SECRET must be set")
        return cls(
            secret=app_settings.JWT_SECRET,
            expires_in=parse_expiration(app_settings.JWT_EXPIRES_IN),
            algorithm=app_settings.JWT_ALGORITHM,
        )

# --- Helpers ---

def parse_expiration(value: Optional[str]) -> timedelta:
    """Parse an expiration window such as "30d"; anything unparseable yields 30 days."""
    match = _EXPIRATION_PATTERN.match((value or "").strip())
    if not match:
        return DEFAULT_TOKEN_LIFETIME
    amount, unit = match.groups()
    try:
        return timedelta(**{_EXPIRATION_UNITS[unit]: int(amount)})
    except OverflowError:
        return DEFAULT_TOKEN_LIFETIME


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        raise InternalError(f"Password verification failed: {e}")


def get_password_hash(password: str) -> str:
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError) as e:
        raise InternalError(f"Password hashing failed: {e}")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """Issues and verifies signed access tokens carrying subject id and role."""

    def __init__(self, config: TokenConfig, clock: Callable[[], datetime] = _utcnow):
        self.config = config
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock().timestamp())

    def issue(self, subject_id: int, role: Role) -> str:
        """Create JWT token"""
        issued_at = self._now()
        expires_at = issued_at + int(self.config.expires_in.total_seconds())
        claims = {
            "sub": str(subject_id),
            "role": Role(role).value,
            "iat": issued_at,
            "exp": expires_at,
        }
        try:
            return jwt.encode(claims, self.config.secret, algorithm=self.config.algorithm)
        except JWTError as e:
            raise InternalError(f"Token creation failed: {e}")

    def decode(self, token: str) -> TokenClaims:
        """
        Check signature, structure and expiry; return the claims.

        Expiry is evaluated against this codec's clock with no leeway:
        a token is valid while now <= exp.
        """
        try:
            payload = jwt.decode(
                token,
                self.config.secret,
                algorithms=[self.config.algorithm],
                # Expiry is checked below against self._clock; claim presence by TokenClaims
                options={"verify_exp": False},
            )
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise AuthError("Invalid token")
        except Exception as e:
            logger.debug(f"Token decode error: {e}")
            raise AuthError("Token validation failed")

        try:
            claims = TokenClaims.model_validate(payload)
        except ClaimsValidationError:
            raise AuthError("Invalid token")

        if self._now() > claims.exp:
            raise AuthError("Token expired")
        return claims

    def verify(self, token: str) -> Identity:
        return self.decode(token).to_identity()


@lru_cache(maxsize=1)
def get_token_codec() -> TokenCodec:
    """Process-wide codec built from settings. Raises InternalError if JWT_SECRET is missing."""
    return TokenCodec(TokenConfig.from_settings())
