# storefront/services/identity_service.py
import time
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

import bcrypt
import jwt
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import UnauthenticatedError
from storefront.domain.schemas import SessionUser, TokenOut, UserOut
from storefront.repos.user_repo import UserRepo
from storefront.utils.settings import (
    ADMIN_TOKEN_TTL_SECONDS,
    CUSTOMER_TOKEN_TTL_SECONDS,
    JWT_ALGORITHM,
    JWT_SECRET,
    TOKEN_REFRESH_WINDOW_SECONDS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ROLE_ADMIN = "ADMIN"
ROLE_CUSTOMER = "CUSTOMER"


def token_lifetime(role: str | None) -> int:
    """Admins get short sessions (1h), everyone else a day."""
    return ADMIN_TOKEN_TTL_SECONDS if role == ROLE_ADMIN else CUSTOMER_TOKEN_TTL_SECONDS


def refresh_if_near_expiry(
    claims: Dict[str, Any],
    now: int,
    window: int = TOKEN_REFRESH_WINDOW_SECONDS,
) -> Dict[str, Any]:
    """
    Return claims with a pushed-out ``exp`` when the token expires within
    ``window`` seconds of ``now``; otherwise the claims as given.
    Claims without ``exp`` get one. Already expired claims are not revived.
    Never mutates the input.
    """
    exp = claims.get("exp")
    if exp is None:
        return {**claims, "exp": now + token_lifetime(claims.get("role"))}

    remaining = exp - now
    if remaining <= 0 or remaining > window:
        return claims

    return {**claims, "exp": now + token_lifetime(claims.get("role"))}


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


class IdentityService:
    """
    -credential check against the users table
    -signed session tokens carrying user id and role
    -expiry extension for sessions close to running out
    """

    def __init__(self, db: Session | None = None, secret: str = JWT_SECRET, algorithm: str = JWT_ALGORITHM):
        self.repo = UserRepo(db) if db is not None else None
        self.secret = secret
        self.algorithm = algorithm

    def authenticate(self, email: str, password: str) -> UserModel:
        user = self.repo.get_by_email(email)
        if not user or not verify_password(password, user.password):
            raise UnauthenticatedError("Invalid email or password")
        return user

    def login(self, email: str, password: str) -> TokenOut:
        user = self.authenticate(email, password)
        token, claims = self.issue_token(user)
        logger.info(f"User {user.id} logged in as {user.role}")
        return TokenOut(
            access_token=token,
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            user=UserOut.model_validate(user),
        )

    def issue_token(self, user: UserModel, now: int | None = None) -> Tuple[str, Dict[str, Any]]:
        iat = int(now if now is not None else time.time())
        claims = {
            "sub": user.id,
            "username": user.username,
            "email": user.email,
            "role": user.role,
            "iat": iat,
            "exp": iat + token_lifetime(user.role),
        }
        return self.sign(claims), claims

    def sign(self, claims: Dict[str, Any]) -> str:
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise UnauthenticatedError("Session expired") from e
        except jwt.InvalidTokenError as e:
            raise UnauthenticatedError("Invalid session token") from e

    @staticmethod
    def session_user(claims: Dict[str, Any]) -> SessionUser:
        if not claims.get("sub"):
            raise UnauthenticatedError("Invalid session token")
        return SessionUser(
            id=str(claims["sub"]),
            username=claims.get("username", ""),
            email=claims.get("email", ""),
            role=claims.get("role", ROLE_CUSTOMER),
        )
