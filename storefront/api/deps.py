# storefront/api/deps.py
import time

from fastapi import Depends, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.domain.errors import ForbiddenError, UnauthenticatedError
from storefront.domain.schemas import SessionUser
from storefront.services.asset_client import AssetClient
from storefront.services.identity_service import IdentityService, refresh_if_near_expiry
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

REFRESHED_TOKEN_HEADER = "X-Refreshed-Token"

_bearer = HTTPBearer(auto_error=False)


def get_asset_client() -> AssetClient:
    return AssetClient()


def get_identity() -> IdentityService:
    return IdentityService()


def get_current_user(
    response: Response,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    identity: IdentityService = Depends(get_identity),
) -> SessionUser:
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Unauthorized")

    claims = identity.decode_token(credentials.credentials)
    refreshed = refresh_if_near_expiry(claims, int(time.time()))
    if refreshed is not claims:
        logger.info(f"Extending session of user {claims.get('sub')}")
        response.headers[REFRESHED_TOKEN_HEADER] = identity.sign(refreshed)

    return identity.session_user(refreshed)


def require_role(role: str):
    def _check(user: SessionUser = Depends(get_current_user)) -> SessionUser:
        if user.role != role:
            raise ForbiddenError("Forbidden")
        return user

    return _check
