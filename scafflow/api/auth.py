"""Authentication endpoints"""

import logging
from fastapi import APIRouter, Depends, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.database import get_db
from scafflow.config import settings
from scafflow.exceptions import Unauthenticated, NotFound
from scafflow.schemas.auth import (
    LoginRequest,
    SignupRequest,
    TokenResponse,
    RefreshTokenResponse,
    UserInfo,
    UserResponse
)
from scafflow.services.auth_service import REFRESH_TOKEN, AuthService
from scafflow.services.ownership_policy import Identity
from scafflow.services.redis_service import RedisService
from scafflow.services.user_service import UserService
from scafflow.api.dependencies import get_identity
from scafflow.api.errors import too_many_requests_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])
security = HTTPBearer(auto_error=False)


def _token_response(user) -> TokenResponse:
    """Issue an access/refresh token pair for a user"""
    access_token = AuthService.create_access_token(
        user_id=str(user.id),
        email=user.email,
        role=user.role
    )
    refresh_token = AuthService.create_refresh_token(user_id=str(user.id))

    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="Bearer",
        expires_in=settings.jwt_expiration_hours * 3600,
        user=UserInfo.model_validate(user)
    )


def _require_credentials(credentials: HTTPAuthorizationCredentials) -> str:
    if credentials is None:
        raise Unauthenticated("Authorization header missing")
    return credentials.credentials


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_data: SignupRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create an account and return JWT tokens

    - **name**: Display name
    - **email**: User email address
    - **password**: At least 8 characters with upper, lower and a digit
    - **role**: site_engineer (default), architect or vendor
    """
    user = await UserService(db).signup(signup_data)
    return _token_response(user)


@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_200_OK)
async def login(
    login_data: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Authenticate user and return JWT tokens

    - **email**: User email address
    - **password**: User password

    Returns access token and refresh token with user information
    """
    redis_service = RedisService()
    client_ip = request.client.host if request.client else "unknown"

    if await redis_service.is_login_throttled(client_ip):
        logger.warning(f"Login throttled for {client_ip}")
        return too_many_requests_error(
            detail="Maximum login attempts exceeded. Please try again later.",
            instance=request.url.path
        )

    user = await UserService(db).authenticate_credentials(login_data.email, login_data.password)

    if not user:
        await redis_service.record_failed_login(client_ip)
        # Generic message: don't reveal which field failed
        raise Unauthenticated("Invalid email or password")

    await redis_service.clear_failed_logins(client_ip)
    return _token_response(user)


@router.post("/refresh", response_model=RefreshTokenResponse, status_code=status.HTTP_200_OK)
async def refresh_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db)
):
    """
    Refresh access token using refresh token

    - **Authorization**: Bearer {refresh_token}

    Returns new access token
    """
    token = _require_credentials(credentials)

    payload = AuthService.validate_token(token, REFRESH_TOKEN)
    if not payload:
        raise Unauthenticated("Invalid or expired refresh token")

    user = await UserService(db).get_by_id(AuthService.subject_id(payload))
    if not user:
        raise Unauthenticated("User not found")

    access_token = AuthService.create_access_token(
        user_id=str(user.id),
        email=user.email,
        role=user.role
    )

    return RefreshTokenResponse(
        access_token=access_token,
        token_type="Bearer",
        expires_in=settings.jwt_expiration_hours * 3600
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    credentials: HTTPAuthorizationCredentials = Depends(security)
):
    """
    Logout user by revoking the access token until it expires

    - **Authorization**: Bearer {access_token}

    Returns 204 No Content on success
    """
    token = _require_credentials(credentials)

    payload = AuthService.decode_token(token)
    if not payload:
        # Invalid tokens are already unusable (idempotent operation)
        return

    await RedisService().revoke_token(token, payload["exp"])


@router.get("/me", response_model=UserResponse, status_code=status.HTTP_200_OK)
async def me(
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db)
):
    """Return the authenticated user's profile"""
    user = await UserService(db).get_by_id(identity.id)
    if not user:
        raise NotFound("User", identity.id)
    return UserResponse.model_validate(user)
