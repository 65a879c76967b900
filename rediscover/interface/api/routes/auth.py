"""Authentication routes."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from rediscover.application.usecase.auth import (
    AuthenticateRequest,
    AuthenticateRequestUseCase,
    LoginRequest,
    LoginResponse,
    LoginUseCase,
    ProviderLoginRequest,
    ProviderLoginResponse,
    ProviderLoginUseCase,
    RegisterRequest,
    RegisterResponse,
    RegisterUseCase,
)
from rediscover.application.usecase.user import (
    GetUserRequest,
    GetUserResponse,
    GetUserUseCase,
)
from rediscover.domain.error import (
    EmailTakenError,
    InvalidCredentialsError,
    InvalidInviteError,
    NotFoundError,
    ProviderAuthFailedError,
    UnauthorizedError,
)
from rediscover.domain.service import AuthService
from rediscover.domain.value import AuthProvider, UnauthorizedReason

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/auth", tags=["authentication"], route_class=DishkaRoute)


class RegisterAPIRequest(BaseModel):
    """API request for password registration."""

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6)
    code: str = Field(min_length=1)


class LoginAPIRequest(BaseModel):
    """API request for password login."""

    email: str
    password: str


class GoogleCallbackRequest(BaseModel):
    """Authorization code posted back by the frontend after Google consent."""

    code: str = Field(min_length=1)


def _unauthorized(e: UnauthorizedError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=str(e),
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post(
    "/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    request: RegisterAPIRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> RegisterResponse:
    """Register with email, password and invite code.

    Raises:
        HTTPException: 409 if the email is registered, 400 if the invite
            does not match
    """
    try:
        return await register_use_case.execute(
            RegisterRequest(
                email=request.email, password=request.password, code=request.code
            )
        )
    except EmailTakenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except InvalidInviteError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginAPIRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> LoginResponse:
    """Log in with email and password."""
    try:
        return await login_use_case.execute(
            LoginRequest(email=request.email, password=request.password)
        )
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))


@router.get("/google")
async def initiate_google_login(
    auth_service: FromDishka[AuthService],
) -> RedirectResponse:
    """Redirect the browser to Google's consent screen."""
    state = secrets.token_urlsafe(32)
    try:
        url = auth_service.initiate_login(AuthProvider.GOOGLE, state)
    except ProviderAuthFailedError as e:
        logger.error(f"Failed to initiate Google login: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Google authentication failed",
        )
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.post("/google", response_model=ProviderLoginResponse)
async def google_callback(
    request: GoogleCallbackRequest,
    provider_login_use_case: FromDishka[ProviderLoginUseCase],
) -> ProviderLoginResponse:
    """Complete Google sign-in with the authorization code.

    Creates the account on first sign-in, merges onto an existing account
    with the same email, or signs in the already-linked account.
    """
    try:
        return await provider_login_use_case.execute(
            ProviderLoginRequest(provider=AuthProvider.GOOGLE, code=request.code)
        )
    except ProviderAuthFailedError as e:
        logger.warning(f"Google login failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Google authentication failed",
        )


@router.get("/me", response_model=GetUserResponse)
async def get_current_user(
    authenticate_use_case: FromDishka[AuthenticateRequestUseCase],
    get_user_use_case: FromDishka[GetUserUseCase],
    authorization: str | None = Header(default=None),
) -> GetUserResponse:
    """Get the user the session token belongs to.

    The Authorization header may carry the token with or without a
    `Bearer ` prefix.
    """
    try:
        user = await authenticate_use_case.execute(
            AuthenticateRequest(authorization=authorization)
        )
    except UnauthorizedError as e:
        raise _unauthorized(e)

    try:
        return await get_user_use_case.execute(GetUserRequest(user_id=user.id))
    except NotFoundError:
        raise _unauthorized(UnauthorizedError(UnauthorizedReason.USER_NOT_FOUND))
