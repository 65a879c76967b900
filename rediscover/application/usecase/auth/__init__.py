"""Authentication use cases."""

from .authenticate import AuthenticateRequest, AuthenticateRequestUseCase
from .login import LoginRequest, LoginResponse, LoginUseCase
from .provider_login import (
    ProviderLoginRequest,
    ProviderLoginResponse,
    ProviderLoginUseCase,
)
from .register import RegisterRequest, RegisterResponse, RegisterUseCase, SessionUser

__all__ = [
    "AuthenticateRequest",
    "AuthenticateRequestUseCase",
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
    "ProviderLoginRequest",
    "ProviderLoginResponse",
    "ProviderLoginUseCase",
    "RegisterRequest",
    "RegisterResponse",
    "RegisterUseCase",
    "SessionUser",
]
