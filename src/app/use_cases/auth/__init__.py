"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .register_use_case import RegisterUseCase
from .dtos import (
    LoginResponse,
    RefreshTokenResponse,
    RegisterCommand,
    RegisterResponse,
    UserInfo,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    "RegisterUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "LoginResponse",
    "RefreshTokenResponse",
    "RegisterResponse",
    # DTOs - Nested Models
    "UserInfo",
]
