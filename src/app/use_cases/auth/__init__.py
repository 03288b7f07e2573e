"""
Authentication Use Cases
"""

from .dtos import Identity, SignInResponse
from .google_sign_in_use_case import GoogleSignInUseCase
from .resolve_identity_use_case import ResolveIdentityUseCase

__all__ = [
    "GoogleSignInUseCase",
    "ResolveIdentityUseCase",
    "Identity",
    "SignInResponse",
]
