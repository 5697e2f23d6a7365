"""
Security module for SkillShare.

Provides:
- Token issuance and validation (JWT, HMAC)
- Password hashing (Argon2)
- Authorization gate (path policy + bearer token resolution)
- Configuration validation
"""

from .gate import (
    DEFAULT_POLICY,
    Access,
    AccessRule,
    AuthorizationGate,
    ensure_owner,
    extract_bearer_token,
)
from .passwords import PasswordHasher
from .tokens import TokenService, derive_signing_key
from .validation import ValidationResult, validate_security_config

__all__ = [
    "Access",
    "AccessRule",
    "AuthorizationGate",
    "DEFAULT_POLICY",
    "ensure_owner",
    "extract_bearer_token",
    "PasswordHasher",
    "TokenService",
    "derive_signing_key",
    "ValidationResult",
    "validate_security_config",
]
