"""
Security configuration validation.

Ensures critical security settings are properly configured
before the application starts.
"""

import os
from dataclasses import dataclass

from skillshare.exceptions import ConfigurationError
from skillshare.logging import get_logger

logger = get_logger("security.validation")

MIN_SECRET_LENGTH = 32

PLACEHOLDER_SECRETS = {
    "change_me",
    "changeme",
    "secret",
    "your-secret-key",
    "jwt-secret",
    "supersecret",
    "development",
    "test",
}


@dataclass
class ValidationResult:
    """Result of security validation."""

    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_jwt_secret(secret: str | None) -> tuple[str | None, str | None]:
    """
    Validate the JWT signing secret.

    An unset or blank secret is an error. Weak secrets still sign tokens, so
    they only produce a warning.

    Returns:
        Tuple of (error_message, warning_message)
    """
    if secret is None or not secret.strip():
        return "JWT_SECRET_KEY is not set", None

    if secret.lower() in PLACEHOLDER_SECRETS:
        return None, f"JWT_SECRET_KEY is a placeholder value ('{secret}')"

    if len(secret) < MIN_SECRET_LENGTH:
        return None, f"JWT_SECRET_KEY should be at least {MIN_SECRET_LENGTH} characters (got {len(secret)})"

    return None, None


def validate_cors_origins(origins: str) -> str | None:
    """Return a warning for permissive CORS origins, if any."""
    origin_list = [o.strip() for o in origins.split(",")]

    if "*" in origin_list:
        return "CORS allows all origins (*) - not recommended for production"

    localhost_patterns = ["localhost", "127.0.0.1", "0.0.0.0"]
    has_localhost = any(
        any(pattern in origin for pattern in localhost_patterns) for origin in origin_list
    )
    if has_localhost and os.getenv("ENV") == "production":
        return "CORS includes localhost origins - verify this is intentional in production"

    return None


def validate_database_url(url: str) -> str | None:
    """Return a warning for a questionable database URL, if any."""
    if url.startswith("sqlite") and os.getenv("ENV") == "production":
        return "Using SQLite in production - consider PostgreSQL"
    return None


def validate_security_config(
    jwt_secret: str | None,
    cors_origins: str | None = None,
    database_url: str | None = None,
    strict: bool = False,
) -> ValidationResult:
    """
    Validate all security configuration.

    Args:
        jwt_secret: JWT signing secret
        cors_origins: CORS allowed origins
        database_url: Database connection URL
        strict: If True, treat warnings as errors

    Returns:
        ValidationResult with errors and warnings

    Raises:
        ConfigurationError: If any error is found (or any warning, when strict)
    """
    errors: list[str] = []
    warnings: list[str] = []

    error, warning = validate_jwt_secret(jwt_secret)
    if error:
        errors.append(error)
    if warning:
        warnings.append(warning)

    if cors_origins:
        warning = validate_cors_origins(cors_origins)
        if warning:
            warnings.append(warning)

    if database_url:
        warning = validate_database_url(database_url)
        if warning:
            warnings.append(warning)

    for error in errors:
        logger.error("config_validation_error", error=error)
    for warning in warnings:
        logger.warning("config_validation_warning", warning=warning)

    if strict and (errors or warnings):
        raise ConfigurationError(errors + warnings)
    if errors:
        raise ConfigurationError(errors)

    return ValidationResult(valid=True, errors=errors, warnings=warnings)
