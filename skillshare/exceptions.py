"""
Domain exception hierarchy.

Every error the identity and social-graph layer can surface derives from
SkillShareError and carries the HTTP status the API layer maps it to.
ConfigurationError is the exception: it is raised at startup or first use of the
token service and is never translated into a per-request response.
"""


class SkillShareError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(SkillShareError):
    status_code = 404
    default_message = "Resource not found"

    def __init__(self, resource: str = "Resource", resource_id: str | None = None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class InvalidCredentialError(SkillShareError):
    status_code = 401
    default_message = "Invalid credentials"


class DuplicateEmailError(SkillShareError):
    status_code = 409
    default_message = "Email already registered"


class SelfFollowError(SkillShareError):
    status_code = 400
    default_message = "Users cannot follow themselves"


class UnauthorizedError(SkillShareError):
    status_code = 401
    default_message = "Not authenticated"


class ForbiddenError(SkillShareError):
    status_code = 403
    default_message = "Not authorized to access this resource"


class ConflictError(SkillShareError):
    """Raised when optimistic version checks keep failing after all retries."""

    status_code = 409
    default_message = "Resource was modified concurrently, please retry"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid. Fatal."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        message = "Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
        super().__init__(message)


__all__ = [
    "SkillShareError",
    "NotFoundError",
    "InvalidCredentialError",
    "DuplicateEmailError",
    "SelfFollowError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "ConfigurationError",
]
