"""
Authorization gate.

Runs before any handler. Resolves the bearer token on the request (if any) and
applies the path policy:

    POST           /auth/login, /auth/register           public
    GET            /posts/**, /users/**, /media/**        public
    GET            /users/{id}/private                    caller must be {id}
    POST/PUT/DEL   /posts/**, /media/**, /learning-plans/**  authenticated
    anything else                                         authenticated

A request that carries a credential which fails validation is rejected even on
public paths. No credential and a bad credential are not the same thing.

Ownership of individual resources (a user's own comment, post or profile) is
checked by each write operation with ensure_owner(), not here.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from skillshare.exceptions import ForbiddenError, UnauthorizedError
from skillshare.logging import get_logger

from .tokens import TokenService

logger = get_logger("security.gate")


class Access(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    # Authenticated, and the {id} path segment must be the caller's own id
    SELF = "self"


def _compile(pattern: str) -> re.Pattern[str]:
    """Translate an ant-style path pattern into a regex."""
    regex = ""
    if pattern.endswith("/**"):
        pattern, tail = pattern[:-3], r"(?:/.*)?"
    else:
        tail = ""
    for segment in pattern.strip("/").split("/"):
        if not segment:
            continue
        if segment == "*":
            regex += r"/[^/]+"
        elif segment.startswith("{") and segment.endswith("}"):
            regex += rf"/(?P<{segment[1:-1]}>[^/]+)"
        else:
            regex += "/" + re.escape(segment)
    return re.compile(f"^{regex}{tail}$")


@dataclass(frozen=True)
class AccessRule:
    """Access requirement for a set of methods on a path pattern. methods=None matches any."""

    pattern: str
    access: Access
    methods: frozenset[str] | None = None
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_regex", _compile(self.pattern))

    def match(self, method: str, path: str) -> dict[str, str] | None:
        """Return captured path parameters if the rule applies, else None."""
        if self.methods is not None and method.upper() not in self.methods:
            return None
        found = self._regex.match(path)
        return found.groupdict() if found else None


def rule(pattern: str, access: Access, *methods: str) -> AccessRule:
    return AccessRule(pattern, access, frozenset(methods) if methods else None)


WRITE_METHODS = ("POST", "PUT", "DELETE")

# First match wins; the fallback for unmatched requests is AUTHENTICATED.
DEFAULT_POLICY: tuple[AccessRule, ...] = (
    rule("/**", Access.PUBLIC, "OPTIONS"),
    rule("/auth/login", Access.PUBLIC, "POST"),
    rule("/auth/register", Access.PUBLIC, "POST"),
    rule("/users/{id}/private", Access.SELF, "GET"),
    rule("/posts/**", Access.PUBLIC, "GET"),
    rule("/users/**", Access.PUBLIC, "GET"),
    rule("/media/**", Access.PUBLIC, "GET"),
    rule("/posts/**", Access.AUTHENTICATED, *WRITE_METHODS),
    rule("/media/**", Access.AUTHENTICATED, *WRITE_METHODS),
    rule("/learning-plans/**", Access.AUTHENTICATED),
)


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Pull the token out of an Authorization header value.

    Returns None when no credential was sent at all.

    Raises:
        UnauthorizedError: If a credential was sent with a scheme other than Bearer.
    """
    if authorization is None or not authorization.strip():
        return None
    scheme, _, value = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        raise UnauthorizedError("Unsupported authorization scheme")
    return value.strip()


def ensure_owner(subject_id: str, owner_id: str, resource: str = "resource") -> None:
    """Reject with ForbiddenError unless the caller owns the resource."""
    if subject_id != owner_id:
        logger.warning("ownership_check_failed", resource=resource, subject_id=subject_id)
        raise ForbiddenError(f"Not authorized to modify this {resource}")


class AuthorizationGate:
    """
    Per-request gate: token in, authenticated subject id (or None) out.

    Usage:
        gate = AuthorizationGate(token_service, prefix="/api")
        subject_id = gate.authorize("GET", "/api/users/42/private", "Bearer eyJ...")
    """

    def __init__(
        self,
        tokens: TokenService,
        rules: Iterable[AccessRule] = DEFAULT_POLICY,
        prefix: str = "",
    ):
        self._tokens = tokens
        self._rules = tuple(rules)
        self._prefix = prefix.rstrip("/")

    def _normalize(self, path: str) -> str:
        if self._prefix and (path == self._prefix or path.startswith(self._prefix + "/")):
            path = path[len(self._prefix):]
        if len(path) > 1:
            path = path.rstrip("/")
        return path or "/"

    def resolve_rule(self, method: str, path: str) -> tuple[Access, dict[str, str]]:
        """Find the access requirement for a request path."""
        normalized = self._normalize(path)
        for access_rule in self._rules:
            params = access_rule.match(method, normalized)
            if params is not None:
                return access_rule.access, params
        return Access.AUTHENTICATED, {}

    def authorize(self, method: str, path: str, authorization: str | None) -> str | None:
        """
        Decide whether a request may proceed.

        Returns:
            The authenticated subject id, or None for an anonymous request to a
            public path.

        Raises:
            UnauthorizedError: Bad credential, or no credential on a protected path.
            ForbiddenError: Valid credential on a path owned by another identity.
        """
        token = extract_bearer_token(authorization)

        subject_id: str | None = None
        if token is not None:
            subject_id = self._tokens.subject_of(token)
            if subject_id is None:
                raise UnauthorizedError("Invalid or expired token")

        access, params = self.resolve_rule(method, path)
        if access is Access.PUBLIC:
            return subject_id

        if subject_id is None:
            raise UnauthorizedError()

        if access is Access.SELF and params.get("id") != subject_id:
            logger.warning("self_access_denied", path=path, subject_id=subject_id)
            raise ForbiddenError()

        return subject_id


__all__ = [
    "Access",
    "AccessRule",
    "AuthorizationGate",
    "DEFAULT_POLICY",
    "ensure_owner",
    "extract_bearer_token",
    "rule",
]
