"""
Stateless identity tokens (HMAC-signed JWT).

Claims layout:
    {"sub": <user id>, "id": <user id>, "email": <email>, "iat": <epoch s>, "exp": <epoch s>}

The server keeps no session record. A token that parses, carries a valid
signature and has not expired (allowing CLOCK_SKEW_SECONDS of drift) is proof of
identity until it expires. Tokens cannot be revoked early.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from skillshare.config import TokenConfig
from skillshare.exceptions import ConfigurationError
from skillshare.logging import get_logger

logger = get_logger("security.tokens")


def derive_signing_key(secret: str | None) -> bytes:
    """
    Derive the HMAC key from the configured secret string.

    Raises:
        ConfigurationError: If the secret is unset or blank.
    """
    if secret is None or not secret.strip():
        raise ConfigurationError(["JWT_SECRET_KEY is not configured"])
    return secret.encode("utf-8")


class TokenService:
    """
    Issues and validates identity tokens.

    Usage:
        tokens = TokenService(TokenConfig(secret="..."))
        token = tokens.issue(user.id, user.email)
        tokens.validate(token)      # True
        tokens.subject_of(token)    # user.id

    validate() and subject_of() share one verification path, so a token is
    either valid with a subject or invalid with none. Neither ever raises.
    """

    def __init__(
        self,
        config: TokenConfig,
        clock: Callable[[], datetime] | None = None,
    ):
        self._config = config
        self._signing_key = derive_signing_key(config.secret)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def lifetime(self) -> timedelta:
        return timedelta(milliseconds=self._config.lifetime_ms)

    def issue(self, subject_id: str, email: str) -> str:
        """Create a signed token for the given identity."""
        issued_at = self._clock()
        expires_at = issued_at + self.lifetime
        claims = {
            "sub": subject_id,
            "id": subject_id,
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(claims, self._signing_key, algorithm=self._config.algorithm)

    def validate(self, token: str | None) -> bool:
        """Return True if the token is well-formed, correctly signed and not expired."""
        return self._verified_claims(token) is not None

    def subject_of(self, token: str | None) -> str | None:
        """Return the token's subject id, or None if the token is not valid."""
        claims = self._verified_claims(token)
        if claims is None:
            return None
        return claims["sub"]

    def _verified_claims(self, token: str | None) -> dict[str, Any] | None:
        if not isinstance(token, str) or not token.strip():
            logger.debug("token_rejected", reason="empty")
            return None

        try:
            claims = jwt.decode(
                token,
                self._signing_key,
                algorithms=[self._config.algorithm],
                options={
                    "leeway": self._config.clock_skew_seconds,
                    "require_exp": True,
                    "require_sub": True,
                },
            )
        except ExpiredSignatureError:
            logger.info("token_rejected", reason="expired")
            return None
        except JWTClaimsError as e:
            logger.info("token_rejected", reason="invalid_claims", error=str(e))
            return None
        except JWTError as e:
            # Malformed input, unsupported algorithm and bad signatures all land here
            logger.info("token_rejected", reason="invalid", error=str(e))
            return None

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.info("token_rejected", reason="missing_subject")
            return None
        return claims


__all__ = ["TokenService", "derive_signing_key"]
