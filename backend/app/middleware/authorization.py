"""
Middleware that runs the authorization gate before any route handler.

On success the authenticated subject id (or None for an anonymous request to a
public path) is stored on request.state.subject_id. Rejections never reach the
router: they are answered here with the same payload shape the exception
handlers use.
"""

from starlette.datastructures import Headers
from starlette.responses import JSONResponse

from skillshare.exceptions import ForbiddenError, UnauthorizedError
from skillshare.logging import bind_context, get_logger
from skillshare.security import AuthorizationGate

logger = get_logger("backend.gate")


class AuthorizationMiddleware:
    def __init__(self, app, gate: AuthorizationGate):
        self.app = app
        self.gate = gate

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "")
        path = scope.get("path", "")
        headers = Headers(scope=scope)

        try:
            subject_id = self.gate.authorize(method, path, headers.get("Authorization"))
        except (UnauthorizedError, ForbiddenError) as e:
            logger.info(
                "request_rejected",
                method=method,
                path=path,
                status_code=e.status_code,
                reason=e.message,
            )
            response_headers = {"WWW-Authenticate": "Bearer"} if e.status_code == 401 else None
            response = JSONResponse(
                status_code=e.status_code,
                content={"detail": e.message, "status_code": e.status_code},
                headers=response_headers,
            )
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})["subject_id"] = subject_id
        if subject_id is not None:
            bind_context(user_id=subject_id)

        await self.app(scope, receive, send)
