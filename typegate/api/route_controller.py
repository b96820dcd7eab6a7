"""Route Controller: access-gated dispatch of configured routes into a status envelope.

Invariants:
    - A route serves either static content or a callback, never both
    - access is a bool or a callable(request) -> bool (sync or async); anything
      else, or a missing access setting, denies (403)
    - Callback returning None -> 404 envelope
    - Envelope: {"status": {"code": n}, "alerts"?: {level: [msg]}, "data"?: content}
    - Alerts are collected per request through add_alert() (request.state.alerts)
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

AccessCheck = bool | Callable[[Request], bool | Awaitable[bool]]
RouteCallback = Callable[[Request], Awaitable[Any]]


@dataclass
class RouteSettings:
    """One configured route."""
    path: str
    methods: list[str] = field(default_factory=lambda: ["GET"])
    content: Any = None
    callback: RouteCallback | None = None
    access: AccessCheck | None = None
    name: str | None = None

    def __post_init__(self):
        if self.content is not None and self.callback is not None:
            raise ValueError(f"Route {self.path} sets both content and callback")


def add_alert(request: Request, level: str, message: str) -> None:
    """Queue a message for the alerts section of this request's envelope."""
    alerts = getattr(request.state, "alerts", None)
    if alerts is None:
        alerts = {}
        request.state.alerts = alerts
    alerts.setdefault(level, []).append(message)


class RouteController:
    """Registers one RouteSettings on the app and serves it."""

    def __init__(self, app: FastAPI, settings: RouteSettings):
        self.settings = settings
        app.add_api_route(
            settings.path, self.handle,
            methods=settings.methods, name=settings.name,
        )

    async def handle(self, request: Request) -> JSONResponse:
        if not await self.access(request):
            return self.forbidden(request)

        if self.settings.content is not None:
            return self.respond(request, self.settings.content)

        if self.settings.callback is not None:
            result = await self.settings.callback(request)
            code = status.HTTP_200_OK
            if isinstance(result, tuple):
                result, code = result
            if result is None:
                return self.not_found(request)
            return self.respond(request, result, code)

        return self.not_found(request)

    async def access(self, request: Request) -> bool:
        check = self.settings.access
        if isinstance(check, bool):
            return check
        if callable(check):
            allowed = check(request)
            if inspect.isawaitable(allowed):
                allowed = await allowed
            return bool(allowed)
        # Default to deny.
        return False

    def respond(
        self, request: Request, content: Any, code: int = status.HTTP_200_OK,
    ) -> JSONResponse:
        payload: dict[str, Any] = {"status": {"code": code}}
        alerts = getattr(request.state, "alerts", None)
        if alerts:
            payload["alerts"] = alerts
        if content is not None:
            payload["data"] = content
        return JSONResponse(status_code=code, content=jsonable_encoder(payload))

    def not_found(self, request: Request) -> JSONResponse:
        return self.respond(request, {
            "title": "Page not found",
            "description": "The page you're looking for wasn't found.",
        }, status.HTTP_404_NOT_FOUND)

    def forbidden(self, request: Request) -> JSONResponse:
        logger.info(
            f"Access denied on {request.url.path}",
            extra={"path": request.url.path},
        )
        return self.respond(request, {
            "title": "Forbidden",
            "description": "You don't have permission to access this page.",
        }, status.HTTP_403_FORBIDDEN)


def mount_routes(app: FastAPI, routes: list[RouteSettings]) -> list[RouteController]:
    """Register every route explicitly, in order."""
    return [RouteController(app, settings) for settings in routes]
