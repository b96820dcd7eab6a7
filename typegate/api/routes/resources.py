"""Resource Routes: validate and save records of a registered type.

Invariants:
    - Unknown type -> 404 envelope
    - Body must be a JSON object -> otherwise 400 envelope
    - Validation messages -> 400, alerts.error carries every message, data the submitted record
    - Persisted -> 201 with the saved record; validate-only types -> 200 with the record
    - Application errors propagate to the global error handlers
"""

from fastapi import Request, status

from typegate.api.route_controller import RouteSettings, add_alert
from typegate.config import Settings
from typegate.core.errors import ResourceTypeNotFoundError
from typegate.infrastructure.resource_repository import SqlResourceRepository
from typegate.services.resource_model import ResourceModel

PREFIX = "/api/v1/resources"


def _resource_model(request: Request, type_name: str) -> ResourceModel | None:
    try:
        return request.app.state.catalog.model(
            type_name, request.app.state.field_types, SqlResourceRepository(),
        )
    except ResourceTypeNotFoundError:
        return None


async def _read_record(request: Request) -> dict | None:
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        add_alert(request, "error", "Request body must be a JSON object.")
        return None
    return body


def _bad_request() -> tuple[dict, int]:
    return {
        "title": "Bad request",
        "description": "The submitted resource could not be read.",
    }, status.HTTP_400_BAD_REQUEST


async def create_resource(request: Request):
    model = _resource_model(request, request.path_params["type_name"])
    if model is None:
        return None
    record = await _read_record(request)
    if record is None:
        return _bad_request()

    result = await model.validate_and_save(record)
    if result.errors:
        for message in result.errors:
            add_alert(request, "error", message)
        return result.record, status.HTTP_400_BAD_REQUEST
    if result.persisted:
        return result.record, status.HTTP_201_CREATED
    return result.record, status.HTTP_200_OK


async def validate_resource(request: Request):
    model = _resource_model(request, request.path_params["type_name"])
    if model is None:
        return None
    record = await _read_record(request)
    if record is None:
        return _bad_request()

    errors = await model.validate(record)
    return {"valid": not errors, "errors": errors}


def routes(settings: Settings) -> list[RouteSettings]:
    return [
        RouteSettings(
            PREFIX + "/{type_name}", methods=["POST"],
            callback=create_resource,
            access=settings.resources_write_access, name="create_resource",
        ),
        RouteSettings(
            PREFIX + "/{type_name}/validate", methods=["POST"],
            callback=validate_resource,
            access=settings.resources_read_access, name="validate_resource",
        ),
    ]
