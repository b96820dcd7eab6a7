"""Type Routes: read-only view of the type catalog.

Invariants:
    - GET /api/v1/types lists registered type names
    - GET /api/v1/types/{type_name} returns the schema, 404 envelope if unknown
"""

from fastapi import Request

from typegate.api.route_controller import RouteSettings
from typegate.config import Settings
from typegate.core.errors import ResourceTypeNotFoundError

PREFIX = "/api/v1/types"


async def list_types(request: Request):
    return {"types": request.app.state.catalog.names()}


async def get_type(request: Request):
    type_name = request.path_params["type_name"]
    try:
        schema = request.app.state.catalog.get(type_name)
    except ResourceTypeNotFoundError:
        return None
    return {
        "name": type_name,
        "schema": schema.model_dump(by_alias=True, exclude_none=True),
    }


def routes(settings: Settings) -> list[RouteSettings]:
    return [
        RouteSettings(
            PREFIX, callback=list_types,
            access=settings.resources_read_access, name="list_types",
        ),
        RouteSettings(
            PREFIX + "/{type_name}", callback=get_type,
            access=settings.resources_read_access, name="get_type",
        ),
    ]
