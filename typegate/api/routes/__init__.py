"""Route Modules: one file per resource/concern.

Invariants:
    - Each module exposes routes(settings) -> list[RouteSettings] (or an APIRouter)
    - Routes never contain business logic (delegate to services)
"""
