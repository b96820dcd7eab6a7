"""API Layer: FastAPI routes, route controller and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Resource endpoints answer with the status envelope of route_controller
"""
