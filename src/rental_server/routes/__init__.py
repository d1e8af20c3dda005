"""Route registration — mounts all routers under ``/api``."""

from fastapi import FastAPI

from rental_server.routes.client import router as client_router
from rental_server.routes.objects import router as objects_router
from rental_server.routes.questions import router as questions_router
from rental_server.routes.responses import router as responses_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the API prefix."""
    app.include_router(questions_router, prefix=API_PREFIX)
    app.include_router(objects_router, prefix=API_PREFIX)
    app.include_router(responses_router, prefix=API_PREFIX)
    app.include_router(client_router, prefix=API_PREFIX)
