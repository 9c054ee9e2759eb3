from fastapi import FastAPI

from .auth import router as auth_router
from .events import router as events_router
from .notifications import router as notifications_router
from .registrations import router as registrations_router
from .verification import router as verification_router


def register_routes(app: FastAPI) -> None:
    """Registra todos los routers de la API en la aplicación FastAPI."""

    app.include_router(auth_router)
    app.include_router(events_router)
    app.include_router(registrations_router)
    app.include_router(verification_router)
    app.include_router(notifications_router)
