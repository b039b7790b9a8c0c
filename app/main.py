import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from . import config
from .errors import DomainError, ErrorCode
from .routers import auth, events
from .services.auth_service import AuthService
from .services.event_service import EventService
from .services.seed import seed_sample_events

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ErrorCode.EVENT_NOT_FOUND: 404,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.EMAIL_ALREADY_REGISTERED: 409,
}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS_CODES.get(exc.code, 400),
        content={"detail": exc.message, "code": exc.code.value},
    )


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    # Raised when a merged update no longer forms a valid event
    return JSONResponse(
        status_code=422, content={"detail": jsonable_encoder(exc.errors())}
    )


def create_app(
    event_service: Optional[EventService] = None,
    auth_service: Optional[AuthService] = None,
    seed: bool = config.SEED_SAMPLE_EVENTS,
) -> FastAPI:
    """Build the app around one EventService and one AuthService"""
    app = FastAPI(
        title="Event Guide API",
        version="1.0.0",
        description="Browse, filter, like and attend local events",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if event_service is None:
        event_service = EventService()
        if seed:
            seed_sample_events(event_service)

    app.state.event_service = event_service
    app.state.auth_service = auth_service or AuthService()

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)

    app.include_router(auth.router)
    app.include_router(events.router)

    @app.get("/")
    def read_root():
        return {"message": "Event Guide API", "status": "running"}

    return app


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
