"""FastAPI application factory, error mapping and lifespan."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meterpay import __version__
from meterpay.api import create_api_router
from meterpay.core.config import Settings, get_settings
from meterpay.core.container import ApplicationContainer
from meterpay.core.log_config import configure_logging
from meterpay.infrastructure.database.session import dispose_engine, init_db
from meterpay.modules.accounts import InvalidCredentialsError
from meterpay.modules.common.exceptions import (
    ConflictError,
    InputValidationError,
    InsufficientFundsError,
    MeterPayError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: tuple[tuple[type[MeterPayError], int], ...] = (
    (InputValidationError, status.HTTP_400_BAD_REQUEST),
    (InsufficientFundsError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
)


def _status_for(exc: MeterPayError) -> int:
    for error_type, code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def meterpay_error_handler(request: Request, exc: MeterPayError) -> JSONResponse:
    code = _status_for(exc)
    body = {"error": exc.code, "detail": exc.message}
    field = getattr(exc, "field", None)
    if field:
        body["field"] = field
    logger.info("%s %s -> %s %s", request.method, request.url.path, code, exc.code)
    return JSONResponse(status_code=code, content=body)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    container.init_infrastructure()
    if not container.settings.uses_memory_storage:
        await init_db()
    logger.info(
        "%s %s started (storage=%s, simulate_failures=%s)",
        container.settings.project_name,
        __version__,
        container.settings.storage.backend,
        container.settings.payments.simulate_failures,
    )
    yield
    if not container.settings.uses_memory_storage:
        await dispose_engine()


def create_app(settings: Optional[Settings] = None, container: Optional[ApplicationContainer] = None) -> FastAPI:
    settings = settings or (container.settings if container else get_settings())
    container = container or ApplicationContainer.from_settings(settings)
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Prepaid meter recharge, wallet and bill payment service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MeterPayError, meterpay_error_handler)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
