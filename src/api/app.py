import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.depends import engine

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("app.request")


def _error_body(code: str, message: str) -> dict:
    return {"success": False, "error": message, "code": code}


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(
        f"Client error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} {exc.base_error.message}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.base_error.code, exc.base_error.message),
    )


def server_error_handler(production: bool):
    async def handle_server_error(request: Request, exc: ServerError):
        logger.error(
            f"Server error on {request.method} {request.url.path}: "
            f"{exc.base_error.code} {exc.base_error.message}"
        )
        message = "Internal server error" if production else exc.base_error.message
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.base_error.code, message),
        )

    return handle_server_error


async def log_requests(request: Request, call_next):
    start = time.monotonic()
    response = await call_next(request)
    latency_ms = int((time.monotonic() - start) * 1000)
    request_logger.info(
        f"{request.method} {request.url.path} {response.status_code} {latency_ms}ms"
    )
    return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await engine.dispose()
    logger.info("Database engine disposed")


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL.upper())

    app = FastAPI(title="Onboarding API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    from src.api.routes import (
        auth,
        companies,
        documents,
        health_check,
        integrations,
        invitations,
        onboarding,
        policies,
        resumes,
        users,
    )

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(users.router, prefix=prefix, tags=["Users"])
    app.include_router(companies.router, prefix=prefix, tags=["Companies"])
    app.include_router(invitations.router, prefix=prefix, tags=["Invitations"])
    app.include_router(onboarding.router, prefix=prefix, tags=["Onboarding"])
    app.include_router(documents.router, prefix=prefix, tags=["Documents"])
    app.include_router(policies.router, prefix=prefix, tags=["Policies"])
    app.include_router(resumes.router, prefix=prefix, tags=["Resumes"])
    app.include_router(integrations.router, prefix=prefix, tags=["Integrations"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(
        ServerError, server_error_handler(ApplicationConfig.is_production())
    )

    return app
