# app/main.py
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging_config import logger, setup_logging
from app.core.settings import Settings, get_settings
from app.middleware import BodySizeLimitMiddleware
from app.routers import submit
from app.services.storage import build_storage


# --- AWS guard: S3 backend zonder credentials heeft geen zin ---
def assert_aws_credentials(settings: Settings) -> None:
    if settings.STORAGE_BACKEND.lower() != "s3":
        return
    if not settings.has_aws_credentials():
        logger.error("missing_aws_credentials")
        raise RuntimeError("Missing AWS credentials in environment")


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Onboarding Intake", version="0.1.0")
    app.state.settings = settings
    app.state.storage = build_storage(settings)

    # ----------------------------------------------------
    # Foutvorm: altijd {"error": ...}
    # ----------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors and errors[0].get("type") == "json_invalid":
            message = "Invalid JSON body"
        else:
            message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        logger.warning("request_invalid", path=request.url.path, error=message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.on_event("startup")
    def _startup_guard():
        # Draait bij app startup (niet bij import)
        assert_aws_credentials(settings)
        logger.info("startup", service=settings.APP_NAME, storage=settings.STORAGE_BACKEND)

    # ----------------------------------------------------
    # Health
    # ----------------------------------------------------
    @app.get("/health", include_in_schema=True)
    def health() -> dict:
        return {"status": "ok"}

    # ----------------------------------------------------
    # Logging middleware
    # ----------------------------------------------------
    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        start = time.time()
        client_ip = request.client.host if request.client else "unknown"

        bound_logger = logger.bind(
            ip=client_ip,
            endpoint=str(request.url.path),
            method=request.method,
        )

        bound_logger.info("request_started")
        response = await call_next(request)
        latency_ms = round((time.time() - start) * 1000, 2)

        bound_logger.bind(status_code=response.status_code, latency_ms=latency_ms).info(
            "request_finished"
        )
        return response

    # ----------------------------------------------------
    # Middleware
    # ----------------------------------------------------
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ----------------------------------------------------
    # Routers
    # ----------------------------------------------------
    app.include_router(submit.router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=get_settings().PORT)
