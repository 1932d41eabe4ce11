"""FastAPI application entrypoint. No business logic; only wiring, middleware and error handlers."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import router as api_router
from app.core.config import Settings, settings
from app.core.errors import ErrorCode, error_detail

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


async def log_requests(request: Request, call_next):
    """Log incoming requests and their outcomes."""
    logger.info("request %s %s", request.method, request.url.path)
    response = await call_next(request)
    logger.info(
        "response %s %s status %s",
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = error_detail(ErrorCode.VALIDATION_ERROR, "Request validation failed")
    body["errors"] = jsonable_encoder(exc.errors())
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": body})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything unanticipated becomes a 500 without leaking internals to the client."""
    logger.exception("error handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": error_detail(ErrorCode.INTERNAL_ERROR, "Internal server error")},
    )


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application; routes are mounted under API_PREFIX."""
    app_settings = app_settings or settings
    application = FastAPI(
        title="Users & Groups API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if app_settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.middleware("http")(log_requests)
    application.add_exception_handler(RequestValidationError, handle_validation_error)
    application.add_exception_handler(Exception, handle_unexpected_error)
    application.include_router(api_router, prefix=app_settings.API_PREFIX)

    @application.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Users & Groups API"}

    return application


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on PORT (console script and python -m app)."""
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
