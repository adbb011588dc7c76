import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Routers
from .routers.valuation import router as valuation_router

# Core modules
from .core.config import settings
from .core.errors import MethodNotAllowedError, ValidationError
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import PromMiddleware, VALUATION_OUTCOMES, metrics_endpoint
from .services.valuation_service import ValuationService

logger = logging.getLogger(__name__)

MISSING_FIELDS = {"error": "Missing required fields"}
METHOD_NOT_ALLOWED = {"error": "Method not allowed"}

def create_app(service: ValuationService | None = None) -> FastAPI:
    """
    App factory so tests and ASGI servers can instantiate cleanly.
    Pass a ValuationService to substitute the model and email clients.
    """
    configure_logging(settings.LOG_LEVEL)  # Set up JSON logs + request-id filter

    app = FastAPI(
        title="Business Valuation Email API",
        version="1.0.0",
        description="Turns small-business financials into an AI valuation report delivered by email.",
    )
    app.state.valuation_service = service if service is not None else ValuationService()

    # CORS: allow the marketing site form to call the API.
    allow_origins = [o.strip() for o in settings.ALLOW_ORIGINS.split(",")] if settings.ALLOW_ORIGINS else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    # Observability middlewares
    app.add_middleware(CorrelationIdMiddleware)  # Adds/propagates X-Request-Id
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)       # Records req/latency metrics

    # Fixed error bodies only; details stay in the logs
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.info("rejected valuation request: %s", exc)
        VALUATION_OUTCOMES.labels(outcome="invalid").inc()
        return JSONResponse(status_code=400, content=MISSING_FIELDS)

    @app.exception_handler(MethodNotAllowedError)
    async def method_not_allowed_handler(request: Request, exc: MethodNotAllowedError):
        return JSONResponse(status_code=405, content=METHOD_NOT_ALLOWED)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return JSONResponse(status_code=405, content=METHOD_NOT_ALLOWED, headers=exc.headers)
        return await http_exception_handler(request, exc)

    # Meta routes
    @app.get("/api/health", tags=["meta"])
    def health():
        return {"status": "ok"}

    @app.get("/api/ping", tags=["meta"])
    def ping():
        return {"pong": True}

    if settings.PROMETHEUS_ENABLED:
        # Standard Prometheus scrape endpoint
        app.add_route("/api/metrics", metrics_endpoint, methods=["GET"])

    # Business routes
    app.include_router(valuation_router, prefix="/api", tags=["valuation"])

    return app

app = create_app()
