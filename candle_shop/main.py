"""
FastAPI Application Entry Point - Candle Shop
"""
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from candle_shop import __version__
from candle_shop.api import auth, health, orders, payments, products
from candle_shop.config import settings
from candle_shop.database import init_db
from candle_shop.errors import StoreError
from candle_shop.logging_config import get_logger, setup_logging
from candle_shop.schemas.common import ErrorResponse
from candle_shop.services.payments import get_payment_gateways

setup_logging()
logger = get_logger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Candle Shop",
    description="Storefront backend: catalog, accounts, orders and payments",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"{field}: {first.get('msg')}" if field else str(first.get("msg", "Invalid request"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"success": False, "message": message, "detail": errors}),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Server error"},
    )


# Error envelope documented on every API route
ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (400, 401, 403, 404, 500)
}

# Include routers
app.include_router(health.router)
for router in (auth.router, products.router, orders.router, payments.router):
    app.include_router(router, prefix=settings.API_PREFIX, responses=ERROR_RESPONSES)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.on_event("startup")
def startup_event():
    """Initialize database on startup"""
    logger.info("service_starting", service=settings.SERVICE_NAME)
    init_db()
    gateways = get_payment_gateways()
    if gateways.mock is not None:
        logger.warning("mock_payments_enabled", detail="not for production use")
    logger.info(
        "service_started",
        port=settings.SERVICE_PORT,
        payments=gateways.mode,
        email_service=settings.EMAIL_SERVICE,
        public_api_url=settings.PUBLIC_API_URL,
    )


@app.on_event("shutdown")
def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("service_stopping", service=settings.SERVICE_NAME)
