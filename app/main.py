# app/main.py
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, get_settings
from app.core.errors import AppError
from app.core.payment_client import MockPaymentProcessor, PaymentProcessor
from app.database import Database

# Import models so SQLModel metadata is populated before create_all()
from app.models import user as _user_models  # noqa: F401
from app.models import product as _product_models  # noqa: F401
from app.models import cart as _cart_models  # noqa: F401
from app.models import order as _order_models  # noqa: F401

# Routers
from app.routers.auth import router as auth_router
from app.routers.products import router as products_router
from app.routers.cart import router as cart_router
from app.routers.orders import router as orders_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Open the database, create tables, seed the catalog once.

    Shutdown:
      - Dispose of the engine's connection pool.
    """
    settings: Settings = app.state.settings
    logger.info("🔄 Startup: opening database %s", settings.DATABASE_URL)
    db = Database(settings.DATABASE_URL)
    try:
        db.create_db_and_tables()
        if settings.SEED_SAMPLE_DATA:
            inserted = db.seed_products()
            if inserted:
                logger.info("Sample jewellery products inserted (%d)", inserted)
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB initialisation FAILED: {e}")
        db.dispose()
        raise

    app.state.db = db
    yield

    logger.info("🛑 Shutdown: closing database")
    db.dispose()


def _error_body(message: str, **extra) -> dict:
    body = {"success": False, "message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Render every failure into the `{success: false, message, ...}` envelope.
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc, AppError):
            return JSONResponse(
                status_code=exc.status_code,
                content=_error_body(exc.message, error=exc.error),
                headers=exc.headers,
            )
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content=_error_body("Endpoint not found", path=request.url.path),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
            message = f"{field}: {first.get('msg')}" if field else first.get("msg")
        else:
            message = "Invalid request"
        return JSONResponse(status_code=400, content=_error_body(message))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        settings: Settings = request.app.state.settings
        stack = None
        if settings.is_development:
            stack = "".join(traceback.format_exception(exc))
        return JSONResponse(
            status_code=500,
            content=_error_body("Internal server error", stack=stack),
        )


def create_app(
    settings: Settings | None = None,
    payment_processor: PaymentProcessor | None = None,
) -> FastAPI:
    """
    Build the API.

    Args:
        settings: defaults to the cached environment settings.
        payment_processor: defaults to MockPaymentProcessor configured from
            PAYMENT_SUCCESS_RATE / PAYMENT_LATENCY_SECONDS.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.payment_processor = payment_processor or MockPaymentProcessor(
        success_rate=settings.PAYMENT_SUCCESS_RATE,
        latency_seconds=settings.PAYMENT_LATENCY_SECONDS,
    )

    # --- CORS configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    register_exception_handlers(app)

    app.include_router(auth_router, prefix=settings.API_PREFIX)
    app.include_router(products_router, prefix=settings.API_PREFIX)
    app.include_router(cart_router, prefix=settings.API_PREFIX)
    app.include_router(orders_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {
            "success": True,
            "message": f"{settings.PROJECT_NAME} is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.VERSION,
        }

    @app.get("/")
    def root():
        """Welcome message with an index of the endpoints."""
        api = settings.API_PREFIX
        return {
            "success": True,
            "message": f"Welcome to {settings.PROJECT_NAME}",
            "endpoints": {
                "health": "/health",
                "auth": f"{api}/auth",
                "products": f"{api}/products",
                "cart": f"{api}/cart",
                "orders": f"{api}/orders",
            },
            "documentation": {
                "auth": {
                    "signup": f"POST {api}/auth/signup",
                    "login": f"POST {api}/auth/login",
                    "verify": f"POST {api}/auth/verify-token",
                },
                "products": {
                    "getAll": f"GET {api}/products",
                    "getById": f"GET {api}/products/:id",
                    "getByCategory": f"GET {api}/products/category/:category",
                    "search": f"GET {api}/products/search/:query",
                },
                "cart": {
                    "add": f"POST {api}/cart/add",
                    "get": f"GET {api}/cart",
                    "update": f"PUT {api}/cart/update",
                    "remove": f"DELETE {api}/cart/remove",
                    "clear": f"DELETE {api}/cart/clear",
                },
                "orders": {
                    "checkout": f"POST {api}/orders/checkout",
                    "getAll": f"GET {api}/orders",
                    "getById": f"GET {api}/orders/:id",
                },
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=5000)
