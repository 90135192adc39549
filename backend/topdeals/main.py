"""
Top Discounts API - FastAPI Main Entry

✅ LOCAL:
    cd backend
    pip install -e ..
    python -m uvicorn topdeals.main:app --reload --host 0.0.0.0 --port 8000

    Needs SHOPIFY_STORE_DOMAIN + SHOPIFY_STOREFRONT_TOKEN (env or backend/.env).

✅ TEST:
    curl -i http://127.0.0.1:8000/health
    curl -i "http://127.0.0.1:8000/api/products?check=env"
    curl -i "http://127.0.0.1:8000/api/products?collection=sale&limit=20&factor=3"
    curl -i "http://127.0.0.1:8000/api/products?query=hoodie"

✅ PRODUCTION:
    Start Command:
        python -m uvicorn topdeals.main:app --host 0.0.0.0 --port $PORT
"""

import logging
from typing import Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Receive, Scope, Send

from topdeals.core.config import settings
from topdeals.core.errors import ApiError, ConfigurationError, QuerySpecError
from topdeals.core.logging_config import setup_logging
from topdeals.schemas.products import ErrorResponse

# ✅ Routers
from topdeals.api.routes_meta import router as meta_router
from topdeals.api.routes_products import router as products_router

logger = logging.getLogger(__name__)


class RouteOwnedPreflightCORS(CORSMiddleware):
    """
    CORSMiddleware that lets OPTIONS requests under `route_owned_prefixes` through
    to the router, so those routes answer their own preflight.
    Simple (GET) responses on those paths still get Access-Control-Allow-Origin.
    """

    def __init__(self, app: ASGIApp, route_owned_prefixes: Tuple[str, ...] = (), **kwargs):
        super().__init__(app, **kwargs)
        self.route_owned_prefixes = route_owned_prefixes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] == "http"
            and scope["method"] == "OPTIONS"
            and scope["path"].startswith(self.route_owned_prefixes)
        ):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


def _error(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _install_error_handlers(app: FastAPI) -> None:
    # Every failure leaves as {"error": ..., "detail"?: ...}

    @app.exception_handler(QuerySpecError)
    async def query_spec_error(request: Request, exc: QuerySpecError):
        return _error(400, exc.message)

    @app.exception_handler(ConfigurationError)
    async def configuration_error(request: Request, exc: ConfigurationError):
        logger.error("Configuration error: %s", exc.message)
        return _error(500, exc.message)

    @app.exception_handler(ApiError)
    async def api_error(request: Request, exc: ApiError):
        return _error(exc.status_code, exc.error, exc.detail)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return _error(405, "Method not allowed")
        return _error(exc.status_code, str(exc.detail))


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Top Discounts API",
        version=settings.APP_VERSION,
        description="Ranks Shopify collection/search products by their biggest variant discount",
    )

    # ✅ CORS (browser clients call /api/products directly)
    # /api preflights are answered by the routes themselves (204 + fixed headers)
    app.add_middleware(
        RouteOwnedPreflightCORS,
        route_owned_prefixes=("/api/",),
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    _install_error_handlers(app)

    # ✅ Mount routers
    app.include_router(meta_router)
    app.include_router(products_router)

    return app


app = create_app()
