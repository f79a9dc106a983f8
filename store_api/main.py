"""
Store API Application

Session-keyed shopping cart API for the GreenHaven plant storefront.
Plant details come from the external catalog service.
"""

import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

from .config import settings
from .database.carts import CartStore
from .errors import CartError
from .routes import cart_router
from .services.plant_client import PlantClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "status": status_code},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Store API starting up...")
    logger.info(f"Plant catalog URL: {app.state.plant_client.base_url}")
    yield
    logger.info("Store API shutting down...")
    await app.state.plant_client.close()


def create_app(plant_client: Optional[PlantClient] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        plant_client: Catalog client to resolve plants with. Defaults to one
            pointed at the configured catalog URL.
    """
    app = FastAPI(
        title=settings.app_name,
        description="Shopping cart API for the GreenHaven plant storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.plant_client = plant_client or PlantClient(settings.plant_api_url)
    app.state.cart_store = CartStore(app.state.plant_client)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, restrict this
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CartError)
    async def cart_error_handler(request: Request, exc: CartError):
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(f"{request.method} {request.url.path} invalid body: {exc.errors()}")
        return _error_response(400, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(500, "Internal server error")

    app.include_router(cart_router)

    @app.get("/")
    async def home():
        """Service banner"""
        return {
            "message": "GreenHaven Store API",
            "docs": "/docs",
            "endpoints": {
                "cart": "/api/cart",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "store-api",
            "sessions": app.state.cart_store.session_count,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "store_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
