# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import logging
from typing import Dict

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config import CORS_ORIGINS
from .db import init_db
from .logging_config import setup_logging
from .routes import (
    admin_toppings_router,
    cart_router,
    customizations_router,
    limiter,
    toppings_router,
)

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Pizza Shop API",
    description="Topping customization, pricing and cart API for the pizza storefront",
    version="1.0.0",
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Toppings", "description": "Topping catalog"},
        {"name": "Customizations", "description": "Topping customization pricing"},
        {"name": "Cart", "description": "Storefront cart"},
        {"name": "Admin - Toppings", "description": "Admin endpoints for the topping catalog"},
    ],
)

# Add rate limit exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# In production, set CORS_ORIGINS to restrict allowed origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    logger.info("Pizza Shop API started")


# ---------- Health ----------


@app.get("/health", tags=["Health"])
def health() -> Dict[str, str]:
    """Health check endpoint. Returns ok if the service is running."""
    return {"status": "ok"}


# ---------- Include Routers with API Version Prefix ----------
# All API endpoints are available under /api/v1/
# Example: /api/v1/customizations/quote, /api/v1/admin/toppings, etc.

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(toppings_router)
api_v1_router.include_router(customizations_router)
api_v1_router.include_router(cart_router)
api_v1_router.include_router(admin_toppings_router)

app.include_router(api_v1_router)

# Also mount at root
app.include_router(toppings_router)
app.include_router(customizations_router)
app.include_router(cart_router)
app.include_router(admin_toppings_router)
