"""
Routes Package for Pizza Shop
=============================

This package contains all API route definitions organized by domain. Each
module defines a FastAPI APIRouter with related endpoints grouped together.

**Customer-Facing Routes:**
- toppings.py: Topping catalog and default toppings of menu pizzas
- customizations.py: Customization quotes, replacement checks, half-and-half
- cart.py: Cart lines, priced server-side

**Admin Routes (require authentication):**
- admin_toppings.py: Topping CRUD and 86 system

Router Registration:
--------------------
All routers are registered in main.py under two prefixes:
1. /api/v1/* - Versioned API (recommended)
2. /* - Root paths

Error Handling:
---------------
Routes raise HTTPException for error conditions:
- 400: Bad request (rule or validation errors)
- 401: Unauthorized (invalid credentials)
- 404: Not found (unknown ID or name)
- 429: Too many requests (rate limited)
- 503: Service unavailable (admin password not configured)
"""

from .toppings import toppings_router
from .customizations import customizations_router, limiter
from .cart import cart_router
from .admin_toppings import admin_toppings_router

__all__ = [
    "toppings_router",
    "customizations_router",
    "cart_router",
    "admin_toppings_router",
    "limiter",
]
