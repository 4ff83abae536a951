"""
Configuration Module for Pizza Shop
===================================

This module centralizes configuration settings, environment variables, and
constants used throughout the application.

Configuration Categories:
-------------------------
- **Database**: Connection URL for the topping catalog, menu and carts.

- **Pricing Rules**: Constants for the topping customization rules. These are
  business rules rather than deployment settings, so they are not read from
  the environment.

- **Rate Limiting**: Throttling for the customization quote endpoint, which
  the storefront calls on every topping edit.

- **CORS Settings**: Cross-Origin Resource Sharing configuration for the
  storefront and admin frontends.

- **Admin Authentication**: HTTP Basic credentials for /admin endpoints.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy database URL (default: "sqlite:///./pizza_shop.db")
- RATE_LIMIT_QUOTE: Quote endpoint rate limit (default: "120 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- ADMIN_USERNAME: Admin username (default: "admin")
- ADMIN_PASSWORD: Admin password (required for admin access)
- LOG_LEVEL: Read by logging_config.setup_logging (default: "INFO")
- PRICING_LOG_LEVEL: Level for the pricing engine loggers (default: LOG_LEVEL)

Usage:
------
    from pizza_shop.config import DATABASE_URL, FREE_REPLACEMENTS_PER_PIZZA
"""

import os
from typing import List


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./pizza_shop.db")


# =============================================================================
# Pricing Rules
# =============================================================================

# Only the first replacement on a pizza can be free; every later one is
# charged at the new topping's full size-tier price.
FREE_REPLACEMENTS_PER_PIZZA: int = 1

# Ingredients every pizza has that are not parsed as toppings when a menu
# pizza is loaded onto one half of a half-and-half pizza
BASE_INGREDIENT_KEYWORDS: List[str] = ["pizza sauce", "mozzarella cheese"]


# =============================================================================
# Rate Limiting Configuration
# =============================================================================

# Rate limit format: "X per Y" where Y is second, minute, hour, or day
RATE_LIMIT_QUOTE: str = os.getenv("RATE_LIMIT_QUOTE", "120 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_quote() -> str:
    """
    Return the current quote rate limit.

    Read through a function so tests can override it without modifying
    the module-level constant.
    """
    return RATE_LIMIT_QUOTE


# =============================================================================
# CORS Configuration
# =============================================================================

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]


# =============================================================================
# Admin Authentication Configuration
# =============================================================================
# ADMIN_PASSWORD must be set in production for admin access to work.

ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
