"""
Logging configuration for the pizza shop application.

Usage:
    from pizza_shop.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: Level for the pizza_shop loggers (default: INFO)
    PRICING_LOG_LEVEL: Level for the pricing engine loggers (defaults to
        LOG_LEVEL). Set to DEBUG to trace every rejected replacement and
        half-and-half decision without turning on SQL and request noise.
"""
import logging
import os
import sys
from typing import Optional

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Loggers that PRICING_LOG_LEVEL applies to
PRICING_LOGGERS = (
    "pizza_shop.services.topping_pricing",
    "pizza_shop.services.half_and_half",
)

# Chatty third-party loggers, quieted unless running at DEBUG
NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "uvicorn.access", "slowapi")


def _resolve_level(level: Optional[str], default: str = "INFO") -> str:
    level = (level or default).upper()
    return level if level in VALID_LEVELS else "INFO"


def setup_logging(level: str = None, pricing_level: str = None) -> int:
    """
    Configure logging for the application.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If not provided, reads from LOG_LEVEL env var, defaults to INFO.
        pricing_level: Level for the pricing engine loggers. If not provided,
               reads PRICING_LOG_LEVEL, falling back to level.

    Returns:
        The numeric level applied to the pizza_shop loggers.
    """
    level = _resolve_level(level if level is not None else os.getenv("LOG_LEVEL"))
    pricing_level = _resolve_level(
        pricing_level if pricing_level is not None else os.getenv("PRICING_LOG_LEVEL"),
        default=level,
    )

    numeric_level = getattr(logging, level)
    root_level = min(numeric_level, getattr(logging, pricing_level))

    logging.basicConfig(
        level=root_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    logging.getLogger("pizza_shop").setLevel(numeric_level)
    for name in PRICING_LOGGERS:
        logging.getLogger(name).setLevel(getattr(logging, pricing_level))

    if level != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured at %s level (pricing: %s)", level, pricing_level
    )
    return numeric_level
