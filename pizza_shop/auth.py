"""
Authentication Module for Pizza Shop
====================================

HTTP Basic Authentication for the admin endpoints (/admin/*). Credentials
come from the ADMIN_USERNAME and ADMIN_PASSWORD environment variables (see
config.py).

Behavior:
---------
- If ADMIN_PASSWORD is not configured, admin endpoints return 503 Service
  Unavailable rather than allowing unauthenticated access.
- Invalid credentials return 401 with a WWW-Authenticate header so browsers
  prompt for credentials.
- Credentials are compared with `secrets.compare_digest()`.

Usage:
------
    from pizza_shop.auth import verify_admin_credentials

    @router.get("/admin/toppings")
    def list_toppings(
        admin_user: str = Depends(verify_admin_credentials),
        db: Session = Depends(get_db),
    ):
        ...
"""

import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from . import config

logger = logging.getLogger(__name__)

security = HTTPBasic(realm="Pizza Shop Admin")


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def verify_admin_credentials(
    credentials: HTTPBasicCredentials = Depends(security),
) -> str:
    """
    Verify HTTP Basic Auth credentials for admin endpoints.

    Returns:
        str: The authenticated username if credentials are valid.

    Raises:
        HTTPException (503): If ADMIN_PASSWORD is not set.
        HTTPException (401): If credentials are invalid.
    """
    # Fail closed: if password not configured, deny all access
    if not config.ADMIN_PASSWORD:
        logger.error("Admin request refused: ADMIN_PASSWORD is not set")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Topping admin is not configured. Set ADMIN_PASSWORD to enable it.",
        )

    username_ok = _matches(credentials.username, config.ADMIN_USERNAME)
    password_ok = _matches(credentials.password, config.ADMIN_PASSWORD)

    if not (username_ok and password_ok):
        logger.warning("Failed admin login for user %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username
