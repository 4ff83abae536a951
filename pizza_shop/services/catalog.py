"""
Catalog lookups.

Loads toppings and menu pizzas from the database and converts them into the
plain types the pricing engine works with.
"""

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models
from .customization_payload import ToppingCatalog
from .money_utils import to_cents
from .topping_parser import parse_toppings_from_description
from .topping_pricing import Topping

logger = logging.getLogger(__name__)


class SizeNotOfferedError(ValueError):
    """Raised when a menu item has no price for the requested size."""


def topping_from_model(row: models.Topping) -> Topping:
    """Convert a Topping row into the engine's Topping."""
    return Topping(
        id=row.id,
        name=row.name,
        category=row.category,
        small_price=str(row.small_price),
        medium_price=str(row.medium_price),
        large_price=str(row.large_price),
    )


def load_catalog(db: Session, include_unavailable: bool = False) -> ToppingCatalog:
    """
    Load the topping catalog.

    Unavailable (86'd) toppings are left out unless include_unavailable is
    set; re-pricing stored cart lines includes them so a topping 86'd after
    it went into a cart doesn't break the cart.
    """
    query = db.query(models.Topping)
    if not include_unavailable:
        query = query.filter(models.Topping.is_available.is_(True))
    rows = query.order_by(models.Topping.category, models.Topping.sort_order, models.Topping.name).all()
    return ToppingCatalog(topping_from_model(row) for row in rows)


def find_menu_item(db: Session, name: str) -> Optional[models.MenuItem]:
    """Find a menu item by name, ignoring case."""
    if not name:
        return None
    return (
        db.query(models.MenuItem)
        .filter(func.lower(models.MenuItem.name) == name.strip().lower())
        .first()
    )


def menu_item_price_cents(menu_item: models.MenuItem, size: Optional[str]) -> int:
    """
    Base price of a menu item at a size, in cents.

    Items with a single price row don't need a size.

    Raises:
        SizeNotOfferedError: If the item has no price for the size
    """
    prices = list(menu_item.prices)
    if size is None and len(prices) == 1:
        return to_cents(prices[0].price)

    for row in prices:
        if size is not None and row.size.strip().lower() == size.strip().lower():
            return to_cents(row.price)

    offered = ", ".join(row.size for row in prices) or "none"
    raise SizeNotOfferedError(
        f"{menu_item.name} is not offered in size {size!r} (offered: {offered})"
    )


def default_toppings_for_pizza(menu_item: models.MenuItem) -> list[str]:
    """Default toppings for a menu pizza, parsed from its description."""
    toppings = parse_toppings_from_description(menu_item.description)
    logger.debug("Default toppings for %s: %s", menu_item.name, toppings)
    return toppings
