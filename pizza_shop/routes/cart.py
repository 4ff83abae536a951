"""
Cart Routes for Pizza Shop
==========================

Storefront cart endpoints. A cart is identified by an opaque cart_id the
storefront generates per browser session; there is no cart table, only
lines keyed by cart_id.

Endpoints:
----------
- GET /cart/{cart_id}: Cart contents and total
- POST /cart/{cart_id}/items: Add a menu item, optionally customized
- PUT /cart/{cart_id}/items/{item_id}/customizations: Re-customize a line
- DELETE /cart/{cart_id}/items/{item_id}: Remove a line

Pricing:
--------
Line prices are always computed here with the topping engine:

    whole pizza:     base price at size + customization total
    half-and-half:   the more expensive half (base + its customizations)

The result is written to the line's `price` column and to `calculatedPrice`
in its stored customization JSON. Prices sent by clients are never read.
Modifications the engine rejects are left off the stored line and reported
in the response's `rejected` list.
"""

import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import CartItem, MenuItem
from ..schemas.cart import (
    CartCustomizationUpdate,
    CartItemCreate,
    CartItemOut,
    CartOut,
    HalfAndHalfSelection,
)
from ..schemas.customizations import ModificationIn, RejectedModificationOut
from ..services.catalog import SizeNotOfferedError, load_catalog, menu_item_price_cents
from ..services.customization_payload import (
    CookingPreferences,
    CustomizationPayload,
    CustomizationPayloadError,
    UnknownToppingError,
    build_half_and_half_payload,
    build_payload,
    parse_customizations,
    serialize_customizations,
)
from ..services.half_and_half import SplitNotAllowedError, price_half_and_half
from ..services.helpers import (
    UnknownPizzaError,
    build_half,
    rejected_out,
    resolve_modification_inputs,
)
from ..services.money_utils import cents_to_decimal, to_cents
from ..services.topping_pricing import calculate_customization_total, free_add_allowance

logger = logging.getLogger(__name__)

cart_router = APIRouter(prefix="/cart", tags=["Cart"])


# =============================================================================
# Pricing
# =============================================================================

def _price_whole(
    db: Session,
    menu_item: MenuItem,
    size: Optional[str],
    modifications: List[ModificationIn],
    cooking_preferences: Optional[CookingPreferences],
    notes: Optional[str],
) -> Tuple[int, CustomizationPayload, List[RejectedModificationOut]]:
    base_cents = menu_item_price_cents(menu_item, size)
    resolved = resolve_modification_inputs(modifications, load_catalog(db))
    total = calculate_customization_total(
        resolved, size or "", free_adds=free_add_allowance(menu_item.name),
    )
    payload = build_payload(total, base_cents, cooking_preferences, notes)
    return base_cents + total.total_cents, payload, [rejected_out(r) for r in total.rejected]


def _price_half_and_half(
    db: Session,
    menu_item: MenuItem,
    size: Optional[str],
    selection: HalfAndHalfSelection,
    cooking_preferences: Optional[CookingPreferences],
    notes: Optional[str],
) -> Tuple[int, CustomizationPayload, List[RejectedModificationOut]]:
    catalog = load_catalog(db)

    # A half with no base pizza of its own starts from the line's menu item
    left_in = selection.left
    if not left_in.pizza_name:
        left_in = left_in.model_copy(update={"pizza_name": menu_item.name})
    right_in = selection.right
    if not right_in.pizza_name:
        right_in = right_in.model_copy(update={"pizza_name": menu_item.name})

    left, left_id = build_half(db, left_in, catalog, size)
    right, right_id = build_half(db, right_in, catalog, size)
    quote = price_half_and_half(left, right, size or "", menu_item.is_gluten_free)

    payload = build_half_and_half_payload(
        left, right, quote,
        cooking_preferences=cooking_preferences,
        special_instructions=notes,
        left_pizza_id=left_id,
        right_pizza_id=right_id,
    )
    rejected = [rejected_out(r, side.value) for side, r in quote.rejected]
    return quote.total_cents, payload, rejected


def _price_line(
    db: Session,
    menu_item: MenuItem,
    size: Optional[str],
    modifications: List[ModificationIn],
    cooking_preferences: Optional[CookingPreferences],
    half_and_half: Optional[HalfAndHalfSelection],
    notes: Optional[str],
) -> Tuple[int, CustomizationPayload, List[RejectedModificationOut]]:
    """
    Price a cart line and build its stored customization payload.

    Returns:
        (unit price in cents, payload, rejected modifications)

    Raises:
        HTTPException: 404 for unknown toppings/pizzas, 400 for sizes the
            pizza isn't offered in or that can't be split, and 400 when
            whole-pizza modifications are sent with a half-and-half selection
    """
    if half_and_half is not None and modifications:
        raise HTTPException(
            status_code=400,
            detail="Send modifications inside each half for a half-and-half pizza",
        )

    try:
        if half_and_half is not None:
            return _price_half_and_half(
                db, menu_item, size, half_and_half, cooking_preferences, notes,
            )
        return _price_whole(db, menu_item, size, modifications, cooking_preferences, notes)
    except UnknownToppingError as e:
        raise HTTPException(status_code=404, detail=f"Topping not found: {e.args[0]}")
    except UnknownPizzaError as e:
        raise HTTPException(status_code=404, detail=f"Pizza not found: {e}")
    except (SizeNotOfferedError, SplitNotAllowedError) as e:
        logger.info("Rejected cart line for %s: %s", menu_item.name, e)
        raise HTTPException(status_code=400, detail=str(e))


# =============================================================================
# Serialization
# =============================================================================

def _item_out(
    item: CartItem,
    rejected: Optional[List[RejectedModificationOut]] = None,
) -> CartItemOut:
    try:
        customizations = parse_customizations(item.customizations).model_dump(
            by_alias=True, exclude_none=True,
        )
    except CustomizationPayloadError as e:
        logger.warning("Cart item %d has unreadable customizations: %s", item.id, e)
        customizations = {}

    unit_cents = to_cents(item.price)
    return CartItemOut(
        id=item.id,
        menu_item_id=item.menu_item_id,
        menu_item_name=item.menu_item.name,
        size=item.size,
        quantity=item.quantity,
        price=cents_to_decimal(unit_cents),
        line_total=cents_to_decimal(unit_cents * item.quantity),
        notes=item.notes,
        customizations=customizations,
        rejected=rejected or [],
    )


def _get_cart_item(db: Session, cart_id: str, item_id: int) -> CartItem:
    item = (
        db.query(CartItem)
        .filter(CartItem.id == item_id, CartItem.cart_id == cart_id)
        .first()
    )
    if not item:
        raise HTTPException(status_code=404, detail="Cart item not found")
    return item


# =============================================================================
# Endpoints
# =============================================================================

@cart_router.get("/{cart_id}", response_model=CartOut)
def get_cart(cart_id: str, db: Session = Depends(get_db)) -> CartOut:
    """Cart contents in the order items were added."""
    items = (
        db.query(CartItem)
        .filter(CartItem.cart_id == cart_id)
        .order_by(CartItem.created_at, CartItem.id)
        .all()
    )
    lines = [_item_out(item) for item in items]
    total_cents = sum(to_cents(line.line_total) for line in lines)
    return CartOut(cart_id=cart_id, items=lines, total=cents_to_decimal(total_cents))


@cart_router.post("/{cart_id}/items", response_model=CartItemOut, status_code=201)
def add_cart_item(
    cart_id: str,
    payload: CartItemCreate,
    db: Session = Depends(get_db),
) -> CartItemOut:
    """Add a menu item to the cart, priced server-side."""
    menu_item = db.query(MenuItem).filter(MenuItem.id == payload.menu_item_id).first()
    if not menu_item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    if not menu_item.is_available:
        raise HTTPException(status_code=400, detail=f"{menu_item.name} is currently unavailable")

    unit_cents, stored, rejected = _price_line(
        db,
        menu_item,
        payload.size,
        payload.modifications,
        payload.cooking_preferences,
        payload.half_and_half,
        payload.notes,
    )

    item = CartItem(
        cart_id=cart_id,
        menu_item_id=menu_item.id,
        size=payload.size,
        quantity=payload.quantity,
        price=cents_to_decimal(unit_cents),
        notes=payload.notes,
        customizations=serialize_customizations(stored),
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(
        "Added %s (%s) x%d to cart %s at %s",
        menu_item.name, payload.size, payload.quantity, cart_id, cents_to_decimal(unit_cents),
    )
    return _item_out(item, rejected)


@cart_router.put("/{cart_id}/items/{item_id}/customizations", response_model=CartItemOut)
def update_cart_item_customizations(
    cart_id: str,
    item_id: int,
    payload: CartCustomizationUpdate,
    db: Session = Depends(get_db),
) -> CartItemOut:
    """Replace a line's customizations and re-price it."""
    item = _get_cart_item(db, cart_id, item_id)
    size = payload.size if payload.size is not None else item.size
    notes = payload.notes if payload.notes is not None else item.notes

    unit_cents, stored, rejected = _price_line(
        db,
        item.menu_item,
        size,
        payload.modifications,
        payload.cooking_preferences,
        payload.half_and_half,
        notes,
    )

    item.size = size
    item.notes = notes
    item.price = cents_to_decimal(unit_cents)
    item.customizations = serialize_customizations(stored)
    db.commit()
    db.refresh(item)
    logger.info("Re-priced cart item %d in cart %s at %s", item.id, cart_id, item.price)
    return _item_out(item, rejected)


@cart_router.delete("/{cart_id}/items/{item_id}", status_code=204)
def delete_cart_item(
    cart_id: str,
    item_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Remove a line from the cart."""
    item = _get_cart_item(db, cart_id, item_id)
    db.delete(item)
    db.commit()
    logger.info("Removed cart item %d from cart %s", item_id, cart_id)
