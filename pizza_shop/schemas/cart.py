"""
Cart Schemas for Pizza Shop
===========================

This module defines Pydantic models for cart lines and their customizations.

Endpoint Coverage:
------------------
- GET /cart/{cart_id}: Cart contents with parsed customizations
- POST /cart/{cart_id}/items: Add a menu item, optionally customized
- PUT /cart/{cart_id}/items/{item_id}/customizations: Re-customize a line
- DELETE /cart/{cart_id}/items/{item_id}: Remove a line

Pricing:
--------
Clients send modifications, never prices. The server prices each line with
the topping engine and stores the result in the line's customization
payload, so the price shown in the cart, at checkout, and on the kitchen
ticket all come from the same calculation.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..services.customization_payload import CookingPreferences
from .customizations import HalfIn, ModificationIn, RejectedModificationOut


class HalfAndHalfSelection(BaseModel):
    """Both halves of a half-and-half pizza."""
    left: HalfIn
    right: HalfIn


class CartItemCreate(BaseModel):
    """
    Request model for adding a menu item to the cart.

    Attributes:
        menu_item_id: Menu item to add
        size: Size as listed on the menu item's prices (e.g., '12"')
        quantity: Number of this exact item (default 1)
        notes: Special instructions
        modifications: Topping modifications for a whole pizza
        cooking_preferences: Sauce/bake preferences
        half_and_half: Both halves, for a half-and-half pizza. Modifications
            then go inside each half; top-level modifications are refused.
            A "Two Topper" or "Three Topper" half gets its included adds.

    Example:
        {
            "menu_item_id": 3,
            "size": "14\"",
            "modifications": [
                {"type": "replace", "topping_name": "Pepperoni", "replaced_topping_name": "Mushrooms"}
            ],
            "cooking_preferences": {"well_done": true}
        }
    """
    menu_item_id: int
    size: Optional[str] = None
    quantity: int = Field(1, ge=1)
    notes: Optional[str] = None
    modifications: List[ModificationIn] = Field(default_factory=list)
    cooking_preferences: Optional[CookingPreferences] = None
    half_and_half: Optional[HalfAndHalfSelection] = None


class CartCustomizationUpdate(BaseModel):
    """
    Request model for re-customizing a cart line.

    The customizations sent replace the line's stored customizations
    entirely. Omitting size keeps the line's current size.
    """
    size: Optional[str] = None
    notes: Optional[str] = None
    modifications: List[ModificationIn] = Field(default_factory=list)
    cooking_preferences: Optional[CookingPreferences] = None
    half_and_half: Optional[HalfAndHalfSelection] = None


class CartItemOut(BaseModel):
    """
    Response model for a cart line.

    Attributes:
        price: Unit price including customizations
        line_total: price * quantity
        customizations: Stored customization payload (camelCase keys)
        rejected: Modifications left out when this line was last priced
                  (only populated on add/update responses)
    """
    id: int
    menu_item_id: int
    menu_item_name: str
    size: Optional[str] = None
    quantity: int
    price: Decimal
    line_total: Decimal
    notes: Optional[str] = None
    customizations: Dict[str, Any] = Field(default_factory=dict)
    rejected: List[RejectedModificationOut] = Field(default_factory=list)


class CartOut(BaseModel):
    cart_id: str
    items: List[CartItemOut]
    total: Decimal
