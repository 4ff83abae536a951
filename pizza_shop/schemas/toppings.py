"""
Topping Schemas for Pizza Shop
==============================

This module defines Pydantic models for the topping catalog: the public
listing used by the storefront's customizer and the admin CRUD endpoints.

Endpoint Coverage:
------------------
- GET /toppings: List available toppings
- GET /toppings/for-pizza: Default toppings for a menu pizza
- GET /admin/toppings: List all toppings (including 86'd)
- POST /admin/toppings: Create a topping
- GET /admin/toppings/{id}: Get a topping
- PUT /admin/toppings/{id}: Update a topping
- PATCH /admin/toppings/{id}/availability: Quick 86/un-86 toggle
- DELETE /admin/toppings/{id}: Delete a topping

Topping Categories:
-------------------
- vegetable: Peppers, onions, mushrooms, olives, etc.
- meat: Pepperoni, ham, bacon, chicken, etc.
- cheese: Extra cheese, feta

The category drives the replacement rules (see
services/topping_pricing.py): vegetables swap for vegetables and meats/cheeses
swap for meats/cheeses for free on the first replacement.

Prices:
-------
Each topping has one price per size tier. Prices are decimals with at most
two places and are returned as strings (e.g. "2.49") to avoid float
rounding in clients.
"""

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

ToppingCategoryName = Literal["vegetable", "meat", "cheese"]


def _check_price(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None:
        return value
    if value < 0:
        raise ValueError("Price cannot be negative")
    if value.normalize().as_tuple().exponent < -2:
        raise ValueError("Price cannot have more than 2 decimal places")
    return value


class ToppingOut(BaseModel):
    """
    Response model for a catalog topping.

    Attributes:
        id: Database primary key
        name: Display name (e.g., "Green Peppers")
        category: vegetable, meat, or cheese
        small_price: Price on a small (10") pizza
        medium_price: Price on a medium (12") pizza
        large_price: Price on a large (14") pizza
        is_available: False when the topping is 86'd
        sort_order: Display order within its category
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    small_price: Decimal
    medium_price: Decimal
    large_price: Decimal
    is_available: bool
    sort_order: int


class ToppingCreate(BaseModel):
    """
    Request model for creating a topping.

    Example:
        {
            "name": "Roasted Garlic",
            "category": "vegetable",
            "small_price": "2.49",
            "medium_price": "2.99",
            "large_price": "3.49"
        }
    """
    name: str
    category: ToppingCategoryName
    small_price: Decimal
    medium_price: Decimal
    large_price: Decimal
    is_available: bool = True
    sort_order: int = 0

    @field_validator("small_price", "medium_price", "large_price")
    @classmethod
    def validate_price(cls, value: Decimal) -> Decimal:
        return _check_price(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name cannot be empty")
        return value


class ToppingUpdate(BaseModel):
    """
    Request model for updating a topping.

    All fields are optional - only provided fields will be updated.
    """
    name: Optional[str] = None
    category: Optional[ToppingCategoryName] = None
    small_price: Optional[Decimal] = None
    medium_price: Optional[Decimal] = None
    large_price: Optional[Decimal] = None
    is_available: Optional[bool] = None
    sort_order: Optional[int] = None

    @field_validator("small_price", "medium_price", "large_price")
    @classmethod
    def validate_price(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        return _check_price(value)


class ToppingAvailabilityUpdate(BaseModel):
    """Request model for the 86 toggle."""
    is_available: bool


class PizzaToppingsOut(BaseModel):
    """Default toppings of a menu pizza, parsed from its description."""
    pizza_name: str
    toppings: List[str]
