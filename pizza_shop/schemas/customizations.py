"""
Customization Schemas for Pizza Shop
====================================

This module defines Pydantic models for pricing topping customizations.
The storefront calls these endpoints on every topping edit to show the
customer what their changes cost before the pizza goes into the cart.

Endpoint Coverage:
------------------
- POST /customizations/quote: Price an ordered list of modifications
- POST /customizations/validate-replacement: Check a single topping swap
- GET /customizations/split-eligibility: Can this size be half-and-half?
- POST /customizations/half-and-half/quote: Price a half-and-half pizza

Referencing Toppings:
---------------------
Modifications reference catalog toppings by id or by name (case-insensitive).
When both are given the id wins.

    {"type": "replace", "topping_name": "Pepperoni", "replaced_topping_name": "Mushrooms"}
    {"type": "add", "topping_id": 26}

Order Matters:
--------------
Modifications must be sent in the order the customer applied them. Only the
first accepted replacement on a pizza can be free, so reordering can change
the total.

Rejected Modifications:
-----------------------
A modification that breaks a rule (e.g. replacing a meat with a vegetable)
is not charged and comes back in `rejected` with its index and a message
suitable for showing to the customer.
"""

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

ModificationTypeName = Literal["add", "remove", "replace"]
HalfName = Literal["whole", "left", "right"]


class ToppingRef(BaseModel):
    """Reference to a catalog topping by id or name."""
    id: Optional[int] = None
    name: Optional[str] = None

    @model_validator(mode="after")
    def check_reference(self) -> "ToppingRef":
        if self.id is None and not (self.name and self.name.strip()):
            raise ValueError("A topping id or name is required")
        return self


class ModificationIn(BaseModel):
    """
    One topping modification.

    Attributes:
        type: add, remove, or replace
        topping_id / topping_name: The topping being added, removed, or swapped in
        replaced_topping_id / replaced_topping_name: For replace, the topping taken off
        half: whole, left, or right (for half-and-half pizzas)
    """
    type: ModificationTypeName
    topping_id: Optional[int] = None
    topping_name: Optional[str] = None
    replaced_topping_id: Optional[int] = None
    replaced_topping_name: Optional[str] = None
    half: HalfName = "whole"

    @model_validator(mode="after")
    def check_topping(self) -> "ModificationIn":
        if self.topping_id is None and not (self.topping_name and self.topping_name.strip()):
            raise ValueError("A topping_id or topping_name is required")
        return self

    @property
    def has_replaced_topping(self) -> bool:
        return self.replaced_topping_id is not None or bool(self.replaced_topping_name)


class PricedModificationOut(BaseModel):
    """An accepted modification and what it added to the price."""
    index: int
    type: ModificationTypeName
    topping_name: str
    replaced_topping_name: Optional[str] = None
    half: HalfName = "whole"
    charge: Decimal


class RejectedModificationOut(BaseModel):
    """A modification that was not applied, and why."""
    index: int
    type: ModificationTypeName
    topping_name: str
    replaced_topping_name: Optional[str] = None
    half: HalfName = "whole"
    reason: str
    side: Optional[HalfName] = None


class QuoteRequest(BaseModel):
    """
    Request model for pricing a pizza's modifications.

    Attributes:
        size: Pizza size as shown on the menu (e.g., '14"', "Medium (12\")")
        modifications: Modifications in the order the customer applied them
        existing_replacements: Replacements already applied to this pizza
        pizza_name: Menu pizza name; "Two Topper"/"Three Topper" include free adds
    """
    size: str
    modifications: List[ModificationIn] = Field(default_factory=list)
    existing_replacements: int = Field(0, ge=0)
    pizza_name: Optional[str] = None


class QuoteResponse(BaseModel):
    """
    Response model for a customization quote.

    Attributes:
        size: The size that was priced
        size_tier: small, medium, or large
        total: Total additional charge
        accepted: Modifications that were applied, with charges
        rejected: Modifications that were not applied, with reasons
        replacement_count: Replacements applied, including existing ones
        free_adds_remaining: Unused included toppings on topper pizzas
    """
    size: str
    size_tier: str
    total: Decimal
    accepted: List[PricedModificationOut]
    rejected: List[RejectedModificationOut]
    replacement_count: int
    free_adds_remaining: int = 0


class ReplacementValidationRequest(BaseModel):
    """Request model for checking a single topping swap."""
    original_topping: ToppingRef
    new_topping: ToppingRef
    size: str
    existing_replacements: int = Field(0, ge=0)


class CustomizationResultOut(BaseModel):
    """Whether a swap is allowed and what it costs."""
    is_valid: bool
    additional_charge: Decimal
    error_message: Optional[str] = None


class SplitEligibilityOut(BaseModel):
    size: str
    size_tier: str
    is_gluten_free: bool
    can_split: bool


class HalfIn(BaseModel):
    """
    One half of a half-and-half pizza.

    Attributes:
        pizza_name: Menu pizza this half starts from. Its price for the
                    requested size and its default toppings are used.
                    Omit for a plain half.
        modifications: Modifications to this half, in order
    """
    pizza_name: Optional[str] = None
    modifications: List[ModificationIn] = Field(default_factory=list)


class HalfAndHalfQuoteRequest(BaseModel):
    size: str
    is_gluten_free: bool = False
    left: HalfIn
    right: HalfIn


class HalfQuoteOut(BaseModel):
    side: HalfName
    pizza_name: Optional[str] = None
    base_price: Decimal
    customization_total: Decimal
    total: Decimal
    default_toppings: List[str]
    current_toppings: List[str]
    accepted: List[PricedModificationOut]
    rejected: List[RejectedModificationOut]


class HalfAndHalfQuoteResponse(BaseModel):
    """
    Response model for a half-and-half quote.

    The customer is charged `total`, the larger of the two half totals.
    """
    size: str
    total: Decimal
    left: HalfQuoteOut
    right: HalfQuoteOut
