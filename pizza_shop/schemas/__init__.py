"""
Schemas Package for Pizza Shop
==============================

This package contains the Pydantic models (schemas) used for API request
validation and response serialization.

Schema Organization:
--------------------
- **toppings.py**: Topping catalog listing and admin CRUD schemas
- **customizations.py**: Customization quotes, replacement checks, and
  half-and-half quotes
- **cart.py**: Cart lines and their customizations

Naming Conventions:
-------------------
- *Out: Response models (e.g., ToppingOut) - what API returns
- *Create: Request models for POST (e.g., ToppingCreate)
- *Update: Request models for PUT/PATCH (e.g., ToppingUpdate)
- *Request: Complex request bodies (e.g., QuoteRequest)
- *Response: Complex response structures (e.g., QuoteResponse)

Money fields are Decimals and serialize as strings ("3.49").

Usage:
------
    from pizza_shop.schemas import QuoteRequest, ToppingOut
"""

from .toppings import (
    ToppingOut,
    ToppingCreate,
    ToppingUpdate,
    ToppingAvailabilityUpdate,
    PizzaToppingsOut,
)
from .customizations import (
    ToppingRef,
    ModificationIn,
    PricedModificationOut,
    RejectedModificationOut,
    QuoteRequest,
    QuoteResponse,
    ReplacementValidationRequest,
    CustomizationResultOut,
    SplitEligibilityOut,
    HalfIn,
    HalfAndHalfQuoteRequest,
    HalfQuoteOut,
    HalfAndHalfQuoteResponse,
)
from .cart import (
    HalfAndHalfSelection,
    CartItemCreate,
    CartCustomizationUpdate,
    CartItemOut,
    CartOut,
)

__all__ = [
    "ToppingOut",
    "ToppingCreate",
    "ToppingUpdate",
    "ToppingAvailabilityUpdate",
    "PizzaToppingsOut",
    "ToppingRef",
    "ModificationIn",
    "PricedModificationOut",
    "RejectedModificationOut",
    "QuoteRequest",
    "QuoteResponse",
    "ReplacementValidationRequest",
    "CustomizationResultOut",
    "SplitEligibilityOut",
    "HalfIn",
    "HalfAndHalfQuoteRequest",
    "HalfQuoteOut",
    "HalfAndHalfQuoteResponse",
    "HalfAndHalfSelection",
    "CartItemCreate",
    "CartCustomizationUpdate",
    "CartItemOut",
    "CartOut",
]
