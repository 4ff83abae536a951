"""
Customization Routes for Pizza Shop
===================================

Endpoints the storefront calls while a customer edits a pizza's toppings.
Every price shown in the customizer comes from here, so the customizer,
cart, and checkout agree.

Endpoints:
----------
- POST /customizations/quote: Price an ordered list of modifications
- POST /customizations/validate-replacement: Check a single topping swap
- GET /customizations/split-eligibility: Whether a size can be half-and-half
- POST /customizations/half-and-half/quote: Price a half-and-half pizza

Rate Limiting:
--------------
The quote endpoints are rate limited per client IP (default: 120/minute)
since the customizer calls them on every click.

Error Handling:
---------------
- 404: A topping or pizza referenced in the request isn't in the catalog
- 400: Half-and-half requested for a size that can't be split, or a base
       pizza isn't offered in the requested size
- Rule violations (e.g. meat -> vegetable swaps) are NOT errors: they come
  back in the response's `rejected` list
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from ..config import RATE_LIMIT_ENABLED, get_rate_limit_quote
from ..db import get_db
from ..schemas.customizations import (
    CustomizationResultOut,
    HalfAndHalfQuoteRequest,
    HalfAndHalfQuoteResponse,
    QuoteRequest,
    QuoteResponse,
    ReplacementValidationRequest,
    SplitEligibilityOut,
)
from ..services.catalog import SizeNotOfferedError, load_catalog
from ..services.customization_payload import UnknownToppingError
from ..services.money_utils import cents_to_decimal
from ..services.half_and_half import SplitNotAllowedError, price_half_and_half
from ..services.helpers import (
    UnknownPizzaError,
    build_half,
    half_quote_out,
    quote_response,
    resolve_modification_inputs,
)
from ..services.topping_pricing import (
    calculate_customization_total,
    can_split_pizza,
    free_add_allowance,
    resolve_size_tier,
    validate_topping_replacement,
)

logger = logging.getLogger(__name__)

customizations_router = APIRouter(prefix="/customizations", tags=["Customizations"])

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)


@customizations_router.post("/quote", response_model=QuoteResponse)
@limiter.limit(get_rate_limit_quote)
def quote_customizations(
    request: Request,
    payload: QuoteRequest,
    db: Session = Depends(get_db),
) -> QuoteResponse:
    """Price a pizza's modifications in the order the customer applied them."""
    catalog = load_catalog(db)
    try:
        modifications = resolve_modification_inputs(payload.modifications, catalog)
    except UnknownToppingError as e:
        raise HTTPException(status_code=404, detail=f"Topping not found: {e.args[0]}")

    total = calculate_customization_total(
        modifications,
        payload.size,
        existing_replacements=payload.existing_replacements,
        free_adds=free_add_allowance(payload.pizza_name),
    )
    if total.rejected:
        logger.info(
            "Quote for %s rejected %d of %d modifications",
            payload.size, len(total.rejected), len(modifications),
        )
    return quote_response(payload.size, total)


@customizations_router.post("/validate-replacement", response_model=CustomizationResultOut)
def validate_replacement(
    payload: ReplacementValidationRequest,
    db: Session = Depends(get_db),
) -> CustomizationResultOut:
    """Check whether a single topping swap is allowed and what it costs."""
    catalog = load_catalog(db)
    try:
        original = catalog.get(payload.original_topping.id, payload.original_topping.name)
        new = catalog.get(payload.new_topping.id, payload.new_topping.name)
    except UnknownToppingError as e:
        raise HTTPException(status_code=404, detail=f"Topping not found: {e.args[0]}")

    result = validate_topping_replacement(
        original, new, payload.size, payload.existing_replacements,
    )
    return CustomizationResultOut(
        is_valid=result.is_valid,
        additional_charge=result.additional_charge,
        error_message=result.error_message,
    )


@customizations_router.get("/split-eligibility", response_model=SplitEligibilityOut)
def split_eligibility(
    size: str = Query(..., description='Pizza size, e.g. 12"'),
    is_gluten_free: bool = Query(False),
) -> SplitEligibilityOut:
    """Whether a pizza of this size/crust can be ordered half-and-half."""
    return SplitEligibilityOut(
        size=size,
        size_tier=resolve_size_tier(size).value,
        is_gluten_free=is_gluten_free,
        can_split=can_split_pizza(size, is_gluten_free),
    )


@customizations_router.post("/half-and-half/quote", response_model=HalfAndHalfQuoteResponse)
@limiter.limit(get_rate_limit_quote)
def quote_half_and_half(
    request: Request,
    payload: HalfAndHalfQuoteRequest,
    db: Session = Depends(get_db),
) -> HalfAndHalfQuoteResponse:
    """Price a half-and-half pizza; the more expensive half sets the price."""
    if not can_split_pizza(payload.size, payload.is_gluten_free):
        raise HTTPException(
            status_code=400,
            detail=f"Half-and-half is not available for size {payload.size}"
            + (" on gluten-free crust" if payload.is_gluten_free else ""),
        )

    catalog = load_catalog(db)
    try:
        left, _ = build_half(db, payload.left, catalog, payload.size)
        right, _ = build_half(db, payload.right, catalog, payload.size)
        quote = price_half_and_half(left, right, payload.size, payload.is_gluten_free)
    except UnknownToppingError as e:
        raise HTTPException(status_code=404, detail=f"Topping not found: {e.args[0]}")
    except UnknownPizzaError as e:
        raise HTTPException(status_code=404, detail=f"Pizza not found: {e}")
    except (SizeNotOfferedError, SplitNotAllowedError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return HalfAndHalfQuoteResponse(
        size=payload.size,
        total=cents_to_decimal(quote.total_cents),
        left=half_quote_out(left, quote.left),
        right=half_quote_out(right, quote.right),
    )
