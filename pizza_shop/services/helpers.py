"""
Shared helpers for routes.

Converts between API schemas and the pricing engine's types so the
customization, cart, and topping routes all resolve and report
modifications the same way.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ..schemas.customizations import (
    HalfIn,
    HalfQuoteOut,
    ModificationIn,
    PricedModificationOut,
    QuoteResponse,
    RejectedModificationOut,
)
from .catalog import default_toppings_for_pizza, find_menu_item, menu_item_price_cents
from .customization_payload import ToppingCatalog, UnknownToppingError
from .half_and_half import HalfPizza, HalfQuote, current_toppings, strip_base_ingredients
from .money_utils import cents_to_decimal
from .topping_pricing import (
    CustomizationTotal,
    ModificationType,
    PricedModification,
    RejectedModification,
    SizeLike,
    ToppingModification,
    resolve_size_tier,
)

logger = logging.getLogger(__name__)


class UnknownPizzaError(LookupError):
    """Raised when a half references a pizza that isn't on the menu."""


def resolve_modification_inputs(
    inputs: Iterable[ModificationIn],
    catalog: ToppingCatalog,
) -> list[ToppingModification]:
    """
    Resolve API modifications against the catalog.

    A replace without a replaced topping is passed through with
    replaced_topping=None; the engine rejects it with a reason.

    Raises:
        UnknownToppingError: If a referenced topping isn't in the catalog
    """
    resolved = []
    for mod in inputs:
        topping = catalog.get(mod.topping_id, mod.topping_name)
        replaced = None
        if mod.type == ModificationType.REPLACE.value and mod.has_replaced_topping:
            replaced = catalog.get(mod.replaced_topping_id, mod.replaced_topping_name)
        resolved.append(ToppingModification(
            type=mod.type,
            topping=topping,
            replaced_topping=replaced,
            half=mod.half,
        ))
    return resolved


def priced_out(priced: PricedModification) -> PricedModificationOut:
    mod = priced.modification
    return PricedModificationOut(
        index=priced.index,
        type=mod.type.value,
        topping_name=mod.topping.name,
        replaced_topping_name=mod.replaced_topping.name if mod.replaced_topping else None,
        half=mod.half.value,
        charge=cents_to_decimal(priced.charge_cents),
    )


def rejected_out(rejected: RejectedModification, side: Optional[str] = None) -> RejectedModificationOut:
    mod = rejected.modification
    return RejectedModificationOut(
        index=rejected.index,
        type=mod.type.value,
        topping_name=mod.topping.name,
        replaced_topping_name=mod.replaced_topping.name if mod.replaced_topping else None,
        half=mod.half.value,
        reason=rejected.reason,
        side=side,
    )


def quote_response(size: SizeLike, total: CustomizationTotal) -> QuoteResponse:
    return QuoteResponse(
        size=str(size.value if hasattr(size, "value") else size),
        size_tier=resolve_size_tier(size).value,
        total=total.total,
        accepted=[priced_out(p) for p in total.accepted],
        rejected=[rejected_out(r) for r in total.rejected],
        replacement_count=total.replacement_count,
        free_adds_remaining=total.free_adds_remaining,
    )


def build_half(
    db: Session,
    half_in: HalfIn,
    catalog: ToppingCatalog,
    size: str,
) -> tuple[HalfPizza, Optional[int]]:
    """
    Build one half of a half-and-half pizza from its API description.

    Returns:
        (HalfPizza, menu item id of its base pizza or None)

    Raises:
        UnknownPizzaError: If pizza_name isn't on the menu
        SizeNotOfferedError: If the base pizza has no price for size
        UnknownToppingError: If a modification references an unknown topping
    """
    base_price_cents = 0
    default_toppings: list[str] = []
    menu_item_id = None

    if half_in.pizza_name:
        menu_item = find_menu_item(db, half_in.pizza_name)
        if menu_item is None:
            raise UnknownPizzaError(half_in.pizza_name)
        menu_item_id = menu_item.id
        base_price_cents = menu_item_price_cents(menu_item, size)
        default_toppings = strip_base_ingredients(default_toppings_for_pizza(menu_item))

    half = HalfPizza(
        base_pizza_name=half_in.pizza_name,
        base_price_cents=base_price_cents,
        default_toppings=tuple(default_toppings),
        modifications=tuple(resolve_modification_inputs(half_in.modifications, catalog)),
    )
    return half, menu_item_id


def half_quote_out(half: HalfPizza, quote: HalfQuote) -> HalfQuoteOut:
    side = quote.side.value
    return HalfQuoteOut(
        side=side,
        pizza_name=half.base_pizza_name,
        base_price=cents_to_decimal(quote.base_price_cents),
        customization_total=quote.customization.total,
        total=cents_to_decimal(quote.total_cents),
        default_toppings=list(half.default_toppings),
        current_toppings=current_toppings(
            half.default_toppings,
            [p.modification for p in quote.customization.accepted],
        ),
        accepted=[priced_out(p) for p in quote.customization.accepted],
        rejected=[rejected_out(r, side) for r in quote.customization.rejected],
    )


__all__ = [
    "UnknownPizzaError",
    "UnknownToppingError",
    "resolve_modification_inputs",
    "priced_out",
    "rejected_out",
    "quote_response",
    "build_half",
    "half_quote_out",
]
