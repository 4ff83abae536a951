"""
Topping Pricing Engine.

This module holds the pricing and validation rules for pizza topping
customization:

- Topping prices depend on the pizza's size tier (small/medium/large).
- Adding a topping is always charged at the topping's tier price.
- Removing a topping is free.
- The first replacement on a pizza can be free:
    - vegetable -> vegetable is free
    - meat/cheese -> meat/cheese is free
    - vegetable -> meat/cheese is charged at the new topping's price
    - meat/cheese -> vegetable is not allowed (remove + add instead)
- Every replacement after the first is charged at the new topping's price.
- Half-and-half is only offered on medium and large, non-gluten-free pizzas.

All functions are pure: they take catalog data in and return amounts in
integer cents, never touching the database.

Usage:
    from pizza_shop.services.topping_pricing import (
        calculate_customization_total,
        ToppingModification,
    )

    result = calculate_customization_total(mods, '14"')
    result.total_cents, result.rejected
"""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Union

from ..config import FREE_REPLACEMENTS_PER_PIZZA
from .money_utils import cents_to_decimal, format_cents, to_cents

logger = logging.getLogger(__name__)


REPLACE_MEAT_WITH_VEGETABLE_ERROR = (
    "Cannot replace meat or cheese with vegetables. "
    "You can remove the topping and add a vegetable separately."
)
INVALID_REPLACEMENT_ERROR = "Invalid topping replacement"
MISSING_REPLACED_TOPPING_ERROR = "Replacement is missing the topping being replaced"


class ToppingCategory(str, Enum):
    """Catalog category of a topping."""
    VEGETABLE = "vegetable"
    MEAT = "meat"
    CHEESE = "cheese"


# Meat and cheese are interchangeable for replacement purposes
PREMIUM_CATEGORIES = frozenset({ToppingCategory.MEAT, ToppingCategory.CHEESE})


class SizeTier(str, Enum):
    """Price bracket a pizza size maps to."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class ModificationType(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"


class HalfPizzaSide(str, Enum):
    WHOLE = "whole"
    LEFT = "left"
    RIGHT = "right"


SizeLike = Union[SizeTier, str]


@dataclass(frozen=True)
class Topping:
    """
    A topping catalog entry.

    Prices are decimal strings as stored in the catalog (e.g. "2.49").
    """
    id: Optional[int]
    name: str
    category: ToppingCategory
    small_price: str
    medium_price: str
    large_price: str

    def __post_init__(self):
        # Accept plain strings for the category ("meat") as well as the enum
        object.__setattr__(self, "category", ToppingCategory(self.category))

    def price_cents(self, tier: SizeTier) -> int:
        """Price of this topping for a size tier, in cents."""
        if tier == SizeTier.SMALL:
            return to_cents(self.small_price)
        if tier == SizeTier.LARGE:
            return to_cents(self.large_price)
        return to_cents(self.medium_price)

    @property
    def is_premium(self) -> bool:
        return self.category in PREMIUM_CATEGORIES


@dataclass(frozen=True)
class ToppingModification:
    """One customer edit to a pizza's toppings."""
    type: ModificationType
    topping: Topping
    replaced_topping: Optional[Topping] = None
    half: HalfPizzaSide = HalfPizzaSide.WHOLE

    def __post_init__(self):
        object.__setattr__(self, "type", ModificationType(self.type))
        object.__setattr__(self, "half", HalfPizzaSide(self.half))


@dataclass(frozen=True)
class CustomizationResult:
    """Outcome of validating and pricing a single replacement."""
    is_valid: bool
    additional_charge_cents: int = 0
    error_message: Optional[str] = None

    @property
    def additional_charge(self) -> Decimal:
        return cents_to_decimal(self.additional_charge_cents)


@dataclass(frozen=True)
class PricedModification:
    """An accepted modification and the charge it contributed."""
    modification: ToppingModification
    charge_cents: int
    index: int = 0


@dataclass(frozen=True)
class RejectedModification:
    """A modification that contributed nothing, with the reason why."""
    index: int
    modification: ToppingModification
    reason: str


@dataclass(frozen=True)
class CustomizationTotal:
    """
    Total additional charge for one pizza's modifications.

    Attributes:
        total_cents: Sum of accepted modification charges
        accepted: Accepted modifications with their individual charges
        rejected: Modifications that were skipped, with reasons
        replacement_count: Replacement counter after the last modification
        free_adds_remaining: Unused free-add allowance
    """
    total_cents: int = 0
    accepted: tuple[PricedModification, ...] = field(default_factory=tuple)
    rejected: tuple[RejectedModification, ...] = field(default_factory=tuple)
    replacement_count: int = 0
    free_adds_remaining: int = 0

    @property
    def total(self) -> Decimal:
        return cents_to_decimal(self.total_cents)

    @property
    def formatted_total(self) -> str:
        return format_cents(self.total_cents)

    @property
    def has_rejections(self) -> bool:
        return bool(self.rejected)


# =============================================================================
# Size Tiers
# =============================================================================

def resolve_size_tier(size: SizeLike) -> SizeTier:
    """
    Map a size to its price tier.

    Free-text size strings (e.g. '10"', 'Medium (12")') are matched by
    substring, case-insensitively. Strings that match nothing fall back to
    medium.
    """
    if isinstance(size, SizeTier):
        return size

    size_key = (size or "").lower()
    if "10" in size_key or "small" in size_key or "9" in size_key:
        return SizeTier.SMALL
    if "12" in size_key or "medium" in size_key or "11" in size_key:
        return SizeTier.MEDIUM
    if "14" in size_key or "large" in size_key:
        return SizeTier.LARGE

    logger.debug("Size %r matched no tier, pricing as medium", size)
    return SizeTier.MEDIUM


def get_topping_price(topping: Topping, size: SizeLike) -> int:
    """Price of a topping for a pizza size, in cents."""
    return topping.price_cents(resolve_size_tier(size))


def calculate_add_topping_charge(topping: Topping, size: SizeLike) -> int:
    """Charge for adding a topping. There are no free adds outside topper pizzas."""
    return get_topping_price(topping, size)


# =============================================================================
# Replacement Rules
# =============================================================================

def validate_topping_replacement(
    original_topping: Topping,
    new_topping: Topping,
    size: SizeLike,
    existing_replacements: int = 0,
) -> CustomizationResult:
    """
    Check whether swapping original_topping for new_topping is allowed and
    what it costs.

    Args:
        original_topping: Topping currently on the pizza
        new_topping: Topping the customer wants instead
        size: Pizza size (tier or free-text string)
        existing_replacements: Replacements already accepted on this pizza

    Returns:
        CustomizationResult. Invalid swaps come back with is_valid=False and
        an error message; this function never raises for rule violations.
    """
    if existing_replacements >= FREE_REPLACEMENTS_PER_PIZZA:
        return CustomizationResult(
            is_valid=True,
            additional_charge_cents=get_topping_price(new_topping, size),
        )

    original = original_topping.category
    new = new_topping.category

    if original == ToppingCategory.VEGETABLE and new == ToppingCategory.VEGETABLE:
        return CustomizationResult(is_valid=True)

    if original in PREMIUM_CATEGORIES and new in PREMIUM_CATEGORIES:
        return CustomizationResult(is_valid=True)

    if original == ToppingCategory.VEGETABLE and new in PREMIUM_CATEGORIES:
        return CustomizationResult(
            is_valid=True,
            additional_charge_cents=get_topping_price(new_topping, size),
        )

    if original in PREMIUM_CATEGORIES and new == ToppingCategory.VEGETABLE:
        return CustomizationResult(
            is_valid=False,
            error_message=REPLACE_MEAT_WITH_VEGETABLE_ERROR,
        )

    return CustomizationResult(is_valid=False, error_message=INVALID_REPLACEMENT_ERROR)


# =============================================================================
# Half-and-Half Eligibility
# =============================================================================

def can_split_pizza(size: SizeLike, is_gluten_free: bool) -> bool:
    """
    Whether a pizza can be ordered half-and-half.

    Gluten-free pizzas are never split. Otherwise only medium and large
    sizes qualify.
    """
    if is_gluten_free:
        return False

    if isinstance(size, SizeTier):
        return size in (SizeTier.MEDIUM, SizeTier.LARGE)

    size_key = (size or "").lower()
    return (
        "12" in size_key
        or "medium" in size_key
        or "14" in size_key
        or "large" in size_key
    )


# =============================================================================
# Topper Pizzas
# =============================================================================

def free_add_allowance(pizza_name: Optional[str]) -> int:
    """Number of free topping adds included with a pizza ("Two Topper" -> 2)."""
    name = (pizza_name or "").lower()
    if "two topper" in name:
        return 2
    if "three topper" in name:
        return 3
    return 0


# =============================================================================
# Totals
# =============================================================================

def apply_modification(
    state: CustomizationTotal,
    modification: ToppingModification,
    size: SizeLike,
    index: int = 0,
) -> CustomizationTotal:
    """
    Fold one modification into a running total.

    The replacement counter and free-add allowance travel in the state, so
    each step only depends on its inputs.
    """
    if modification.type == ModificationType.ADD:
        if state.free_adds_remaining > 0:
            return replace(
                state,
                accepted=state.accepted + (PricedModification(modification, 0, index),),
                free_adds_remaining=state.free_adds_remaining - 1,
            )
        charge = calculate_add_topping_charge(modification.topping, size)
        return replace(
            state,
            total_cents=state.total_cents + charge,
            accepted=state.accepted + (PricedModification(modification, charge, index),),
        )

    if modification.type == ModificationType.REPLACE:
        if modification.replaced_topping is None:
            return replace(
                state,
                rejected=state.rejected + (
                    RejectedModification(index, modification, MISSING_REPLACED_TOPPING_ERROR),
                ),
            )

        result = validate_topping_replacement(
            modification.replaced_topping,
            modification.topping,
            size,
            state.replacement_count,
        )
        if not result.is_valid:
            logger.debug(
                "Rejected replacement %s -> %s: %s",
                modification.replaced_topping.name,
                modification.topping.name,
                result.error_message,
            )
            return replace(
                state,
                rejected=state.rejected + (
                    RejectedModification(index, modification, result.error_message),
                ),
            )
        return replace(
            state,
            total_cents=state.total_cents + result.additional_charge_cents,
            accepted=state.accepted + (
                PricedModification(modification, result.additional_charge_cents, index),
            ),
            replacement_count=state.replacement_count + 1,
        )

    # Removing a topping never costs anything
    return replace(
        state,
        accepted=state.accepted + (PricedModification(modification, 0, index),),
    )


def calculate_customization_total(
    modifications: Iterable[ToppingModification],
    size: SizeLike,
    existing_replacements: int = 0,
    free_adds: int = 0,
) -> CustomizationTotal:
    """
    Total additional charge for a pizza's modifications.

    Modifications must be in the order the customer applied them: the first
    accepted replacement takes the free slot.

    Args:
        modifications: Ordered modifications for one pizza
        size: Pizza size (tier or free-text string)
        existing_replacements: Replacements already accepted before these
        free_adds: Number of adds included in the pizza price (topper pizzas)

    Returns:
        CustomizationTotal with the total, accepted and rejected modifications
    """
    state = CustomizationTotal(
        replacement_count=existing_replacements,
        free_adds_remaining=free_adds,
    )
    for index, modification in enumerate(modifications):
        state = apply_modification(state, modification, size, index)
    return state
