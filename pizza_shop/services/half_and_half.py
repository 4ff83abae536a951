"""
Half-and-half pizza pricing.

A half-and-half pizza has two independently topped halves, each starting
from a base pizza. The customer pays for the more expensive half; the
cheaper half rides along for free.

Each half is priced with the regular topping engine, so each half gets its
own free replacement.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..config import BASE_INGREDIENT_KEYWORDS
from .money_utils import format_cents
from .topping_pricing import (
    CustomizationTotal,
    HalfPizzaSide,
    ModificationType,
    RejectedModification,
    SizeLike,
    ToppingModification,
    calculate_customization_total,
    can_split_pizza,
    free_add_allowance,
)

logger = logging.getLogger(__name__)


class SplitNotAllowedError(ValueError):
    """Raised when a half-and-half pizza is requested for a size that can't be split."""


@dataclass(frozen=True)
class HalfPizza:
    """One half of a half-and-half pizza."""
    base_pizza_name: Optional[str] = None
    base_price_cents: int = 0
    default_toppings: tuple[str, ...] = field(default_factory=tuple)
    modifications: tuple[ToppingModification, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class HalfQuote:
    side: HalfPizzaSide
    base_price_cents: int
    customization: CustomizationTotal

    @property
    def total_cents(self) -> int:
        return self.base_price_cents + self.customization.total_cents


@dataclass(frozen=True)
class HalfAndHalfQuote:
    left: HalfQuote
    right: HalfQuote

    @property
    def total_cents(self) -> int:
        return max(self.left.total_cents, self.right.total_cents)

    @property
    def formatted_total(self) -> str:
        return format_cents(self.total_cents)

    @property
    def rejected(self) -> list[tuple[HalfPizzaSide, RejectedModification]]:
        """Rejected modifications from both halves, tagged with their side."""
        return (
            [(self.left.side, r) for r in self.left.customization.rejected]
            + [(self.right.side, r) for r in self.right.customization.rejected]
        )


def strip_base_ingredients(topping_names: Iterable[str]) -> list[str]:
    """Drop sauce/mozzarella entries that every pizza has anyway."""
    return [
        name for name in topping_names
        if not any(keyword in name.lower() for keyword in BASE_INGREDIENT_KEYWORDS)
    ]


def current_toppings(
    default_toppings: Iterable[str],
    modifications: Iterable[ToppingModification],
) -> list[str]:
    """
    Toppings on a pizza after applying modifications to its defaults.

    Names are compared case-insensitively. A replacement whose replaced
    topping isn't on the pizza is ignored.
    """
    current = list(default_toppings)

    for mod in modifications:
        name = mod.topping.name
        if mod.type == ModificationType.REMOVE:
            current = [t for t in current if t.lower() != name.lower()]
        elif mod.type == ModificationType.ADD:
            if not any(t.lower() == name.lower() for t in current):
                current.append(name)
        elif mod.type == ModificationType.REPLACE and mod.replaced_topping:
            replaced = mod.replaced_topping.name.lower()
            for index, topping in enumerate(current):
                if topping.lower() == replaced:
                    current[index] = name
                    break

    return current


def price_half(half: HalfPizza, side: HalfPizzaSide, size: SizeLike) -> HalfQuote:
    """Price one half. A topper base pizza brings its included adds to its half."""
    customization = calculate_customization_total(
        half.modifications,
        size,
        free_adds=free_add_allowance(half.base_pizza_name),
    )
    return HalfQuote(side=side, base_price_cents=half.base_price_cents, customization=customization)


def price_half_and_half(
    left: HalfPizza,
    right: HalfPizza,
    size: SizeLike,
    is_gluten_free: bool = False,
) -> HalfAndHalfQuote:
    """
    Price a half-and-half pizza.

    Raises:
        SplitNotAllowedError: If the size/crust combination can't be split
    """
    if not can_split_pizza(size, is_gluten_free):
        raise SplitNotAllowedError(
            f"Half-and-half is not available for size {size!r}"
            + (" on gluten-free crust" if is_gluten_free else "")
        )

    quote = HalfAndHalfQuote(
        left=price_half(left, HalfPizzaSide.LEFT, size),
        right=price_half(right, HalfPizzaSide.RIGHT, size),
    )
    logger.debug(
        "Half-and-half %s / %s: left=%d right=%d charged=%d",
        left.base_pizza_name,
        right.base_pizza_name,
        quote.left.total_cents,
        quote.right.total_cents,
        quote.total_cents,
    )
    return quote
