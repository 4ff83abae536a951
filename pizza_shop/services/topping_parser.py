"""
Parse pizza menu descriptions into default toppings.

Menu pizzas don't store their toppings separately; the description
("Pizza sauce, BBQ Sauce, Chicken, Red Onions and Mozzarella Cheese") is the
source of truth. This module extracts the known toppings and removable base
ingredients (sauces, mozzarella) from it.
"""

import re
from typing import Optional, Sequence

# Every topping in the catalog (see seed_toppings.py)
KNOWN_TOPPINGS: tuple[str, ...] = (
    "Banana Peppers",
    "Black Olives",
    "Cooked Tomatoes",
    "Dill Pickles",
    "Fresh Tomatoes",
    "Green Olives",
    "Green Peppers",
    "Jalapeno",
    "Lettuce",
    "Mushrooms",
    "Onions",
    "Pineapple",
    "Red Onions",
    "Spinach",
    "Anchovy",
    "Bacon",
    "Beef",
    "Chicken",
    "Donair Meat",
    "Ham",
    "Italian Sausage",
    "Pepperoni",
    "Salami",
    "Shrimp",
    "Spicy Beef",
    "Extra Cheese",
    "Feta Cheese",
)

# Sauces and cheese a customer can take off, but not add as extra toppings
REMOVABLE_BASE_INGREDIENTS: tuple[str, ...] = (
    "Pizza sauce",
    "Mozzarella Cheese",
    "BBQ Sauce",
    "Frank's Red Hot Sauce",
    "Butter Chicken Sauce",
    "Ranch Sauce",
    "Chipotle Sauce",
    "Our Own Creamy Sauce",
    "Sweet Donair Sauce",
    "Teriyaki Sauce",
    "Salsa sauce",
)

_SPLIT_PATTERN = re.compile(r",|\sand\s")


def _match(part: str, candidates: Sequence[str]) -> Optional[str]:
    """
    Best catalog name for one description part, ignoring case.

    Candidates named inside the part win, longest first, ties in catalog
    order. Otherwise the first candidate in catalog order that contains the
    part is used.
    """
    part_lower = part.lower()
    inside = [c for c in candidates if c.lower() in part_lower]
    if inside:
        return max(inside, key=len)
    return next((c for c in candidates if part_lower in c.lower()), None)


def parse_toppings_from_description(
    description: Optional[str],
    known_toppings: Sequence[str] = KNOWN_TOPPINGS,
    base_ingredients: Sequence[str] = REMOVABLE_BASE_INGREDIENTS,
) -> list[str]:
    """
    Extract toppings and removable base ingredients from a pizza description.

    Each comma or "and" separated part is matched against the catalog by
    substring, ignoring case. A part naming "Red Onions" resolves to
    "Red Onions", and a part naming "Onions" to "Onions". A bare fragment
    such as "Peppers" takes the first catalog topping containing it
    ("Banana Peppers").

    Examples:
        "Pizza sauce, Pepperoni and Mozzarella Cheese"
            -> ["Pizza sauce", "Pepperoni", "Mozzarella Cheese"]
    """
    if not description:
        return []

    parts = [part.strip() for part in _SPLIT_PATTERN.split(description)]

    items: list[str] = []
    for part in parts:
        if not part:
            continue

        matched = _match(part, known_toppings)
        if matched is None:
            matched = _match(part, base_ingredients)

        if matched is not None and matched not in items:
            items.append(matched)

    return items
