"""
Services Package for Pizza Shop
===============================

This package contains the business logic of the application. Routes call
into these modules; none of them touch HTTP, and only `catalog` touches the
database.

Available Services:
-------------------
- **topping_pricing**: Topping prices by size, replacement rules,
  half-and-half eligibility, and customization totals
- **half_and_half**: Pricing for split pizzas (customer pays for the more
  expensive half)
- **customization_payload**: Cooking preferences and the customization JSON
  stored on cart lines
- **topping_parser**: Default toppings parsed from menu descriptions
- **catalog**: Loading catalog toppings and menu pizzas from the database
- **money_utils**: Integer-cents conversions

Design Philosophy:
------------------
The pricing modules are pure functions over catalog data passed in by the
caller. They return amounts in integer cents and report rule violations as
data rather than raising, so the same calls serve quotes, cart edits, and
checkout.

Usage:
------
    from pizza_shop.services.topping_pricing import calculate_customization_total
    from pizza_shop.services.customization_payload import parse_customizations

Or import the modules:

    from pizza_shop.services import topping_pricing, customization_payload
"""

from . import money_utils
from . import topping_pricing
from . import half_and_half
from . import customization_payload
from . import topping_parser
from . import catalog

__all__ = [
    "money_utils",
    "topping_pricing",
    "half_and_half",
    "customization_payload",
    "topping_parser",
    "catalog",
]
