"""
Seed the topping catalog and a starter pizza menu.

Run directly to seed the database configured by DATABASE_URL:

    python -m pizza_shop.seed_toppings

Seeding is skipped for any table that already has rows, so it is safe to
run more than once.
"""

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from . import db as db_module
from .models import MenuItem, MenuItemPrice, Topping

logger = logging.getLogger(__name__)

# Every topping costs the same per size tier
SMALL_PRICE = Decimal("2.49")
MEDIUM_PRICE = Decimal("2.99")
LARGE_PRICE = Decimal("3.49")

TOPPINGS = [
    # Vegetables
    ("Green Peppers", "vegetable"),
    ("Mushrooms", "vegetable"),
    ("Onions", "vegetable"),
    ("Red Onions", "vegetable"),
    ("Jalapeno", "vegetable"),
    ("Banana Peppers", "vegetable"),
    ("Spinach", "vegetable"),
    ("Fresh Tomatoes", "vegetable"),
    ("Green Olives", "vegetable"),
    ("Black Olives", "vegetable"),
    ("Pineapple", "vegetable"),
    ("Dill Pickles", "vegetable"),
    ("Lettuce", "vegetable"),
    ("Cooked Tomatoes", "vegetable"),
    # Meats
    ("Pepperoni", "meat"),
    ("Ham", "meat"),
    ("Salami", "meat"),
    ("Beef", "meat"),
    ("Spicy Beef", "meat"),
    ("Bacon", "meat"),
    ("Italian Sausage", "meat"),
    ("Chicken", "meat"),
    ("Donair Meat", "meat"),
    ("Shrimp", "meat"),
    ("Anchovy", "meat"),
    # Cheese
    ("Extra Cheese", "cheese"),
    ("Feta Cheese", "cheese"),
]

# (name, description, gluten free, {size: price})
PIZZAS = [
    (
        "Pepperoni",
        "Pizza sauce, Pepperoni and Mozzarella Cheese",
        False,
        {'10"': "12.99", '12"': "15.99", '14"': "18.99"},
    ),
    (
        "Hawaiian",
        "Pizza sauce, Ham, Pineapple and Mozzarella Cheese",
        False,
        {'10"': "13.99", '12"': "16.99", '14"': "19.99"},
    ),
    (
        "Vegetarian",
        "Pizza sauce, Green Peppers, Mushrooms, Onions, Black Olives and Mozzarella Cheese",
        False,
        {'10"': "14.99", '12"': "17.99", '14"': "20.99"},
    ),
    (
        "BBQ Chicken",
        "BBQ Sauce, Chicken, Red Onions and Mozzarella Cheese",
        False,
        {'10"': "15.99", '12"': "18.99", '14"': "21.99"},
    ),
    (
        "Two Topper",
        "Pizza sauce and Mozzarella Cheese with your choice of two toppings",
        False,
        {'10"': "11.99", '12"': "14.99", '14"': "17.99"},
    ),
    (
        "Gluten-Free Pepperoni",
        "Pizza sauce, Pepperoni and Mozzarella Cheese - Available on gluten-free crust",
        True,
        {'10"': "16.99"},
    ),
]


def seed_toppings(db: Optional[Session] = None) -> int:
    """Insert the topping catalog. Returns the number of toppings added."""
    session = db if db is not None else db_module.SessionLocal()
    try:
        existing = session.query(Topping).count()
        if existing > 0:
            logger.info("Topping catalog already has %d toppings. Not seeding again.", existing)
            return 0

        session.add_all([
            Topping(
                name=name,
                category=category,
                small_price=SMALL_PRICE,
                medium_price=MEDIUM_PRICE,
                large_price=LARGE_PRICE,
                is_available=True,
                sort_order=sort_order,
            )
            for sort_order, (name, category) in enumerate(TOPPINGS)
        ])
        session.commit()
        logger.info("Seeded %d toppings.", len(TOPPINGS))
        return len(TOPPINGS)
    finally:
        if db is None:
            session.close()


def seed_pizzas(db: Optional[Session] = None) -> int:
    """Insert the starter pizza menu. Returns the number of pizzas added."""
    session = db if db is not None else db_module.SessionLocal()
    try:
        existing = session.query(MenuItem).count()
        if existing > 0:
            logger.info("Menu already has %d items. Not seeding again.", existing)
            return 0

        for name, description, is_gluten_free, prices in PIZZAS:
            session.add(MenuItem(
                name=name,
                category="pizza",
                description=description,
                is_gluten_free=is_gluten_free,
                is_available=True,
                prices=[
                    MenuItemPrice(size=size, price=Decimal(price))
                    for size, price in prices.items()
                ],
            ))
        session.commit()
        logger.info("Seeded %d pizzas.", len(PIZZAS))
        return len(PIZZAS)
    finally:
        if db is None:
            session.close()


if __name__ == "__main__":
    from .logging_config import setup_logging

    setup_logging()
    db_module.init_db()
    seed_toppings()
    seed_pizzas()
