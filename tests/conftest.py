from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import pizza_shop.config as config_mod
import pizza_shop.db as db
from pizza_shop.main import app
from pizza_shop.models import Base, MenuItem, MenuItemPrice
from pizza_shop.routes import limiter
from pizza_shop.seed_toppings import seed_pizzas, seed_toppings
from pizza_shop.services.topping_pricing import Topping

# Test admin credentials
TEST_ADMIN_USERNAME = "testadmin"
TEST_ADMIN_PASSWORD = "testpassword123"


@pytest.fixture
def client():
    """Shared FastAPI TestClient using an in-memory SQLite DB.

    Uses StaticPool so all connections share the same in-memory database.
    Seeds the full topping catalog and starter pizza menu, plus a
    single-price side. Sets up test admin credentials and turns off rate
    limiting.
    """
    original_username = config_mod.ADMIN_USERNAME
    original_password = config_mod.ADMIN_PASSWORD
    original_engine = db.engine
    original_session_local = db.SessionLocal
    original_limiter_enabled = limiter.enabled

    config_mod.ADMIN_USERNAME = TEST_ADMIN_USERNAME
    config_mod.ADMIN_PASSWORD = TEST_ADMIN_PASSWORD
    limiter.enabled = False

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the db module used by the app
    db.engine = engine
    db.SessionLocal = TestingSessionLocal

    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    seed_toppings(session)
    seed_pizzas(session)
    session.add(MenuItem(
        name="Garlic Bread",
        category="sides",
        description="Garlic butter on a toasted baguette",
        is_gluten_free=False,
        is_available=True,
        prices=[MenuItemPrice(size="Regular", price=Decimal("5.99"))],
    ))
    session.commit()
    session.close()

    # Override FastAPI DB dependency
    def override_get_db():
        db_sess = TestingSessionLocal()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[db.get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()

    db.engine = original_engine
    db.SessionLocal = original_session_local
    limiter.enabled = original_limiter_enabled
    config_mod.ADMIN_USERNAME = original_username
    config_mod.ADMIN_PASSWORD = original_password


@pytest.fixture
def admin_auth():
    """Returns HTTP Basic Auth tuple for admin endpoints."""
    return (TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD)


@pytest.fixture
def session(client):
    """A session on the test database, for asserting on stored rows."""
    db_sess = db.SessionLocal()
    try:
        yield db_sess
    finally:
        db_sess.close()


def make_topping(name, category, topping_id=None, small="2.49", medium="2.99", large="3.49"):
    return Topping(
        id=topping_id,
        name=name,
        category=category,
        small_price=small,
        medium_price=medium,
        large_price=large,
    )


@pytest.fixture
def toppings():
    """Engine toppings keyed by name, priced like the seeded catalog."""
    return {
        "Mushrooms": make_topping("Mushrooms", "vegetable", 2),
        "Onions": make_topping("Onions", "vegetable", 3),
        "Green Peppers": make_topping("Green Peppers", "vegetable", 1),
        "Pepperoni": make_topping("Pepperoni", "meat", 15),
        "Bacon": make_topping("Bacon", "meat", 20),
        "Ham": make_topping("Ham", "meat", 16),
        "Extra Cheese": make_topping("Extra Cheese", "cheese", 26),
        "Feta Cheese": make_topping("Feta Cheese", "cheese", 27),
    }
