"""
Public Topping Routes for Pizza Shop
====================================

Read-only catalog endpoints used by the storefront's pizza customizer.

Endpoints:
----------
- GET /toppings: List available toppings, grouped by category
- GET /toppings/for-pizza: Default toppings of a menu pizza

No authentication is required.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Topping
from ..schemas.toppings import PizzaToppingsOut, ToppingOut
from ..services.catalog import default_toppings_for_pizza, find_menu_item

logger = logging.getLogger(__name__)

toppings_router = APIRouter(prefix="/toppings", tags=["Toppings"])


@toppings_router.get("", response_model=List[ToppingOut])
def list_toppings(
    db: Session = Depends(get_db),
    category: Optional[str] = Query(None, description="Filter by category"),
) -> List[ToppingOut]:
    """List available toppings ordered by category, then display order."""
    query = db.query(Topping).filter(Topping.is_available.is_(True))
    if category:
        query = query.filter(Topping.category == category.lower())
    toppings = query.order_by(Topping.category, Topping.sort_order, Topping.name).all()
    return [ToppingOut.model_validate(t) for t in toppings]


@toppings_router.get("/for-pizza", response_model=PizzaToppingsOut)
def get_pizza_toppings(
    pizza_name: str = Query(..., description="Menu pizza name"),
    db: Session = Depends(get_db),
) -> PizzaToppingsOut:
    """Default toppings for a menu pizza, parsed from its description."""
    menu_item = find_menu_item(db, pizza_name)
    if menu_item is None:
        raise HTTPException(status_code=404, detail=f"Pizza not found: {pizza_name}")
    return PizzaToppingsOut(
        pizza_name=menu_item.name,
        toppings=default_toppings_for_pizza(menu_item),
    )
