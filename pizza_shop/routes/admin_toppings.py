"""
Admin Topping Routes for Pizza Shop
===================================

This module contains admin endpoints for managing the topping catalog and
its "86" toggle.

Endpoints:
----------
- GET /admin/toppings: List all toppings (including 86'd)
- POST /admin/toppings: Create a new topping
- GET /admin/toppings/{id}: Get a specific topping
- PUT /admin/toppings/{id}: Update a topping
- DELETE /admin/toppings/{id}: Delete a topping
- PATCH /admin/toppings/{id}/availability: Toggle 86 status

The "86" System:
----------------
Restaurant terminology for "out of stock". An 86'd topping disappears from
GET /toppings and can't be used in new customizations, but cart lines that
already use it still price correctly.

Price changes take effect on the next quote. Lines already in carts keep the
price they were given when added or last re-customized.

Authentication:
---------------
All endpoints require admin authentication via HTTP Basic Auth.

Usage:
------
    # 86 mushrooms
    PATCH /admin/toppings/5/availability
    {"is_available": false}
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..auth import verify_admin_credentials
from ..db import get_db
from ..models import Topping
from ..schemas.toppings import (
    ToppingAvailabilityUpdate,
    ToppingCreate,
    ToppingOut,
    ToppingUpdate,
)

logger = logging.getLogger(__name__)

admin_toppings_router = APIRouter(
    prefix="/admin/toppings",
    tags=["Admin - Toppings"]
)


def _get_topping(db: Session, topping_id: int) -> Topping:
    topping = db.query(Topping).filter(Topping.id == topping_id).first()
    if not topping:
        raise HTTPException(status_code=404, detail="Topping not found")
    return topping


def _name_taken(db: Session, name: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Topping).filter(func.lower(Topping.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Topping.id != exclude_id)
    return query.first() is not None


@admin_toppings_router.get("", response_model=List[ToppingOut])
def list_toppings(
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
    category: Optional[str] = Query(None, description="Filter by category"),
) -> List[ToppingOut]:
    """List all toppings, including unavailable ones."""
    query = db.query(Topping)
    if category:
        query = query.filter(Topping.category == category.lower())
    toppings = query.order_by(Topping.category, Topping.sort_order, Topping.name).all()
    return [ToppingOut.model_validate(t) for t in toppings]


@admin_toppings_router.post("", response_model=ToppingOut, status_code=201)
def create_topping(
    payload: ToppingCreate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ToppingOut:
    """Create a new topping."""
    if _name_taken(db, payload.name):
        raise HTTPException(status_code=400, detail=f"Topping '{payload.name}' already exists")

    topping = Topping(
        name=payload.name,
        category=payload.category,
        small_price=payload.small_price,
        medium_price=payload.medium_price,
        large_price=payload.large_price,
        is_available=payload.is_available,
        sort_order=payload.sort_order,
    )
    db.add(topping)
    db.commit()
    db.refresh(topping)
    logger.info("Created topping: %s (id=%d)", topping.name, topping.id)
    return ToppingOut.model_validate(topping)


@admin_toppings_router.get("/{topping_id}", response_model=ToppingOut)
def get_topping(
    topping_id: int,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ToppingOut:
    """Get a specific topping by ID."""
    return ToppingOut.model_validate(_get_topping(db, topping_id))


@admin_toppings_router.put("/{topping_id}", response_model=ToppingOut)
def update_topping(
    topping_id: int,
    payload: ToppingUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ToppingOut:
    """Update a topping. Only provided fields change."""
    topping = _get_topping(db, topping_id)

    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in updates:
        updates["name"] = updates["name"].strip()
        if not updates["name"]:
            raise HTTPException(status_code=400, detail="Name cannot be empty")
        if _name_taken(db, updates["name"], exclude_id=topping_id):
            raise HTTPException(status_code=400, detail=f"Topping '{updates['name']}' already exists")

    for field, value in updates.items():
        setattr(topping, field, value)

    db.commit()
    db.refresh(topping)
    logger.info("Updated topping: %s (id=%d) fields=%s", topping.name, topping.id, sorted(updates))
    return ToppingOut.model_validate(topping)


@admin_toppings_router.patch("/{topping_id}/availability", response_model=ToppingOut)
def update_topping_availability(
    topping_id: int,
    payload: ToppingAvailabilityUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ToppingOut:
    """Toggle topping availability (86/un-86)."""
    topping = _get_topping(db, topping_id)
    topping.is_available = payload.is_available
    db.commit()
    db.refresh(topping)
    logger.info("Updated topping %d availability: %s", topping_id, payload.is_available)
    return ToppingOut.model_validate(topping)


@admin_toppings_router.delete("/{topping_id}", status_code=204)
def delete_topping(
    topping_id: int,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> None:
    """Delete a topping."""
    topping = _get_topping(db, topping_id)
    name = topping.name
    db.delete(topping)
    db.commit()
    logger.info("Deleted topping: %s (id=%d)", name, topping_id)
