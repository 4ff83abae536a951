from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    Boolean,
    DateTime,
    ForeignKey,
    Text,
    Index,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


# --- Topping catalog ---

class Topping(Base):
    """A topping that can be added to, removed from, or swapped on a pizza."""
    __tablename__ = "toppings"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    category = Column(String, nullable=False, index=True)  # 'vegetable', 'meat', 'cheese'
    small_price = Column(Numeric(10, 2), nullable=False)
    medium_price = Column(Numeric(10, 2), nullable=False)
    large_price = Column(Numeric(10, 2), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)  # False = "86'd" / out of stock
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


# --- Pizza menu ---

class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    category = Column(String, nullable=False, index=True)  # 'pizza', 'wings', 'sides', 'drinks', ...
    description = Column(Text, nullable=True)  # default toppings are parsed from this
    is_gluten_free = Column(Boolean, nullable=False, default=False)
    is_available = Column(Boolean, nullable=False, default=True)

    prices = relationship("MenuItemPrice", back_populates="menu_item", cascade="all, delete-orphan")
    cart_items = relationship("CartItem", back_populates="menu_item")


class MenuItemPrice(Base):
    """Price of a menu item at one size (e.g. '12"' -> 16.99)."""
    __tablename__ = "menu_item_prices"

    id = Column(Integer, primary_key=True, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False)
    size = Column(String(50), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    __table_args__ = (
        UniqueConstraint("menu_item_id", "size", name="uix_menu_item_size"),
    )

    menu_item = relationship("MenuItem", back_populates="prices")


# --- Shopping cart ---

class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(String, nullable=False, index=True)  # storefront session identifier
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"), nullable=False)
    size = Column(String(50), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(10, 2), nullable=False)  # unit price including customizations
    notes = Column(Text, nullable=True)
    customizations = Column(Text, nullable=True)  # JSON payload, see services/customization_payload.py
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    menu_item = relationship("MenuItem", back_populates="cart_items")

    __table_args__ = (
        Index("ix_cart_items_cart_id_created_at", "cart_id", "created_at"),
    )
