from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, Boolean, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
import uuid

from .database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class SaleStatus(str, enum.Enum):
    PAID = "Paid"
    PARTIALLY_PAID = "Partially Paid"
    UNPAID = "Unpaid"


# --- Material rolls (dimensional + film pricing) ---

class MaterialCategory(Base):
    """Roll material families — banner, vinyl, DTF film..."""
    __tablename__ = "material_categories"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)

    stock_items = relationship("StockItem", back_populates="category")
    pricing_tiers = relationship("PricingTier", back_populates="category")


class StockItem(Base):
    """One roll SKU. Stock and width are tracked in meters."""
    __tablename__ = "stock_items"

    sku_id = Column(String, primary_key=True, default=_uuid)
    category_id = Column(String, ForeignKey("material_categories.id"), nullable=False)
    item_name = Column(String, nullable=False)
    width = Column(Float, nullable=False)
    total_stock_meters = Column(Float, default=0.0)
    reorder_level = Column(Float, default=0.0)
    last_purchase_price_per_roll = Column(Float, default=0.0)

    category = relationship("MaterialCategory", back_populates="stock_items")


class PricingTier(Base):
    """Area multiplier in currency per cm² for one material category."""
    __tablename__ = "pricing_tiers"

    id = Column(String, primary_key=True, default=_uuid)
    category_id = Column(String, ForeignKey("material_categories.id"), nullable=False)
    name = Column(String, nullable=False)
    value = Column(Float, nullable=False)

    category = relationship("MaterialCategory", back_populates="pricing_tiers")


# --- Catalog products (negotiated pricing) ---

class ProductCategory(Base):
    """Product setup — up to five attribute fields driving the cascading filters."""
    __tablename__ = "product_categories"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String, unique=True, nullable=False)
    fields = Column(JSON, default=list)  # [{label, options}, ...] or null per slot


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)  # ProductCategory.name
    quantity = Column(Integer, default=0)
    price = Column(Float, nullable=False)  # preferred selling price
    min_price = Column(Float, default=0.0)  # negotiation floor
    purchase_price = Column(Float, nullable=True)
    sku = Column(String, nullable=True)
    min_stock_level = Column(Integer, nullable=True)
    is_consumable = Column(Boolean, default=False)
    attributes = Column(JSON, default=list)  # five slot values, null where unset


# --- Customers + sales ---

class Customer(Base):
    __tablename__ = "customers"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String, nullable=False)
    email = Column(String)
    phone = Column(String)
    address = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    sales = relationship("Sale", back_populates="customer")


class Sale(Base):
    __tablename__ = "sales"

    id = Column(String, primary_key=True, default=_uuid)
    date = Column(DateTime, default=datetime.utcnow)
    customer_id = Column(String, ForeignKey("customers.id"), nullable=False)
    items_json = Column(JSON, default=list)  # line items as submitted
    total = Column(Float, default=0.0)
    amount_paid = Column(Float, default=0.0)
    status = Column(String, default=SaleStatus.UNPAID.value)
    user_id = Column(String, nullable=True)
    user_name = Column(String, nullable=True)
    payments_json = Column(JSON, default=list)

    customer = relationship("Customer", back_populates="sales")


# --- Quote sessions ---

class QuoteSession(Base):
    """One user's order-in-progress between calculator requests."""
    __tablename__ = "quote_sessions"

    id = Column(String, primary_key=True)  # UUID
    user_id = Column(String, nullable=False)
    items_json = Column(JSON, default=list)
    status = Column(String, default="active")  # 'active' | 'abandoned'
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
