from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class CustomerBase(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class CustomerCreate(CustomerBase):
    pass


class Customer(CustomerBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


class MaterialCategory(BaseModel):
    id: str
    name: str
    is_active: bool = True

    class Config:
        from_attributes = True


class StockItem(BaseModel):
    sku_id: str
    category_id: str
    item_name: str
    width: float
    total_stock_meters: float = 0.0
    reorder_level: float = 0.0
    last_purchase_price_per_roll: float = 0.0

    class Config:
        from_attributes = True


class PricingTier(BaseModel):
    id: str
    category_id: str
    name: str
    value: float

    class Config:
        from_attributes = True


class CategoryField(BaseModel):
    label: str
    options: List[str] = []


class ProductCategory(BaseModel):
    id: str
    name: str
    fields: List[Optional[CategoryField]] = []

    class Config:
        from_attributes = True


class InventoryItem(BaseModel):
    id: str
    name: str
    category: str
    quantity: int = 0
    price: float
    min_price: float = 0.0
    sku: Optional[str] = None
    min_stock_level: Optional[int] = None
    is_consumable: bool = False
    attributes: List[Optional[str]] = []
    low_stock: bool = False

    class Config:
        from_attributes = True
