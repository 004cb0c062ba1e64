from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from .. import models, schemas
from ..catalog import CatalogLookupError, load_catalog
from ..database import get_db

router = APIRouter(prefix="/catalog", tags=["catalog"])

# Starter catalog. Prices in UGX. Tier values are per cm².
DEFAULT_MATERIAL_CATEGORIES = [
    {"id": "mat-banner", "name": "Banner"},
    {"id": "mat-vinyl", "name": "Vinyl Sticker"},
    {"id": "mat-dtf", "name": "DTF Film"},
]

DEFAULT_STOCK_ITEMS = [
    {"sku_id": "sku-banner-320", "category_id": "mat-banner", "item_name": "Frontlit Banner 3.2m",
     "width": 3.2, "total_stock_meters": 150.0, "reorder_level": 50.0, "last_purchase_price_per_roll": 420000.0},
    {"sku_id": "sku-vinyl-152", "category_id": "mat-vinyl", "item_name": "Glossy Vinyl 1.52m",
     "width": 1.52, "total_stock_meters": 100.0, "reorder_level": 50.0, "last_purchase_price_per_roll": 380000.0},
    {"sku_id": "sku-dtf-060", "category_id": "mat-dtf", "item_name": "DTF Film 60cm",
     "width": 0.6, "total_stock_meters": 200.0, "reorder_level": 30.0, "last_purchase_price_per_roll": 250000.0},
    {"sku_id": "sku-dtf-030", "category_id": "mat-dtf", "item_name": "DTF Film 30cm",
     "width": 0.3, "total_stock_meters": 100.0, "reorder_level": 30.0, "last_purchase_price_per_roll": 150000.0},
]

DEFAULT_PRICING_TIERS = [
    {"id": "tier-banner-standard", "category_id": "mat-banner", "name": "Standard", "value": 2.5},
    {"id": "tier-banner-wholesale", "category_id": "mat-banner", "name": "Wholesale", "value": 2.0},
    {"id": "tier-vinyl-standard", "category_id": "mat-vinyl", "name": "Standard", "value": 5.0},
]

DEFAULT_PRODUCT_CATEGORIES = [
    {"id": "pc-tshirt", "name": "T-Shirt", "fields": [
        {"label": "Neck Type", "options": ["V-Neck", "Round", "Collared"]},
        {"label": "Brand", "options": ["Gildan", "Fruit of the Loom"]},
        {"label": "Body Color", "options": ["White", "Black", "Navy"]},
        None,
        {"label": "Size", "options": ["S", "M", "L", "XL"]},
    ]},
    {"id": "pc-business-card", "name": "Business Card", "fields": [
        {"label": "Finish", "options": ["Matte", "Glossy"]},
    ]},
    {"id": "pc-ink", "name": "Ink", "fields": [
        {"label": "Color", "options": ["Cyan", "Magenta", "Yellow", "Black"]},
    ]},
]

DEFAULT_INVENTORY = [
    {"id": "prod-tee-round-white-m", "name": "Plain Tee", "category": "T-Shirt", "quantity": 40,
     "price": 15000.0, "min_price": 12000.0, "sku": "TEE-RW-M",
     "attributes": ["Round", "Gildan", "White", None, "M"]},
    {"id": "prod-tee-vneck-black-l", "name": "Plain Tee", "category": "T-Shirt", "quantity": 4,
     "price": 16000.0, "min_price": 13000.0, "sku": "TEE-VB-L",
     "attributes": ["V-Neck", "Gildan", "Black", None, "L"]},
    {"id": "prod-cards-matte-100", "name": "Business Cards x100", "category": "Business Card", "quantity": 25,
     "price": 30000.0, "min_price": 25000.0, "sku": "BC-M-100",
     "attributes": ["Matte", None, None, None, None]},
    {"id": "prod-ink-cyan", "name": "Eco-Solvent Ink 1L", "category": "Ink", "quantity": 10,
     "price": 90000.0, "min_price": 85000.0, "sku": "INK-C-1L", "is_consumable": True,
     "attributes": ["Cyan", None, None, None, None]},
]

_SEED_TABLES = [
    (models.MaterialCategory, "id", DEFAULT_MATERIAL_CATEGORIES),
    (models.StockItem, "sku_id", DEFAULT_STOCK_ITEMS),
    (models.PricingTier, "id", DEFAULT_PRICING_TIERS),
    (models.ProductCategory, "id", DEFAULT_PRODUCT_CATEGORIES),
    (models.InventoryItem, "id", DEFAULT_INVENTORY),
]


def seed_catalog(db: Session) -> int:
    """Insert the starter catalog. Safe to run multiple times — skips existing rows."""
    seeded = 0
    for model, key, rows in _SEED_TABLES:
        for row in rows:
            existing = db.query(model).filter(getattr(model, key) == row[key]).first()
            if not existing:
                db.add(model(**row))
                seeded += 1
        db.flush()
    db.commit()
    return seeded


@router.get("/seed")
def seed(db: Session = Depends(get_db)):
    """Seed the starter catalog."""
    return {"ok": True, "seeded": seed_catalog(db)}


@router.get("/material-categories", response_model=List[schemas.MaterialCategory])
def list_material_categories(db: Session = Depends(get_db)):
    return db.query(models.MaterialCategory).order_by(models.MaterialCategory.name).all()


@router.get("/rolls", response_model=List[schemas.StockItem])
def list_rolls(film: Optional[bool] = None, db: Session = Depends(get_db)):
    """All roll SKUs, or only film / only non-film rolls when `film` is given."""
    if film is None:
        return db.query(models.StockItem).order_by(models.StockItem.item_name).all()
    catalog = load_catalog(db)
    wanted = {r.sku_id for r in catalog.rolls_for_mode(film=film)}
    return [r for r in db.query(models.StockItem).order_by(models.StockItem.item_name).all()
            if r.sku_id in wanted]


@router.get("/film-rolls")
def list_film_roll_options(db: Session = Depends(get_db)):
    return load_catalog(db).film_roll_options()


@router.get("/tiers", response_model=List[schemas.PricingTier])
def list_tiers(sku_id: Optional[str] = None, db: Session = Depends(get_db)):
    """Pricing tiers, limited to the roll's material category when sku_id is given."""
    if not sku_id:
        return db.query(models.PricingTier).all()
    catalog = load_catalog(db)
    try:
        wanted = {t.id for t in catalog.tiers_for_roll(sku_id)}
    except CatalogLookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [t for t in db.query(models.PricingTier).all() if t.id in wanted]


@router.get("/product-categories", response_model=List[schemas.ProductCategory])
def list_product_categories(tab: Optional[str] = None, db: Session = Depends(get_db)):
    """Product setups; a calculator tab narrows them by keyword."""
    rows = db.query(models.ProductCategory).order_by(models.ProductCategory.name).all()
    if not tab:
        return rows
    wanted = {c.id for c in load_catalog(db).product_categories_for_tab(tab)}
    return [c for c in rows if c.id in wanted]


@router.get("/products", response_model=List[schemas.InventoryItem])
def list_products(
    category: Optional[str] = None,
    tab: Optional[str] = None,
    attr1: Optional[str] = None,
    attr2: Optional[str] = None,
    attr3: Optional[str] = None,
    attr4: Optional[str] = None,
    attr5: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Catalog products. With a category, applies the cascading attribute
    filters; consumables only show on the supplies tab.
    """
    catalog = load_catalog(db)
    if category:
        filters = {1: attr1, 2: attr2, 3: attr3, 4: attr4, 5: attr5}
        products = catalog.filter_products(
            category, filters, include_consumables=(tab == "supplies"),
        )
    else:
        products = list(catalog.products)
    return [
        {
            "id": p.id,
            "name": p.name,
            "category": p.category,
            "price": p.price,
            "min_price": p.min_price,
            "quantity": p.quantity,
            "attributes": list(p.attributes),
            "sku": p.sku,
            "min_stock_level": p.min_stock_level,
            "is_consumable": p.is_consumable,
            "low_stock": catalog.is_low_stock(p),
        }
        for p in products
    ]
