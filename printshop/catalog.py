"""
Catalog snapshot — the read-only collections the quote engine prices against.

The host refreshes a snapshot from the store before each interaction
(load_catalog) and hands it to the engine. Lookups by id raise
CatalogLookupError when the id no longer exists; the filters below drive
the cascading selection lists of the calculator screens.
"""

from dataclasses import dataclass, field
from typing import Optional

from .config import settings

ATTRIBUTE_SLOTS = 5

FILM_CATEGORY_MATCHES = ("dtf", "direct to film")

# Calculator tab → keywords a product category name must contain to show up.
# Tabs not listed here (e.g. "products") show every category.
CATEGORY_KEYWORDS = {
    "embroidery": ["embroidery", "t-shirt", "shirt", "polo", "cap", "uniform", "garment", "jumper", "hoodie"],
    "bizhub": ["bizhub", "general", "print", "card", "flyer", "poster", "book", "document", "paper"],
    "supplies": ["ink", "powder", "solution", "clean", "thread", "toner", "material"],
}


class CatalogLookupError(LookupError):
    """An id referenced by the host is no longer in the catalog snapshot."""

    def __init__(self, kind: str, identifier):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} '{identifier}' not found in catalog")


@dataclass(frozen=True)
class MaterialCategory:
    id: str
    name: str
    is_active: bool = True

    @property
    def is_film(self) -> bool:
        lowered = self.name.lower()
        return any(match in lowered for match in FILM_CATEGORY_MATCHES)


@dataclass(frozen=True)
class Roll:
    sku_id: str
    item_name: str
    category_id: str
    width: float  # meters
    total_stock_meters: float = 0.0
    reorder_level: float = 0.0
    last_purchase_price_per_roll: float = 0.0

    @property
    def needs_reorder(self) -> bool:
        return self.total_stock_meters <= self.reorder_level


@dataclass(frozen=True)
class PricingTier:
    id: str
    name: str
    category_id: str
    value: float  # currency per cm²


@dataclass(frozen=True)
class CategoryField:
    label: str
    options: tuple = ()


@dataclass(frozen=True)
class ProductCategory:
    id: str
    name: str
    # One entry per attribute slot (1..5); None where the slot is unused
    fields: tuple = (None,) * ATTRIBUTE_SLOTS

    def field_for(self, slot: int) -> Optional[CategoryField]:
        return self.fields[slot - 1] if 1 <= slot <= len(self.fields) else None

    def defined_fields(self) -> list:
        """[(slot, CategoryField)] for every labelled slot, in slot order."""
        return [(i + 1, f) for i, f in enumerate(self.fields) if f is not None and f.label]


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: str  # ProductCategory.name
    price: float  # preferred selling price
    min_price: float = 0.0  # floor for negotiation
    quantity: int = 0
    attributes: tuple = (None,) * ATTRIBUTE_SLOTS
    sku: str = ""
    min_stock_level: Optional[int] = None
    is_consumable: bool = False

    def attribute(self, slot: int) -> Optional[str]:
        return self.attributes[slot - 1] if 1 <= slot <= len(self.attributes) else None

    def attribute_values(self) -> list:
        """Populated attribute values in slot order, empty slots skipped."""
        return [a for a in self.attributes if a]


def normalize_slots(values, size: int = ATTRIBUTE_SLOTS) -> tuple:
    """Pad or trim a slot list to exactly `size` entries."""
    values = list(values or [])[:size]
    return tuple(values + [None] * (size - len(values)))


@dataclass
class Catalog:
    rolls: list = field(default_factory=list)
    tiers: list = field(default_factory=list)
    products: list = field(default_factory=list)
    product_categories: list = field(default_factory=list)
    material_categories: list = field(default_factory=list)

    # --- Lookups ---

    def roll(self, sku_id: str) -> Roll:
        for r in self.rolls:
            if r.sku_id == sku_id:
                return r
        raise CatalogLookupError("Roll", sku_id)

    def tier(self, tier_id: str) -> PricingTier:
        for t in self.tiers:
            if t.id == tier_id:
                return t
        raise CatalogLookupError("Pricing tier", tier_id)

    def product(self, product_id: str) -> Product:
        for p in self.products:
            if p.id == product_id:
                return p
        raise CatalogLookupError("Product", product_id)

    def product_category(self, name: str) -> ProductCategory:
        for c in self.product_categories:
            if c.name == name:
                return c
        raise CatalogLookupError("Product category", name)

    def material_category(self, category_id: str) -> MaterialCategory:
        for c in self.material_categories:
            if c.id == category_id:
                return c
        raise CatalogLookupError("Material category", category_id)

    # --- Dimensional / film selection lists ---

    def is_film_roll(self, roll: Roll) -> bool:
        """A roll whose material category is gone is not offered as film."""
        try:
            return self.material_category(roll.category_id).is_film
        except CatalogLookupError:
            return False

    def rolls_for_mode(self, film: bool = False) -> list:
        """Film rolls for the film calculator, every other roll for dimensional pricing."""
        return [r for r in self.rolls if self.is_film_roll(r) == film]

    def tiers_for_roll(self, sku_id: str) -> list:
        """Pricing tiers sharing the selected roll's material category."""
        if not sku_id:
            return []
        category_id = self.roll(sku_id).category_id
        return [t for t in self.tiers if t.category_id == category_id]

    def film_roll_options(self) -> list:
        """
        One option per distinct film roll width, narrowest first.
        Widths under a meter are labelled in cm.
        """
        film_rolls = self.rolls_for_mode(film=True)
        options = []
        for width in sorted({r.width for r in film_rolls}):
            roll = next(r for r in film_rolls if r.width == width)
            if width < 1:
                label = f"{width * 100:g} cm Roll"
            else:
                label = f"{width:g} m Roll"
            options.append({"width": width, "label": label, "sku_id": roll.sku_id})
        return options

    # --- Catalog product cascading filters ---

    def product_categories_for_tab(self, tab: str) -> list:
        keywords = CATEGORY_KEYWORDS.get(tab)
        if not keywords:
            return list(self.product_categories)
        return [
            c for c in self.product_categories
            if any(k in c.name.lower() for k in keywords)
        ]

    def filter_products(self, category: str, filters: dict = None,
                        include_consumables: bool = False) -> list:
        """
        Products of one category matching every active attribute filter.

        filters: {slot_number: value}; empty values are ignored.
        Consumables (machine supplies) only show when include_consumables is set.
        """
        if not category:
            return []
        active = {int(slot): value for slot, value in (filters or {}).items() if value}
        matches = []
        for p in self.products:
            if p.category != category:
                continue
            if p.is_consumable and not include_consumables:
                continue
            if any(p.attribute(slot) != value for slot, value in active.items()):
                continue
            matches.append(p)
        return matches

    def is_low_stock(self, product: Product) -> bool:
        level = product.min_stock_level or settings.DEFAULT_LOW_STOCK_LEVEL
        return product.quantity <= level


# --- Store → snapshot ---

def load_catalog(db) -> Catalog:
    """Build a fresh snapshot from the database collections."""
    from . import models

    return Catalog(
        rolls=[
            Roll(
                sku_id=r.sku_id,
                item_name=r.item_name,
                category_id=r.category_id,
                width=r.width,
                total_stock_meters=r.total_stock_meters or 0.0,
                reorder_level=r.reorder_level or 0.0,
                last_purchase_price_per_roll=r.last_purchase_price_per_roll or 0.0,
            )
            for r in db.query(models.StockItem).all()
        ],
        tiers=[
            PricingTier(id=t.id, name=t.name, category_id=t.category_id, value=t.value)
            for t in db.query(models.PricingTier).all()
        ],
        products=[
            Product(
                id=p.id,
                name=p.name,
                category=p.category,
                price=p.price,
                min_price=p.min_price or 0.0,
                quantity=p.quantity or 0,
                attributes=normalize_slots(p.attributes),
                sku=p.sku or "",
                min_stock_level=p.min_stock_level,
                is_consumable=bool(p.is_consumable),
            )
            for p in db.query(models.InventoryItem).all()
        ],
        product_categories=[
            ProductCategory(
                id=c.id,
                name=c.name,
                fields=normalize_slots(
                    CategoryField(label=f["label"], options=tuple(f.get("options") or ()))
                    if f else None
                    for f in (c.fields or [])
                ),
            )
            for c in db.query(models.ProductCategory).all()
        ],
        material_categories=[
            MaterialCategory(id=c.id, name=c.name, is_active=bool(c.is_active))
            for c in db.query(models.MaterialCategory).all()
        ],
    )
