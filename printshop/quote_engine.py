"""
Quote Engine — accumulates priced line items into an order and hands it off.

One QuoteEngine serves one interactive session: a catalog snapshot to
resolve ids against, and the quote being built. Pricing flows are pure;
the quote list is the only state that survives between calls.

Lifecycle: Empty → Accumulating → (cleared | handed off) → Empty
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .catalog import Catalog, CatalogLookupError, Roll
from .pricing.base import EntryResult, LineItem, Rejection
from .pricing.catalog_product import ProductEntry
from .pricing.dimensional import DimensionalEntry
from .pricing.film import FilmEntry
from .pricing.manual import ManualEntry
from .pricing.registry import get_entry_flow
from .units import LengthUnit, parse_unit

logger = logging.getLogger(__name__)


@dataclass
class SubmitResult:
    ok: bool
    error: Optional[Rejection] = None
    message: str = ""
    confirmation: Any = None


class Quote:
    """Ordered line items. Changes only through append, remove and clear."""

    def __init__(self, items: list = None):
        self._items = list(items or [])

    @property
    def items(self) -> tuple:
        return tuple(self._items)

    @property
    def total(self) -> float:
        """Σ quantity × unit price — recomputed on every read."""
        return sum(item.quantity * item.price for item in self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self.items)

    def append(self, item: LineItem):
        self._items.append(item)

    def remove(self, index: int) -> LineItem:
        """Removes exactly the item at `index`; the rest keep their order."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"No quote item at position {index} (quote has {len(self._items)})")
        return self._items.pop(index)

    def clear(self):
        self._items = []

    def submit(self, create_sale: Callable[[list], Any]) -> SubmitResult:
        """
        Hand the whole item list to the sale-creation collaborator.

        Empty quotes are refused without calling it. If the collaborator
        raises, the quote is left as it was and the error propagates.
        """
        if self.is_empty:
            return SubmitResult(
                ok=False,
                error=Rejection.EMPTY_QUOTE_ON_SUBMIT,
                message="Your quote is empty. Add items to create a sale.",
            )
        items = list(self._items)
        try:
            confirmation = create_sale(items)
        except Exception as e:
            logger.warning("Sale handoff failed for %d quote items: %s", len(items), e)
            raise
        self.clear()
        return SubmitResult(ok=True, confirmation=confirmation)

    def to_list(self) -> list:
        return [item.to_dict() for item in self._items]

    @classmethod
    def from_list(cls, data: list) -> "Quote":
        return cls([LineItem.from_dict(d) for d in data or []])


class QuoteEngine:
    """
    Host-facing facade over the four entry flows and the quote.

    Entities are referenced by id. A missing id (None/"") is a
    MISSING_SELECTION rejection; an id that is not in the snapshot raises
    CatalogLookupError.
    """

    def __init__(self, catalog: Catalog = None, quote: Quote = None):
        self.catalog = catalog or Catalog()
        self.quote = quote if quote is not None else Quote()
        self.dimensional = get_entry_flow("dim")
        self.film = get_entry_flow("film")
        self.product = get_entry_flow("product")
        self.manual = get_entry_flow("manual")

    # --- Read side ---

    @property
    def items(self) -> tuple:
        return self.quote.items

    @property
    def total(self) -> float:
        return self.quote.total

    # --- Entry flows ---

    def add_dimensional(self, length: float, width: float,
                        roll_id: str = None, tier_id: str = None,
                        length_unit=LengthUnit.CENTIMETER,
                        width_unit=LengthUnit.CENTIMETER,
                        quantity: int = 1, extra_fee: float = 0.0,
                        extra_fee_label: str = "") -> EntryResult:
        roll = self._roll_for(roll_id, film=False)
        tier = None
        if tier_id:
            tier = self.catalog.tier(tier_id)
            if roll is not None and tier.category_id != roll.category_id:
                raise CatalogLookupError(f"Pricing tier for roll {roll.sku_id}", tier_id)
        entry = DimensionalEntry(
            length=length,
            width=width,
            roll=roll,
            tier=tier,
            length_unit=parse_unit(length_unit),
            width_unit=parse_unit(width_unit),
            quantity=quantity,
            extra_fee=extra_fee,
            extra_fee_label=extra_fee_label,
        )
        return self._append(self.dimensional, entry)

    def add_film(self, length: float = 0.0, roll_id: str = None,
                 preset: str = None, length_unit=LengthUnit.CENTIMETER,
                 quantity: int = 1, extra_fee: float = 0.0,
                 extra_fee_label: str = "") -> EntryResult:
        entry = FilmEntry(
            length=length,
            roll=self._roll_for(roll_id, film=True),
            preset=preset.strip().upper() if preset else None,
            length_unit=parse_unit(length_unit),
            quantity=quantity,
            extra_fee=extra_fee,
            extra_fee_label=extra_fee_label,
        )
        return self._append(self.film, entry)

    def add_product(self, product_id: str = None, negotiated_price: float = None,
                    quantity: int = 1, extra_fee: float = 0.0,
                    extra_fee_label: str = "") -> EntryResult:
        entry = ProductEntry(
            product=self.catalog.product(product_id) if product_id else None,
            negotiated_price=negotiated_price,
            quantity=quantity,
            extra_fee=extra_fee,
            extra_fee_label=extra_fee_label,
        )
        return self._append(self.product, entry)

    def add_manual(self, name: str, price: float, quantity: int = 1) -> EntryResult:
        return self._append(self.manual, ManualEntry(name=name, price=price, quantity=quantity))

    # --- Quote management ---

    def remove(self, index: int) -> LineItem:
        return self.quote.remove(index)

    def clear(self):
        self.quote.clear()

    def submit(self, create_sale: Callable[[list], Any]) -> SubmitResult:
        return self.quote.submit(create_sale)

    def _roll_for(self, roll_id: Optional[str], film: bool) -> Optional[Roll]:
        """Resolve a roll offered by the film or the dimensional calculator, never the other's."""
        if not roll_id:
            return None
        roll = self.catalog.roll(roll_id)
        if self.catalog.is_film_roll(roll) != film:
            raise CatalogLookupError("Film roll" if film else "Dimensional roll", roll_id)
        return roll

    def _append(self, flow, entry) -> EntryResult:
        result = flow.build(entry)
        if result.ok:
            self.quote.append(result.item)
            logger.info("Added %s to quote (%d items, total %.2f)",
                        result.item.item_id, len(self.quote), self.quote.total)
        else:
            logger.debug("Rejected %s entry: %s", flow.KIND, result.error.value)
        return result
