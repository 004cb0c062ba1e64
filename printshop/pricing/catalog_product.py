"""
Catalog product pricing — an existing product sold at a negotiated unit price.

total = negotiated × quantity + extra_fee

The negotiated price may never go below the product's floor (min_price).
"""

from dataclasses import dataclass
from typing import Optional

from ..catalog import Product
from .base import BaseEntry, EntryResult, Rejection, fee_annotation, format_money


@dataclass
class ProductEntry:
    product: Optional[Product] = None
    negotiated_price: Optional[float] = None  # None → the product's preferred price
    quantity: int = 1
    extra_fee: float = 0.0
    extra_fee_label: str = ""


def default_negotiated_price(product: Optional[Product]) -> float:
    """Price the negotiation starts from when a product is picked."""
    return product.price if product else 0.0


def can_append(product: Optional[Product], negotiated_price: float) -> bool:
    """Whether the append control should be enabled at all."""
    if product is None:
        return False
    return negotiated_price >= (product.min_price or 0.0)


class CatalogProductPricing(BaseEntry):
    KIND = "product"
    DEFAULT_FEE_LABEL = "Extra Fee/Design"

    def negotiated(self, entry: ProductEntry) -> float:
        if entry.negotiated_price is None:
            return default_negotiated_price(entry.product)
        return entry.negotiated_price

    def price(self, entry: ProductEntry) -> float:
        return self.negotiated(entry) * entry.quantity + entry.extra_fee

    def build(self, entry: ProductEntry) -> EntryResult:
        if entry.product is None:
            return EntryResult.rejected(
                Rejection.MISSING_SELECTION, "Please select a product from the filtered list."
            )
        rejected = self.check_quantity(entry.quantity)
        if rejected:
            return rejected
        # NaN compares False against any floor, so it must not reach the floor check
        rejected = self.check_price(self.negotiated(entry), allow_zero=True)
        if rejected:
            return rejected
        floor = entry.product.min_price or 0.0
        if self.negotiated(entry) < floor:
            return EntryResult.rejected(
                Rejection.BELOW_FLOOR_PRICE,
                f"Price cannot be below the minimum discount price of {format_money(floor)}.",
            )
        rejected = self.check_extra_fee(entry.extra_fee)
        if rejected:
            return rejected

        total = self.price(entry)
        rejected = self.check_total(total, allow_zero=True)
        if rejected:
            return rejected

        item = self.make_line_item(
            entry.product.id,
            self.describe(entry),
            entry.quantity,
            self.apportion(total, entry.quantity),
        )
        return EntryResult.accepted(
            item,
            form={
                "quantity": 1,
                "extra_fee": 0.0,
                "extra_fee_label": "",
                "product": None,
                "negotiated_price": 0.0,
            },
        )

    def describe(self, entry: ProductEntry) -> str:
        name = entry.product.name
        attributes = " | ".join(entry.product.attribute_values())
        if attributes:
            name += f" ({attributes})"
        fee = fee_annotation(entry.extra_fee, entry.extra_fee_label, self.DEFAULT_FEE_LABEL)
        if fee:
            name += f" (+ {fee})"
        return name
