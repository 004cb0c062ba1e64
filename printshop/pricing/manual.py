"""
Manual entry — a free-text charge not tied to any catalog record
(delivery, design time, rush fees). No extra fee: the price is the charge.
"""

from dataclasses import dataclass

from .base import BaseEntry, EntryResult, Rejection


@dataclass
class ManualEntry:
    name: str = ""
    price: float = 0.0
    quantity: int = 1


class ManualPricing(BaseEntry):
    KIND = "manual"

    def price(self, entry: ManualEntry) -> float:
        return entry.price * entry.quantity

    def build(self, entry: ManualEntry) -> EntryResult:
        name = (entry.name or "").strip()
        if not name:
            return EntryResult.rejected(Rejection.BLANK_REQUIRED_FIELD, "Please enter an item name.")
        rejected = self.check_price(entry.price)
        if rejected:
            return rejected
        rejected = self.check_quantity(entry.quantity)
        if rejected:
            return rejected
        rejected = self.check_total(self.price(entry))
        if rejected:
            return rejected

        item = self.make_line_item(None, name, entry.quantity, float(entry.price))
        return EntryResult.accepted(item, form={"name": "", "price": 0.0, "quantity": 1})
