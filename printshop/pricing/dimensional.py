"""
Dimensional (area) pricing — material cut from a roll, priced per cm².

base  = length_cm × width_cm × tier.value × quantity
total = base + extra_fee
"""

from dataclasses import dataclass
from typing import Optional

from ..catalog import Roll, PricingTier
from ..units import LengthUnit, to_meters, is_valid_length
from .base import BaseEntry, EntryResult, Rejection, fee_annotation


@dataclass
class DimensionalEntry:
    length: float
    width: float
    roll: Optional[Roll] = None
    tier: Optional[PricingTier] = None
    length_unit: LengthUnit = LengthUnit.CENTIMETER
    width_unit: LengthUnit = LengthUnit.CENTIMETER
    quantity: int = 1
    extra_fee: float = 0.0
    extra_fee_label: str = ""


class DimensionalPricing(BaseEntry):
    KIND = "dim"
    DEFAULT_FEE_LABEL = "Extra"

    def price(self, entry: DimensionalEntry) -> float:
        """Total for the whole line, extra fee included. 0 when no tier is chosen."""
        multiplier = entry.tier.value if entry.tier else 0.0
        length_cm = to_meters(entry.length, entry.length_unit) * 100
        width_cm = to_meters(entry.width, entry.width_unit) * 100
        return length_cm * width_cm * multiplier * entry.quantity + entry.extra_fee

    def build(self, entry: DimensionalEntry) -> EntryResult:
        if entry.roll is None:
            return EntryResult.rejected(Rejection.MISSING_SELECTION, "Please select a material/roll.")
        if entry.tier is None:
            return EntryResult.rejected(Rejection.MISSING_SELECTION, "Please select a pricing tier.")
        rejected = self.check_quantity(entry.quantity)
        if rejected:
            return rejected
        if not (is_valid_length(entry.length) and is_valid_length(entry.width)):
            return EntryResult.rejected(
                Rejection.INVALID_DIMENSION, "Length and width must be zero or positive numbers."
            )
        rejected = self.check_extra_fee(entry.extra_fee)
        if rejected:
            return rejected

        total = self.price(entry)
        rejected = self.check_total(total)
        if rejected:
            return rejected

        item = self.make_line_item(
            entry.roll.sku_id,
            self.describe(entry),
            entry.quantity,
            self.apportion(total, entry.quantity),
        )
        return EntryResult.accepted(item, form={"quantity": 1, "extra_fee": 0.0, "extra_fee_label": ""})

    def describe(self, entry: DimensionalEntry) -> str:
        length_m = to_meters(entry.length, entry.length_unit)
        width_m = to_meters(entry.width, entry.width_unit)
        name = f"{entry.roll.item_name} ({length_m:.2f}m x {width_m:.2f}m)"
        fee = fee_annotation(entry.extra_fee, entry.extra_fee_label, self.DEFAULT_FEE_LABEL)
        if fee:
            name += f" + {fee}"
        return name
