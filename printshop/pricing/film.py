"""
Film (DTF) pricing — two flat sheet presets or a custom length per meter.

Preset:  base = preset price × quantity (length ignored)
Custom:  base = length_m × rate per meter × quantity
total = base + extra_fee

No pricing tier is involved; the roll only identifies the film stock.
"""

from dataclasses import dataclass
from typing import Optional

from ..catalog import Roll
from ..config import settings
from ..units import LengthUnit, to_meters, is_valid_length
from .base import BaseEntry, EntryResult, Rejection, fee_annotation

# Canonical sheet length (cm) shown when a preset is picked, display only
FILM_PRESET_LENGTHS_CM = {
    "A4": 29.7,
    "A3": 42.0,
}


def film_preset_prices() -> dict:
    return {
        "A4": settings.FILM_PRESET_A4_PRICE,
        "A3": settings.FILM_PRESET_A3_PRICE,
    }


@dataclass
class FilmEntry:
    length: float
    roll: Optional[Roll] = None
    preset: Optional[str] = None
    length_unit: LengthUnit = LengthUnit.CENTIMETER
    quantity: int = 1
    extra_fee: float = 0.0
    extra_fee_label: str = ""


@dataclass
class FilmForm:
    """
    Film calculator form state.

    Picking a preset snaps the length to the sheet length; typing a
    length drops back to custom mode. Picking a roll snaps the width.
    """
    length: float = 100.0
    length_unit: LengthUnit = LengthUnit.CENTIMETER
    width: float = 60.0
    width_unit: LengthUnit = LengthUnit.CENTIMETER
    preset: Optional[str] = None
    roll: Optional[Roll] = None
    quantity: int = 1
    extra_fee: float = 0.0
    extra_fee_label: str = ""

    def select_preset(self, name: Optional[str]):
        if name is None:
            self.preset = None
            return
        key = name.strip().upper()
        if key not in FILM_PRESET_LENGTHS_CM:
            raise ValueError(
                f"Unknown film preset: {name}. Available: {list(FILM_PRESET_LENGTHS_CM.keys())}"
            )
        self.preset = key
        self.length = FILM_PRESET_LENGTHS_CM[key]
        self.length_unit = LengthUnit.CENTIMETER

    def set_length(self, value: float, unit: LengthUnit = None):
        self.length = value
        if unit is not None:
            self.length_unit = unit
        self.preset = None

    def select_roll(self, roll: Optional[Roll]):
        self.roll = roll
        if roll is not None:
            self.width = roll.width * 100
            self.width_unit = LengthUnit.CENTIMETER

    def to_entry(self) -> FilmEntry:
        return FilmEntry(
            length=self.length,
            length_unit=self.length_unit,
            roll=self.roll,
            preset=self.preset,
            quantity=self.quantity,
            extra_fee=self.extra_fee,
            extra_fee_label=self.extra_fee_label,
        )

    def apply(self, result: EntryResult):
        """Carry an accepted result's reset values back into the form."""
        if not result.ok:
            return
        for key, value in result.form.items():
            setattr(self, key, value)


class FilmPricing(BaseEntry):
    KIND = "film"
    DEFAULT_FEE_LABEL = "Extra"

    def __init__(self, preset_prices: dict = None, rate_per_meter: float = None):
        self.preset_prices = preset_prices or film_preset_prices()
        self.rate_per_meter = (
            rate_per_meter if rate_per_meter is not None else settings.FILM_RATE_PER_METER
        )

    def price(self, entry: FilmEntry) -> float:
        if entry.preset:
            base = self.preset_prices[entry.preset] * entry.quantity
        else:
            base = to_meters(entry.length, entry.length_unit) * self.rate_per_meter * entry.quantity
        return base + entry.extra_fee

    def build(self, entry: FilmEntry) -> EntryResult:
        if entry.roll is None:
            return EntryResult.rejected(Rejection.MISSING_SELECTION, "Please select a material/roll.")
        if entry.preset and entry.preset not in self.preset_prices:
            raise ValueError(
                f"Unknown film preset: {entry.preset}. Available: {list(self.preset_prices.keys())}"
            )
        rejected = self.check_quantity(entry.quantity)
        if rejected:
            return rejected
        if not entry.preset and not is_valid_length(entry.length):
            return EntryResult.rejected(
                Rejection.INVALID_DIMENSION, "Length must be zero or a positive number."
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
        return EntryResult.accepted(
            item,
            form={"quantity": 1, "extra_fee": 0.0, "extra_fee_label": "", "preset": None},
        )

    def describe(self, entry: FilmEntry) -> str:
        name = entry.roll.item_name
        if entry.preset:
            name += f" ({entry.preset})"
        else:
            name += f" (Custom Length: {to_meters(entry.length, entry.length_unit):.2f}m)"
        fee = fee_annotation(entry.extra_fee, entry.extra_fee_label, self.DEFAULT_FEE_LABEL)
        if fee:
            name += f" + {fee}"
        return name
