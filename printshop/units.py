# Length conversion for dimensional pricing, everything converts through meters

import enum
import math


class LengthUnit(str, enum.Enum):
    METER = "m"
    CENTIMETER = "cm"
    INCH = "in"
    FOOT = "ft"


# Multiplicative factor to meters
CONVERSION_TO_METER = {
    LengthUnit.METER: 1.0,
    LengthUnit.CENTIMETER: 0.01,
    LengthUnit.INCH: 0.0254,
    LengthUnit.FOOT: 0.3048,
}

# ISO paper sizes in cm, (width, height)
PAPER_SIZES = {
    "A5": (14.8, 21.0),
    "A4": (21.0, 29.7),
    "A3": (29.7, 42.0),
    "A2": (42.0, 59.4),
    "A1": (59.4, 84.1),
    "A0": (84.1, 118.9),
}


def parse_unit(unit) -> LengthUnit:
    """Accepts a LengthUnit or its string value ('m', 'cm', 'in', 'ft')."""
    if isinstance(unit, LengthUnit):
        return unit
    try:
        return LengthUnit(str(unit).strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown length unit: {unit!r}. "
            f"Available: {[u.value for u in LengthUnit]}"
        )


def to_meters(value: float, unit) -> float:
    return value * CONVERSION_TO_METER[parse_unit(unit)]


def from_meters(meters: float, unit) -> float:
    return meters / CONVERSION_TO_METER[parse_unit(unit)]


def to_centimeters(value: float, unit) -> float:
    return to_meters(value, unit) * 100.0


def display_value(value) -> float:
    """Coerce user input for display. Negative, non-numeric or non-finite values show as zero."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip().replace(",", ""))
    except (ValueError, TypeError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def convert_display(meters) -> dict:
    """
    Fixed display of one length in every unit.

    Returns: {"m": "1.00", "cm": "100.0", "ft": "3.28", "in": "39.37"}
    """
    value_m = display_value(meters)
    return {
        "m": f"{value_m:.2f}",
        "cm": f"{value_m * 100:.1f}",
        "ft": f"{from_meters(value_m, LengthUnit.FOOT):.2f}",
        "in": f"{from_meters(value_m, LengthUnit.INCH):.2f}",
    }


def is_valid_length(value) -> bool:
    """A length usable in a price computation: numeric, finite, not negative."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def paper_size_dimensions(name: str) -> dict:
    """
    Dimension pair for an ISO paper preset, in centimeters.
    The sheet's height is the print length, its width the print width.
    """
    key = name.strip().upper()
    if key not in PAPER_SIZES:
        raise ValueError(
            f"Unknown paper size: {name}. Available: {list(PAPER_SIZES.keys())}"
        )
    width_cm, height_cm = PAPER_SIZES[key]
    return {
        "length": height_cm,
        "length_unit": LengthUnit.CENTIMETER,
        "width": width_cm,
        "width_unit": LengthUnit.CENTIMETER,
    }
