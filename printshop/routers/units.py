from fastapi import APIRouter, HTTPException

from ..units import PAPER_SIZES, convert_display, display_value, parse_unit, to_meters

router = APIRouter(prefix="/units", tags=["units"])


@router.get("/convert")
def convert(value: str = "0", unit: str = "m"):
    """
    One length in every unit. Bad or negative values display as zero —
    this endpoint never prices anything.
    """
    try:
        length_unit = parse_unit(unit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    meters = to_meters(display_value(value), length_unit)
    return {"meters": meters, "display": convert_display(meters)}


@router.get("/paper-sizes")
def paper_sizes():
    return {
        name: {"width_cm": width, "height_cm": height}
        for name, (width, height) in PAPER_SIZES.items()
    }
