"""
Film (DTF) pricing tests — presets, custom lengths, form state.
"""

import pytest

from printshop.catalog import Roll
from printshop.pricing.base import Rejection
from printshop.pricing.film import FILM_PRESET_LENGTHS_CM, FilmEntry, FilmForm, FilmPricing
from printshop.units import LengthUnit


def _film_roll(width=0.6):
    return Roll(sku_id="sku-dtf-60", item_name="DTF Film 60cm", category_id="mat-dtf", width=width)


def _flow():
    return FilmPricing(preset_prices={"A4": 5000.0, "A3": 10000.0}, rate_per_meter=15000.0)


# ============================================================
# Presets
# ============================================================

def test_preset_ignores_length():
    """A4 x 3 at 5000 each is 15000 whatever the length field says."""
    flow = _flow()
    for length in (0, 29.7, 500):
        result = flow.build(FilmEntry(length=length, roll=_film_roll(), preset="A4", quantity=3))
        assert result.ok
        assert result.item.line_total == pytest.approx(15000.0)
        assert result.item.price == pytest.approx(5000.0)


def test_preset_ignores_bad_length():
    """Length is not validated while a preset is active."""
    result = _flow().build(FilmEntry(length=-1, roll=_film_roll(), preset="A3"))
    assert result.ok
    assert result.item.price == pytest.approx(10000.0)


def test_preset_with_extra_fee():
    result = _flow().build(FilmEntry(length=0, roll=_film_roll(), preset="A3",
                                     quantity=2, extra_fee=1000, extra_fee_label="Pressing"))
    assert result.item.line_total == pytest.approx(21000.0)
    assert result.item.name == "DTF Film 60cm (A3) + Pressing: 1,000 UGX"


def test_unknown_preset_raises():
    with pytest.raises(ValueError, match="Unknown film preset"):
        _flow().build(FilmEntry(length=0, roll=_film_roll(), preset="A2"))


def test_default_prices_come_from_settings():
    flow = FilmPricing()
    assert flow.preset_prices == {"A4": 5000.0, "A3": 10000.0}
    assert flow.rate_per_meter == 15000.0


# ============================================================
# Custom length
# ============================================================

def test_custom_length_per_meter():
    """2.5m at 15000 per meter."""
    result = _flow().build(FilmEntry(length=250, roll=_film_roll()))
    assert result.ok
    assert result.item.price == pytest.approx(37500.0)
    assert result.item.name == "DTF Film 60cm (Custom Length: 2.50m)"


def test_custom_length_in_feet():
    result = _flow().build(FilmEntry(length=10, length_unit=LengthUnit.FOOT,
                                     roll=_film_roll(), quantity=2))
    assert result.item.line_total == pytest.approx(3.048 * 15000.0 * 2)


def test_custom_negative_length_rejected():
    result = _flow().build(FilmEntry(length=-5, roll=_film_roll()))
    assert result.error == Rejection.INVALID_DIMENSION


def test_zero_length_rejected_as_zero_total():
    result = _flow().build(FilmEntry(length=0, roll=_film_roll()))
    assert result.error == Rejection.NON_POSITIVE_TOTAL


def test_missing_roll_rejected():
    result = _flow().build(FilmEntry(length=100, preset="A4"))
    assert result.error == Rejection.MISSING_SELECTION
    assert result.message == "Please select a material/roll."


def test_zero_quantity_rejected():
    result = _flow().build(FilmEntry(length=100, roll=_film_roll(), quantity=0))
    assert result.error == Rejection.NON_POSITIVE_QUANTITY


def test_accepted_form_clears_preset():
    result = _flow().build(FilmEntry(length=0, roll=_film_roll(), preset="A4"))
    assert result.form["preset"] is None
    assert result.form["quantity"] == 1


# ============================================================
# Form state
# ============================================================

def test_form_preset_snaps_length():
    form = FilmForm()
    form.select_preset("a3")
    assert form.preset == "A3"
    assert form.length == FILM_PRESET_LENGTHS_CM["A3"]
    assert form.length_unit == LengthUnit.CENTIMETER


def test_form_typing_length_drops_preset():
    form = FilmForm()
    form.select_preset("A4")
    form.set_length(2, LengthUnit.METER)
    assert form.preset is None
    assert form.length == 2
    assert form.length_unit == LengthUnit.METER


def test_form_roll_snaps_width():
    form = FilmForm()
    form.select_roll(_film_roll(width=0.3))
    assert form.width == pytest.approx(30.0)
    assert form.width_unit == LengthUnit.CENTIMETER


def test_form_unknown_preset_raises():
    with pytest.raises(ValueError):
        FilmForm().select_preset("Letter")


def test_form_round_trip_through_flow():
    """Entry built from the form prices; accepted result resets the form."""
    form = FilmForm()
    form.select_roll(_film_roll())
    form.select_preset("A4")
    form.quantity = 3
    form.extra_fee = 500
    result = _flow().build(form.to_entry())
    assert result.item.line_total == pytest.approx(15500.0)

    form.apply(result)
    assert form.quantity == 1
    assert form.extra_fee == 0.0
    assert form.preset is None
    assert form.roll is not None


def test_form_keeps_values_on_rejection():
    form = FilmForm(quantity=0)
    form.select_roll(_film_roll())
    result = _flow().build(form.to_entry())
    assert not result.ok
    form.apply(result)
    assert form.quantity == 0
