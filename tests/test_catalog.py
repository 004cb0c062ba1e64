"""
Catalog snapshot tests — lookups, selection lists, cascading filters,
and loading from the database.
"""

import pytest

from printshop.catalog import CatalogLookupError, ProductCategory, Roll, load_catalog, normalize_slots
from printshop.routers.catalog import seed_catalog


def test_lookups(catalog):
    assert catalog.roll("sku-vinyl").width == 1.52
    assert catalog.tier("tier-banner").value == 5.0
    assert catalog.product("prod-ink").is_consumable
    assert catalog.product_category("T-Shirt").id == "pc-tshirt"
    assert catalog.material_category("mat-dtf").is_film


def test_lookup_error_carries_id(catalog):
    with pytest.raises(CatalogLookupError) as exc_info:
        catalog.tier("tier-gone")
    assert exc_info.value.identifier == "tier-gone"
    assert isinstance(exc_info.value, LookupError)


def test_unknown_material_category_raises(catalog):
    with pytest.raises(CatalogLookupError, match="Material category 'mat-nope'"):
        catalog.material_category("mat-nope")


def test_roll_without_category_is_not_film(catalog):
    orphan = Roll(sku_id="sku-orphan", item_name="Offcut", category_id="mat-gone", width=1.0)
    assert not catalog.is_film_roll(orphan)


def test_rolls_split_by_film(catalog):
    film = {r.sku_id for r in catalog.rolls_for_mode(film=True)}
    other = {r.sku_id for r in catalog.rolls_for_mode(film=False)}
    assert film == {"sku-dtf-60", "sku-dtf-30", "sku-dtf-30b"}
    assert other == {"sku-banner", "sku-vinyl"}


def test_tiers_follow_roll_category(catalog):
    assert [t.id for t in catalog.tiers_for_roll("sku-banner")] == ["tier-banner", "tier-banner-bulk"]
    assert [t.id for t in catalog.tiers_for_roll("sku-vinyl")] == ["tier-vinyl"]
    assert catalog.tiers_for_roll("") == []


def test_film_roll_options_unique_and_sorted(catalog):
    options = catalog.film_roll_options()
    assert [o["width"] for o in options] == [0.3, 0.6]
    assert [o["label"] for o in options] == ["30 cm Roll", "60 cm Roll"]


def test_product_categories_for_tab(catalog):
    assert [c.name for c in catalog.product_categories_for_tab("embroidery")] == ["T-Shirt"]
    assert [c.name for c in catalog.product_categories_for_tab("bizhub")] == ["Business Card"]
    assert [c.name for c in catalog.product_categories_for_tab("supplies")] == ["Ink"]
    assert len(catalog.product_categories_for_tab("products")) == 3


def test_filter_products_by_attributes(catalog):
    assert len(catalog.filter_products("T-Shirt")) == 2
    matches = catalog.filter_products("T-Shirt", {1: "V-Neck", 5: ""})
    assert [p.id for p in matches] == ["prod-tee-black"]
    assert catalog.filter_products("T-Shirt", {3: "Navy"}) == []
    assert catalog.filter_products("") == []


def test_consumables_hidden_outside_supplies(catalog):
    assert catalog.filter_products("Ink") == []
    assert [p.id for p in catalog.filter_products("Ink", include_consumables=True)] == ["prod-ink"]


def test_low_stock(catalog):
    assert catalog.is_low_stock(catalog.product("prod-tee-black"))  # 3 <= default 5
    assert not catalog.is_low_stock(catalog.product("prod-tee-white"))
    assert catalog.is_low_stock(catalog.product("prod-cards"))  # 25 <= its own 30


def test_category_fields():
    category = ProductCategory(id="pc", name="Cap", fields=normalize_slots([None, None]))
    assert len(category.fields) == 5
    assert category.defined_fields() == []
    assert category.field_for(9) is None


def test_load_catalog_from_seeded_db(db):
    assert seed_catalog(db) > 0
    assert seed_catalog(db) == 0

    snapshot = load_catalog(db)
    assert snapshot.roll("sku-banner-320").item_name == "Frontlit Banner 3.2m"
    assert snapshot.is_film_roll(snapshot.roll("sku-dtf-060"))
    tee = snapshot.product("prod-tee-round-white-m")
    assert tee.attributes == ("Round", "Gildan", "White", None, "M")
    cards = snapshot.product_category("Business Card")
    assert cards.field_for(1).options == ("Matte", "Glossy")
    assert cards.field_for(2) is None
