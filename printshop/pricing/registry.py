"""
Entry registry — maps line-item kind tags to pricing flows.
"""

from .base import BaseEntry
from .catalog_product import CatalogProductPricing
from .dimensional import DimensionalPricing
from .film import FilmPricing
from .manual import ManualPricing

ENTRY_REGISTRY: dict[str, type] = {
    DimensionalPricing.KIND: DimensionalPricing,
    FilmPricing.KIND: FilmPricing,
    CatalogProductPricing.KIND: CatalogProductPricing,
    ManualPricing.KIND: ManualPricing,
}


def get_entry_flow(kind: str) -> BaseEntry:
    """Returns an instance of the pricing flow for a kind, or raises ValueError."""
    if kind not in ENTRY_REGISTRY:
        raise ValueError(
            f"No pricing flow registered for kind: {kind}. "
            f"Available: {list(ENTRY_REGISTRY.keys())}"
        )
    return ENTRY_REGISTRY[kind]()


def has_entry_flow(kind: str) -> bool:
    return kind in ENTRY_REGISTRY


def list_entry_flows() -> list[str]:
    return list(ENTRY_REGISTRY.keys())
