"""
Shared pieces for every quote entry flow.

Input: an entry dataclass with fully-resolved catalog entities
Output: EntryResult — an accepted LineItem or a Rejection with a message

Validation failures are returned, never raised. Only conditions the host
could not have prevented (bad unit strings, vanished catalog ids) raise.
"""

import enum
import logging
import math
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict
from typing import Optional

from ..config import settings

logger = logging.getLogger(__name__)


class Rejection(str, enum.Enum):
    MISSING_SELECTION = "missing_selection"
    NON_POSITIVE_QUANTITY = "non_positive_quantity"
    NON_POSITIVE_PRICE = "non_positive_price"
    NON_POSITIVE_TOTAL = "non_positive_total"
    BELOW_FLOOR_PRICE = "below_floor_price"
    BLANK_REQUIRED_FIELD = "blank_required_field"
    INVALID_DIMENSION = "invalid_dimension"
    INVALID_EXTRA_FEE = "invalid_extra_fee"
    EMPTY_QUOTE_ON_SUBMIT = "empty_quote_on_submit"


@dataclass(frozen=True)
class LineItem:
    item_id: str
    name: str
    quantity: int
    price: float  # unit price, extra fee already apportioned

    @property
    def line_total(self) -> float:
        return self.quantity * self.price

    @property
    def kind(self) -> str:
        return parse_item_id(self.item_id)[0]

    @property
    def source_id(self) -> Optional[str]:
        return parse_item_id(self.item_id)[1]

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        return cls(
            item_id=data["item_id"],
            name=data["name"],
            quantity=int(data["quantity"]),
            price=float(data["price"]),
        )


@dataclass
class EntryResult:
    ok: bool
    item: Optional[LineItem] = None
    error: Optional[Rejection] = None
    message: str = ""
    # Form values the host should show after this result (empty on rejection)
    form: dict = field(default_factory=dict)

    @classmethod
    def accepted(cls, item: LineItem, form: dict = None) -> "EntryResult":
        return cls(ok=True, item=item, form=form or {})

    @classmethod
    def rejected(cls, error: Rejection, message: str) -> "EntryResult":
        return cls(ok=False, error=error, message=message)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "item": self.item.to_dict() if self.item else None,
            "error": self.error.value if self.error else None,
            "message": self.message,
            "form": self.form,
        }


# --- Formatting ---

def format_money(amount, currency: str = None) -> str:
    """Whole currency units with thousands separators: 30000 → '30,000 UGX'."""
    currency = currency or settings.CURRENCY
    if isinstance(amount, bool) or not isinstance(amount, (int, float)) or math.isnan(amount):
        return f"0 {currency}"
    # Half rounds up, as the shop's receipts do
    return f"{int(math.floor(amount + 0.5)):,} {currency}"


def fee_annotation(extra_fee: float, label: str, default_label: str) -> str:
    """'<label>: <money>' for a positive extra fee, '' otherwise."""
    if not extra_fee or extra_fee <= 0:
        return ""
    label = (label or "").strip() or default_label
    return f"{label}: {format_money(extra_fee)}"


# --- Line item ids ---

def make_item_id(kind: str, source_id: str = None) -> str:
    """'<kind>-<source>-<token>' or '<kind>-<token>'. Tokens never contain dashes."""
    token = uuid.uuid4().hex[:12]
    if source_id:
        return f"{kind}-{source_id}-{token}"
    return f"{kind}-{token}"


def parse_item_id(item_id: str) -> tuple:
    """Returns (kind, source_id or None). Source ids may themselves contain dashes."""
    kind, _, rest = item_id.partition("-")
    source, sep, _token = rest.rpartition("-")
    return kind, (source if sep and source else None)


class BaseEntry(ABC):
    """All quote entry flows inherit from this."""

    KIND = ""
    DEFAULT_FEE_LABEL = "Extra"

    @abstractmethod
    def build(self, entry) -> EntryResult:
        """
        Validates the entry in a fixed order (first failure wins) and
        returns the priced LineItem on success.
        """
        pass

    # --- Helper methods for all entry flows ---

    def check_quantity(self, quantity) -> Optional[EntryResult]:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            return EntryResult.rejected(
                Rejection.NON_POSITIVE_QUANTITY, "Quantity must be greater than zero."
            )
        return None

    def check_extra_fee(self, extra_fee) -> Optional[EntryResult]:
        if isinstance(extra_fee, bool) or not isinstance(extra_fee, (int, float)) \
                or not math.isfinite(extra_fee) or extra_fee < 0:
            return EntryResult.rejected(
                Rejection.INVALID_EXTRA_FEE, "Extra fee must be zero or a positive amount."
            )
        return None

    def check_price(self, price, allow_zero: bool = False) -> Optional[EntryResult]:
        """A unit price typed by the user: a finite number, positive unless allow_zero."""
        if isinstance(price, bool) or not isinstance(price, (int, float)) \
                or not math.isfinite(price) or price < 0 or (price == 0 and not allow_zero):
            message = "Price must be zero or a positive number." if allow_zero \
                else "Price must be greater than zero."
            return EntryResult.rejected(Rejection.NON_POSITIVE_PRICE, message)
        return None

    def check_total(self, total: float, allow_zero: bool = False) -> Optional[EntryResult]:
        # Finite inputs can still overflow once multiplied by the quantity
        if not math.isfinite(total) or total < 0 or (total == 0 and not allow_zero):
            return EntryResult.rejected(
                Rejection.NON_POSITIVE_TOTAL, "Calculated price must be greater than zero."
            )
        return None

    def apportion(self, total: float, quantity: int) -> float:
        """Unit price carrying an equal share of any extra fee."""
        return total / quantity

    def make_line_item(self, source_id: Optional[str], name: str,
                       quantity: int, unit_price: float) -> LineItem:
        item = LineItem(
            item_id=make_item_id(self.KIND, source_id),
            name=name,
            quantity=quantity,
            price=unit_price,
        )
        logger.debug("Priced %s line %s: %d x %.2f", self.KIND, item.item_id, quantity, unit_price)
        return item
