"""
Sale creation — the collaborator a submitted quote is handed to.

Persists the sale with its line items, derives the payment status, records
the initial payment and takes sold catalog products out of stock.
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models
from .pricing.base import parse_item_id
from .pricing.catalog_product import CatalogProductPricing

logger = logging.getLogger(__name__)


def sale_status(total: float, amount_paid: float) -> models.SaleStatus:
    if amount_paid >= total:
        return models.SaleStatus.PAID
    if amount_paid > 0:
        return models.SaleStatus.PARTIALLY_PAID
    return models.SaleStatus.UNPAID


def create_sale(db: Session, items: list, customer_id: str,
                amount_paid: float = 0.0, user=None, commit: bool = True) -> models.Sale:
    """
    Store a sale for the given quote line items.

    Raises LookupError for an unknown customer and ValueError for an empty
    item list or a negative payment; nothing is written in either case.

    With commit=False the sale is only flushed: the caller owns the
    transaction and must commit or roll back.
    """
    if not items:
        raise ValueError("A sale needs at least one line item")
    if amount_paid < 0:
        raise ValueError("Amount paid cannot be negative")
    customer = db.query(models.Customer).filter(models.Customer.id == customer_id).first()
    if not customer:
        raise LookupError(f"Customer '{customer_id}' not found")

    now = datetime.utcnow()
    total = sum(item.quantity * item.price for item in items)
    user_id = getattr(user, "id", None)
    user_name = getattr(user, "name", None)

    payments = []
    if amount_paid > 0:
        payments.append({
            "id": str(uuid.uuid4()),
            "date": now.isoformat(),
            "amount": amount_paid,
            "recorded_by": user_name,
            "note": "Initial payment",
        })

    sale = models.Sale(
        date=now,
        customer_id=customer.id,
        items_json=[item.to_dict() for item in items],
        total=total,
        amount_paid=amount_paid,
        status=sale_status(total, amount_paid).value,
        user_id=user_id,
        user_name=user_name,
        payments_json=payments,
    )
    db.add(sale)
    _take_products_out_of_stock(db, items)

    try:
        if commit:
            db.commit()
        else:
            db.flush()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(sale)
    logger.info("Created sale %s for customer %s: %d items, total %.2f, %s",
                sale.id, customer.id, len(items), total, sale.status)
    return sale


def make_sale_creator(db: Session, customer_id: str, amount_paid: float = 0.0,
                      user=None, commit: bool = True):
    """Bind sale details into the one-argument callback Quote.submit expects."""
    def _create(items: list) -> models.Sale:
        return create_sale(db, items, customer_id, amount_paid=amount_paid,
                           user=user, commit=commit)
    return _create


def _take_products_out_of_stock(db: Session, items: list):
    """Catalog product lines reduce the product's on-hand quantity."""
    for item in items:
        kind, product_id = parse_item_id(item.item_id)
        if kind != CatalogProductPricing.KIND or not product_id:
            continue
        product = db.query(models.InventoryItem).filter(models.InventoryItem.id == product_id).first()
        if not product:
            logger.warning("Sold product %s is no longer in inventory — stock not updated", product_id)
            continue
        product.quantity = (product.quantity or 0) - item.quantity


def sale_to_dict(sale: models.Sale) -> dict:
    return {
        "id": sale.id,
        "date": sale.date.isoformat() if sale.date else None,
        "customer_id": sale.customer_id,
        "customer_name": sale.customer.name if sale.customer else None,
        "items": sale.items_json or [],
        "total": sale.total,
        "amount_paid": sale.amount_paid,
        "status": sale.status,
        "user_id": sale.user_id,
        "user_name": sale.user_name,
        "payments": sale.payments_json or [],
    }
