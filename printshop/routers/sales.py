from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional
from .. import models
from ..auth import Identity, get_current_user
from ..database import get_db
from ..sales import sale_to_dict

router = APIRouter(prefix="/sales", tags=["sales"])


@router.get("/")
def list_sales(
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 50,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    """Sales newest first. Non-admin users only see the sales they recorded."""
    query = db.query(models.Sale)
    if current_user.role != "admin":
        query = query.filter(models.Sale.user_id == current_user.id)
    if status:
        query = query.filter(models.Sale.status == status)
    sales = query.order_by(models.Sale.date.desc()).offset(skip).limit(limit).all()
    return [sale_to_dict(s) for s in sales]


@router.get("/{sale_id}")
def get_sale(
    sale_id: str,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    sale = db.query(models.Sale).filter(models.Sale.id == sale_id).first()
    if not sale:
        raise HTTPException(status_code=404, detail="Sale not found")
    if current_user.role != "admin" and sale.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Not your sale")
    return sale_to_dict(sale)
