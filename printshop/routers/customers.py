"""
Customers a sale can be recorded against. Quotes themselves are anonymous;
a customer is only needed at submit time.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import get_db

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("/", response_model=schemas.Customer)
def create_customer(customer: schemas.CustomerCreate, db: Session = Depends(get_db)):
    name = customer.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Customer name is required")
    record = models.Customer(**{**customer.model_dump(), "name": name})
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@router.get("/", response_model=List[schemas.Customer])
def list_customers(q: Optional[str] = None, skip: int = 0, limit: int = 100,
                   db: Session = Depends(get_db)):
    """Alphabetical; `q` matches name, phone or email."""
    query = db.query(models.Customer)
    if q:
        pattern = f"%{q.strip()}%"
        query = query.filter(or_(
            models.Customer.name.ilike(pattern),
            models.Customer.phone.ilike(pattern),
            models.Customer.email.ilike(pattern),
        ))
    return query.order_by(models.Customer.name).offset(skip).limit(limit).all()


@router.get("/{customer_id}", response_model=schemas.Customer)
def get_customer(customer_id: str, db: Session = Depends(get_db)):
    record = db.get(models.Customer, customer_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Customer '{customer_id}' not found")
    return record
