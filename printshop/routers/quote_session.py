"""
Quote Session API — one user's order-in-progress across calculator requests.

POST   /api/session/start              — Start an empty quote
GET    /api/session/{id}               — Current items and total
POST   /api/session/{id}/dimensional   — Append an area-priced roll cut
POST   /api/session/{id}/film          — Append a film (DTF) print
POST   /api/session/{id}/product       — Append a catalog product at a negotiated price
POST   /api/session/{id}/manual        — Append a free-text charge
DELETE /api/session/{id}/items/{index} — Remove one item
POST   /api/session/{id}/clear         — Discard every item
POST   /api/session/{id}/submit        — Hand the quote to sale creation, then clear it
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from .. import models
from ..auth import Identity, get_current_user
from ..catalog import CatalogLookupError, load_catalog
from ..database import get_db
from ..quote_engine import Quote, QuoteEngine
from ..sales import make_sale_creator, sale_to_dict
from ..units import LengthUnit


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["quote-session"])


# --- Request schemas ---

class DimensionalRequest(BaseModel):
    roll_id: Optional[str] = None
    tier_id: Optional[str] = None
    length: float
    length_unit: LengthUnit = LengthUnit.CENTIMETER
    width: float
    width_unit: LengthUnit = LengthUnit.CENTIMETER
    quantity: int = 1
    extra_fee: float = 0.0
    extra_fee_label: str = ""


class FilmRequest(BaseModel):
    roll_id: Optional[str] = None
    preset: Optional[str] = None
    length: float = 0.0
    length_unit: LengthUnit = LengthUnit.CENTIMETER
    quantity: int = 1
    extra_fee: float = 0.0
    extra_fee_label: str = ""


class ProductRequest(BaseModel):
    product_id: Optional[str] = None
    negotiated_price: Optional[float] = None
    quantity: int = 1
    extra_fee: float = 0.0
    extra_fee_label: str = ""


class ManualRequest(BaseModel):
    name: str = ""
    price: float = 0.0
    quantity: int = 1


class SubmitRequest(BaseModel):
    customer_id: str
    amount_paid: float = 0.0


# --- Endpoints ---

@router.post("/start")
def start_session(
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    session = models.QuoteSession(
        id=str(uuid.uuid4()),
        user_id=current_user.id,
        items_json=[],
        status="active",
    )
    db.add(session)
    db.commit()
    return {"session_id": session.id, "items": [], "total": 0.0}


@router.get("/{session_id}")
def get_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    session = _get_session(db, session_id, current_user)
    return _quote_state(session.id, Quote.from_list(session.items_json))


@router.post("/{session_id}/dimensional")
def add_dimensional(
    session_id: str,
    request: DimensionalRequest,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    session = _get_session(db, session_id, current_user)
    engine = _engine_for(db, session)
    return _append(db, session, engine, lambda: engine.add_dimensional(**request.model_dump()))


@router.post("/{session_id}/film")
def add_film(
    session_id: str,
    request: FilmRequest,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    session = _get_session(db, session_id, current_user)
    engine = _engine_for(db, session)
    return _append(db, session, engine, lambda: engine.add_film(**request.model_dump()))


@router.post("/{session_id}/product")
def add_product(
    session_id: str,
    request: ProductRequest,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    session = _get_session(db, session_id, current_user)
    engine = _engine_for(db, session)
    return _append(db, session, engine, lambda: engine.add_product(**request.model_dump()))


@router.post("/{session_id}/manual")
def add_manual(
    session_id: str,
    request: ManualRequest,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    session = _get_session(db, session_id, current_user)
    engine = _engine_for(db, session)
    return _append(db, session, engine, lambda: engine.add_manual(**request.model_dump()))


@router.delete("/{session_id}/items/{index}")
def remove_item(
    session_id: str,
    index: int,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    session = _get_session(db, session_id, current_user)
    quote = Quote.from_list(session.items_json)
    try:
        removed = quote.remove(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    _save(db, session, quote)
    state = _quote_state(session.id, quote)
    state["removed"] = removed.to_dict()
    return state


@router.post("/{session_id}/clear")
def clear_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    session = _get_session(db, session_id, current_user)
    quote = Quote.from_list(session.items_json)
    quote.clear()
    _save(db, session, quote)
    return _quote_state(session.id, quote)


@router.post("/{session_id}/submit")
def submit_session(
    session_id: str,
    request: SubmitRequest,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    """
    Create a sale from the whole quote. The sale, the stock changes and the
    cleared session are committed together; on any failure none of them is.
    """
    session = _get_session(db, session_id, current_user)
    quote = Quote.from_list(session.items_json)
    create_sale = make_sale_creator(
        db, request.customer_id, amount_paid=request.amount_paid,
        user=current_user, commit=False,
    )
    try:
        result = quote.submit(create_sale)
        if result.ok:
            _save(db, session, quote)
    except LookupError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Submitting quote session %s failed; sale rolled back", session_id)
        raise HTTPException(status_code=500, detail="Could not store the sale. Nothing was saved.")

    if not result.ok:
        raise HTTPException(
            status_code=400,
            detail={"error": result.error.value, "message": result.message},
        )

    state = _quote_state(session.id, quote)
    state["sale"] = sale_to_dict(result.confirmation)
    return state


# --- Helpers ---

def _get_session(db: Session, session_id: str, current_user: Identity) -> models.QuoteSession:
    session = db.query(models.QuoteSession).filter(
        models.QuoteSession.id == session_id,
    ).first()
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    if session.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Not your session")
    if session.status != "active":
        raise HTTPException(status_code=400, detail=f"Session is {session.status}, not active")
    return session


def _engine_for(db: Session, session: models.QuoteSession) -> QuoteEngine:
    return QuoteEngine(load_catalog(db), Quote.from_list(session.items_json))


def _append(db: Session, session: models.QuoteSession, engine: QuoteEngine, add) -> dict:
    try:
        result = add()
    except CatalogLookupError as e:
        raise HTTPException(status_code=409, detail=f"{e} — refresh the catalog and try again")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not result.ok:
        raise HTTPException(
            status_code=400,
            detail={"error": result.error.value, "message": result.message},
        )

    _save(db, session, engine.quote)
    state = _quote_state(session.id, engine.quote)
    state["result"] = result.to_dict()
    return state


def _save(db: Session, session: models.QuoteSession, quote: Quote):
    session.items_json = quote.to_list()
    flag_modified(session, "items_json")
    db.commit()


def _quote_state(session_id: str, quote: Quote) -> dict:
    return {
        "session_id": session_id,
        "items": quote.to_list(),
        "item_count": len(quote),
        "total": quote.total,
    }
