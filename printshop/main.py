from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import catalog, customers, quote_session, sales, units

logger = logging.getLogger("printshop")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=f"{settings.COMPANY_NAME} Quoting",
    description="Print-shop quote calculator — area, film, catalog and manual pricing",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(catalog.router, prefix="/api")
app.include_router(units.router, prefix="/api")
app.include_router(quote_session.router, prefix="/api")
app.include_router(customers.router, prefix="/api")
app.include_router(sales.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "printshop-quoting"}


@app.on_event("startup")
def auto_seed():
    """Seed the starter catalog on first run."""
    from .database import SessionLocal
    from .routers.catalog import seed_catalog
    db = SessionLocal()
    try:
        seeded = seed_catalog(db)
        if seeded:
            logger.info("Seeded %d starter catalog rows", seeded)
    finally:
        db.close()
