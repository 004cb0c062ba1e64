"""
Shared test fixtures — SQLite database, test client, provider tokens,
and an in-memory catalog snapshot for the pure pricing tests.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set JWT_SECRET before importing app modules
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from printshop.auth import create_access_token
from printshop.catalog import (
    Catalog, CategoryField, MaterialCategory, PricingTier, Product, ProductCategory, Roll,
)
from printshop.database import Base, get_db
from printshop.main import app


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def auth_headers():
    """Bearer token for a cashier, as the auth provider would issue it."""
    token = create_access_token("user-1", name="Grace")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_user_headers():
    token = create_access_token("user-2", name="Peter")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def catalog():
    """Small catalog snapshot — no database needed."""
    return Catalog(
        material_categories=[
            MaterialCategory(id="mat-banner", name="Banner"),
            MaterialCategory(id="mat-vinyl", name="Vinyl Sticker"),
            MaterialCategory(id="mat-dtf", name="DTF Film"),
        ],
        rolls=[
            Roll(sku_id="sku-banner", item_name="Frontlit Banner", category_id="mat-banner", width=3.2),
            Roll(sku_id="sku-vinyl", item_name="Glossy Vinyl", category_id="mat-vinyl", width=1.52),
            Roll(sku_id="sku-dtf-60", item_name="DTF Film 60cm", category_id="mat-dtf", width=0.6),
            Roll(sku_id="sku-dtf-30", item_name="DTF Film 30cm", category_id="mat-dtf", width=0.3),
            Roll(sku_id="sku-dtf-30b", item_name="DTF Film 30cm (B)", category_id="mat-dtf", width=0.3),
        ],
        tiers=[
            PricingTier(id="tier-banner", name="Standard", category_id="mat-banner", value=5.0),
            PricingTier(id="tier-banner-bulk", name="Wholesale", category_id="mat-banner", value=2.0),
            PricingTier(id="tier-vinyl", name="Standard", category_id="mat-vinyl", value=8.0),
        ],
        product_categories=[
            ProductCategory(id="pc-tshirt", name="T-Shirt", fields=(
                CategoryField("Neck Type", ("V-Neck", "Round")),
                CategoryField("Brand", ("Gildan",)),
                CategoryField("Body Color", ("White", "Black")),
                None,
                CategoryField("Size", ("M", "L")),
            )),
            ProductCategory(id="pc-cards", name="Business Card", fields=(
                CategoryField("Finish", ("Matte", "Glossy")), None, None, None, None,
            )),
            ProductCategory(id="pc-ink", name="Ink"),
        ],
        products=[
            Product(id="prod-tee-white", name="Plain Tee", category="T-Shirt",
                    price=10000.0, min_price=8000.0, quantity=40,
                    attributes=("Round", "Gildan", "White", None, "M")),
            Product(id="prod-tee-black", name="Plain Tee", category="T-Shirt",
                    price=11000.0, min_price=9000.0, quantity=3,
                    attributes=("V-Neck", "Gildan", "Black", None, "L")),
            Product(id="prod-cards", name="Business Cards x100", category="Business Card",
                    price=30000.0, min_price=25000.0, quantity=25,
                    attributes=("Matte", None, None, None, None), min_stock_level=30),
            Product(id="prod-ink", name="Eco-Solvent Ink 1L", category="Ink",
                    price=90000.0, min_price=85000.0, quantity=10, is_consumable=True),
        ],
    )
