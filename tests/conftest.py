"""
Pytest fixtures for the inventory tracker test suite.

Provides:
- An in-memory SQLite session per test (schema created fresh each time)
- A FastAPI TestClient wired to that session
- Catalog builders for categories, suppliers and products
"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import inventory_tracker.models  # noqa: F401
from inventory_tracker.database import Base, get_db
from inventory_tracker.main import app
from inventory_tracker.models.users import User
from inventory_tracker.schemas.category import CategoryCreate
from inventory_tracker.schemas.product import ProductCreate
from inventory_tracker.schemas.supplier import SupplierCreate
from inventory_tracker.services.catalog import CatalogManager
from inventory_tracker.utils.hashing import get_password_hash
from inventory_tracker.utils.tokenJWT import create_access_token

ACTOR = "Test User"


class FrozenClock:
    """Returns the same instant until moved by hand."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    u = User(username="staff", first_name="Test", last_name="User",
             password_hash=get_password_hash("secret123"))
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def auth_headers(user):
    token = create_access_token(data={"sub": user.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def catalog(db):
    return CatalogManager(db)


def supplier_payload(name="Acme Trading", **overrides):
    data = {
        "name": name,
        "company_contact_num": "09171234567",
        "address": {"region": "NCR", "city": "Makati", "street_address": "123 Ayala Ave"},
        "contact_persons": [
            {"name": "Ana Cruz", "email": "ana@acme.ph", "phone": "+639171234567"},
        ],
    }
    data.update(overrides)
    return data


@pytest.fixture
def category(catalog):
    return catalog.create_category(CategoryCreate(name="Beverages"), actor=ACTOR)


@pytest.fixture
def supplier(catalog):
    return catalog.create_supplier(SupplierCreate(**supplier_payload()), actor=ACTOR)


@pytest.fixture
def make_product(catalog, category, supplier):
    counter = {"n": 0}

    def _make(quantity=0, price="10.00", name=None):
        counter["n"] += 1
        payload = ProductCreate(
            name=name or f"Product {counter['n']}",
            quantity=quantity,
            price=price,
            category_id=category.id,
            supplier_id=supplier.id,
        )
        return catalog.create_product(payload, actor=ACTOR)

    return _make
