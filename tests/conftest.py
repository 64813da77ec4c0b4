import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from food_ordering.core.database import build_engine, create_tables, drop_tables, get_db
from food_ordering.core.security import create_access_token, get_password_hash
from food_ordering.main import app
from food_ordering.models.restaurant import MenuItem, Restaurant
from food_ordering.models.user import Country, User, UserRole
from food_ordering.services.auth_service import token_claims

engine = build_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    create_tables(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_tables(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role=UserRole.MEMBER, country=Country.INDIA, email=None, password="secret123",
              name=None, payment_method=None):
        counter["n"] += 1
        user = User(
            email=email or f"{role.value}{counter['n']}@{country.value}.example.org",
            hashed_password=get_password_hash(password),
            name=name or f"{role.value.title()} {counter['n']}",
            role=role,
            country=country,
            payment_method=payment_method,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_restaurant(db):
    def _make(name="Spice Palace", country=Country.INDIA, items=(("Biryani", "14.99"),)):
        restaurant = Restaurant(
            name=name,
            description=f"{name} kitchen",
            address="1 Test Street",
            image="",
            country=country,
            rating=Decimal("4.5"),
        )
        for item_name, price in items:
            restaurant.menu_items.append(MenuItem(
                name=item_name,
                description="",
                price=Decimal(price),
                image="",
                category="Main Course",
                available=True,
            ))
        db.add(restaurant)
        db.commit()
        db.refresh(restaurant)
        return restaurant

    return _make


def auth_header(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(token_claims(user))}"}


@pytest.fixture
def headers():
    return auth_header


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, Country.AMERICA)


@pytest.fixture
def india_manager(make_user):
    return make_user(UserRole.MANAGER, Country.INDIA)


@pytest.fixture
def america_manager(make_user):
    return make_user(UserRole.MANAGER, Country.AMERICA)


@pytest.fixture
def india_member(make_user):
    return make_user(UserRole.MEMBER, Country.INDIA)


@pytest.fixture
def america_member(make_user):
    return make_user(UserRole.MEMBER, Country.AMERICA)


@pytest.fixture
def spice_palace(make_restaurant):
    return make_restaurant("Spice Palace", Country.INDIA, (("Biryani", "14.99"), ("Naan Bread", "3.99")))


@pytest.fixture
def american_diner(make_restaurant):
    return make_restaurant("American Diner", Country.AMERICA, (("Classic Burger", "13.99"), ("Milkshake", "5.99")))
