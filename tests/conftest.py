"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# config.py reads the environment at import time
os.environ.setdefault("RUNTIME_ENVIRONMENT", "TEST")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_TOKEN_SECRET", "test_token_secret_1234567890abcdef")
os.environ.setdefault("LOG_MASK_SECRETS", "true")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import config
import db
from enums.garment_size import GarmentSize
from enums.payment_method import PaymentMethod
from enums.product_category import ProductCategory
from enums.user_role import UserRole
from models.order import OrderRequestDTO, OrderLineRequestDTO, ShippingAddressDTO
from models.product import ProductDTO, CustomizationOptionsDTO
from models.user import UserDTO
from repositories.product import ProductRepository
from repositories.user import UserRepository
from utils.access_token import issue_access_token


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine(monkeypatch):
    """In-memory SQLite engine, installed as the application's engine."""
    engine = db.build_engine("sqlite+aiosqlite:///:memory:")
    await db.create_db_and_tables(engine)

    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setattr(db, "session_maker", async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine):
    """Create test database session."""
    async with db.session_maker() as session:
        yield session
        await session.rollback()


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def shipping_address():
    return ShippingAddressDTO(street="1 Main St", city="Springfield", state="IL", zip_code="62701", country="US")


@pytest.fixture
def make_product(test_session):
    """Factory: persist a product and return its DTO."""
    async def _make_product(name: str = "Classic Tee", price: float = 10.0, stock: int = 10,
                            category: ProductCategory = ProductCategory.T_SHIRTS,
                            sizes: list[GarmentSize] | None = None) -> ProductDTO:
        product = await ProductRepository.create(ProductDTO(
            name=name,
            description=f"{name} description",
            price=price,
            category=category,
            stock=stock,
            image_url=f"https://cdn.example.com/{name.lower().replace(' ', '-')}.png",
            is_customizable=True,
            customization_options=CustomizationOptionsDTO(
                colors=["black", "white"],
                sizes=sizes if sizes is not None else [GarmentSize.S, GarmentSize.M],
                print_locations=[],
            ),
        ), test_session)
        await test_session.commit()
        return product

    return _make_product


@pytest.fixture
def make_user(test_session):
    """Factory: persist a user and return its DTO."""
    async def _make_user(email: str = "customer@example.com", role: UserRole = UserRole.USER) -> UserDTO:
        user = await UserRepository.create(UserDTO(email=email, name=email.split("@")[0], role=role), test_session)
        await test_session.commit()
        return user

    return _make_user


@pytest.fixture
def order_request(shipping_address):
    """Factory: build an order request from (product_id, quantity) pairs."""
    def _order_request(*lines: tuple[int, int]) -> OrderRequestDTO:
        return OrderRequestDTO(
            items=[OrderLineRequestDTO(product_id=product_id, quantity=quantity) for product_id, quantity in lines],
            shipping_address=shipping_address,
            payment_method=PaymentMethod.CREDIT_CARD,
        )

    return _order_request


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest.fixture
def auth_headers():
    """Factory: Authorization header carrying a valid token for the user."""
    def _auth_headers(user: UserDTO) -> dict[str, str]:
        token = issue_access_token(user.id, user.role, config.AUTH_TOKEN_SECRET)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest_asyncio.fixture
async def api_client(test_engine):
    """HTTP client talking to the FastAPI app in-process (same event loop as the DB fixtures)."""
    from web.app import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
