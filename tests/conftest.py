# Standard Library
from decimal import Decimal
from typing import AsyncGenerator, Optional

# Third-Party Libraries
import pytest
import pytest_asyncio

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, AsyncEngine
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

# First-Party Libraries (Your project)
from src.main import app
from src.database import get_db_session
from src.auth.security import get_password_hash, create_access_token
from src.roles.models import Role
from src.users.models import Account, Customer, Manager
from src.categories.models import Category
from src.products.models import Product
from src.attributes.models import Attribute, AttributeValue
from src.product_variants.models import ProductVariant, VariantAttributeValue
from src.feedback.models import Feedback

# URL de base pour la DB en mémoire
TEST_DATABASE_BASE_URL = "sqlite+aiosqlite:///:memory:"

# --- Fixtures de Base ---

@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Crée un engine, des tables, et fournit une session DB en mémoire pour chaque test."""
    engine: AsyncEngine = create_async_engine(TEST_DATABASE_BASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with TestingSessionLocal() as session:
        yield session

    await engine.dispose()

@pytest_asyncio.fixture(scope="function")
async def test_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Fournit un AsyncClient httpx qui utilise la session DB de test isolée."""
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    del app.dependency_overrides[get_db_session]

# --- Fixtures Comptes et Authentification ---

async def create_account(
    session: AsyncSession,
    email: str,
    password: str,
    full_name: str,
    role: Optional[Role] = None,
    phone_number: Optional[str] = None,
    address: Optional[str] = None,
):
    """Crée un compte avec un profil manager (si role) ou client. Retourne le profil."""
    account = Account(
        email=email,
        username=email.split("@")[0],
        full_name=full_name,
        password_hash=get_password_hash(password),
    )
    session.add(account)
    await session.flush()
    if role is not None:
        profile = Manager(account_id=account.id, role_id=role.id)
    else:
        profile = Customer(account_id=account.id, phone_number=phone_number, address=address)
    session.add(profile)
    await session.commit()
    await session.refresh(profile)
    return profile

def bearer_headers(account: Account, role: str) -> dict[str, str]:
    access_token = create_access_token(data={"sub": str(account.id), "role": role})
    return {"Authorization": f"Bearer {access_token}"}

@pytest_asyncio.fixture(scope="function")
async def admin_role(db_session: AsyncSession) -> Role:
    role = Role(name="admin")
    db_session.add(role)
    await db_session.commit()
    await db_session.refresh(role)
    return role

@pytest_asyncio.fixture(scope="function")
async def manager_role(db_session: AsyncSession) -> Role:
    role = Role(name="manager")
    db_session.add(role)
    await db_session.commit()
    await db_session.refresh(role)
    return role

@pytest_asyncio.fixture(scope="function")
async def admin_manager(db_session: AsyncSession, admin_role: Role) -> Manager:
    """Profil manager de l'administrateur."""
    return await create_account(db_session, "admin@example.com", "adminpassword", "Admin User", role=admin_role)

@pytest_asyncio.fixture(scope="function")
async def admin_user(db_session: AsyncSession, admin_manager: Manager) -> Account:
    return await db_session.get(Account, admin_manager.account_id)

@pytest_asyncio.fixture(scope="function")
async def staff_manager(db_session: AsyncSession, manager_role: Role) -> Manager:
    """Profil d'un manager non administrateur."""
    return await create_account(db_session, "manager@example.com", "managerpassword", "Manager User", role=manager_role)

@pytest_asyncio.fixture(scope="function")
async def manager_user(db_session: AsyncSession, staff_manager: Manager) -> Account:
    return await db_session.get(Account, staff_manager.account_id)

@pytest_asyncio.fixture(scope="function")
async def test_customer(db_session: AsyncSession) -> Customer:
    return await create_account(
        db_session, "testuser@example.com", "testpassword", "Test User",
        phone_number="0600000001", address="1 rue des Tests, Paris",
    )

@pytest_asyncio.fixture(scope="function")
async def test_user(db_session: AsyncSession, test_customer: Customer) -> Account:
    """Compte client standard."""
    return await db_session.get(Account, test_customer.account_id)

@pytest_asyncio.fixture(scope="function")
async def test_customer_2(db_session: AsyncSession) -> Customer:
    return await create_account(db_session, "testuser2@example.com", "testpassword2", "Second User")

@pytest_asyncio.fixture(scope="function")
async def test_user_2(db_session: AsyncSession, test_customer_2: Customer) -> Account:
    return await db_session.get(Account, test_customer_2.account_id)

@pytest_asyncio.fixture(scope="function")
async def auth_headers_admin(admin_user: Account) -> dict[str, str]:
    """Génère les headers d'authentification pour l'administrateur."""
    return bearer_headers(admin_user, "admin")

@pytest_asyncio.fixture(scope="function")
async def auth_headers_manager(manager_user: Account) -> dict[str, str]:
    return bearer_headers(manager_user, "manager")

@pytest_asyncio.fixture(scope="function")
async def auth_headers_user(test_user: Account) -> dict[str, str]:
    """Génère les headers d'authentification pour le client standard."""
    return bearer_headers(test_user, "user")

@pytest_asyncio.fixture(scope="function")
async def auth_headers_user_2(test_user_2: Account) -> dict[str, str]:
    return bearer_headers(test_user_2, "user")

# --- Fixtures Catalogue ---

@pytest_asyncio.fixture(scope="function")
async def test_category(db_session: AsyncSession) -> Category:
    category = Category(name="T-shirts", description="Hauts à manches courtes")
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category

@pytest_asyncio.fixture(scope="function")
async def test_product(db_session: AsyncSession, test_category: Category) -> Product:
    product = Product(
        name="T-shirt Basique",
        description="T-shirt en coton",
        brand="Maison",
        category_id=test_category.id,
    )
    db_session.add(product)
    await db_session.commit()
    await db_session.refresh(product)
    return product

@pytest_asyncio.fixture(scope="function")
async def color_attribute(db_session: AsyncSession) -> Attribute:
    """Attribut 'Couleur' avec les valeurs Rouge et Bleu."""
    attribute = Attribute(name="Couleur")
    db_session.add(attribute)
    await db_session.flush()
    db_session.add_all([
        AttributeValue(attribute_id=attribute.id, value="Rouge"),
        AttributeValue(attribute_id=attribute.id, value="Bleu"),
    ])
    await db_session.commit()
    await db_session.refresh(attribute)
    return attribute

@pytest_asyncio.fixture(scope="function")
async def size_attribute(db_session: AsyncSession) -> Attribute:
    attribute = Attribute(name="Taille")
    db_session.add(attribute)
    await db_session.flush()
    db_session.add(AttributeValue(attribute_id=attribute.id, value="M"))
    await db_session.commit()
    await db_session.refresh(attribute)
    return attribute

async def get_value(session: AsyncSession, attribute: Attribute, value: str) -> AttributeValue:
    result = await session.execute(
        select(AttributeValue).where(AttributeValue.attribute_id == attribute.id, AttributeValue.value == value)
    )
    return result.scalar_one()

@pytest_asyncio.fixture(scope="function")
async def test_variant(
    db_session: AsyncSession,
    test_product: Product,
    color_attribute: Attribute,
    size_attribute: Attribute,
) -> ProductVariant:
    """Variante Rouge / M du produit de test, à 19.99."""
    variant = ProductVariant(
        sku="TSHIRT-RED-M",
        price=Decimal("19.99"),
        stock_quantity=10,
        product_id=test_product.id,
    )
    db_session.add(variant)
    await db_session.flush()
    for attribute, value in ((color_attribute, "Rouge"), (size_attribute, "M")):
        attribute_value = await get_value(db_session, attribute, value)
        db_session.add(VariantAttributeValue(
            product_variant_id=variant.id,
            attribute_value_id=attribute_value.id,
            attribute_id=attribute.id,
        ))
    await db_session.commit()
    await db_session.refresh(variant)
    return variant

@pytest_asyncio.fixture(scope="function")
async def test_feedback(db_session: AsyncSession, test_variant: ProductVariant, test_customer: Customer) -> Feedback:
    feedback = Feedback(
        product_id=test_variant.product_id,
        product_variant_id=test_variant.id,
        customer_id=test_customer.id,
        rating=4,
        comment="Très bonne qualité",
    )
    db_session.add(feedback)
    await db_session.commit()
    await db_session.refresh(feedback)
    return feedback
