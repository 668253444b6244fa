"""
pytest Fixtures for Library Catalog Tests

This file contains shared fixtures used across all test files.

WHAT ARE FIXTURES?
==================
Fixtures are reusable test setup/teardown functions.
They provide:
- Test data (sample books, authors, members)
- Test resources (database sessions, HTTP clients, auth headers)
- Setup/cleanup logic (create/drop tables)

For database tests, each test function gets its own in-memory SQLite
database, so commits and rollbacks made by the code under test behave
exactly as in production and never leak into the next test.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from collections.abc import Generator
from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_catalog.database import Base, get_db
from library_catalog.main import app
from library_catalog.models import (
    Author,
    Book,
    BookCategory,
    Borrowing,
    Category,
    Member,
    Publisher,
    Role,
    User,
)
from library_catalog.services.gateway import Gateway
from library_catalog.services.security import create_access_token, hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the whole test.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a database session for one test.

    Configured like the application's SessionLocal.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture
def gateway(db_session: Session) -> Gateway:
    """A Persistence Gateway over the test session."""
    return Gateway(db_session)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_author(db_session: Session) -> Author:
    author = Author(first_name="John Ronald", last_name="Tolkien")
    db_session.add(author)
    db_session.commit()
    return author


@pytest.fixture
def second_author(db_session: Session) -> Author:
    author = Author(first_name="George", last_name="Orwell")
    db_session.add(author)
    db_session.commit()
    return author


@pytest.fixture
def sample_publisher(db_session: Session) -> Publisher:
    publisher = Publisher(publisher_name="HarperCollins")
    db_session.add(publisher)
    db_session.commit()
    return publisher


@pytest.fixture
def sample_categories(db_session: Session) -> list[Category]:
    """Fantasy, Classic and Poetry, in that (alphabetical) order."""
    categories = [
        Category(category_name="Fantasy"),
        Category(category_name="Classic"),
        Category(category_name="Poetry"),
    ]
    db_session.add_all(categories)
    db_session.commit()
    return sorted(categories, key=lambda c: c.category_name)


@pytest.fixture
def sample_book(
    db_session: Session,
    sample_author: Author,
    sample_publisher: Publisher,
    sample_categories: list[Category],
) -> Book:
    """The Hobbit, by Tolkien, linked to the first category (Classic)."""
    book = Book(
        title="The Hobbit",
        price=Decimal("14.99"),
        publishing_date=date(1937, 9, 21),
        author=sample_author,
        publisher=sample_publisher,
    )
    book.book_categories = [BookCategory(category=sample_categories[0])]
    db_session.add(book)
    db_session.commit()
    return book


@pytest.fixture
def multiple_books(
    db_session: Session,
    sample_author: Author,
    second_author: Author,
    sample_publisher: Publisher,
) -> list[Book]:
    """Three books: two by Tolkien, one by Orwell."""
    books = [
        Book(
            title="The Silmarillion",
            price=Decimal("20.00"),
            publishing_date=date(1977, 9, 15),
            author=sample_author,
            publisher=sample_publisher,
        ),
        Book(
            title="Animal Farm",
            price=Decimal("9.99"),
            publishing_date=date(1945, 8, 17),
            author=second_author,
            publisher=sample_publisher,
        ),
        Book(
            title="Leaf by Niggle",
            price=Decimal("5.50"),
            publishing_date=date(1945, 1, 1),
            author=sample_author,
        ),
    ]
    db_session.add_all(books)
    db_session.commit()
    return books


@pytest.fixture
def sample_member(db_session: Session) -> Member:
    member = Member(
        first_name="Ana",
        last_name="Pop",
        address="Str. Memorandumului 28, Cluj-Napoca",
        email="ana.pop@example.com",
        phone="0722-123-123",
    )
    db_session.add(member)
    db_session.commit()
    return member


@pytest.fixture
def sample_borrowing(
    db_session: Session,
    sample_member: Member,
    sample_book: Book,
) -> Borrowing:
    borrowing = Borrowing(member=sample_member, book=sample_book)
    db_session.add(borrowing)
    db_session.commit()
    return borrowing


# =============================================================================
# IDENTITY FIXTURES
# =============================================================================

@pytest.fixture
def admin_user(db_session: Session) -> User:
    """A user holding the Admin role."""
    user = User(
        email="admin@example.com",
        hashed_password=hash_password("AdminPass123"),
        is_active=True,
        roles=[Role(name="Admin")],
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def member_user(db_session: Session) -> User:
    """A user with no roles and a linked member record."""
    user = User(
        email="reader@example.com",
        hashed_password=hash_password("ReaderPass123"),
        is_active=True,
    )
    user.member = Member(
        first_name="Ion",
        last_name="Popescu",
        email="reader@example.com",
    )
    db_session.add(user)
    db_session.commit()
    return user


def _auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(
        {"sub": str(user.id), "email": user.email, "roles": user.role_names}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return _auth_headers(admin_user)


@pytest.fixture
def member_headers(member_user: User) -> dict[str, str]:
    return _auth_headers(member_user)
