#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample data for development.

USAGE:
    # From the project root with the package installed
    python scripts/seed_data.py

This script:
1. Creates the tables if they don't exist
2. Clears existing catalog data (optional)
3. Creates the administrator role and an administrator account
4. Creates sample authors, publishers, categories and books
5. Links books to their categories
"""

import os
from datetime import date
from decimal import Decimal

from sqlalchemy import delete
from sqlalchemy.orm import Session

from library_catalog.config import get_settings
from library_catalog.database import SessionLocal, create_tables
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
    user_roles,
)
from library_catalog.services.security import hash_password

settings = get_settings()

ADMIN_EMAIL = os.environ.get("SEED_ADMIN_EMAIL", "admin@library.example.com")
ADMIN_PASSWORD = os.environ.get("SEED_ADMIN_PASSWORD", "ChangeMe123")


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    for table in (Borrowing, BookCategory, Book, Member, Author, Publisher, Category):
        db.execute(delete(table))
    db.execute(delete(user_roles))
    db.execute(delete(User))
    db.execute(delete(Role))
    db.commit()
    print("Data cleared.")


def create_admin(db: Session) -> User:
    """Create the administrator role and an account that holds it."""
    print("Creating administrator...")
    role = Role(name=settings.admin_role)
    admin = User(
        email=ADMIN_EMAIL,
        hashed_password=hash_password(ADMIN_PASSWORD),
        is_active=True,
        roles=[role],
    )
    db.add(admin)
    db.commit()

    print(f"Created administrator {ADMIN_EMAIL} with role '{settings.admin_role}'.")
    return admin


def create_authors(db: Session) -> dict[str, Author]:
    """Create sample authors."""
    print("Creating authors...")
    authors_data = [
        ("George", "Orwell"),
        ("Jane", "Austen"),
        ("Ernest", "Hemingway"),
        ("Agatha", "Christie"),
        ("Isaac", "Asimov"),
        ("John Ronald", "Tolkien"),
    ]

    authors = {}
    for first_name, last_name in authors_data:
        author = Author(first_name=first_name, last_name=last_name)
        db.add(author)
        authors[last_name] = author

    db.commit()
    print(f"Created {len(authors)} authors.")
    return authors


def create_publishers(db: Session) -> dict[str, Publisher]:
    """Create sample publishers."""
    print("Creating publishers...")
    names = ["Penguin Books", "HarperCollins", "Bantam Spectra", "Scribner"]

    publishers = {name: Publisher(publisher_name=name) for name in names}
    db.add_all(publishers.values())
    db.commit()

    print(f"Created {len(publishers)} publishers.")
    return publishers


def create_categories(db: Session) -> dict[str, Category]:
    """Create sample categories."""
    print("Creating categories...")
    names = [
        "Science Fiction",
        "Fantasy",
        "Mystery",
        "Classic Literature",
        "Dystopian",
        "Romance",
    ]

    categories = {name: Category(category_name=name) for name in names}
    db.add_all(categories.values())
    db.commit()

    print(f"Created {len(categories)} categories.")
    return categories


def create_books(
    db: Session,
    authors: dict[str, Author],
    publishers: dict[str, Publisher],
    categories: dict[str, Category],
) -> list[Book]:
    """Create sample books with author, publisher and category links."""
    print("Creating books...")

    books_data = [
        {
            "title": "1984",
            "publishing_date": date(1949, 6, 8),
            "price": Decimal("12.99"),
            "author": "Orwell",
            "publisher": "Penguin Books",
            "categories": ["Science Fiction", "Dystopian", "Classic Literature"],
        },
        {
            "title": "Animal Farm",
            "publishing_date": date(1945, 8, 17),
            "price": Decimal("9.99"),
            "author": "Orwell",
            "publisher": "Penguin Books",
            "categories": ["Classic Literature"],
        },
        {
            "title": "Pride and Prejudice",
            "publishing_date": date(1813, 1, 28),
            "price": Decimal("8.99"),
            "author": "Austen",
            "publisher": "Penguin Books",
            "categories": ["Romance", "Classic Literature"],
        },
        {
            "title": "The Old Man and the Sea",
            "publishing_date": date(1952, 9, 1),
            "price": Decimal("11.99"),
            "author": "Hemingway",
            "publisher": "Scribner",
            "categories": ["Classic Literature"],
        },
        {
            "title": "Murder on the Orient Express",
            "publishing_date": date(1934, 1, 1),
            "price": Decimal("14.99"),
            "author": "Christie",
            "publisher": "HarperCollins",
            "categories": ["Mystery", "Classic Literature"],
        },
        {
            "title": "Foundation",
            "publishing_date": date(1951, 5, 1),
            "price": Decimal("15.99"),
            "author": "Asimov",
            "publisher": "Bantam Spectra",
            "categories": ["Science Fiction"],
        },
        {
            "title": "The Hobbit",
            "publishing_date": date(1937, 9, 21),
            "price": Decimal("14.99"),
            "author": "Tolkien",
            "publisher": "HarperCollins",
            "categories": ["Fantasy", "Classic Literature"],
        },
    ]

    books = []
    for data in books_data:
        category_names = data.pop("categories")
        book = Book(
            title=data["title"],
            publishing_date=data["publishing_date"],
            price=data["price"],
            author=authors[data["author"]],
            publisher=publishers[data["publisher"]],
        )
        book.book_categories = [
            BookCategory(category=categories[name]) for name in category_names
        ]
        db.add(book)
        books.append(book)

    db.commit()
    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        create_admin(db)
        authors = create_authors(db)
        publishers = create_publishers(db)
        categories = create_categories(db)
        books = create_books(db, authors, publishers, categories)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Publishers: {len(publishers)}")
        print(f"  - Categories: {len(categories)}")
        print(f"  - Books: {len(books)}")
        print(f"\nSign in as {ADMIN_EMAIL} at http://localhost:{settings.port}/auth/login")
        print(f"Pages documentation at http://localhost:{settings.port}/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
