"""
Catalog Query Service

Builds the book listings and the category, publisher and author views by
composing queries across the domain model, and keeps a book's category links
in sync with a set of selected category ids.

Every function takes the request's Gateway as its first argument.

View Data
=========
The *IndexData dataclasses are per-request aggregation structures: a list
of records plus, when one record is selected, the books (or categories)
that belong to it. Routers turn them into response schemas.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from library_catalog.errors import (
    ConcurrencyConflict,
    NotFound,
    PartialUpdateFailure,
    ValidationFailed,
)
from library_catalog.models import Author, Book, BookCategory, Category, Publisher
from library_catalog.services.gateway import Gateway
from library_catalog.validation import validate_fields

logger = logging.getLogger(__name__)


# =============================================================================
# Include Specifications
# =============================================================================
BOOK_DETAIL = ("author", "publisher", "book_categories.category")
CATEGORY_WITH_BOOKS = ("book_categories.book.author",)
PUBLISHER_WITH_BOOKS = ("books.author",)
AUTHOR_WITH_BOOKS = ("books.author",)


class SortKey(str, Enum):
    TITLE = "title"
    AUTHOR = "author"


# =============================================================================
# View Data
# =============================================================================
@dataclass
class CategoryIndexData:
    categories: list[Category]
    category_id: int | None = None
    books: list[Book] = field(default_factory=list)


@dataclass
class BookIndexData:
    books: list[Book]
    search_text: str | None = None
    sort_key: SortKey = SortKey.TITLE
    book_id: int | None = None
    categories: list[Category] = field(default_factory=list)


@dataclass
class PublisherIndexData:
    publishers: list[Publisher]
    publisher_id: int | None = None
    books: list[Book] = field(default_factory=list)


@dataclass
class AuthorIndexData:
    authors: list[Author]
    author_id: int | None = None
    books: list[Book] = field(default_factory=list)


@dataclass
class AssignedCategoryData:
    """One checkbox of a book's category list."""

    category_id: int
    category_name: str
    assigned: bool


# =============================================================================
# Helpers
# =============================================================================
def author_full_name():
    """SQL expression for an author's full name (first + ' ' + last)."""
    return Author.first_name + " " + Author.last_name


def _select_exactly_one(records: Iterable[Any], record_id: int, entity: str) -> Any:
    """Pick the record with the id; zero or several matches is an error."""
    matches = [record for record in records if record.id == record_id]
    if len(matches) != 1:
        raise NotFound(entity, record_id)
    return matches[0]


def _by_title(books: Iterable[Book]) -> list[Book]:
    return sorted(books, key=lambda book: (book.title, book.id))


# =============================================================================
# Categories
# =============================================================================
def list_categories(gateway: Gateway) -> list[Category]:
    """All categories by name, each with its books (and their authors) loaded."""
    return gateway.list(
        Category,
        include=CATEGORY_WITH_BOOKS,
        order_by=(Category.category_name, Category.id),
    )


def _books_of(category: Category) -> list[Book]:
    books: dict[int, Book] = {}
    for link in category.book_categories:
        books.setdefault(link.book_id, link.book)
    return _by_title(books.values())


def books_in_category(gateway: Gateway, category_id: int) -> list[Book]:
    """
    Books linked to a category through the junction table.

    Raises:
        NotFound: If the id does not match exactly one category
    """
    category = _select_exactly_one(list_categories(gateway), category_id, "Category")
    return _books_of(category)


def category_index(gateway: Gateway, category_id: int | None = None) -> CategoryIndexData:
    """
    Categories page: every category, plus the books of the selected one.

    Raises:
        NotFound: If category_id is given and matches no category
    """
    data = CategoryIndexData(categories=list_categories(gateway))

    if category_id is not None:
        data.category_id = category_id
        category = _select_exactly_one(data.categories, category_id, "Category")
        data.books = _books_of(category)

    return data


# =============================================================================
# Books
# =============================================================================
def list_books(
    gateway: Gateway,
    search_text: str | None = None,
    sort_key: SortKey | str = SortKey.TITLE,
) -> list[Book]:
    """
    Books filtered by title or author name, sorted by title or author.

    Args:
        search_text: Case-insensitive substring of the title OR the author's
            full name; None or blank returns every book
        sort_key: "title" or "author"; ties are ordered by id

    Raises:
        ValueError: If sort_key is not a known key
    """
    sort_key = SortKey(sort_key)
    criteria = []

    if search_text and search_text.strip():
        # % and _ in the search text are matched literally
        needle = search_text.strip()
        criteria.append(
            or_(
                Book.title.icontains(needle, autoescape=True),
                author_full_name().icontains(needle, autoescape=True),
            )
        )

    if sort_key is SortKey.AUTHOR:
        order_by = (author_full_name(), Book.id)
    else:
        order_by = (Book.title, Book.id)

    return gateway.list(
        Book,
        *criteria,
        include=BOOK_DETAIL,
        order_by=order_by,
        outerjoin=(Book.author,),
    )


def book_index(
    gateway: Gateway,
    search_text: str | None = None,
    sort_key: SortKey | str = SortKey.TITLE,
    book_id: int | None = None,
) -> BookIndexData:
    """
    Books page: the filtered listing, plus the categories of the selected book.

    Raises:
        NotFound: If book_id is given and no such book exists
    """
    data = BookIndexData(
        books=list_books(gateway, search_text, sort_key),
        search_text=search_text,
        sort_key=SortKey(sort_key),
    )

    if book_id is not None:
        data.book_id = book_id
        book = gateway.find(Book, book_id, include=("book_categories.category",))
        data.categories = sorted(book.categories, key=lambda c: (c.category_name, c.id))

    return data


def get_book(gateway: Gateway, book_id: int) -> Book:
    """A book with its author, publisher and categories."""
    return gateway.find(Book, book_id, include=BOOK_DETAIL)


# =============================================================================
# Publishers and Authors
# =============================================================================
def books_by_publisher(gateway: Gateway, publisher_id: int) -> list[Book]:
    """
    Books of one publisher, by title.

    Raises:
        NotFound: If the publisher does not exist
    """
    publisher = gateway.find(Publisher, publisher_id, include=PUBLISHER_WITH_BOOKS)
    return _by_title(publisher.books)


def publisher_index(gateway: Gateway, publisher_id: int | None = None) -> PublisherIndexData:
    """Publishers page: every publisher, plus the books of the selected one."""
    data = PublisherIndexData(
        publishers=gateway.list(
            Publisher,
            include=PUBLISHER_WITH_BOOKS,
            order_by=(Publisher.publisher_name, Publisher.id),
        )
    )

    if publisher_id is not None:
        data.publisher_id = publisher_id
        publisher = _select_exactly_one(data.publishers, publisher_id, "Publisher")
        data.books = _by_title(publisher.books)

    return data


def books_by_author(gateway: Gateway, author_id: int) -> list[Book]:
    """
    Books of one author, by title.

    Raises:
        NotFound: If the author does not exist
    """
    author = gateway.find(Author, author_id, include=AUTHOR_WITH_BOOKS)
    return _by_title(author.books)


def author_index(gateway: Gateway, author_id: int | None = None) -> AuthorIndexData:
    """Authors page: every author, plus the books of the selected one."""
    data = AuthorIndexData(
        authors=gateway.list(
            Author,
            include=AUTHOR_WITH_BOOKS,
            order_by=(Author.last_name, Author.first_name, Author.id),
        )
    )

    if author_id is not None:
        data.author_id = author_id
        author = _select_exactly_one(data.authors, author_id, "Author")
        data.books = _by_title(author.books)

    return data


# =============================================================================
# Category Assignment
# =============================================================================
def assigned_category_data(gateway: Gateway, book: Book | None = None) -> list[AssignedCategoryData]:
    """
    Every category with a flag telling whether the book is linked to it.

    With no book (the create form) every flag is False.
    """
    assigned = {link.category_id for link in book.book_categories} if book else set()
    categories = gateway.list(Category, order_by=(Category.category_name, Category.id))
    return [
        AssignedCategoryData(
            category_id=category.id,
            category_name=category.category_name,
            assigned=category.id in assigned,
        )
        for category in categories
    ]


def _check_categories_exist(gateway: Gateway, category_ids: set[int]) -> None:
    if not category_ids:
        return
    found = {c.id for c in gateway.list(Category, Category.id.in_(category_ids))}
    missing = sorted(category_ids - found)
    if missing:
        raise NotFound("Category", missing[0])


def _apply_category_diff(book: Book, selected: set[int]) -> bool:
    """
    Insert links for newly selected categories and delete deselected ones.

    Links whose category stays selected are not touched.

    Returns:
        True if any link was inserted or deleted
    """
    current = {link.category_id: link for link in book.book_categories}
    added = sorted(selected - current.keys())
    removed = sorted(current.keys() - selected)

    for category_id in added:
        book.book_categories.append(BookCategory(category_id=category_id))

    for category_id in removed:
        # delete-orphan cascade turns the removal into a DELETE
        book.book_categories.remove(current[category_id])

    return bool(added or removed)


def assign_categories(
    gateway: Gateway,
    book_id: int,
    selected_ids: Iterable[int],
    bump_version: bool = True,
) -> Book:
    """
    Make the book's categories equal the selected set.

    Calling it twice with the same set changes nothing the second time.
    Inserts and deletes are committed together or not at all. A change to
    the set counts as an edit of the book and increments its version,
    unless bump_version is False (the caller already changed the row).

    Raises:
        NotFound: If the book or any selected category does not exist
        ConcurrencyConflict: If the book row changed underneath the update
        PartialUpdateFailure: If the database rejected part of the change;
            nothing was saved
    """
    selected = set(selected_ids)
    book = gateway.find(Book, book_id, include=("book_categories",))
    _check_categories_exist(gateway, selected)

    try:
        with gateway.atomic():
            changed = _apply_category_diff(book, selected)
            if changed and bump_version:
                # Link rows live in their own table; mark the book row dirty
                # so the flush issues a versioned UPDATE for it
                flag_modified(book, "title")
    except StaleDataError as exc:
        logger.warning(f"Concurrency conflict on Book {book_id}: {exc}")
        raise ConcurrencyConflict("Book", book_id) from exc
    except SQLAlchemyError as exc:
        logger.error(f"Category assignment for book {book_id} failed: {exc}")
        raise PartialUpdateFailure() from exc

    logger.info(f"Book {book_id} categories set to {sorted(selected)}")
    return book


# =============================================================================
# Book Writes
# =============================================================================
def _check_references(gateway: Gateway, values: dict[str, Any]) -> None:
    errors = {}
    for field_name, model in (("author_id", Author), ("publisher_id", Publisher)):
        ref = values.get(field_name)
        if ref is None:
            continue
        try:
            gateway.find(model, ref)
        except NotFound:
            errors[field_name] = f"{model.__name__} {ref} does not exist"
    if errors:
        raise ValidationFailed(errors)


def create_book(
    gateway: Gateway,
    values: dict[str, Any],
    selected_category_ids: Iterable[int] = (),
) -> Book:
    """
    Validate and insert a book together with its category links.

    Raises:
        ValidationFailed: If a field breaks a rule or names a missing author/publisher
        NotFound: If a selected category does not exist
        PartialUpdateFailure: If the insert could not be completed
    """
    errors = validate_fields("book", values)
    if errors:
        raise ValidationFailed(errors)
    _check_references(gateway, values)

    selected = set(selected_category_ids)
    _check_categories_exist(gateway, selected)

    try:
        with gateway.atomic():
            book = gateway.add(Book(**values))
            _apply_category_diff(book, selected)
    except SQLAlchemyError as exc:
        logger.error(f"Creating book '{values.get('title')}' failed: {exc}")
        raise PartialUpdateFailure() from exc

    return get_book(gateway, book.id)


def update_book(
    gateway: Gateway,
    book_id: int,
    values: dict[str, Any],
    expected_version: int | None = None,
    selected_category_ids: Iterable[int] | None = None,
) -> Book:
    """
    Update a book's fields and, when given, its categories in one unit of work.

    Raises:
        ValidationFailed: If a provided field breaks a rule
        NotFound: If the book or a selected category does not exist
        ConcurrencyConflict: If the book changed since expected_version
        PartialUpdateFailure: If the category change could not be applied
    """
    errors = validate_fields("book", values, partial=True)
    if errors:
        raise ValidationFailed(errors)
    _check_references(gateway, values)

    with gateway.atomic():
        version_read = gateway.find(Book, book_id).version
        book = gateway.update(Book, book_id, values, expected_version)
        if selected_category_ids is not None:
            # One edit, one version step: skip the bump if the fields already made it
            assign_categories(
                gateway,
                book_id,
                selected_category_ids,
                bump_version=book.version == version_read,
            )

    return get_book(gateway, book_id)
