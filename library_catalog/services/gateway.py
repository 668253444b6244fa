"""
Persistence Gateway

A thin data-access layer over one SQLAlchemy session.

Services never touch the session directly: they receive a Gateway for the
current request and ask it for typed collections.

Include Specifications
======================
Related rows are loaded only when asked for. An include specification is a
sequence of dotted relationship paths:

    gateway.find(Book, 1, include=("author", "book_categories.category"))

Each path becomes a chain of selectinload() options, so the book comes back
with its author and its category rows attached, and nothing else. Keeping the
fetch shape explicit bounds result size and avoids N+1 queries.

Units of Work
=============
add/update/delete commit immediately. Wrap several calls in atomic() to
commit them together; any exception inside rolls the whole change set back.
"""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Load, Session, selectinload
from sqlalchemy.orm.exc import StaleDataError

from library_catalog.database import Base
from library_catalog.errors import ConcurrencyConflict, NotFound

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)

IncludeSpec = Sequence[str]


def build_load_options(model: type[Base], include: IncludeSpec) -> list[Load]:
    """
    Translate dotted include paths into selectinload() chains.

    Args:
        model: Root model of the query
        include: Paths such as "book_categories.category"

    Returns:
        Loader options for select().options()

    Raises:
        ValueError: If a path names an attribute that is not a relationship
    """
    options = []
    for path in include:
        current = model
        option = None
        for name in path.split("."):
            relationship = current.__mapper__.relationships.get(name)
            if relationship is None:
                raise ValueError(
                    f"{current.__name__} has no relationship named '{name}'"
                )
            attribute = getattr(current, name)
            option = selectinload(attribute) if option is None else option.selectinload(attribute)
            current = relationship.mapper.class_
        options.append(option)
    return options


class Gateway:
    """
    Typed collections over one request's session.

    Usage:
        gateway = Gateway(db)
        books = gateway.list(Book, include=("author",), order_by=(Book.title,))
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self._atomic_depth = 0

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def list(
        self,
        model: type[T],
        *criteria: Any,
        include: IncludeSpec = (),
        order_by: Sequence[Any] = (),
        outerjoin: Sequence[Any] = (),
    ) -> list[T]:
        """
        Fetch every row of a model matching the criteria.

        Args:
            model: Mapped class to query
            *criteria: SQL expressions combined with AND
            include: Relationship paths to eager-load
            order_by: ORDER BY expressions
            outerjoin: Relationships to LEFT OUTER JOIN for filtering/sorting
        """
        stmt = select(model)
        for target in outerjoin:
            stmt = stmt.outerjoin(target)
        if criteria:
            stmt = stmt.where(*criteria)
        if include:
            stmt = stmt.options(*build_load_options(model, include))
        if order_by:
            stmt = stmt.order_by(*order_by)
        return list(self.session.execute(stmt).scalars().unique().all())

    def first(self, model: type[T], *criteria: Any) -> T | None:
        """The first row (lowest id) matching the criteria, or None."""
        stmt = select(model).where(*criteria).order_by(model.id).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def find(self, model: type[T], entity_id: int, include: IncludeSpec = ()) -> T:
        """
        Fetch one row by primary key.

        Raises:
            NotFound: If no row has that id
        """
        stmt = select(model).where(model.id == entity_id)
        if include:
            stmt = stmt.options(*build_load_options(model, include))
        entity = self.session.execute(stmt).scalar_one_or_none()

        if entity is None:
            raise NotFound(model.__name__, entity_id)
        return entity

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    def add(self, entity: T) -> T:
        """Insert a new entity and return it with its id assigned."""
        self.session.add(entity)
        self._commit()
        logger.info(f"Added {entity!r}")
        return entity

    def update(
        self,
        model: type[T],
        entity_id: int,
        values: dict[str, Any],
        expected_version: int | None = None,
    ) -> T:
        """
        Change columns of an existing row using optimistic concurrency.

        Args:
            model: Mapped class with a version column
            entity_id: Row to change
            values: Column → new value
            expected_version: Version the caller read; None skips the check

        Raises:
            NotFound: If the row does not exist
            ConcurrencyConflict: If the row changed since the caller read it
        """
        entity = self.find(model, entity_id)

        if expected_version is not None and entity.version != expected_version:
            logger.warning(
                f"Concurrency conflict on {model.__name__} {entity_id}: "
                f"expected version {expected_version}, found {entity.version}"
            )
            raise ConcurrencyConflict(model.__name__, entity_id)

        for field, value in values.items():
            setattr(entity, field, value)

        try:
            self._commit()
        except StaleDataError as exc:
            # Another transaction updated or deleted the row after our read
            logger.warning(f"Concurrency conflict on {model.__name__} {entity_id}: {exc}")
            raise ConcurrencyConflict(model.__name__, entity_id) from exc

        logger.info(f"Updated {entity!r}")
        return entity

    def delete(self, model: type[Base], entity_id: int) -> None:
        """
        Delete a row by primary key.

        ORM cascades (junction rows, borrowings) are applied.

        Raises:
            NotFound: If the row does not exist
        """
        entity = self.session.get(model, entity_id)
        if entity is None:
            raise NotFound(model.__name__, entity_id)

        self.session.delete(entity)
        try:
            self._commit()
        except StaleDataError as exc:
            raise ConcurrencyConflict(model.__name__, entity_id) from exc

        logger.info(f"Deleted {model.__name__} {entity_id}")

    # -------------------------------------------------------------------------
    # Units of Work
    # -------------------------------------------------------------------------
    @contextmanager
    def atomic(self) -> Iterator["Gateway"]:
        """
        Group several writes into one commit.

        Nested atomic() blocks join the outermost one. On any exception the
        session is rolled back and the exception propagates.

        Usage:
            with gateway.atomic():
                gateway.add(book)
                gateway.add(BookCategory(book=book, category_id=3))
        """
        self._atomic_depth += 1
        try:
            yield self
            if self._atomic_depth == 1:
                self.session.commit()
            else:
                self.session.flush()
        except Exception:
            if self._atomic_depth == 1:
                self.session.rollback()
            raise
        finally:
            self._atomic_depth -= 1

    def _commit(self) -> None:
        if self._atomic_depth:
            # Send SQL now so ids and constraint errors surface immediately
            self.session.flush()
            return

        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
