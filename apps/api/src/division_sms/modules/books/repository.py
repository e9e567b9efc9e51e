"""
Book Repository

Books (soft-deleted) and their issuances.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.books.models import Book, BookIssuance
from division_sms.modules.shared.pagination import paginate

logger = logging.getLogger(__name__)


# ============================================
# Books
# ============================================


async def create(db: AsyncSession, **fields: Any) -> Book:
    book = Book(**fields)
    db.add(book)
    await db.flush()
    await db.refresh(book)

    logger.info(f"Created book: {book.id} ({book.title})")
    return book


async def get_by_id(db: AsyncSession, id: str) -> Book | None:
    result = await db.execute(select(Book).where(Book.id == str(id), Book.deleted_at.is_(None)))
    return result.scalar_one_or_none()


async def get_many(db: AsyncSession, ids: list[str]) -> list[Book]:
    if not ids:
        return []
    result = await db.execute(select(Book).where(Book.id.in_(ids), Book.deleted_at.is_(None)))
    return list(result.scalars().all())


async def list_books(
    db: AsyncSession,
    *,
    school_id: str,
    search: str | None = None,
    grade_level: int | None = None,
    subject_area: str | None = None,
    is_active: bool | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Book], int]:
    query = select(Book).where(Book.school_id == school_id, Book.deleted_at.is_(None))

    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Book.title.ilike(pattern), Book.isbn.ilike(pattern)))
    if grade_level is not None:
        query = query.where(Book.grade_level == grade_level)
    if subject_area:
        query = query.where(Book.subject_area == subject_area)
    if is_active is not None:
        query = query.where(Book.is_active == is_active)

    query = query.order_by(Book.grade_level, Book.subject_area, Book.title)
    return await paginate(db, query, skip, limit)


async def update(db: AsyncSession, book: Book, **fields: Any) -> Book:
    for key, value in fields.items():
        setattr(book, key, value)

    await db.flush()
    await db.refresh(book)
    return book


async def soft_delete(db: AsyncSession, book: Book) -> None:
    book.deleted_at = datetime.now(UTC)
    await db.flush()


# ============================================
# Issuances
# ============================================


async def get_issuance(db: AsyncSession, id: str) -> BookIssuance | None:
    result = await db.execute(select(BookIssuance).where(BookIssuance.id == str(id)))
    return result.scalar_one_or_none()


async def count_outstanding(db: AsyncSession, book_id: str) -> int:
    """Issuances of a book that have not come back yet."""
    result = await db.execute(
        select(func.count())
        .select_from(BookIssuance)
        .where(BookIssuance.book_id == book_id, BookIssuance.date_returned.is_(None))
    )
    return result.scalar_one()


async def find_issuances(
    db: AsyncSession,
    *,
    student_ids: list[str],
    book_ids: list[str],
    school_year: str,
) -> list[BookIssuance]:
    """Issuances of any (student, book) pair drawn from the two lists."""
    result = await db.execute(
        select(BookIssuance).where(
            BookIssuance.student_id.in_(student_ids),
            BookIssuance.book_id.in_(book_ids),
            BookIssuance.school_year == school_year,
        )
    )
    return list(result.scalars().all())


async def create_issuance(db: AsyncSession, **fields: Any) -> BookIssuance:
    issuance = BookIssuance(**fields)
    db.add(issuance)
    await db.flush()
    await db.refresh(issuance)
    return issuance


async def update_issuance(
    db: AsyncSession, issuance: BookIssuance, **fields: Any
) -> BookIssuance:
    for key, value in fields.items():
        setattr(issuance, key, value)

    await db.flush()
    await db.refresh(issuance)
    return issuance


async def list_issuances(
    db: AsyncSession,
    *,
    school_id: str,
    section_id: str | None = None,
    student_id: str | None = None,
    book_id: str | None = None,
    school_year: str | None = None,
    is_returned: bool | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[BookIssuance], int]:
    query = select(BookIssuance).where(BookIssuance.school_id == school_id)

    if section_id:
        query = query.where(BookIssuance.section_id == section_id)
    if student_id:
        query = query.where(BookIssuance.student_id == student_id)
    if book_id:
        query = query.where(BookIssuance.book_id == book_id)
    if school_year:
        query = query.where(BookIssuance.school_year == school_year)
    if is_returned is True:
        query = query.where(BookIssuance.date_returned.is_not(None))
    elif is_returned is False:
        query = query.where(BookIssuance.date_returned.is_(None))

    query = query.order_by(BookIssuance.date_issued.desc(), BookIssuance.created_at.desc())
    return await paginate(db, query, skip, limit)
