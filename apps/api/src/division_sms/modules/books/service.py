"""
Book Service Layer

Issuing lends every selected book to every selected student. Students must
hold an approved enrollment in the section for that school year. A
(student, book) pair that is still out is refused with ALREADY_ISSUED; a
pair that came back earlier in the year is lent out again on the same row.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.books import repository
from division_sms.modules.books.models import Book, BookIssuance
from division_sms.modules.books.schemas import (
    BookCreate,
    BookUpdate,
    IssueBooksRequest,
    ReturnBookRequest,
)
from division_sms.modules.enrollment import repository as enrollment_repository
from division_sms.modules.sections import repository as sections_repository
from division_sms.modules.shared.errors import (
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
    raise_for_integrity_error,
)

logger = logging.getLogger(__name__)

BOOK_IN_USE = "This book is still issued to students and cannot be deleted."


# ============================================
# Books
# ============================================


async def get_book(db: AsyncSession, school_id: str, id: str) -> Book:
    book = await repository.get_by_id(db, id)
    if not book or book.school_id != school_id:
        raise NotFoundError("Book", id)
    return book


async def list_books(
    db: AsyncSession,
    school_id: str,
    **filters,
) -> tuple[list[Book], int]:
    return await repository.list_books(db, school_id=school_id, **filters)


async def create_book(db: AsyncSession, school_id: str, data: BookCreate) -> Book:
    try:
        book = await repository.create(
            db, **data.model_dump(exclude={"school_id"}), school_id=school_id
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e)

    return book


async def update_book(db: AsyncSession, school_id: str, id: str, data: BookUpdate) -> Book:
    book = await get_book(db, school_id, id)
    book = await repository.update(db, book, **data.model_dump(exclude_unset=True))
    await db.commit()
    return book


async def delete_book(db: AsyncSession, school_id: str, id: str) -> None:
    book = await get_book(db, school_id, id)
    if await repository.count_outstanding(db, id):
        raise InvalidStateError(BOOK_IN_USE, "BOOK_IN_USE")

    await repository.soft_delete(db, book)
    await db.commit()
    logger.info(f"Soft-deleted book {id}")


# ============================================
# Issuances
# ============================================


async def get_issuance(db: AsyncSession, school_id: str, id: str) -> BookIssuance:
    issuance = await repository.get_issuance(db, id)
    if not issuance or issuance.school_id != school_id:
        raise NotFoundError("Book issuance", id)
    return issuance


async def list_issuances(
    db: AsyncSession,
    school_id: str,
    **filters,
) -> tuple[list[BookIssuance], int]:
    return await repository.list_issuances(db, school_id=school_id, **filters)


async def issue_books(
    db: AsyncSession,
    school_id: str,
    data: IssueBooksRequest,
    issued_by: str,
) -> list[BookIssuance]:
    """
    Raises:
        NotFoundError: Section or a book is not in this school
        ValidationFailedError: A student has no approved enrollment in the section
        InvalidStateError: ALREADY_ISSUED when a pair is still out
    """
    section = await sections_repository.get_by_id(db, data.section_id)
    if not section or section.school_id != school_id:
        raise NotFoundError("Section", data.section_id)

    books = await repository.get_many(db, data.book_ids)
    found = {b.id for b in books if b.school_id == school_id}
    for book_id in data.book_ids:
        if book_id not in found:
            raise NotFoundError("Book", book_id)

    enrolled = set(
        await enrollment_repository.list_approved_student_ids(
            db, data.section_id, data.school_year
        )
    )
    not_enrolled = [sid for sid in data.student_ids if sid not in enrolled]
    if not_enrolled:
        raise ValidationFailedError(
            f"{len(not_enrolled)} student(s) are not enrolled in this section for "
            f"{data.school_year}.",
            "STUDENT_NOT_ENROLLED",
        )

    existing = {
        (i.student_id, i.book_id): i
        for i in await repository.find_issuances(
            db,
            student_ids=data.student_ids,
            book_ids=data.book_ids,
            school_year=data.school_year,
        )
    }
    outstanding = [i for i in existing.values() if not i.is_returned]
    if outstanding:
        raise InvalidStateError(
            f"{len(outstanding)} book(s) are already issued to these students and not returned.",
            "ALREADY_ISSUED",
        )

    issued: list[BookIssuance] = []
    try:
        for student_id in data.student_ids:
            for book_id in data.book_ids:
                previous = existing.get((student_id, book_id))
                if previous:
                    issuance = await repository.update_issuance(
                        db,
                        previous,
                        section_id=data.section_id,
                        date_issued=data.date_issued,
                        date_returned=None,
                        condition_on_return=None,
                        return_code=None,
                        remarks=data.remarks,
                        issued_by=issued_by,
                    )
                else:
                    issuance = await repository.create_issuance(
                        db,
                        student_id=student_id,
                        book_id=book_id,
                        section_id=data.section_id,
                        school_id=school_id,
                        school_year=data.school_year,
                        date_issued=data.date_issued,
                        remarks=data.remarks,
                        issued_by=issued_by,
                    )
                issued.append(issuance)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(
            e, duplicate_message="Some of these books were issued at the same time."
        )

    logger.info(
        f"Issued {len(data.book_ids)} book(s) to {len(data.student_ids)} student(s) "
        f"of section {data.section_id}"
    )
    return issued


async def return_book(
    db: AsyncSession,
    school_id: str,
    id: str,
    data: ReturnBookRequest,
) -> BookIssuance:
    """
    Raises:
        InvalidStateError: ALREADY_RETURNED
        ValidationFailedError: Return date before the issue date
    """
    issuance = await get_issuance(db, school_id, id)
    if issuance.is_returned:
        raise InvalidStateError("This book has already been returned.", "ALREADY_RETURNED")
    if data.date_returned < issuance.date_issued:
        raise ValidationFailedError(
            "The return date cannot be before the issue date.", "INVALID_RETURN_DATE"
        )

    changes = {
        "date_returned": data.date_returned,
        "condition_on_return": data.condition_on_return,
        "return_code": data.return_code,
    }
    if data.remarks is not None:
        changes["remarks"] = data.remarks

    issuance = await repository.update_issuance(db, issuance, **changes)
    await db.commit()

    logger.info(f"Returned book issuance {id} on {data.date_returned}")
    return issuance
