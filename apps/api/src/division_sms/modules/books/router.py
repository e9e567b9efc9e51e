"""
Books Router

Endpoints:
- GET /books, GET /books/{id}, POST /books, PATCH /books/{id}, DELETE /books/{id}
- GET /books/issuances - Issuances (section, student, book, school year, returned)
- POST /books/issuances - Issue books to students of a section
- POST /books/issuances/{id}/return - Record a return
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import (
    CurrentUser,
    get_current_user,
    get_records_staff,
    resolve_school_id,
)
from division_sms.core.database import get_db
from division_sms.modules.books import service
from division_sms.modules.books.schemas import (
    BookCreate,
    BookResponse,
    BookUpdate,
    IssuanceResponse,
    IssueBooksRequest,
    ReturnBookRequest,
)
from division_sms.modules.shared.grade_levels import GRADE_LEVEL_MAX, GRADE_LEVEL_MIN
from division_sms.modules.shared.pagination import Page, PageParams, page_params

router = APIRouter()


# ============================================
# Issuances (declared first so /issuances is not read as a book id)
# ============================================


@router.get("/issuances", response_model=Page[IssuanceResponse], summary="List Issuances")
async def list_issuances(
    school_id: str | None = Query(None),
    section_id: str | None = Query(None),
    student_id: str | None = Query(None),
    book_id: str | None = Query(None),
    school_year: str | None = Query(None, max_length=9),
    is_returned: bool | None = Query(None),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Page[IssuanceResponse]:
    issuances, total = await service.list_issuances(
        db,
        resolve_school_id(user, school_id),
        section_id=section_id,
        student_id=student_id,
        book_id=book_id,
        school_year=school_year,
        is_returned=is_returned,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[IssuanceResponse](
        items=[IssuanceResponse.model_validate(i) for i in issuances],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.post(
    "/issuances",
    response_model=list[IssuanceResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Issue Books",
)
async def issue_books(
    data: IssueBooksRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[IssuanceResponse]:
    issuances = await service.issue_books(
        db, resolve_school_id(user, data.school_id), data, issued_by=user.id
    )
    return [IssuanceResponse.model_validate(i) for i in issuances]


@router.post(
    "/issuances/{issuance_id}/return",
    response_model=IssuanceResponse,
    summary="Return Book",
)
async def return_book(
    issuance_id: str,
    data: ReturnBookRequest,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> IssuanceResponse:
    issuance = await service.return_book(
        db, resolve_school_id(user, school_id), issuance_id, data
    )
    return IssuanceResponse.model_validate(issuance)


# ============================================
# Books
# ============================================


@router.get("", response_model=Page[BookResponse], summary="List Books")
async def list_books(
    school_id: str | None = Query(None),
    search: str | None = Query(None, min_length=1, max_length=100),
    grade_level: int | None = Query(None, ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX),
    subject_area: str | None = Query(None, max_length=100),
    is_active: bool | None = Query(None),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Page[BookResponse]:
    books, total = await service.list_books(
        db,
        resolve_school_id(user, school_id),
        search=search,
        grade_level=grade_level,
        subject_area=subject_area,
        is_active=is_active,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[BookResponse](
        items=[BookResponse.model_validate(b) for b in books],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/{book_id}", response_model=BookResponse, summary="Get Book")
async def get_book(
    book_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> BookResponse:
    book = await service.get_book(db, resolve_school_id(user, school_id), book_id)
    return BookResponse.model_validate(book)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Book",
)
async def create_book(
    data: BookCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> BookResponse:
    book = await service.create_book(db, resolve_school_id(user, data.school_id), data)
    return BookResponse.model_validate(book)


@router.patch("/{book_id}", response_model=BookResponse, summary="Update Book")
async def update_book(
    book_id: str,
    data: BookUpdate,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> BookResponse:
    book = await service.update_book(db, resolve_school_id(user, school_id), book_id, data)
    return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Book",
)
async def delete_book(
    book_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> None:
    await service.delete_book(db, resolve_school_id(user, school_id), book_id)
