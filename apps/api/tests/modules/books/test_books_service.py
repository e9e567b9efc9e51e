"""
Unit tests for book issuance and returns.
"""

from datetime import date
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from division_sms.modules.books import service
from division_sms.modules.books.models import BookReturnCode
from division_sms.modules.books.schemas import IssueBooksRequest, ReturnBookRequest
from division_sms.modules.shared.errors import (
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
)

SERVICE = "division_sms.modules.books.service"
SCHOOL_ID = "11111111-1111-1111-1111-111111111111"


def make_issuance(**overrides):
    fields = {
        "id": "iss-1",
        "school_id": SCHOOL_ID,
        "student_id": "stu-1",
        "book_id": "book-1",
        "date_issued": date(2024, 6, 10),
        "date_returned": None,
    }
    fields.update(overrides)
    issuance = SimpleNamespace(**fields)
    issuance.is_returned = issuance.date_returned is not None
    return issuance


def _updated(db, issuance, **fields):
    return SimpleNamespace(**{**vars(issuance), **fields})


@pytest.fixture
def repos():
    with (
        patch(f"{SERVICE}.repository") as repo,
        patch(f"{SERVICE}.sections_repository") as sections_repo,
        patch(f"{SERVICE}.enrollment_repository") as enrollment_repo,
    ):
        sections_repo.get_by_id = AsyncMock(
            return_value=SimpleNamespace(id="sec-1", school_id=SCHOOL_ID)
        )
        repo.get_many = AsyncMock(
            return_value=[
                SimpleNamespace(id="book-1", school_id=SCHOOL_ID),
                SimpleNamespace(id="book-2", school_id=SCHOOL_ID),
            ]
        )
        repo.find_issuances = AsyncMock(return_value=[])
        repo.create_issuance = AsyncMock(
            side_effect=lambda db, **fields: SimpleNamespace(id="new", **fields)
        )
        repo.update_issuance = AsyncMock(side_effect=_updated)
        enrollment_repo.list_approved_student_ids = AsyncMock(return_value=["stu-1", "stu-2"])
        yield SimpleNamespace(repo=repo, sections=sections_repo, enrollment=enrollment_repo)


def make_request(**overrides) -> IssueBooksRequest:
    data = {
        "section_id": "sec-1",
        "school_year": "2024-2025",
        "book_ids": ["book-1", "book-2"],
        "student_ids": ["stu-1", "stu-2"],
        "date_issued": date(2024, 6, 10),
    }
    data.update(overrides)
    return IssueBooksRequest(**data)


class TestIssueBooks:
    @pytest.mark.asyncio
    async def test_every_book_to_every_student(self, mock_db, repos):
        issued = await service.issue_books(mock_db, SCHOOL_ID, make_request(), "user-1")

        assert len(issued) == 4
        assert {(i.student_id, i.book_id) for i in issued} == {
            ("stu-1", "book-1"),
            ("stu-1", "book-2"),
            ("stu-2", "book-1"),
            ("stu-2", "book-2"),
        }
        assert all(i.school_id == SCHOOL_ID and i.issued_by == "user-1" for i in issued)
        mock_db.commit.assert_awaited_once()

    def test_duplicate_ids_are_collapsed(self):
        request = make_request(book_ids=["book-1", "book-1"], student_ids=["stu-2", "stu-2"])
        assert request.book_ids == ["book-1"]
        assert request.student_ids == ["stu-2"]

    @pytest.mark.asyncio
    async def test_student_without_approved_enrollment(self, mock_db, repos):
        repos.enrollment.list_approved_student_ids.return_value = ["stu-1"]

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.issue_books(mock_db, SCHOOL_ID, make_request(), "user-1")
        assert exc_info.value.error_code == "STUDENT_NOT_ENROLLED"
        repos.repo.create_issuance.assert_not_called()

    @pytest.mark.asyncio
    async def test_book_of_other_school(self, mock_db, repos):
        repos.repo.get_many.return_value = [SimpleNamespace(id="book-1", school_id=SCHOOL_ID)]

        with pytest.raises(NotFoundError):
            await service.issue_books(mock_db, SCHOOL_ID, make_request(), "user-1")

    @pytest.mark.asyncio
    async def test_outstanding_book_refused(self, mock_db, repos):
        repos.repo.find_issuances.return_value = [make_issuance()]

        with pytest.raises(InvalidStateError) as exc_info:
            await service.issue_books(mock_db, SCHOOL_ID, make_request(), "user-1")
        assert exc_info.value.error_code == "ALREADY_ISSUED"
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_returned_book_is_reissued_on_same_row(self, mock_db, repos):
        returned = make_issuance(date_returned=date(2024, 9, 1))
        repos.repo.find_issuances.return_value = [returned]

        issued = await service.issue_books(
            mock_db,
            SCHOOL_ID,
            make_request(book_ids=["book-1"], student_ids=["stu-1"], date_issued=date(2024, 10, 1)),
            "user-1",
        )

        assert len(issued) == 1
        assert issued[0].id == "iss-1"
        assert issued[0].date_returned is None
        assert issued[0].date_issued == date(2024, 10, 1)
        repos.repo.create_issuance.assert_not_called()


class TestReturnBook:
    @pytest.mark.asyncio
    async def test_return(self, mock_db, repos):
        repos.repo.get_issuance = AsyncMock(return_value=make_issuance())

        issuance = await service.return_book(
            mock_db,
            SCHOOL_ID,
            "iss-1",
            ReturnBookRequest(
                date_returned=date(2025, 3, 31),
                condition_on_return="Good",
                return_code=BookReturnCode.FORCE_MAJEURE,
            ),
        )

        assert issuance.date_returned == date(2025, 3, 31)
        assert issuance.return_code == BookReturnCode.FORCE_MAJEURE
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_already_returned(self, mock_db, repos):
        repos.repo.get_issuance = AsyncMock(
            return_value=make_issuance(date_returned=date(2025, 1, 5))
        )

        with pytest.raises(InvalidStateError) as exc_info:
            await service.return_book(
                mock_db, SCHOOL_ID, "iss-1", ReturnBookRequest(date_returned=date(2025, 3, 31))
            )
        assert exc_info.value.error_code == "ALREADY_RETURNED"

    @pytest.mark.asyncio
    async def test_return_before_issue_date(self, mock_db, repos):
        repos.repo.get_issuance = AsyncMock(return_value=make_issuance())

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.return_book(
                mock_db, SCHOOL_ID, "iss-1", ReturnBookRequest(date_returned=date(2024, 6, 1))
            )
        assert exc_info.value.error_code == "INVALID_RETURN_DATE"


class TestDeleteBook:
    """Books still out on loan cannot be deleted."""

    @pytest.mark.asyncio
    async def test_outstanding_copies(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(
            return_value=SimpleNamespace(id="book-1", school_id=SCHOOL_ID)
        )
        repos.repo.count_outstanding = AsyncMock(return_value=2)
        repos.repo.soft_delete = AsyncMock()

        with pytest.raises(InvalidStateError) as exc_info:
            await service.delete_book(mock_db, SCHOOL_ID, "book-1")

        assert exc_info.value.error_code == "BOOK_IN_USE"
        repos.repo.soft_delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_all_returned(self, mock_db, repos):
        book = SimpleNamespace(id="book-1", school_id=SCHOOL_ID)
        repos.repo.get_by_id = AsyncMock(return_value=book)
        repos.repo.count_outstanding = AsyncMock(return_value=0)
        repos.repo.soft_delete = AsyncMock()

        await service.delete_book(mock_db, SCHOOL_ID, "book-1")

        repos.repo.soft_delete.assert_awaited_once_with(mock_db, book)
        mock_db.commit.assert_awaited_once()
