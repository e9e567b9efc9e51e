"""
Unit tests for the form request service layer.

These tests cover:
- Public LRN lookup
- Submitting Form 137 / diploma requests (skipping types already open)
- Public status check guarded by the LRN
- Staff status transitions
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from division_sms.modules.form_requests import service
from division_sms.modules.form_requests.models import DocumentRequestType, FormRequestStatus
from division_sms.modules.form_requests.schemas import FormRequestSubmit
from division_sms.modules.shared.errors import InvalidStateError, NotFoundError

SERVICE = "division_sms.modules.form_requests.service"
SCHOOL_ID = "11111111-1111-1111-1111-111111111111"
LRN = "123456789012"


@pytest.fixture
def student():
    return SimpleNamespace(
        id="stu-1",
        lrn=LRN,
        first_name="Juan",
        last_name="Dela Cruz",
        school_id=SCHOOL_ID,
    )


@pytest.fixture
def repos(student):
    with (
        patch(f"{SERVICE}.repository") as repo,
        patch(f"{SERVICE}.students_repository") as students_repo,
        patch(f"{SERVICE}.SchoolRepository") as school_repo,
    ):
        students_repo.get_by_lrn = AsyncMock(return_value=student)
        school_repo.get_by_id = AsyncMock(
            return_value=SimpleNamespace(id=SCHOOL_ID, name="Ozamiz City National High School")
        )
        repo.get_open_types = AsyncMock(return_value=set())
        repo.create = AsyncMock(side_effect=lambda db, **fields: SimpleNamespace(**fields))
        repo.update = AsyncMock(
            side_effect=lambda db, request, **fields: SimpleNamespace(**{**vars(request), **fields})
        )
        yield SimpleNamespace(repo=repo, students=students_repo, schools=school_repo)


def make_submit(**overrides) -> FormRequestSubmit:
    data = {
        "student_lrn": LRN,
        "request_types": ["form137", "diploma"],
        "requestor_name": "Maria Dela Cruz",
        "requestor_contact": "09171234567",
        "requestor_relationship": "Mother",
        "purpose": "College application",
    }
    data.update(overrides)
    return FormRequestSubmit(**data)


class TestSubmitSchema:
    def test_lrn_must_be_12_digits(self):
        with pytest.raises(ValidationError):
            make_submit(student_lrn="12345")

    def test_lrn_is_stripped(self):
        assert make_submit(student_lrn=f"  {LRN} ").student_lrn == LRN

    def test_request_types_deduplicated(self):
        body = make_submit(request_types=["diploma", "diploma"])
        assert body.request_types == [DocumentRequestType.DIPLOMA]

    def test_at_least_one_type(self):
        with pytest.raises(ValidationError):
            make_submit(request_types=[])


class TestLookup:
    @pytest.mark.asyncio
    async def test_lookup_includes_school_name(self, mock_db, repos):
        result = await service.lookup_student(mock_db, f" {LRN} ")

        assert result.lrn == LRN
        assert result.school_name == "Ozamiz City National High School"
        repos.students.get_by_lrn.assert_awaited_once_with(mock_db, LRN)

    @pytest.mark.asyncio
    async def test_unknown_lrn(self, mock_db, repos):
        repos.students.get_by_lrn.return_value = None

        with pytest.raises(NotFoundError):
            await service.lookup_student(mock_db, LRN)


class TestSubmitRequests:
    @pytest.mark.asyncio
    async def test_one_pending_request_per_type(self, mock_db, repos):
        created, skipped = await service.submit_requests(mock_db, make_submit())

        assert [r.request_type for r in created] == [
            DocumentRequestType.FORM137,
            DocumentRequestType.DIPLOMA,
        ]
        assert all(r.status == FormRequestStatus.PENDING for r in created)
        assert all(r.school_id == SCHOOL_ID and r.student_id == "stu-1" for r in created)
        assert skipped == []
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_open_type_is_skipped(self, mock_db, repos):
        repos.repo.get_open_types.return_value = {DocumentRequestType.FORM137}

        created, skipped = await service.submit_requests(mock_db, make_submit())

        assert [r.request_type for r in created] == [DocumentRequestType.DIPLOMA]
        assert skipped == [DocumentRequestType.FORM137]

    @pytest.mark.asyncio
    async def test_every_type_open_fails(self, mock_db, repos):
        repos.repo.get_open_types.return_value = {
            DocumentRequestType.FORM137,
            DocumentRequestType.DIPLOMA,
        }

        with pytest.raises(InvalidStateError) as exc_info:
            await service.submit_requests(mock_db, make_submit())
        assert exc_info.value.error_code == "REQUEST_ALREADY_EXISTS"
        assert "Form 137, Diploma" in exc_info.value.message
        repos.repo.create.assert_not_called()


class TestPublicStatus:
    @pytest.mark.asyncio
    async def test_matching_lrn(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(return_value=SimpleNamespace(id="req-1", student_lrn=LRN))

        request = await service.get_request_status(mock_db, "req-1", LRN)
        assert request.id == "req-1"

    @pytest.mark.asyncio
    async def test_wrong_lrn_hides_request(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(return_value=SimpleNamespace(id="req-1", student_lrn=LRN))

        with pytest.raises(NotFoundError):
            await service.get_request_status(mock_db, "req-1", "999999999999")


class TestStaffTransitions:
    def make_request(self, status):
        return SimpleNamespace(id="req-1", school_id=SCHOOL_ID, status=status, remarks=None)

    @pytest.mark.asyncio
    async def test_approve_records_approver(self, mock_db, repos, registrar):
        repos.repo.get_by_id = AsyncMock(
            return_value=self.make_request(FormRequestStatus.PENDING)
        )

        request = await service.approve_request(mock_db, SCHOOL_ID, "req-1", registrar)

        assert request.status == FormRequestStatus.APPROVED
        assert request.approved_by == registrar.id
        assert request.approved_at is not None
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_complete_approved_request(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(
            return_value=self.make_request(FormRequestStatus.APPROVED)
        )

        request = await service.complete_request(
            mock_db, SCHOOL_ID, "req-1", remarks="Released to requestor"
        )

        assert request.status == FormRequestStatus.COMPLETED
        assert request.completed_at is not None
        assert request.remarks == "Released to requestor"

    @pytest.mark.asyncio
    async def test_pending_request_cannot_be_completed(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(
            return_value=self.make_request(FormRequestStatus.PENDING)
        )

        with pytest.raises(InvalidStateError) as exc_info:
            await service.complete_request(mock_db, SCHOOL_ID, "req-1")
        assert exc_info.value.error_code == "INVALID_STATUS_TRANSITION"

    @pytest.mark.asyncio
    async def test_rejected_request_is_final(self, mock_db, repos, registrar):
        repos.repo.get_by_id = AsyncMock(
            return_value=self.make_request(FormRequestStatus.REJECTED)
        )

        with pytest.raises(InvalidStateError):
            await service.approve_request(mock_db, SCHOOL_ID, "req-1", registrar)

    @pytest.mark.asyncio
    async def test_request_of_other_school_not_found(self, mock_db, repos):
        request = self.make_request(FormRequestStatus.PENDING)
        request.school_id = "22222222-2222-2222-2222-222222222222"
        repos.repo.get_by_id = AsyncMock(return_value=request)

        with pytest.raises(NotFoundError):
            await service.reject_request(mock_db, SCHOOL_ID, "req-1")
