"""
Unit tests for medical assistance approval and guarantee letters.
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from division_sms.documents.guarantee_letter import GuaranteeProgram
from division_sms.modules.medical_assistance import service
from division_sms.modules.medical_assistance.models import AgeUnit, MedicalAssistanceStatus
from division_sms.modules.medical_assistance.schemas import (
    MedicalAssistanceCreate,
    StatusUpdate,
)
from division_sms.modules.shared.errors import NotFoundError, ValidationFailedError

SERVICE = "division_sms.modules.medical_assistance.service"


def make_assistance(**overrides):
    fields = {
        "id": "ma-1",
        "status": MedicalAssistanceStatus.PENDING,
        "date_approved": None,
        "patient_fullname": "Juan Dela Cruz",
        "patient_age_value": 7,
        "patient_age_unit": AgeUnit.YEARS,
        "patient_address": "Purok 3, Tudela, Misamis Occidental",
        "hospital": None,
        "lgu_amount": Decimal("5000.00"),
        "maifip_amount": None,
        "dswd_amount": Decimal("1500.00"),
        "lgu_gl_no": None,
        "maifip_gl_no": None,
        "dswd_gl_no": 12,
        "remarks": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _updated(db, assistance, **fields):
    return SimpleNamespace(**{**vars(assistance), **fields})


class TestUpdateStatus:
    """Tests for status changes and GL number assignment."""

    @pytest.mark.asyncio
    async def test_approval_assigns_missing_gl_numbers(self, mock_db):
        """Only programs with an amount and no number get a new GL number."""
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(return_value=make_assistance())
            repo.next_gl_number = AsyncMock(return_value=41)
            repo.update = AsyncMock(side_effect=_updated)

            result = await service.update_status(
                mock_db,
                "ma-1",
                StatusUpdate(status=MedicalAssistanceStatus.APPROVED),
                today=date(2025, 3, 14),
            )

        assert result.status == MedicalAssistanceStatus.APPROVED
        assert result.date_approved == date(2025, 3, 14)
        assert result.lgu_gl_no == 41
        assert result.maifip_gl_no is None
        assert result.dswd_gl_no == 12
        repo.next_gl_number.assert_awaited_once_with(
            mock_db, "lgu_gl_no", date(2025, 1, 1), date(2026, 1, 1)
        )
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_approval_keeps_existing_date(self, mock_db):
        """The numbering year follows an already set approval date."""
        assistance = make_assistance(date_approved=date(2024, 12, 30))
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(return_value=assistance)
            repo.next_gl_number = AsyncMock(return_value=1)
            repo.update = AsyncMock(side_effect=_updated)

            result = await service.update_status(
                mock_db,
                "ma-1",
                StatusUpdate(status=MedicalAssistanceStatus.APPROVED),
                today=date(2025, 1, 2),
            )

        assert result.date_approved == date(2024, 12, 30)
        repo.next_gl_number.assert_awaited_once_with(
            mock_db, "lgu_gl_no", date(2024, 1, 1), date(2025, 1, 1)
        )

    @pytest.mark.asyncio
    async def test_other_statuses_do_not_number(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(return_value=make_assistance())
            repo.next_gl_number = AsyncMock()
            repo.update = AsyncMock(side_effect=_updated)

            result = await service.update_status(
                mock_db,
                "ma-1",
                StatusUpdate(status=MedicalAssistanceStatus.FOR_EVALUATION, remarks="Needs SOA"),
            )

        assert result.status == MedicalAssistanceStatus.FOR_EVALUATION
        assert result.remarks == "Needs SOA"
        assert result.date_approved is None
        repo.next_gl_number.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_record(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError):
                await service.update_status(
                    mock_db, "missing", StatusUpdate(status=MedicalAssistanceStatus.REJECTED)
                )


class TestGuaranteeLetter:
    """Tests for printing guarantee letters."""

    @pytest.mark.asyncio
    async def test_program_without_amount(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(return_value=make_assistance())

            with pytest.raises(ValidationFailedError) as exc_info:
                await service.get_guarantee_letter(mock_db, "ma-1", GuaranteeProgram.MAIFIP)

        assert exc_info.value.error_code == "NO_PROGRAM_AMOUNT"

    @pytest.mark.asyncio
    async def test_renders_letter(self, mock_db):
        assistance = make_assistance(date_approved=date(2025, 2, 3), lgu_gl_no=7)
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(return_value=assistance)

            html = await service.get_guarantee_letter(mock_db, "ma-1", GuaranteeProgram.LGU)

        assert "25-AO-FHP-TDL-00007" in html
        assert "JUAN DELA CRUZ" in html
        assert "FIVE THOUSAND" in html


class TestCreateAssistance:
    """Tests for filing assistance records."""

    @staticmethod
    def make_data(**overrides) -> MedicalAssistanceCreate:
        data = {
            "hospital_id": "hosp-1",
            "total_bill_amount": Decimal("20000"),
            "philhealth_granted_amount": Decimal("4000"),
            "patient_fullname": "Maria Santos",
            "patient_age_value": 3,
            "patient_age_unit": AgeUnit.MONTHS,
            "patient_gender": "Female",
            "requester_fullname": "Ana Santos",
            "doctors": [{"doctor_name": "Dr. Reyes", "professional_fee": "1500"}],
        }
        data.update(overrides)
        return MedicalAssistanceCreate(**data)

    @pytest.mark.asyncio
    async def test_create_is_pending(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_hospital = AsyncMock(return_value=SimpleNamespace(id="hosp-1"))
            repo.create = AsyncMock(
                side_effect=lambda db, **fields: SimpleNamespace(id="ma-9", **fields)
            )

            result = await service.create_assistance(mock_db, self.make_data(), created_by="u-1")

        assert result.status == MedicalAssistanceStatus.PENDING
        assert result.created_by == "u-1"
        assert result.doctors == [{"doctor_name": "Dr. Reyes", "professional_fee": "1500"}]
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_hospital(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_hospital = AsyncMock(return_value=None)
            repo.create = AsyncMock()

            with pytest.raises(NotFoundError):
                await service.create_assistance(mock_db, self.make_data(), created_by="u-1")

        repo.create.assert_not_awaited()

    def test_philhealth_cannot_exceed_bill(self):
        with pytest.raises(ValueError):
            self.make_data(philhealth_granted_amount=Decimal("25000"))
