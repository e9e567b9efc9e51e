"""
Medical Assistance Service Layer

Approving an assistance record stamps ``date_approved`` (when unset) and
hands out the next GL number of the approval year to every program that
has an amount but no number yet. Guarantee letters can only be printed for
a program with an amount.
"""

import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.documents.guarantee_letter import GuaranteeProgram, render_guarantee_letter
from division_sms.modules.medical_assistance import repository
from division_sms.modules.medical_assistance.models import (
    Hospital,
    MedicalAssistance,
    MedicalAssistanceStatus,
)
from division_sms.modules.medical_assistance.schemas import (
    HospitalCreate,
    HospitalUpdate,
    MedicalAssistanceCreate,
    MedicalAssistanceUpdate,
    StatusUpdate,
)
from division_sms.modules.shared.errors import (
    NotFoundError,
    ValidationFailedError,
    raise_for_integrity_error,
)

logger = logging.getLogger(__name__)

HOSPITAL_IN_USE = "This hospital has medical assistance records and cannot be deleted."

# program -> (amount column, GL number column)
PROGRAM_COLUMNS: dict[GuaranteeProgram, tuple[str, str]] = {
    GuaranteeProgram.LGU: ("lgu_amount", "lgu_gl_no"),
    GuaranteeProgram.MAIFIP: ("maifip_amount", "maifip_gl_no"),
    GuaranteeProgram.DSWD: ("dswd_amount", "dswd_gl_no"),
}


# ============================================
# Hospitals
# ============================================


async def get_hospital(db: AsyncSession, id: str) -> Hospital:
    hospital = await repository.get_hospital(db, id)
    if not hospital:
        raise NotFoundError("Hospital", id)
    return hospital


async def list_hospitals(db: AsyncSession, **filters) -> tuple[list[Hospital], int]:
    return await repository.list_hospitals(db, **filters)


async def create_hospital(db: AsyncSession, data: HospitalCreate) -> Hospital:
    hospital = await repository.create_hospital(db, **data.model_dump(), is_active=True)
    await db.commit()
    return hospital


async def update_hospital(db: AsyncSession, id: str, data: HospitalUpdate) -> Hospital:
    hospital = await get_hospital(db, id)
    hospital = await repository.update_hospital(
        db, hospital, **data.model_dump(exclude_unset=True)
    )
    await db.commit()
    return hospital


async def delete_hospital(db: AsyncSession, id: str) -> None:
    hospital = await get_hospital(db, id)
    try:
        await repository.delete_hospital(db, hospital)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, in_use_message=HOSPITAL_IN_USE)

    logger.info(f"Deleted hospital {id}")


# ============================================
# Assistance
# ============================================


def _json_lists(data: MedicalAssistanceCreate | MedicalAssistanceUpdate) -> dict:
    """family_composition and doctors as JSON-ready lists, for the fields that were set."""
    fields = {}
    for key in ("family_composition", "doctors"):
        if key in data.model_fields_set:
            items = getattr(data, key)
            fields[key] = (
                [i.model_dump(mode="json") for i in items] if items is not None else None
            )
    return fields


async def get_assistance(db: AsyncSession, id: str) -> MedicalAssistance:
    assistance = await repository.get_by_id(db, id)
    if not assistance:
        raise NotFoundError("Medical assistance", id)
    return assistance


async def list_assistance(db: AsyncSession, **filters) -> tuple[list[MedicalAssistance], int]:
    return await repository.list_assistance(db, **filters)


async def create_assistance(
    db: AsyncSession, data: MedicalAssistanceCreate, created_by: str
) -> MedicalAssistance:
    await get_hospital(db, data.hospital_id)

    fields = {
        **data.model_dump(exclude={"family_composition", "doctors", "access_type"}),
        **_json_lists(data),
    }
    if data.access_type is not None:
        fields["access_type"] = data.access_type

    assistance = await repository.create(
        db, **fields, status=MedicalAssistanceStatus.PENDING, created_by=created_by
    )
    await db.commit()

    logger.info(f"Created medical assistance {assistance.id} for {assistance.patient_fullname}")
    return assistance


async def update_assistance(
    db: AsyncSession, id: str, data: MedicalAssistanceUpdate
) -> MedicalAssistance:
    assistance = await get_assistance(db, id)

    changes = {
        **data.model_dump(exclude_unset=True, exclude={"family_composition", "doctors"}),
        **_json_lists(data),
    }

    if changes.get("hospital_id"):
        await get_hospital(db, changes["hospital_id"])

    assistance = await repository.update(db, assistance, **changes)
    await db.commit()
    return assistance


async def _approval_fields(
    db: AsyncSession, assistance: MedicalAssistance, today: date
) -> dict:
    """date_approved plus the GL numbers the record is still missing."""
    approved_on = assistance.date_approved or today
    fields: dict = {"date_approved": approved_on}

    year_start = date(approved_on.year, 1, 1)
    year_end = date(approved_on.year + 1, 1, 1)
    for amount_column, number_column in PROGRAM_COLUMNS.values():
        if getattr(assistance, amount_column) and getattr(assistance, number_column) is None:
            fields[number_column] = await repository.next_gl_number(
                db, number_column, year_start, year_end
            )
    return fields


async def update_status(
    db: AsyncSession,
    id: str,
    data: StatusUpdate,
    today: date | None = None,
) -> MedicalAssistance:
    assistance = await get_assistance(db, id)

    changes: dict = {"status": data.status}
    if data.remarks is not None:
        changes["remarks"] = data.remarks
    if data.status == MedicalAssistanceStatus.APPROVED:
        changes.update(await _approval_fields(db, assistance, today or date.today()))

    assistance = await repository.update(db, assistance, **changes)
    await db.commit()

    logger.info(f"Medical assistance {id} is now '{data.status.value}'")
    return assistance


async def delete_assistance(db: AsyncSession, id: str) -> None:
    assistance = await get_assistance(db, id)
    await repository.delete_assistance(db, assistance)
    await db.commit()
    logger.info(f"Deleted medical assistance {id}")


async def get_guarantee_letter(
    db: AsyncSession,
    id: str,
    program: GuaranteeProgram,
    today: date | None = None,
) -> str:
    """
    Render the guarantee letter of one program.

    Raises:
        NotFoundError: Unknown assistance record
        ValidationFailedError: NO_PROGRAM_AMOUNT when the program has no amount
    """
    assistance = await get_assistance(db, id)
    amount_column, _ = PROGRAM_COLUMNS[program]
    if not getattr(assistance, amount_column):
        raise ValidationFailedError(
            f"This record has no {program.value.upper()} amount.", "NO_PROGRAM_AMOUNT"
        )
    return render_guarantee_letter(assistance, program, today)
