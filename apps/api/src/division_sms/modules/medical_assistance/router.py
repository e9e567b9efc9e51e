"""
Medical Assistance Router

Division-level endpoints.

Endpoints:
- GET/POST /medical-assistance/hospitals, GET/PATCH/DELETE /medical-assistance/hospitals/{id}
- GET /medical-assistance - List records (status, access type, hospital, name search)
- GET /medical-assistance/{id}
- POST /medical-assistance
- PATCH /medical-assistance/{id}
- PATCH /medical-assistance/{id}/status - Status change (approval assigns GL numbers)
- DELETE /medical-assistance/{id}
- GET /medical-assistance/{id}/guarantee-letter/{program} - Printable letter (HTML)
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import CurrentUser, get_division_admin
from division_sms.core.database import get_db
from division_sms.documents.guarantee_letter import GuaranteeProgram
from division_sms.modules.medical_assistance import service
from division_sms.modules.medical_assistance.models import AccessType, MedicalAssistanceStatus
from division_sms.modules.medical_assistance.schemas import (
    HospitalCreate,
    HospitalResponse,
    HospitalUpdate,
    MedicalAssistanceCreate,
    MedicalAssistanceResponse,
    MedicalAssistanceUpdate,
    StatusUpdate,
)
from division_sms.modules.shared.pagination import Page, PageParams, page_params

router = APIRouter()


# ============================================
# Hospitals
# ============================================


@router.get("/hospitals", response_model=Page[HospitalResponse], summary="List Hospitals")
async def list_hospitals(
    search: str | None = Query(None, min_length=1, max_length=100),
    is_active: bool | None = Query(None),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> Page[HospitalResponse]:
    hospitals, total = await service.list_hospitals(
        db, search=search, is_active=is_active, skip=page.skip, limit=page.limit
    )
    return Page[HospitalResponse](
        items=[HospitalResponse.model_validate(h) for h in hospitals],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/hospitals/{hospital_id}", response_model=HospitalResponse, summary="Get Hospital")
async def get_hospital(
    hospital_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> HospitalResponse:
    return HospitalResponse.model_validate(await service.get_hospital(db, hospital_id))


@router.post(
    "/hospitals",
    response_model=HospitalResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Hospital",
)
async def create_hospital(
    data: HospitalCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> HospitalResponse:
    return HospitalResponse.model_validate(await service.create_hospital(db, data))


@router.patch(
    "/hospitals/{hospital_id}",
    response_model=HospitalResponse,
    summary="Update Hospital",
)
async def update_hospital(
    hospital_id: str,
    data: HospitalUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> HospitalResponse:
    hospital = await service.update_hospital(db, hospital_id, data)
    return HospitalResponse.model_validate(hospital)


@router.delete(
    "/hospitals/{hospital_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Hospital",
)
async def delete_hospital(
    hospital_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> None:
    await service.delete_hospital(db, hospital_id)


# ============================================
# Assistance
# ============================================


@router.get("", response_model=Page[MedicalAssistanceResponse], summary="List Medical Assistance")
async def list_assistance(
    status_filter: MedicalAssistanceStatus | None = Query(None, alias="status"),
    access_type: AccessType | None = Query(None),
    hospital_id: str | None = Query(None),
    search: str | None = Query(None, min_length=1, max_length=100),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> Page[MedicalAssistanceResponse]:
    records, total = await service.list_assistance(
        db,
        status=status_filter,
        access_type=access_type,
        hospital_id=hospital_id,
        search=search,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[MedicalAssistanceResponse](
        items=[MedicalAssistanceResponse.model_validate(r) for r in records],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get(
    "/{assistance_id}",
    response_model=MedicalAssistanceResponse,
    summary="Get Medical Assistance",
)
async def get_assistance(
    assistance_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> MedicalAssistanceResponse:
    assistance = await service.get_assistance(db, assistance_id)
    return MedicalAssistanceResponse.model_validate(assistance)


@router.post(
    "",
    response_model=MedicalAssistanceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Medical Assistance",
)
async def create_assistance(
    data: MedicalAssistanceCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> MedicalAssistanceResponse:
    assistance = await service.create_assistance(db, data, created_by=user.id)
    return MedicalAssistanceResponse.model_validate(assistance)


@router.patch(
    "/{assistance_id}",
    response_model=MedicalAssistanceResponse,
    summary="Update Medical Assistance",
)
async def update_assistance(
    assistance_id: str,
    data: MedicalAssistanceUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> MedicalAssistanceResponse:
    assistance = await service.update_assistance(db, assistance_id, data)
    return MedicalAssistanceResponse.model_validate(assistance)


@router.patch(
    "/{assistance_id}/status",
    response_model=MedicalAssistanceResponse,
    summary="Update Medical Assistance Status",
)
async def update_status(
    assistance_id: str,
    data: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> MedicalAssistanceResponse:
    assistance = await service.update_status(db, assistance_id, data)
    return MedicalAssistanceResponse.model_validate(assistance)


@router.delete(
    "/{assistance_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Medical Assistance",
)
async def delete_assistance(
    assistance_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> None:
    await service.delete_assistance(db, assistance_id)


@router.get(
    "/{assistance_id}/guarantee-letter/{program}",
    response_class=HTMLResponse,
    summary="Print Guarantee Letter",
)
async def print_guarantee_letter(
    assistance_id: str,
    program: GuaranteeProgram,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> HTMLResponse:
    html = await service.get_guarantee_letter(db, assistance_id, program)
    return HTMLResponse(html)
