"""
Learner Health Schemas
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from division_sms.modules.health.models import HeightForAge, NutritionalStatus
from division_sms.modules.shared.school_year import validate_school_year


def calculate_bmi(height_cm: Decimal | None, weight_kg: Decimal | None) -> Decimal | None:
    """Body mass index (kg/m^2) to one decimal place; None without both measurements."""
    if not height_cm or not weight_kg:
        return None
    height_m = Decimal(str(height_cm)) / Decimal("100")
    bmi = Decimal(str(weight_kg)) / (height_m * height_m)
    return bmi.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


class HealthEntry(BaseModel):
    student_id: str
    height_cm: Decimal | None = Field(None, gt=0, lt=300, decimal_places=1)
    weight_kg: Decimal | None = Field(None, gt=0, lt=500, decimal_places=1)
    nutritional_status: NutritionalStatus | None = None
    height_for_age: HeightForAge | None = None
    remarks: str | None = Field(None, max_length=1000)
    measured_at: date | None = None

    @field_validator("measured_at")
    @classmethod
    def validate_measured_at(cls, value: date | None) -> date | None:
        if value and value > date.today():
            raise ValueError("measured_at cannot be in the future")
        return value


class HealthBulkUpsert(BaseModel):
    school_id: str | None = None
    section_id: str
    school_year: str
    records: list[HealthEntry] = Field(..., min_length=1)

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str) -> str:
        return validate_school_year(value.strip())

    @model_validator(mode="after")
    def validate_unique_students(self) -> "HealthBulkUpsert":
        student_ids = [r.student_id for r in self.records]
        if len(set(student_ids)) != len(student_ids):
            raise ValueError("Each student may appear only once")
        return self


class HealthResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    section_id: str
    school_year: str
    height_cm: Decimal | None
    weight_kg: Decimal | None
    nutritional_status: NutritionalStatus | None
    height_for_age: HeightForAge | None
    remarks: str | None
    measured_at: date | None
    updated_at: datetime

    @computed_field
    @property
    def bmi(self) -> Decimal | None:
        return calculate_bmi(self.height_cm, self.weight_kg)


class HealthBulkResponse(BaseModel):
    created: int
    updated: int
    records: list[HealthResponse]
