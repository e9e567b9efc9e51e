"""
Purchase Order Schemas

Lots and their items are stored as JSON on the purchase order. Item totals
default to quantity x unit price.
"""

from datetime import date as date_type
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from division_sms.modules.procurement.models import PurchaseOrderStatus


class LotItem(BaseModel):
    description: str = Field(..., min_length=1, max_length=1000)
    quantity: Decimal = Field(..., gt=0)
    unit: str = Field(..., min_length=1, max_length=50)
    unit_price: Decimal = Field(..., ge=0)
    total_amount: Decimal | None = Field(None, ge=0)

    @model_validator(mode="after")
    def fill_total(self) -> "LotItem":
        if self.total_amount is None:
            self.total_amount = (self.quantity * self.unit_price).quantize(Decimal("0.01"))
        return self


class Lot(BaseModel):
    lot_number: str = Field(..., min_length=1, max_length=50)
    description: str | None = Field(None, max_length=1000)
    items: list[LotItem] = Field(default_factory=list)


class PurchaseOrderBase(BaseModel):
    office_division: str | None = Field(None, max_length=200)
    purpose: str | None = None
    source_of_funds: str | None = Field(None, max_length=200)
    mode_of_procurement: str | None = Field(None, max_length=200)
    delivery_period: str | None = Field(None, max_length=200)
    delivery_location: str | None = Field(None, max_length=200)
    terms_of_payment: str | None = Field(None, max_length=200)
    particulars: str | None = None

    prepared_by_name: str | None = Field(None, max_length=200)
    prepared_by_position: str | None = Field(None, max_length=200)
    requester_name: str | None = Field(None, max_length=200)
    requester_position: str | None = Field(None, max_length=200)
    approver_name: str | None = Field(None, max_length=200)
    approver_position: str | None = Field(None, max_length=200)


class PurchaseOrderCreate(PurchaseOrderBase):
    pr_number: str = Field(..., min_length=1, max_length=50)
    date: date_type
    lots: list[Lot] = Field(default_factory=list)

    @field_validator("pr_number")
    @classmethod
    def strip_pr_number(cls, value: str) -> str:
        return value.strip()


class PurchaseOrderUpdate(PurchaseOrderBase):
    pr_number: str | None = Field(None, min_length=1, max_length=50)
    date: date_type | None = None
    lots: list[Lot] | None = None


class PurchaseOrderResponse(PurchaseOrderBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    pr_number: str
    date: date_type
    status: PurchaseOrderStatus
    lots: list[Lot]
    total_amount: Decimal
    created_by: str | None
    created_at: datetime
    updated_at: datetime
