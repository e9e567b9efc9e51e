"""
Procurement Models

Purchase orders (purchase requests) with their lots and items stored as JSON.
"""

from datetime import date as date_type
from decimal import Decimal
from enum import Enum

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from division_sms.modules.shared import BaseModel, pg_enum


class PurchaseOrderStatus(str, Enum):
    DRAFT = "draft"
    APPROVED = "approved"


class PurchaseOrder(BaseModel):
    __tablename__ = "purchase_orders"

    pr_number: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    status: Mapped[PurchaseOrderStatus] = mapped_column(
        pg_enum(PurchaseOrderStatus, "purchase_order_status"),
        nullable=False,
        default=PurchaseOrderStatus.DRAFT,
    )

    # [{lot_number, description, items: [{description, quantity, unit, unit_price, total_amount}]}]
    lots: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)

    office_division: Mapped[str | None] = mapped_column(String(200), nullable=True)
    purpose: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_of_funds: Mapped[str | None] = mapped_column(String(200), nullable=True)
    mode_of_procurement: Mapped[str | None] = mapped_column(String(200), nullable=True)
    delivery_period: Mapped[str | None] = mapped_column(String(200), nullable=True)
    delivery_location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    terms_of_payment: Mapped[str | None] = mapped_column(String(200), nullable=True)
    particulars: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Signatories
    prepared_by_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    prepared_by_position: Mapped[str | None] = mapped_column(String(200), nullable=True)
    requester_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    requester_position: Mapped[str | None] = mapped_column(String(200), nullable=True)
    approver_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    approver_position: Mapped[str | None] = mapped_column(String(200), nullable=True)

    created_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    @property
    def total_amount(self) -> Decimal:
        """Sum of every item's total across all lots."""
        return sum(
            (
                Decimal(str(item.get("total_amount") or 0))
                for lot in self.lots or []
                for item in lot.get("items", [])
            ),
            Decimal("0"),
        )
