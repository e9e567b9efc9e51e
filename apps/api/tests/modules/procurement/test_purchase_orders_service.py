"""
Unit tests for the purchase order workflow.
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from division_sms.core.config import settings
from division_sms.modules.procurement import service
from division_sms.modules.procurement.models import PurchaseOrderStatus
from division_sms.modules.procurement.schemas import PurchaseOrderCreate, PurchaseOrderUpdate
from division_sms.modules.shared.errors import DuplicateRecordError, InvalidStateError

SERVICE = "division_sms.modules.procurement.service"


class FakeDriverError(Exception):
    def __init__(self, sqlstate: str):
        super().__init__(sqlstate)
        self.sqlstate = sqlstate


def make_order(**overrides):
    fields = {
        "id": "po-1",
        "pr_number": "PR-2025-001",
        "status": PurchaseOrderStatus.DRAFT,
        "lots": [],
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _updated(db, order, **fields):
    return SimpleNamespace(**{**vars(order), **fields})


def make_create(**overrides) -> PurchaseOrderCreate:
    data = {
        "pr_number": "  PR-2025-002 ",
        "date": date(2025, 4, 1),
        "purpose": "Office supplies",
        "lots": [
            {
                "lot_number": "1",
                "items": [
                    {
                        "description": "Bond paper",
                        "quantity": "10",
                        "unit": "ream",
                        "unit_price": "250",
                    }
                ],
            }
        ],
    }
    data.update(overrides)
    return PurchaseOrderCreate(**data)


class TestCreatePurchaseOrder:
    """Tests for drafting purchase orders."""

    @pytest.mark.asyncio
    async def test_creates_draft_with_json_lots(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.create = AsyncMock(
                side_effect=lambda db, **fields: SimpleNamespace(id="po-2", **fields)
            )

            result = await service.create_purchase_order(mock_db, make_create(), created_by="u-1")

        assert result.status == PurchaseOrderStatus.DRAFT
        assert result.pr_number == "PR-2025-002"
        assert result.lots[0]["items"][0]["total_amount"] == "2500.00"
        assert result.prepared_by_position == settings.default_prepared_by_position
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_keeps_given_position(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.create = AsyncMock(
                side_effect=lambda db, **fields: SimpleNamespace(id="po-2", **fields)
            )

            result = await service.create_purchase_order(
                mock_db, make_create(prepared_by_position="Supply Officer"), created_by="u-1"
            )

        assert result.prepared_by_position == "Supply Officer"

    @pytest.mark.asyncio
    async def test_duplicate_pr_number(self, mock_db):
        error = IntegrityError("INSERT", {}, FakeDriverError("23505"))
        with patch(f"{SERVICE}.repository") as repo:
            repo.create = AsyncMock(side_effect=error)

            with pytest.raises(DuplicateRecordError) as exc_info:
                await service.create_purchase_order(mock_db, make_create(), created_by="u-1")

        assert exc_info.value.message == service.DUPLICATE_PR_NUMBER
        mock_db.rollback.assert_awaited_once()


class TestApprovedOrdersAreFrozen:
    """Approved purchase orders reject edits and deletes."""

    @pytest.mark.asyncio
    async def test_approve_draft(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(return_value=make_order())
            repo.update = AsyncMock(side_effect=_updated)

            result = await service.approve_purchase_order(mock_db, "po-1")

        assert result.status == PurchaseOrderStatus.APPROVED

    @pytest.mark.asyncio
    async def test_update_approved(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(
                return_value=make_order(status=PurchaseOrderStatus.APPROVED)
            )
            repo.update = AsyncMock()

            with pytest.raises(InvalidStateError) as exc_info:
                await service.update_purchase_order(
                    mock_db, "po-1", PurchaseOrderUpdate(purpose="Changed")
                )

        assert exc_info.value.error_code == "PURCHASE_ORDER_APPROVED"
        repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_approved(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(
                return_value=make_order(status=PurchaseOrderStatus.APPROVED)
            )
            repo.delete_purchase_order = AsyncMock()

            with pytest.raises(InvalidStateError):
                await service.delete_purchase_order(mock_db, "po-1")

        repo.delete_purchase_order.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_approve_twice(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(
                return_value=make_order(status=PurchaseOrderStatus.APPROVED)
            )

            with pytest.raises(InvalidStateError):
                await service.approve_purchase_order(mock_db, "po-1")

    @pytest.mark.asyncio
    async def test_update_replaces_lots(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(return_value=make_order())
            repo.update = AsyncMock(side_effect=_updated)

            result = await service.update_purchase_order(
                mock_db,
                "po-1",
                PurchaseOrderUpdate(
                    lots=[
                        {
                            "lot_number": "2",
                            "items": [
                                {
                                    "description": "Ink",
                                    "quantity": "3",
                                    "unit": "bottle",
                                    "unit_price": Decimal("120.50"),
                                }
                            ],
                        }
                    ]
                ),
            )

        assert result.lots == [
            {
                "lot_number": "2",
                "description": None,
                "items": [
                    {
                        "description": "Ink",
                        "quantity": "3",
                        "unit": "bottle",
                        "unit_price": "120.50",
                        "total_amount": "361.50",
                    }
                ],
            }
        ]
