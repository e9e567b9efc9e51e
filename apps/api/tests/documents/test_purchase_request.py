"""
Unit tests for purchase order printables.
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from division_sms.core.config import settings
from division_sms.documents.purchase_request import (
    calculate_total_amount,
    render_approved_budget,
    render_obligation_request,
    render_purchase_request,
)

LOTS = [
    {
        "lot_number": "LOT 1",
        "description": "Office supplies",
        "items": [
            {
                "description": "Bond paper, A4",
                "quantity": "10",
                "unit": "ream",
                "unit_price": "250.00",
                "total_amount": "2500.00",
            },
            {
                "description": "Ballpen <black>",
                "quantity": "50",
                "unit": "pc",
                "unit_price": "12.50",
                "total_amount": "625.00",
            },
        ],
    },
    {"lot_number": "LOT 2", "description": "Empty lot", "items": []},
]


def make_purchase_order(**overrides):
    fields = {
        "pr_number": "2025-03-0012",
        "date": date(2025, 3, 5),
        "lots": LOTS,
        "office_division": "OCM",
        "purpose": "For office use",
        "particulars": None,
        "source_of_funds": "General Fund",
        "mode_of_procurement": "Small Value Procurement",
        "delivery_period": "15 days",
        "delivery_location": "City Hall",
        "terms_of_payment": "30 days",
        "prepared_by_name": "Juan Dela Cruz",
        "prepared_by_position": "EXECUTIVE ASSISTANT II",
        "requester_name": "Maria Santos",
        "requester_position": "Department Head",
        "approver_name": "Approving Officer",
        "approver_position": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_total_amount_sums_items_across_lots():
    assert calculate_total_amount(LOTS) == Decimal("3125.00")
    assert calculate_total_amount(None) == Decimal("0")


class TestRenderPurchaseRequest:
    def test_contains_number_date_and_total(self):
        html = render_purchase_request(make_purchase_order())

        assert "PURCHASE REQUEST" in html
        assert "2025-03-0012" in html
        assert "03/05/2025" in html
        assert "3,125.00" in html
        assert "*NOTHING FOLLOWS*" in html

    def test_item_text_is_escaped(self):
        html = render_purchase_request(make_purchase_order())
        assert "Ballpen &lt;black&gt;" in html
        assert "Ballpen <black>" not in html

    def test_approver_position_defaults_to_city_mayor(self):
        html = render_purchase_request(make_purchase_order())
        assert settings.city_mayor_position in html

    def test_particulars_used_when_purpose_missing(self):
        html = render_purchase_request(
            make_purchase_order(purpose=None, particulars="Training materials")
        )
        assert "PURPOSE: Training materials" in html


def test_obligation_request_shows_total():
    html = render_obligation_request(make_purchase_order())
    assert "3,125.00" in html
    assert settings.lgu_office in html


def test_approved_budget_numbers_items_and_signatories():
    html = render_approved_budget(make_purchase_order())

    assert "March 5, 2025" in html
    assert "3,125.00" in html
    assert "Juan Dela Cruz" in html
    assert settings.budget_officer_name in html


def test_approved_budget_prepared_by_defaults():
    html = render_approved_budget(
        make_purchase_order(prepared_by_name=None, prepared_by_position=None)
    )
    assert settings.executive_assistant_name in html
    assert settings.default_prepared_by_position in html
