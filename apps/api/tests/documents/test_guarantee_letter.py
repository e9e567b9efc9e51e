"""
Unit tests for guarantee letter numbering and rendering.
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from division_sms.core.config import settings
from division_sms.documents.guarantee_letter import (
    GuaranteeProgram,
    build_gl_number,
    format_age,
    get_city_code,
    guarantee_details,
    render_guarantee_letter,
)
from division_sms.modules.medical_assistance.models import AgeUnit


def make_hospital(**overrides):
    fields = {
        "name": "MHARS",
        "full_hospital_name": "Mayor Hilarion A. Ramiro Sr. Medical Center",
        "address": "Maningcol, Ozamiz City",
        "hospital_director": "Dr. Jose Rizal",
        "position": "Medical Center Chief",
        "greeting_name": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def make_assistance(**overrides):
    fields = {
        "patient_fullname": "Pedro Penduko",
        "patient_address": "Purok 3, Tudela, Misamis Occidental",
        "patient_age_value": 1,
        "patient_age_unit": AgeUnit.YEARS,
        "lgu_amount": Decimal("15000.00"),
        "maifip_amount": Decimal("2500.75"),
        "dswd_amount": None,
        "lgu_gl_no": 12,
        "maifip_gl_no": 3,
        "dswd_gl_no": None,
        "date_approved": date(2025, 2, 14),
        "hospital": make_hospital(),
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestCityCode:
    @pytest.mark.parametrize(
        ("address", "code"),
        [
            ("Brgy. Poblacion, Sinacaban", "SNCBN"),
            ("Purok 3, TUDELA", "TDL"),
            ("Don Victoriano Chiongbian, Mis. Occ.", "DONVIC"),
            ("Oroquieta City", "OROQ"),
            ("Tangub City", "TNGB"),
            ("Cebu City", "OZC"),
        ],
    )
    def test_known_and_unknown_addresses(self, address, code):
        assert get_city_code(address) == code

    def test_missing_address_defaults_to_ozamiz(self):
        assert get_city_code(None) == "OZC"
        assert get_city_code("") == "OZC"


class TestGlNumber:
    def test_lgu_includes_city_code(self):
        assert (
            build_gl_number(GuaranteeProgram.LGU, 12, date(2025, 2, 14), "TDL")
            == "25-AO-FHP-TDL-00012"
        )

    def test_maifip_has_no_city_code(self):
        assert build_gl_number(GuaranteeProgram.MAIFIP, 3, date(2025, 1, 1)) == "25-AO-MAIFIP-00003"

    def test_dswd_uses_fhp_format(self):
        assert (
            build_gl_number(GuaranteeProgram.DSWD, 7, date(2026, 6, 30), "OZC")
            == "26-AO-FHP-OZC-00007"
        )

    def test_missing_sequence_prints_zeros(self):
        assert build_gl_number(GuaranteeProgram.MAIFIP, None, date(2025, 1, 1)) == (
            "25-AO-MAIFIP-00000"
        )


class TestFormatAge:
    def test_singular_for_one(self):
        assert format_age(1, "years") == "1 year"
        assert format_age(1, "MONTHS") == "1 month"

    def test_plural_otherwise(self):
        assert format_age(3, "months") == "3 months"
        assert format_age(0, "days") == "0 days"


class TestGuaranteeDetails:
    def test_lgu_details(self):
        details = guarantee_details(make_assistance(), GuaranteeProgram.LGU)
        assert details.gl_number == "25-AO-FHP-TDL-00012"
        assert details.amount == Decimal("15000.00")

    def test_missing_amount_is_zero(self):
        details = guarantee_details(make_assistance(), GuaranteeProgram.DSWD)
        assert details.amount == Decimal("0.00")

    def test_year_from_today_when_not_approved(self):
        details = guarantee_details(
            make_assistance(date_approved=None), GuaranteeProgram.MAIFIP, today=date(2027, 3, 1)
        )
        assert details.gl_number == "27-AO-MAIFIP-00003"


class TestRenderGuaranteeLetter:
    def test_lgu_letter(self):
        html = render_guarantee_letter(make_assistance(), GuaranteeProgram.LGU)

        assert "GUARANTEE NOTE - NO. 25-AO-FHP-TDL-00012" in html
        assert "February 14, 2025" in html
        assert "PEDRO PENDUKO, 1 year old" in html
        assert "FIFTEEN THOUSAND (₱15,000.00) PESOS ONLY" in html
        assert "Dear Dr. Jose Rizal," in html
        assert "MAIFIP" not in html

    def test_maifip_letter_names_fund_source(self):
        html = render_guarantee_letter(make_assistance(), GuaranteeProgram.MAIFIP)

        assert "TWO THOUSAND FIVE HUNDRED & 75/100" in html
        assert "(MAIFIP) Fund" in html

    def test_greeting_prefers_greeting_name(self):
        assistance = make_assistance(hospital=make_hospital(greeting_name="Dr. Ramos"))
        html = render_guarantee_letter(assistance, GuaranteeProgram.LGU)
        assert "Dear Dr. Ramos," in html

    def test_generic_greeting_without_hospital(self):
        html = render_guarantee_letter(make_assistance(hospital=None), GuaranteeProgram.LGU)
        assert "Dear Sir/Madam," in html

    def test_signatories_from_settings(self):
        html = render_guarantee_letter(make_assistance(), GuaranteeProgram.LGU)
        assert settings.executive_assistant_name in html
