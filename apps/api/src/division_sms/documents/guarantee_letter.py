"""
Guarantee Letters

A guarantee letter commits the city to pay a patient's hospital bill under
one program. Each program prints its own GL number:

- LGU:    ``YY-AO-FHP-<CITY>-<00000>``
- MAIFIP: ``YY-AO-MAIFIP-<00000>``
- DSWD:   ``YY-AO-FHP-<CITY>-<00000>``

YY comes from the letter date (``date_approved``, or today when unset).
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from html import escape
from typing import Any

from division_sms.core.config import settings
from division_sms.documents.amounts import format_amount_in_words, format_peso, to_decimal

DEFAULT_CITY_CODE = "OZC"

# Checked in order against the lowercased patient address
CITY_CODES: tuple[tuple[str, str], ...] = (
    ("sinacaban", "SNCBN"),
    ("tudela", "TDL"),
    ("ozamiz", "OZC"),
    ("don victoriano chiongbian", "DONVIC"),
    ("oroquieta", "OROQ"),
    ("clarin", "CLR"),
    ("bonifacio", "BNFC"),
    ("tangub", "TNGB"),
)


class GuaranteeProgram(str, Enum):
    LGU = "lgu"
    MAIFIP = "maifip"
    DSWD = "dswd"


@dataclass(frozen=True)
class GuaranteeDetails:
    """The number and amount printed on one program's letter."""

    program: GuaranteeProgram
    gl_number: str
    amount: Decimal


def get_city_code(address: str | None) -> str:
    """Map an address to its city code, defaulting to Ozamiz."""
    if not address:
        return DEFAULT_CITY_CODE
    text = address.lower()
    for needle, code in CITY_CODES:
        if needle in text:
            return code
    return DEFAULT_CITY_CODE


def format_age(value: int, unit: str) -> str:
    """``1 year``, ``3 months``; the unit is singular only for a value of 1."""
    unit = unit.lower()
    if value == 1 and unit.endswith("s"):
        unit = unit[:-1]
    return f"{value} {unit}"


def build_gl_number(
    program: GuaranteeProgram,
    sequence: int | None,
    letter_date: date,
    city_code: str = DEFAULT_CITY_CODE,
) -> str:
    year = f"{letter_date.year % 100:02d}"
    number = f"{sequence or 0:05d}"
    if program == GuaranteeProgram.MAIFIP:
        return f"{year}-AO-MAIFIP-{number}"
    return f"{year}-AO-FHP-{city_code}-{number}"


def letter_date_for(assistance: Any, today: date | None = None) -> date:
    return assistance.date_approved or today or date.today()


def guarantee_details(
    assistance: Any,
    program: GuaranteeProgram,
    today: date | None = None,
) -> GuaranteeDetails:
    """Resolve the GL number and amount of a program from an assistance record."""
    letter_date = letter_date_for(assistance, today)
    city_code = get_city_code(assistance.patient_address)

    if program == GuaranteeProgram.LGU:
        sequence, amount = assistance.lgu_gl_no, assistance.lgu_amount
    elif program == GuaranteeProgram.MAIFIP:
        sequence, amount = assistance.maifip_gl_no, assistance.maifip_amount
    else:
        sequence, amount = assistance.dswd_gl_no, assistance.dswd_amount

    return GuaranteeDetails(
        program=program,
        gl_number=build_gl_number(program, sequence, letter_date, city_code),
        amount=to_decimal(amount),
    )


def _greeting(hospital: Any) -> str:
    if hospital is None:
        return "Dear Sir/Madam,"
    if hospital.greeting_name:
        return f"Dear {escape(hospital.greeting_name)},"
    if hospital.hospital_director:
        return f"Dear {escape(hospital.hospital_director)},"
    return "Dear Sir/Madam,"


def _hospital_block(hospital: Any) -> str:
    if hospital is None:
        return "<p>--</p>"
    lines = [
        f"<p><strong>{escape(hospital.hospital_director or '--')}</strong></p>",
        f"<p>{escape(hospital.position or '')}</p>",
        f"<p>{escape(hospital.full_hospital_name or hospital.name)}</p>",
        f"<p>{escape(hospital.address or '')}</p>",
    ]
    return "\n      ".join(lines)


def _age_unit_value(unit: Any) -> str:
    return unit.value if isinstance(unit, Enum) else str(unit)


def render_guarantee_letter(
    assistance: Any,
    program: GuaranteeProgram,
    today: date | None = None,
) -> str:
    """Render the printable guarantee letter of one program."""
    details = guarantee_details(assistance, program, today)
    letter_date = letter_date_for(assistance, today)
    hospital = getattr(assistance, "hospital", None)

    patient = escape(assistance.patient_fullname.upper())
    age_unit = _age_unit_value(assistance.patient_age_unit)
    age = escape(format_age(assistance.patient_age_value, age_unit))
    words = format_amount_in_words(details.amount)
    peso = format_peso(details.amount)

    fund_line = ""
    if program == GuaranteeProgram.MAIFIP:
        fund_line = (
            "<p>Charged to the Medical Assistance to Indigent and Financially "
            "Incapacitated Patients (MAIFIP) Fund of "
            f"{escape(settings.maifip_fund_source)}.</p>"
        )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Guarantee Note - {escape(details.gl_number)}</title>
  <style>
    @page {{ size: 8.5in 13in; margin: 0.5in 0.75in; }}
    body {{ font-family: "Times New Roman", serif; font-size: 12pt; line-height: 1.5; color: #000; }}
    .letterhead {{ text-align: center; margin-bottom: 24px; }}
    .letterhead .office {{ font-weight: bold; font-size: 14pt; }}
    .title {{ text-align: center; font-weight: bold; text-decoration: underline; margin: 16px 0; }}
    .hospital p {{ margin: 0; }}
    .body p {{ text-align: justify; text-indent: 48px; }}
    .signature {{ margin-top: 48px; }}
    .signature .name {{ font-weight: bold; text-transform: uppercase; }}
    .footer {{ margin-top: 48px; font-size: 9pt; font-style: italic; text-align: center; }}
  </style>
</head>
<body>
  <div class="letterhead">
    <div>Republic of the Philippines</div>
    <div class="office">{escape(settings.lgu_office)}</div>
    <div>{escape(settings.lgu_name)}</div>
    <div>Telefax No. {escape(settings.lgu_telefax)} | Mobile No. {escape(settings.lgu_mobile)}</div>
  </div>

  <div class="title">GUARANTEE NOTE - NO. {escape(details.gl_number)}</div>

  <p>Date: {letter_date.strftime("%B")} {letter_date.day}, {letter_date.year}</p>

  <div class="hospital">
      {_hospital_block(hospital)}
  </div>

  <p>{_greeting(hospital)}</p>

  <div class="body">
    <p>{patient}, {age} old, sought help from the Office of the City Mayor for financial
    assistance for his/her unpaid medical bill. In consideration thereof, and in accordance
    with {escape(settings.hospitalization_program_name)} of the local government under the
    present administration, we hereby guarantee the payment of his/her medical bill in the
    amount of {words} ({peso}) PESOS ONLY.</p>
    {fund_line}
    <p>We undertake to pay the said amount after fifteen (15) days from receipt of written demand.</p>
    <p>All sums owing under this letter are payable in Philippine Peso.</p>
  </div>

  <div class="signature">
    <p>By the authority of:</p>
    <p class="name">{escape(settings.city_mayor_name)}</p>
    <p>{escape(settings.city_mayor_position)}</p>
  </div>

  <div class="signature">
    <p>Respectfully yours,</p>
    <p class="name">{escape(settings.executive_assistant_name)}</p>
    <p>{escape(settings.executive_assistant_position)}</p>
  </div>

  <div class="footer">
    This document is not valid unless it bears the official seal of the City Mayor.
    Any erasure, alteration or the like herein, renders the same invalid.
  </div>
</body>
</html>"""
