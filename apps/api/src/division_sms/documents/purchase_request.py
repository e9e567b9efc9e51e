"""
Purchase Request Documents

Renders the three printables of a purchase order:
- Purchase Request (PR)
- Obligation Request (OBR)
- Approved Budget for the Contract (SF-GOOD-01, landscape)

Every value coming from the database is HTML-escaped.
"""

from datetime import date
from decimal import Decimal
from html import escape
from typing import Any

from division_sms.core.config import settings
from division_sms.documents.amounts import format_amount, to_decimal

_PORTRAIT_PAGE = "size: 8.5in 13in; margin: 0.4in 0.5in;"
_LANDSCAPE_PAGE = "size: 13in 8.5in landscape; margin: 0.3in 0.5in;"

_TABLE_STYLES = """
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body { font-family: Arial, sans-serif; font-size: 9pt; line-height: 1.2; color: #000; background: #fff; }
    table { width: 100%; border-collapse: collapse; }
    th, td { border: 1px solid #000; padding: 4px 6px; vertical-align: top; }
    th { font-weight: bold; text-align: center; }
    .header { display: flex; justify-content: space-between; align-items: center; }
    .header-center { text-align: center; flex: 1; }
    .header-title { font-size: 14pt; font-weight: bold; }
    .header-subtitle { font-size: 11pt; font-weight: bold; color: #1e3a8a; }
    .header-info { font-size: 8pt; }
    .text-center { text-align: center; }
    .text-right { text-align: right; }
    .nothing-follows { font-style: italic; text-align: center; }
    .signature-name { font-weight: bold; text-transform: uppercase; margin-top: 10px; }
    .signature-title { font-size: 8pt; }
    .signature-note { font-size: 7pt; margin-top: 5px; }
    @media print { body { print-color-adjust: exact; -webkit-print-color-adjust: exact; } }
"""


def _text(value: Any) -> str:
    return escape(str(value)) if value not in (None, "") else ""


def calculate_total_amount(lots: list[dict] | None) -> Decimal:
    """Sum of every item's total_amount across all lots."""
    total = Decimal("0")
    for lot in lots or []:
        for item in lot.get("items", []):
            total += to_decimal(item.get("total_amount"))
    return total


def _format_short_date(value: date | None) -> str:
    """MM/DD/YYYY."""
    return value.strftime("%m/%d/%Y") if value else ""


def _format_long_date(value: date | None) -> str:
    """e.g. "March 5, 2025"."""
    return f"{value.strftime('%B')} {value.day}, {value.year}" if value else ""


def _page(title: str, page_rule: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>{escape(title)}</title>
  <style>
    @page {{ {page_rule} }}
    {_TABLE_STYLES}
  </style>
</head>
<body>
{body}
</body>
</html>"""


def _office_header(colspan: int) -> str:
    return f"""
  <tr>
    <td colspan="{colspan}" style="border: none; padding: 10px;">
      <div class="header">
        <div class="header-center">
          <div class="header-title">REPUBLIC OF THE PHILIPPINES</div>
          <div class="header-subtitle">{escape(settings.lgu_office)}</div>
          <div style="font-weight: bold;">{escape(settings.lgu_name)}</div>
          <div class="header-info">TELEFAX NO. {escape(settings.lgu_telefax)}</div>
          <div class="header-info">MOBILE NO. {escape(settings.lgu_mobile)}</div>
          <div class="header-info">EMAIL: {escape(settings.lgu_email)}</div>
        </div>
      </div>
    </td>
  </tr>"""


def _particulars(purchase_order: Any) -> str:
    return _text(purchase_order.purpose or purchase_order.particulars)


def render_purchase_request(purchase_order: Any) -> str:
    """Purchase Request: one row per lot header and per item, with grand total."""
    rows: list[str] = []
    for lot in purchase_order.lots or []:
        rows.append(
            f"""
  <tr>
    <td></td><td></td>
    <td class="text-center">{_text(lot.get("lot_number"))}<br>{_text(lot.get("description"))}</td>
    <td></td><td></td><td></td>
  </tr>"""
        )
        for item in lot.get("items", []):
            rows.append(
                f"""
  <tr>
    <td class="text-center">{_text(item.get("quantity"))}</td>
    <td class="text-center">{_text(item.get("unit"))}</td>
    <td>{_text(item.get("description"))}</td>
    <td></td>
    <td class="text-right">{format_amount(item.get("unit_price"))}</td>
    <td class="text-right">{format_amount(item.get("total_amount"))}</td>
  </tr>"""
            )

    total = format_amount(calculate_total_amount(purchase_order.lots))
    approver_position = purchase_order.approver_position or settings.city_mayor_position

    body = f"""
<table>
  <tr>
    <td colspan="6" style="border: none; padding: 10px;">
      <div class="header">
        <div class="header-center">
          <div class="header-title">PURCHASE REQUEST</div>
          <div style="font-size: 12pt; font-weight: bold;">LOCAL GOVERNMENT UNIT OF {escape(settings.lgu_name)}</div>
        </div>
      </div>
    </td>
  </tr>
  <tr>
    <td><strong>Department</strong></td>
    <td>{_text(purchase_order.office_division) or "OCM"}</td>
    <td><strong>PR No.</strong></td>
    <td colspan="3">{_text(purchase_order.pr_number)}</td>
  </tr>
  <tr><td><strong>Section</strong></td><td></td><td><strong>SAI No.</strong></td><td colspan="3"></td></tr>
  <tr><td></td><td></td><td><strong>ALOBS No.</strong></td><td colspan="3"></td></tr>
  <tr>
    <td></td><td></td><td><strong>Date</strong></td>
    <td colspan="3">{_format_short_date(purchase_order.date)}</td>
  </tr>
  <tr>
    <th style="width: 8%;">Quantity</th>
    <th style="width: 8%;">Unit of<br>Issue</th>
    <th style="width: 40%;">Item Description</th>
    <th style="width: 10%;">Stock<br>No.</th>
    <th style="width: 12%;">Estimated Unit<br>Cost</th>
    <th style="width: 12%;">Estimated Cost</th>
  </tr>
  {"".join(rows)}
  <tr><td colspan="6" class="nothing-follows">*NOTHING FOLLOWS*</td></tr>
  <tr>
    <td colspan="5" class="text-right"><strong>Grand-Total</strong></td>
    <td class="text-right"><strong>{total}</strong></td>
  </tr>
  <tr>
    <td colspan="6" style="padding-bottom: 30px;"><strong>PURPOSE: {_particulars(purchase_order)}</strong></td>
  </tr>
  <tr>
    <td></td>
    <td colspan="2" class="text-center"><strong>Requested By</strong></td>
    <td colspan="3" class="text-center"><strong>Approved By</strong></td>
  </tr>
  <tr>
    <td class="text-center"><strong>Signature</strong></td>
    <td colspan="2" style="padding-bottom: 50px;"></td>
    <td colspan="3" style="padding-bottom: 50px;"></td>
  </tr>
  <tr>
    <td class="text-center"><strong>Printed Name</strong></td>
    <td colspan="2" class="text-center"><div class="signature-name">{_text(purchase_order.requester_name)}</div></td>
    <td colspan="3" class="text-center"><div class="signature-name">{_text(purchase_order.approver_name)}</div></td>
  </tr>
  <tr>
    <td></td>
    <td colspan="2" class="text-center"><div class="signature-title">{_text(purchase_order.requester_position)}</div></td>
    <td colspan="3" class="text-center"><div class="signature-title">{_text(approver_position)}</div></td>
  </tr>
  <tr>
    <td class="text-center"><strong>Date</strong></td>
    <td colspan="2"></td>
    <td colspan="3"></td>
  </tr>
</table>"""
    return _page(f"Purchase Request - {purchase_order.pr_number}", _PORTRAIT_PAGE, body)


def render_obligation_request(purchase_order: Any) -> str:
    """Obligation Request: the particulars and the total against the appropriation."""
    total = format_amount(calculate_total_amount(purchase_order.lots))

    body = f"""
<table>
  {_office_header(5)}
  <tr>
    <th colspan="4" style="font-size: 11pt;">OBLIGATION REQUEST</th>
    <th style="width: 15%;">No.</th>
  </tr>
  <tr><td style="width: 20%; font-weight: bold;">Payee/Office</td><td colspan="4"></td></tr>
  <tr><td style="font-weight: bold;">Office</td><td colspan="4" style="font-weight: bold;">{escape(settings.lgu_office)}</td></tr>
  <tr><td style="font-weight: bold;">Address</td><td colspan="4" style="font-weight: bold;">{escape(settings.lgu_name.title())}</td></tr>
  <tr>
    <th style="width: 12%;">Responsibility<br>Center</th>
    <th style="width: 48%;">PARTICULARS</th>
    <th style="width: 8%;">F.P.P</th>
    <th style="width: 20%;">Account<br>Code</th>
    <th style="width: 12%;">Amount</th>
  </tr>
  <tr>
    <td style="height: 200px;"></td>
    <td class="text-center" style="padding: 30px 10px;"><strong>{_particulars(purchase_order)}</strong></td>
    <td></td>
    <td></td>
    <td class="text-right" style="padding-top: 80px;"><strong>{total}</strong></td>
  </tr>
  <tr>
    <td colspan="4" class="text-right" style="font-weight: bold;">TOTAL:</td>
    <td class="text-right"><strong>{total}</strong></td>
  </tr>
  <tr>
    <td colspan="2">
      <strong>A. Certified</strong><br>
      <div style="margin-left: 10px; font-size: 7pt;">
        &#9744; Charges to appropriation/allotment necessary, lawful and under my direct supervision<br><br>
        &#9744; Supporting documents valid, proper and legal
      </div>
    </td>
    <td colspan="3">
      <strong>B. Certified</strong><br>
      <div class="text-center" style="margin-top: 40px; font-size: 8pt;">Existence of available appropriation</div>
    </td>
  </tr>
  <tr>
    <td></td>
    <td colspan="2" class="text-center"><strong>Requested By</strong></td>
    <td colspan="2" class="text-center"><strong>Approved By</strong></td>
  </tr>
  <tr>
    <td class="text-center"><strong>Signature</strong></td>
    <td colspan="2" style="padding-bottom: 50px;"></td>
    <td colspan="2" style="padding-bottom: 50px;"></td>
  </tr>
  <tr>
    <td class="text-center"><strong>Printed Name</strong></td>
    <td colspan="2" class="text-center"><div class="signature-name">{escape(settings.city_mayor_name)}</div></td>
    <td colspan="2" class="text-center"><div class="signature-name">{escape(settings.budget_officer_name)}</div></td>
  </tr>
  <tr>
    <td></td>
    <td colspan="2" class="text-center">
      <div class="signature-title">{escape(settings.city_mayor_position)}</div>
      <div class="signature-note">Head, Requesting Office/Authorized Representative</div>
    </td>
    <td colspan="2" class="text-center">
      <div class="signature-title">{escape(settings.budget_officer_position)}</div>
      <div class="signature-note">Head, Budget Unit/Authorized Representative</div>
    </td>
  </tr>
  <tr>
    <td class="text-center"><strong>Date</strong></td>
    <td colspan="2"></td>
    <td colspan="2"></td>
  </tr>
</table>"""
    return _page(f"Obligation Request - {purchase_order.pr_number}", _PORTRAIT_PAGE, body)


def render_approved_budget(purchase_order: Any) -> str:
    """Approved Budget for the Contract: numbered items with unit and total cost."""
    rows: list[str] = []
    item_no = 1
    for lot in purchase_order.lots or []:
        rows.append(
            f"""
  <tr>
    <td></td>
    <td>{_text(lot.get("lot_number"))}<br>{_text(lot.get("description"))}</td>
    {"<td></td>" * 10}
  </tr>"""
        )
        for item in lot.get("items", []):
            unit_price = format_amount(item.get("unit_price"))
            rows.append(
                f"""
  <tr>
    <td class="text-center">{item_no}</td>
    <td>{_text(item.get("description"))}</td>
    <td class="text-center">{_text(item.get("quantity"))}</td>
    <td class="text-center">{_text(item.get("unit"))}</td>
    <td class="text-right">{unit_price}</td>
    {"<td></td>" * 5}
    <td class="text-right">{unit_price}</td>
    <td class="text-right">{format_amount(item.get("total_amount"))}</td>
  </tr>"""
            )
            item_no += 1

    total = format_amount(calculate_total_amount(purchase_order.lots))
    prepared_by_name = purchase_order.prepared_by_name or settings.executive_assistant_name
    prepared_by_position = (
        purchase_order.prepared_by_position or settings.default_prepared_by_position
    )

    body = f"""
<table>
  {_office_header(12)}
  <tr>
    <td colspan="6" style="border: none;"><strong>Name of the Procuring Entity</strong></td>
    <td colspan="2" style="border: none;"></td>
    <td colspan="2" style="border: none;"><strong>Date</strong></td>
    <td colspan="2" style="border: none;">{_format_long_date(purchase_order.date)}</td>
  </tr>
  <tr>
    <td colspan="6" style="border: none;"><strong>Standard Form Number: SF-GOOD-01</strong></td>
    <td colspan="6" style="border: none;"><strong>Revised on: May 24, 2004</strong></td>
  </tr>
  <tr><th colspan="12" style="font-size: 10pt;">APPROVED BUDGET FOR THE CONTRACT</th></tr>
  <tr><td style="font-weight: bold;">Stations:</td><td colspan="11"></td></tr>
  <tr><td style="font-weight: bold;">Length:</td><td colspan="11"></td></tr>
  <tr>
    <th rowspan="2" style="width: 4%;">ITEM NO.</th>
    <th rowspan="2" style="width: 23%;">DESCRIPTION</th>
    <th rowspan="2" style="width: 5%;">QTY</th>
    <th rowspan="2" style="width: 5%;">UNIT</th>
    <th rowspan="2" style="width: 8%;">CURRENT<br>MARKET<br>PRICE</th>
    <th rowspan="2" style="width: 7%;">VAT, OTHER TAXES<br>AND/OR DUTIES<br>APPLICABLE</th>
    <th rowspan="2" style="width: 7%;">FREIGHT &amp;<br>INSURANCE</th>
    <th rowspan="2" style="width: 7%;">OTHER<br>INDIRECT<br>COST</th>
    <th colspan="2" style="width: 14%;">OTHER COST FACTORS<br>(e.g., MARK-UP,<br>INFLATION, CURRENCY<br>VALUATION ADJUSTMENT)</th>
    <th rowspan="2" style="width: 9%;">UNIT COST</th>
    <th rowspan="2" style="width: 9%;">TOTAL COST</th>
  </tr>
  <tr><th style="width: 7%;"></th><th style="width: 7%;"></th></tr>
  {"".join(rows)}
  <tr><td colspan="12" class="nothing-follows">*NOTHING FOLLOWS*</td></tr>
  <tr>
    <td colspan="10" style="border-right: none;"></td>
    <td class="text-right" style="border-left: none;"><strong>Php</strong></td>
    <td class="text-right"><strong>{total}</strong></td>
  </tr>
  <tr><td colspan="12" style="height: 50px;"></td></tr>
  <tr>
    <td></td>
    <td colspan="3" class="text-center"><strong>PREPARED BY</strong></td>
    <td colspan="3" class="text-center"><strong>RECOMMENDING APPROVAL</strong></td>
    <td colspan="5" class="text-center"><strong>APPROVED BY</strong></td>
  </tr>
  <tr>
    <td class="text-center"><strong>Signature</strong></td>
    <td colspan="3" style="padding-bottom: 50px;"></td>
    <td colspan="3" style="padding-bottom: 50px;"></td>
    <td colspan="5" style="padding-bottom: 50px;"></td>
  </tr>
  <tr>
    <td class="text-center"><strong>Printed Name</strong></td>
    <td colspan="3" class="text-center"><div class="signature-name">{escape(prepared_by_name)}</div></td>
    <td colspan="3" class="text-center"><div class="signature-name">{escape(settings.budget_officer_name)}</div></td>
    <td colspan="5" class="text-center"><div class="signature-name">{escape(settings.city_mayor_name)}</div></td>
  </tr>
  <tr>
    <td></td>
    <td colspan="3" class="text-center"><div class="signature-title">{escape(prepared_by_position)}</div></td>
    <td colspan="3" class="text-center"><div class="signature-title">{escape(settings.budget_officer_position)}</div></td>
    <td colspan="5" class="text-center"><div class="signature-title">{escape(settings.city_mayor_position)}</div></td>
  </tr>
  <tr>
    <td class="text-center"><strong>Date</strong></td>
    <td colspan="3"></td>
    <td colspan="3"></td>
    <td colspan="5"></td>
  </tr>
</table>"""
    return _page(f"Approved Budget - {purchase_order.pr_number}", _LANDSCAPE_PAGE, body)
