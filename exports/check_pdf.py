"""
Check PDF Generator

Prints payroll and vendor checks on standard check-on-top stock:
check face (3.5in), payee stub (3.5in), company stub (4.0in) on a
US letter page, one check per page. Uses ReportLab.
"""

import io
import logging
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field
from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from engines.services.money import cents_to_dollars, format_currency_from_cents

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = letter
MARGIN = 0.5

# Section heights in inches; they add up to the 11in page
CHECK_HEIGHT = 3.5
PAYEE_STUB_HEIGHT = 3.5
COMPANY_STUB_HEIGHT = 4.0

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

_SCALES = [
    (1_000_000_000, "Billion"),
    (1_000_000, "Million"),
    (1_000, "Thousand"),
]


class CheckSettings(BaseModel):
    """Business details printed on every check."""

    business_name: str
    business_address_line1: str | None = None
    business_address_line2: str | None = None
    business_city: str | None = None
    business_state: str | None = None
    business_zip: str | None = None
    bank_name: str | None = None


class CheckData(BaseModel):
    check_number: int = Field(..., ge=1)
    payee_name: str
    amount_cents: int = Field(..., ge=0)
    issue_date: date
    memo: str | None = None


def _words_below_thousand(n: int) -> str:
    if n == 0:
        return ""
    if n < 10:
        return ONES[n]
    if n < 20:
        return TEENS[n - 10]
    if n < 100:
        tens, ones = divmod(n, 10)
        return f"{TENS[tens]}-{ONES[ones]}" if ones else TENS[tens]
    hundreds, rest = divmod(n, 100)
    words = f"{ONES[hundreds]} Hundred"
    return f"{words} {_words_below_thousand(rest)}" if rest else words


def _dollars_to_words(n: int) -> str:
    if n == 0:
        return "Zero"
    parts = []
    for scale, name in _SCALES:
        count, n = divmod(n, scale)
        if count:
            parts.append(f"{_words_below_thousand(count)} {name}")
    if n:
        parts.append(_words_below_thousand(n))
    return " ".join(parts)


def number_to_words(amount: float | Decimal) -> str:
    """
    Spell out a dollar amount for the check's amount line.

    1234.56 -> "One Thousand Two Hundred Thirty-Four and 56/100".
    Negative amounts are spelled as their absolute value.
    """
    total_cents = int(
        (abs(Decimal(str(amount))) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    )
    if total_cents == 0:
        return "Zero and 00/100"
    dollars, cents = divmod(total_cents, 100)
    return f"{_dollars_to_words(dollars)} and {cents:02d}/100"


def _city_state_zip(settings: CheckSettings) -> str:
    parts: list[str] = []
    if settings.business_city:
        parts.append(settings.business_city)
    if settings.business_state:
        if parts:
            parts[-1] += ","
        parts.append(settings.business_state)
    if settings.business_zip:
        parts.append(settings.business_zip)
    return " ".join(parts)


def _y(inches_from_top: float) -> float:
    """Convert a top-down inch offset to ReportLab's bottom-up points."""
    return PAGE_HEIGHT - inches_from_top * inch


def _perforation(pdf: canvas.Canvas, at: float) -> None:
    pdf.saveState()
    pdf.setDash(2, 2)
    pdf.setLineWidth(0.25)
    pdf.line(0, _y(at), PAGE_WIDTH, _y(at))
    pdf.restoreState()


def _draw_stub(pdf: canvas.Canvas, title: str, check: CheckData, top: float) -> None:
    pdf.setFont("Helvetica-Bold", 9)
    pdf.drawString(MARGIN * inch, _y(top), title)

    pdf.setFont("Helvetica", 9)
    left = MARGIN * inch
    right = (MARGIN + 3.5) * inch
    y = top + 0.35
    issued = check.issue_date.strftime("%m/%d/%Y")

    pdf.drawString(left, _y(y), f"Check #: {check.check_number}")
    pdf.drawString(right, _y(y), f"Date: {issued}")
    y += 0.22

    pdf.drawString(left, _y(y), f"Pay to: {check.payee_name}")
    pdf.drawString(right, _y(y), f"Amount: {format_currency_from_cents(check.amount_cents)}")
    y += 0.22

    if check.memo:
        pdf.drawString(left, _y(y), f"Memo: {check.memo}")
        y += 0.22

    pdf.saveState()
    pdf.setStrokeGray(0.8)
    pdf.setLineWidth(0.15)
    pdf.line(left, _y(y + 0.1), PAGE_WIDTH - MARGIN * inch, _y(y + 0.1))
    pdf.restoreState()


def _draw_check_face(pdf: canvas.Canvas, settings: CheckSettings, check: CheckData) -> None:
    left = MARGIN * inch
    right = PAGE_WIDTH - MARGIN * inch

    # Business block
    pdf.setFont("Helvetica-Bold", 10)
    pdf.drawString(left, _y(0.5), settings.business_name)
    pdf.setFont("Helvetica", 8)
    y = 0.65
    for line in (settings.business_address_line1, settings.business_address_line2):
        if line:
            pdf.drawString(left, _y(y), line)
            y += 0.13
    city_line = _city_state_zip(settings)
    if city_line:
        pdf.drawString(left, _y(y), city_line)

    # Check number and date
    pdf.setFont("Helvetica-Bold", 11)
    pdf.drawRightString(right, _y(0.5), str(check.check_number))
    pdf.setFont("Helvetica", 9)
    pdf.drawString(right - 1.5 * inch, _y(0.85), f"Date: {check.issue_date.strftime('%m/%d/%Y')}")
    pdf.line(right - 1.2 * inch, _y(0.9), right, _y(0.9))

    # Payee line
    pay_to = 1.35
    pdf.setFont("Helvetica", 8)
    pdf.drawString(left, _y(pay_to - 0.1), "PAY TO THE")
    pdf.drawString(left, _y(pay_to + 0.02), "ORDER OF")
    pdf.setFont("Helvetica-Bold", 11)
    pdf.drawString(left + 0.85 * inch, _y(pay_to), check.payee_name)
    pdf.line(left + 0.85 * inch, _y(pay_to + 0.05), right - 1.6 * inch, _y(pay_to + 0.05))

    # Amount box
    box_x = right - 1.4 * inch
    box_top = pay_to - 0.18
    pdf.rect(box_x, _y(box_top + 0.32), 1.3 * inch, 0.32 * inch)
    pdf.setFont("Helvetica-Bold", 12)
    pdf.drawString(box_x + 0.07 * inch, _y(box_top + 0.22), format_currency_from_cents(check.amount_cents))

    # Amount in words, trimmed to fit before "DOLLARS"
    words_y = pay_to + 0.45
    max_width = right - 1.6 * inch - left
    words = number_to_words(cents_to_dollars(check.amount_cents))
    while pdf.stringWidth(words, "Helvetica", 9) > max_width and len(words) > 20:
        words = words[:-1]
    pdf.setFont("Helvetica", 9)
    pdf.drawString(left, _y(words_y), words)
    pdf.line(left, _y(words_y + 0.05), right - 1.6 * inch, _y(words_y + 0.05))
    pdf.setFont("Helvetica", 8)
    pdf.drawString(right - 1.3 * inch, _y(words_y), "DOLLARS")

    if settings.bank_name:
        pdf.setFont("Helvetica-Bold", 9)
        pdf.drawString(left, _y(2.2), settings.bank_name)

    # Memo and signature
    memo_y = 2.85
    pdf.setFont("Helvetica", 8)
    pdf.drawString(left, _y(memo_y), "Memo")
    if check.memo:
        pdf.setFont("Helvetica", 9)
        pdf.drawString(left + 0.45 * inch, _y(memo_y), check.memo)
    pdf.line(left + 0.4 * inch, _y(memo_y + 0.05), left + 3 * inch, _y(memo_y + 0.05))

    sig_x = right - 2.8 * inch
    pdf.line(sig_x, _y(memo_y + 0.05), right, _y(memo_y + 0.05))
    pdf.setFont("Helvetica", 7)
    pdf.drawString(sig_x + 0.3 * inch, _y(memo_y + 0.2), "AUTHORIZED SIGNATURE")


def generate_check_pdf(settings: CheckSettings, checks: list[CheckData]) -> bytes:
    """
    Render checks to a PDF, one per page.

    Returns the PDF as bytes ready for streaming.
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter, pageCompression=0)
    pdf.setTitle(f"Checks - {settings.business_name}")

    stub_top = CHECK_HEIGHT + PAYEE_STUB_HEIGHT
    for check in checks:
        _draw_check_face(pdf, settings, check)
        _perforation(pdf, CHECK_HEIGHT)
        _draw_stub(pdf, "PAYEE RECORD", check, CHECK_HEIGHT + 0.15)
        _perforation(pdf, stub_top)
        _draw_stub(pdf, "COMPANY RECORD", check, stub_top + 0.15)
        pdf.showPage()

    pdf.save()
    logger.info("Generated %d check(s) for %s", len(checks), settings.business_name)
    return buffer.getvalue()


def generate_check_filename(
    restaurant_name: str,
    check_numbers: list[int],
    now: datetime | None = None,
) -> str:
    """
    check-{name}-{number}-{timestamp}.pdf for one check,
    checks-{name}-{first}-to-{last}-{timestamp}.pdf for several.
    """
    sanitized = re.sub(r"[^a-zA-Z0-9]", "-", restaurant_name).lower()
    timestamp = (now or datetime.now()).strftime("%Y-%m-%d-%H%M%S")

    if len(check_numbers) == 1:
        return f"check-{sanitized}-{check_numbers[0]}-{timestamp}.pdf"
    return f"checks-{sanitized}-{check_numbers[0]}-to-{check_numbers[-1]}-{timestamp}.pdf"
