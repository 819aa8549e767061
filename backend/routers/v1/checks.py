"""
Check Printing API Routes

Renders checks with payee and company stubs as a downloadable PDF.
"""

import io

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from backend.config import Settings, get_settings
from backend.schemas.payroll import CheckPrintRequest
from exports.check_pdf import CheckSettings, generate_check_filename, generate_check_pdf

router = APIRouter()


@router.post(
    "/pdf",
    summary="Print checks",
    description="Generate a PDF with one check per page on check-on-top stock.",
)
async def print_checks(
    request: CheckPrintRequest,
    settings: Settings = Depends(get_settings),
):
    """Generate and download a check PDF."""
    check_settings = request.settings or CheckSettings(
        business_name=settings.check_business_name,
        bank_name=settings.check_bank_name or None,
    )
    if not check_settings.business_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Business name is required to print checks",
        )

    pdf_bytes = generate_check_pdf(check_settings, request.checks)
    filename = generate_check_filename(
        check_settings.business_name,
        [c.check_number for c in request.checks],
    )

    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
