"""
Catalogue API - Report Route Handlers
======================================

What:  Product report generation and download.

Endpoints:
    GET /download-products-pdf
        Generates the PDF listing and saves it under REPORTS_DIR.
        Answers with a plain-text confirmation, not the document.
    GET /download-products-pdf/file
        Sends the last generated document as an attachment
        (404 until a report has been generated).
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.database import get_db_session
from catalogue_api.exceptions import NotFoundError
from catalogue_api.schemas.common import ErrorResponse
from catalogue_api.services.report_service import ReportService

router = APIRouter(prefix="/download-products-pdf", tags=["Reports"])


def get_report_service(request: Request) -> ReportService:
    """FastAPI dependency returning the report service bound to the application."""
    return request.app.state.report_service


@router.get(
    "",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Report generated", "content": {"text/plain": {}}},
        500: {"description": "Store or export error", "model": ErrorResponse},
    },
    summary="Generate the product report",
)
async def generate_products_pdf(
    db: AsyncSession = Depends(get_db_session),
    reports: ReportService = Depends(get_report_service),
) -> PlainTextResponse:
    await reports.export_products(db)
    return PlainTextResponse("PDF généré avec succès", status_code=200)


@router.get(
    "/file",
    response_class=FileResponse,
    responses={
        200: {"description": "Generated document", "content": {"application/pdf": {}}},
        404: {"description": "No report generated yet", "model": ErrorResponse},
    },
    summary="Download the last generated product report",
)
async def download_products_pdf(
    reports: ReportService = Depends(get_report_service),
) -> FileResponse:
    path = reports.latest_report()
    if path is None:
        raise NotFoundError(
            message="Aucun rapport n'a encore été généré",
            resource="report",
            resource_id=reports.filename,
        )

    return FileResponse(
        path=str(path),
        media_type=reports.exporter.media_type,
        filename=path.name,
        headers={"Cache-Control": "no-store"},
    )
