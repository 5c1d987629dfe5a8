"""
Catalogue API - Report Service
===============================

What:  Fetches the product listing, renders it through a ReportExporter and
       saves the document under the reports directory.
Who:   Built by the application factory (bound to `app.state.report_service`)
       and called by the report route handlers.

Workflow (GET /download-products-pdf):
    ┌──────────────┐    ┌──────────────┐    ┌──────────────┐
    │ list_products│───▶│ render (pool)│───▶│ write (async)│
    │  (Database)  │    │  (Exporter)  │    │  (aiofiles)  │
    └──────────────┘    └──────────────┘    └──────────────┘

    Store failures surface as DatabaseError; render or write failures as
    ReportExportError. A failed export never leaves a truncated file behind:
    the document is written to a temporary name and renamed into place.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from catalogue_api.config import settings
from catalogue_api.exceptions import ReportExportError
from catalogue_api.services.exporter_base import ReportExporter
from catalogue_api.services.pdf_exporter import PdfReportExporter
from catalogue_api.services.product_service import product_service

logger = logging.getLogger(__name__)


class ReportService:
    """
    Product report generation.

    Args:
        exporter:    renderer to use (defaults to PdfReportExporter)
        reports_dir: override of settings.reports_dir (used in tests)
        filename:    override of settings.report_filename
    """

    def __init__(
        self,
        exporter: Optional[ReportExporter] = None,
        reports_dir: Optional[str] = None,
        filename: Optional[str] = None,
    ):
        self.exporter = exporter or PdfReportExporter()
        self.reports_dir = Path(reports_dir or settings.reports_dir).resolve()
        self.filename = filename or settings.report_filename

    @property
    def report_path(self) -> Path:
        """Location of the most recently generated document."""
        return self.reports_dir / self.filename

    async def export_products(self, db: AsyncSession) -> Path:
        """
        Generate the product report and save it server-side.

        Returns:
            Path of the written document.

        Raises:
            DatabaseError: the product listing could not be read (→ 500)
            ReportExportError: rendering or writing failed (→ 500)
        """
        products = await product_service.list_products(db)

        try:
            document = await run_in_threadpool(self.exporter.render, products)
        except Exception as e:
            logger.error("Report rendering failed: %s", str(e), exc_info=True)
            raise ReportExportError(context={"stage": "render", "error_type": type(e).__name__})

        await self._write(document)
        logger.info(
            "Report generated: %s (%d products, %d bytes)",
            self.report_path,
            len(products),
            len(document),
        )
        return self.report_path

    async def _write(self, document: bytes) -> None:
        target = self.report_path
        # One temp file per export: concurrent exports each replace the
        # target atomically and the last one wins.
        partial = target.with_name(f".{target.name}.{uuid.uuid4().hex}.partial")
        try:
            self.reports_dir.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(partial, "wb") as f:
                await f.write(document)
            os.replace(partial, target)
        except OSError as e:
            logger.error("Failed to write report at %s: %s", target, str(e))
            partial.unlink(missing_ok=True)
            raise ReportExportError(
                context={"stage": "write", "path": str(target), "os_error": str(e)}
            )

    def latest_report(self) -> Optional[Path]:
        """The last generated document, or None if none exists yet."""
        path = self.report_path
        return path if path.is_file() else None
