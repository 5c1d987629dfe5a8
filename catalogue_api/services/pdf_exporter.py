"""
Catalogue API - PDF Report Exporter
====================================

What:  ReportExporter implementation producing a PDF with fpdf2.
How:   One A4 page (more when the listing overflows): the title, a header
       line, then one text line per product.

Layout:
    Liste des Produits
    ID    Nom    Prix    Catégorie ID
    1    Pomme    1.50    3
    ...

fpdf2's core fonts only cover latin-1; characters outside it are replaced
with "?" rather than failing the whole export.
"""

import logging
from typing import Optional, Sequence

from fpdf import FPDF

from catalogue_api.config import settings
from catalogue_api.schemas.product import ProductResponse
from catalogue_api.services.exporter_base import ReportExporter

logger = logging.getLogger(__name__)

HEADER_LINE = "ID    Nom    Prix    Catégorie ID"
LINE_HEIGHT = 10
FONT_FAMILY = "Helvetica"
FONT_SIZE = 12


def _latin1(value: str) -> str:
    return value.encode("latin-1", "replace").decode("latin-1")


def format_product_line(product: ProductResponse) -> str:
    """Text of a single product row."""
    return f"{product.id}    {product.nom}    {product.prix:.2f}    {product.categorie_id}"


class PdfReportExporter(ReportExporter):
    """Renders the product listing as a PDF document."""

    media_type = "application/pdf"

    def __init__(self, title: Optional[str] = None):
        self.title = title or settings.report_title

    def render(self, products: Sequence[ProductResponse]) -> bytes:
        pdf = FPDF()
        pdf.set_auto_page_break(auto=True, margin=15)
        pdf.add_page()
        pdf.set_font(FONT_FAMILY, size=FONT_SIZE)

        pdf.cell(0, LINE_HEIGHT, _latin1(self.title), new_x="LMARGIN", new_y="NEXT")
        pdf.cell(0, LINE_HEIGHT, _latin1(HEADER_LINE), new_x="LMARGIN", new_y="NEXT")

        for product in products:
            pdf.cell(
                0,
                LINE_HEIGHT,
                _latin1(format_product_line(product)),
                new_x="LMARGIN",
                new_y="NEXT",
            )

        document = bytes(pdf.output())
        logger.debug("Rendered PDF: %d products, %d bytes", len(products), len(document))
        return document
