# Services package init
"""
Catalogue API - Services Layer
===============================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - CategoryService: category queries and the cascading delete
    - ProductService: product queries with category reference checks
    - ReportExporter (abstract): interface for product report renderers
    - PdfReportExporter: fpdf2 implementation of ReportExporter
    - ReportService: list → render → save workflow for the product report

Services never build HTTP responses; they return schemas or raise the
exceptions declared in `catalogue_api.exceptions`.
"""
