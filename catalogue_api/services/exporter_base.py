"""
Catalogue API - Abstract Report Exporter Interface
===================================================

What:  Abstract base class defining the contract for product report renderers.
Why:   ReportService only needs "products in, document bytes out"; the
       concrete format (PDF today) can be swapped without touching it.
How:   Concrete implementations inherit from ReportExporter and implement render().
Who:   Called by ReportService when GET /download-products-pdf is requested.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from catalogue_api.schemas.product import ProductResponse


class ReportExporter(ABC):
    """
    Abstract interface for rendering a product listing into a document.

    Contract:
        - render() is synchronous and CPU-bound; callers run it off the event loop
        - one line per product: id, name, price, category id
        - the document starts with a fixed title
        - any rendering failure is raised as an exception (never partial bytes)
    """

    #: MIME type of the produced document
    media_type: str = "application/octet-stream"

    @abstractmethod
    def render(self, products: Sequence[ProductResponse]) -> bytes:
        """
        Render the product listing.

        Args:
            products: rows to list, in display order. May be empty; the
                      document then only carries the title and header.

        Returns:
            bytes: the complete document.
        """
        ...
