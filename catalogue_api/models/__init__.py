# Models package init
"""
ORM models. Importing this package registers both tables on `Base.metadata`.
"""

from catalogue_api.models.category import Category
from catalogue_api.models.product import Product

__all__ = ["Category", "Product"]
