"""
Catalogue API - Category SQLAlchemy Model
==========================================

What:  ORM model representing the `categories` table.
Who:   Used by CategoryService, ProductService (reference checks) and Alembic.

Table Design:
    - id:  integer primary key generated by the store
    - nom: display name, required

    One category owns zero or more products (`produits.categorie_id`). The
    relationship is declared without ORM cascades: CategoryService deletes the
    products explicitly, in the same transaction as the category row.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalogue_api.database import Base

if TYPE_CHECKING:
    from catalogue_api.models.product import Product


class Category(Base):
    """A named grouping of products."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    nom: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Category display name",
    )

    produits: Mapped[List["Product"]] = relationship(
        back_populates="categorie",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, nom='{self.nom}')>"
