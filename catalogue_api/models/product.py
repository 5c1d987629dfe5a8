"""
Catalogue API - Product SQLAlchemy Model
=========================================

What:  ORM model representing the `produits` table.
Who:   Used by ProductService, CategoryService (cascading delete),
       ReportService and Alembic.

Table Design:
    - id:           integer primary key generated by the store
    - nom:          display name, required
    - prix:         NUMERIC(10, 2), returned to Python as float
    - categorie_id: foreign key to categories.id, indexed because
                    GET /categories/{id}/produits and the cascading delete
                    both filter on it
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalogue_api.database import Base

if TYPE_CHECKING:
    from catalogue_api.models.category import Category


class Product(Base):
    """A sellable item with a price and a category reference."""

    __tablename__ = "produits"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    nom: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Product display name",
    )

    # asdecimal=False: JSON responses carry a number, not a Decimal string
    prix: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
        comment="Product price",
    )

    categorie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
    )

    categorie: Mapped["Category"] = relationship(
        back_populates="produits",
        lazy="raise",
    )

    __table_args__ = (
        Index("idx_produits_categorie_id", "categorie_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, nom='{self.nom}', prix={self.prix}, "
            f"categorie_id={self.categorie_id})>"
        )
