"""Create categories and produits tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `categories` and `produits` with the foreign key from
       produits.categorie_id to categories.id and an index on it.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nom", sa.String(255), nullable=False, comment="Category display name"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "produits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nom", sa.String(255), nullable=False, comment="Product display name"),
        sa.Column("prix", sa.Numeric(10, 2), nullable=False, comment="Product price"),
        sa.Column("categorie_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["categorie_id"], ["categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    # Filters of GET /categories/{id}/produits and of the cascading delete
    op.create_index("idx_produits_categorie_id", "produits", ["categorie_id"])


def downgrade() -> None:
    op.drop_index("idx_produits_categorie_id", table_name="produits")
    op.drop_table("produits")
    op.drop_table("categories")
