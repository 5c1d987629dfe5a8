"""
Catalogue API - Product Service (Resource Repository)
======================================================

What:  Every query touching the `produits` table.
How:   Stateless; each call receives the request's AsyncSession.
Who:   Called by the product, category (nested listing), dashboard and
       report code paths.

Referential Integrity:
    Creation and update both look the category up first and raise
    InvalidReferenceError (→ 400) when it does not exist, before writing.
    The lookup and the write are separate round trips; a category deleted
    in between is not detected here.
"""

import logging
from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.exceptions import CatalogueError, InvalidReferenceError, NotFoundError
from catalogue_api.models import Category, Product
from catalogue_api.schemas.product import ProductResponse
from catalogue_api.services.category_service import store_failure

logger = logging.getLogger(__name__)


class ProductService:
    """
    Repository operations for products.

    Responsibilities:
        - list_products() / list_products_by_category()
        - create_product() / update_product(): reference check, then write
        - delete_product(): idempotent delete by id
        - count_products(): dashboard counter
    """

    async def _ensure_category_exists(self, db: AsyncSession, categorie_id: int) -> None:
        """Dedicated lookup run before any product write."""
        category = await db.get(Category, categorie_id)
        if category is None:
            logger.warning("Rejected product write: category %s does not exist", categorie_id)
            raise InvalidReferenceError(categorie_id=categorie_id)

    async def list_products(self, db: AsyncSession) -> List[ProductResponse]:
        try:
            result = await db.execute(select(Product).order_by(Product.id))
            return [ProductResponse.model_validate(p) for p in result.scalars().all()]
        except Exception as e:
            raise await store_failure(db, "list_products", e)

    async def list_products_by_category(
        self, db: AsyncSession, categorie_id: int
    ) -> List[ProductResponse]:
        """Products of one category; an unknown category yields an empty list."""
        try:
            result = await db.execute(
                select(Product)
                .where(Product.categorie_id == categorie_id)
                .order_by(Product.id)
            )
            return [ProductResponse.model_validate(p) for p in result.scalars().all()]
        except Exception as e:
            raise await store_failure(
                db, "list_products_by_category", e, categorie_id=categorie_id
            )

    async def create_product(
        self, db: AsyncSession, nom: str, prix: float, categorie_id: int
    ) -> ProductResponse:
        """
        Insert a product after checking its category reference.

        Raises:
            InvalidReferenceError: categorie_id does not exist (→ 400)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            await self._ensure_category_exists(db, categorie_id)

            product = Product(nom=nom, prix=prix, categorie_id=categorie_id)
            db.add(product)
            await db.flush()
            await db.commit()
            logger.info(
                "Product created: id=%s nom=%r categorie_id=%s",
                product.id,
                product.nom,
                product.categorie_id,
            )
            return ProductResponse.model_validate(product)

        except CatalogueError:
            raise
        except Exception as e:
            raise await store_failure(
                db, "create_product", e, nom=nom, categorie_id=categorie_id
            )

    async def update_product(
        self,
        db: AsyncSession,
        product_id: int,
        nom: str,
        prix: float,
        categorie_id: int,
    ) -> ProductResponse:
        """
        Replace all mutable fields of a product.

        Order of checks:
            1. Category reference → InvalidReferenceError (400); product untouched
            2. Product id         → NotFoundError (404)
            3. Write and commit
        """
        try:
            await self._ensure_category_exists(db, categorie_id)

            product = await db.get(Product, product_id)
            if product is None:
                raise NotFoundError(
                    message="Produit non trouvé",
                    resource="product",
                    resource_id=product_id,
                )

            product.nom = nom
            product.prix = prix
            product.categorie_id = categorie_id
            await db.flush()
            await db.commit()
            logger.info("Product %s updated", product_id)
            return ProductResponse.model_validate(product)

        except CatalogueError:
            raise
        except Exception as e:
            raise await store_failure(db, "update_product", e, product_id=product_id)

    async def delete_product(self, db: AsyncSession, product_id: int) -> None:
        """Idempotent: an unknown id is not an error."""
        try:
            result = await db.execute(delete(Product).where(Product.id == product_id))
            await db.commit()
            logger.info("Product %s deleted (%s rows)", product_id, result.rowcount)
        except Exception as e:
            raise await store_failure(db, "delete_product", e, product_id=product_id)

    async def count_products(self, db: AsyncSession) -> int:
        try:
            count = await db.scalar(select(func.count()).select_from(Product))
            return int(count or 0)
        except Exception as e:
            raise await store_failure(db, "count_products", e)


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()
