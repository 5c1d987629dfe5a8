"""
Catalogue API - Category Service (Resource Repository)
=======================================================

What:  Every query touching the `categories` table, plus the cascading delete.
How:   Stateless; each call receives the request's AsyncSession.
Who:   Called by the category and dashboard route handlers.

Cascading Delete:
    DELETE /categories/{id} removes the category's products, then the
    category row. Both statements run in the session's transaction and are
    committed together; any failure rolls both back, so a category is never
    left half-deleted.

Error Handling Strategy:
    Store failures are rolled back, logged with the operation name, and
    re-raised as DatabaseError (generic message to the client). Application
    exceptions (NotFoundError) propagate untouched.
"""

import logging
from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.exceptions import CatalogueError, DatabaseError, NotFoundError
from catalogue_api.models import Category, Product
from catalogue_api.schemas.category import CategoryResponse

logger = logging.getLogger(__name__)


async def store_failure(db: AsyncSession, operation: str, error: Exception, **context) -> DatabaseError:
    """
    Roll back the session and build the DatabaseError to raise.

    Shared by the category and product services so that every store failure
    is logged and translated the same way.
    """
    logger.error(
        "Database error during %s: %s",
        operation,
        str(error),
        exc_info=True,
        extra=context,
    )
    try:
        await db.rollback()
    except Exception as rollback_error:
        logger.error("Rollback after failed %s also failed: %s", operation, rollback_error)
    context["operation"] = operation
    context["error_type"] = type(error).__name__
    return DatabaseError(context=context)


class CategoryService:
    """
    Repository operations for categories.

    Responsibilities:
        - list_categories(): all rows ordered by id
        - create_category(): insert and return the generated row
        - update_category(): rename, NotFoundError when the id is unknown
        - delete_category(): transactional cascading delete, idempotent
        - count_categories(): dashboard counter
    """

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        try:
            result = await db.execute(select(Category).order_by(Category.id))
            return [CategoryResponse.model_validate(c) for c in result.scalars().all()]
        except Exception as e:
            raise await store_failure(db, "list_categories", e)

    async def create_category(self, db: AsyncSession, nom: str) -> CategoryResponse:
        """
        Insert a category and return it with its generated id.

        flush() assigns the primary key; commit() makes the row visible to
        other sessions before the response is sent.
        """
        try:
            category = Category(nom=nom)
            db.add(category)
            await db.flush()
            await db.commit()
            logger.info("Category created: id=%s nom=%r", category.id, category.nom)
            return CategoryResponse.model_validate(category)
        except Exception as e:
            raise await store_failure(db, "create_category", e, nom=nom)

    async def update_category(self, db: AsyncSession, category_id: int, nom: str) -> CategoryResponse:
        """
        Replace the category's name.

        Raises:
            NotFoundError: no category has this id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            category = await db.get(Category, category_id)
            if category is None:
                raise NotFoundError(
                    message="Catégorie non trouvée",
                    resource="category",
                    resource_id=category_id,
                )

            category.nom = nom
            await db.flush()
            await db.commit()
            logger.info("Category %s renamed to %r", category_id, nom)
            return CategoryResponse.model_validate(category)

        except CatalogueError:
            raise
        except Exception as e:
            raise await store_failure(db, "update_category", e, category_id=category_id)

    async def delete_category(self, db: AsyncSession, category_id: int) -> None:
        """
        Delete a category together with every product referencing it.

        Idempotent: deleting an unknown id deletes nothing and still succeeds.
        Both DELETE statements share one transaction; commit happens once,
        after the second statement.
        """
        try:
            products = await db.execute(
                delete(Product).where(Product.categorie_id == category_id)
            )
            categories = await db.execute(
                delete(Category).where(Category.id == category_id)
            )
            await db.commit()
            logger.info(
                "Category %s deleted (%s category rows, %s product rows)",
                category_id,
                categories.rowcount,
                products.rowcount,
            )
        except Exception as e:
            raise await store_failure(db, "delete_category", e, category_id=category_id)

    async def count_categories(self, db: AsyncSession) -> int:
        try:
            count = await db.scalar(select(func.count()).select_from(Category))
            return int(count or 0)
        except Exception as e:
            raise await store_failure(db, "count_categories", e)


# ── Singleton Instance ────────────────────────────────────────────────────
category_service = CategoryService()
