"""
Catalogue API - Product Service Unit Tests
===========================================

What:  Tests for ProductService against a mocked AsyncSession.

What we test:
    ✅ Creation and update check the category reference before writing
    ✅ Unknown category → InvalidReferenceError, product untouched
    ✅ Unknown product on update → NotFoundError
    ✅ Listing by category and deletion by id
    ✅ Store failures surface as DatabaseError
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import OperationalError

from catalogue_api.exceptions import DatabaseError, InvalidReferenceError, NotFoundError, ValidationError
from catalogue_api.models import Category, Product
from catalogue_api.services.product_service import ProductService


class TestProductServiceCreate:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_create_product(self, mock_db_session):
        mock_db_session.get.return_value = Category(id=1, nom="Fruits")
        added = []
        mock_db_session.add.side_effect = added.append

        async def assign_id():
            added[0].id = 10
        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        result = await self.service.create_product(
            mock_db_session, nom="Pomme", prix=1.5, categorie_id=1
        )

        assert result.id == 10
        assert result.prix == 1.5
        assert result.categorie_id == 1
        mock_db_session.get.assert_awaited_once_with(Category, 1)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_product_unknown_category(self, mock_db_session):
        """Creation is rejected like update when the category does not exist."""
        mock_db_session.get.return_value = None

        with pytest.raises(InvalidReferenceError) as exc_info:
            await self.service.create_product(
                mock_db_session, nom="Pomme", prix=1.5, categorie_id=99
            )

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.message == "La catégorie spécifiée n'existe pas"
        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()


class TestProductServiceUpdate:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_update_product(self, mock_db_session, sample_product_data):
        product = Product(**sample_product_data)
        mock_db_session.get = AsyncMock(side_effect=[Category(id=2, nom="Légumes"), product])

        result = await self.service.update_product(
            mock_db_session, 10, nom="Carotte", prix=0.8, categorie_id=2
        )

        assert result.model_dump() == {"id": 10, "nom": "Carotte", "prix": 0.8, "categorie_id": 2}
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_product_unknown_category_leaves_product_untouched(
        self, mock_db_session, sample_product_data
    ):
        """The category check runs first; the product is never loaded."""
        mock_db_session.get = AsyncMock(return_value=None)

        with pytest.raises(InvalidReferenceError):
            await self.service.update_product(
                mock_db_session, 10, nom="Carotte", prix=0.8, categorie_id=99
            )

        mock_db_session.get.assert_awaited_once_with(Category, 99)
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_product_not_found(self, mock_db_session):
        mock_db_session.get = AsyncMock(side_effect=[Category(id=1, nom="Fruits"), None])

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_product(
                mock_db_session, 404, nom="X", prix=1.0, categorie_id=1
            )

        assert exc_info.value.message == "Produit non trouvé"
        mock_db_session.commit.assert_not_awaited()


class TestProductServiceQueries:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_list_products_by_category_empty(self, mock_db_session):
        """An unknown or empty category yields an empty list, not an error."""
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_products_by_category(mock_db_session, 123) == []

    @pytest.mark.asyncio
    async def test_list_products(self, mock_db_session, sample_product_data):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [Product(**sample_product_data)]
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_products(mock_db_session)

        assert len(result) == 1
        assert result[0].nom == "Pomme"

    @pytest.mark.asyncio
    async def test_delete_product_is_idempotent(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        await self.service.delete_product(mock_db_session, 999)

        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_count_products_store_error(self, mock_db_session):
        mock_db_session.scalar = AsyncMock(
            side_effect=OperationalError("SELECT count(*)", {}, Exception("gone"))
        )

        with pytest.raises(DatabaseError):
            await self.service.count_products(mock_db_session)

        mock_db_session.rollback.assert_awaited_once()
