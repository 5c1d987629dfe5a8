"""
Catalogue API - Category Service Unit Tests
============================================

What:  Tests for CategoryService against a mocked AsyncSession.

What we test:
    ✅ Listing maps rows to CategoryResponse
    ✅ Creation flushes, commits and returns the generated id
    ✅ Update of an unknown id raises NotFoundError without committing
    ✅ Cascading delete issues both statements and commits once
    ✅ Store failures are rolled back and surface as DatabaseError
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import OperationalError

from catalogue_api.exceptions import DatabaseError, NotFoundError
from catalogue_api.models import Category
from catalogue_api.services.category_service import CategoryService


def store_down():
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestCategoryServiceList:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_list_categories(self, mock_db_session):
        rows = [Category(id=1, nom="Fruits"), Category(id=2, nom="Légumes")]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_categories(mock_db_session)

        assert [(c.id, c.nom) for c in result] == [(1, "Fruits"), (2, "Légumes")]

    @pytest.mark.asyncio
    async def test_list_categories_store_error(self, mock_db_session):
        """Driver failures become DatabaseError and the session is rolled back."""
        mock_db_session.execute = AsyncMock(side_effect=store_down())

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_categories(mock_db_session)

        assert exc_info.value.message == "Erreur serveur"
        assert exc_info.value.context["operation"] == "list_categories"
        mock_db_session.rollback.assert_awaited_once()


class TestCategoryServiceCreate:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_create_category_returns_generated_id(self, mock_db_session):
        added = []
        mock_db_session.add.side_effect = added.append

        async def assign_id():
            added[0].id = 42
        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        result = await self.service.create_category(mock_db_session, nom="Fruits")

        assert result.id == 42
        assert result.nom == "Fruits"
        assert isinstance(added[0], Category)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_category_commit_failure(self, mock_db_session):
        added = []
        mock_db_session.add.side_effect = added.append

        async def assign_id():
            added[0].id = 1
        mock_db_session.flush = AsyncMock(side_effect=assign_id)
        mock_db_session.commit = AsyncMock(side_effect=store_down())

        with pytest.raises(DatabaseError):
            await self.service.create_category(mock_db_session, nom="Fruits")

        mock_db_session.rollback.assert_awaited_once()


class TestCategoryServiceUpdate:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_update_category(self, mock_db_session):
        category = Category(id=3, nom="Old")
        mock_db_session.get.return_value = category

        result = await self.service.update_category(mock_db_session, 3, nom="New")

        assert result.id == 3
        assert result.nom == "New"
        assert category.nom == "New"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_category_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_category(mock_db_session, 999, nom="New")

        assert exc_info.value.message == "Catégorie non trouvée"
        mock_db_session.commit.assert_not_awaited()
        mock_db_session.rollback.assert_not_awaited()


class TestCategoryServiceDelete:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_delete_category_removes_products_first(self, mock_db_session):
        """Products are deleted before the category, then one commit."""
        mock_db_session.execute.return_value = MagicMock(rowcount=1)

        await self.service.delete_category(mock_db_session, 5)

        statements = [call.args[0] for call in mock_db_session.execute.await_args_list]
        assert len(statements) == 2
        assert statements[0].table.name == "produits"
        assert statements[1].table.name == "categories"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_category_failure_rolls_back_both_statements(self, mock_db_session):
        """A failure on the second statement rolls back the product deletion too."""
        mock_db_session.execute = AsyncMock(
            side_effect=[MagicMock(rowcount=2), store_down()]
        )

        with pytest.raises(DatabaseError):
            await self.service.delete_category(mock_db_session, 5)

        mock_db_session.commit.assert_not_awaited()
        mock_db_session.rollback.assert_awaited_once()


class TestCategoryServiceCount:

    @pytest.mark.asyncio
    async def test_count_categories(self, mock_db_session):
        mock_db_session.scalar.return_value = 7

        assert await CategoryService().count_categories(mock_db_session) == 7

    @pytest.mark.asyncio
    async def test_count_categories_empty_table(self, mock_db_session):
        mock_db_session.scalar.return_value = None

        assert await CategoryService().count_categories(mock_db_session) == 0
