"""
Catalogue API - Category Route Handlers
========================================

What:  CRUD endpoints for categories plus the nested product listing.
How:   Path ids are parsed as integers and bodies validated by Pydantic
       before CategoryService / ProductService are called.
"""

from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.database import get_db_session
from catalogue_api.schemas.category import (
    CategoryCreate,
    CategoryEnvelope,
    CategoryResponse,
    CategoryUpdate,
)
from catalogue_api.schemas.common import MAX_ID, ErrorResponse, MessageResponse
from catalogue_api.schemas.product import ProductResponse
from catalogue_api.services.category_service import category_service
from catalogue_api.services.product_service import product_service

router = APIRouter(prefix="/categories", tags=["Categories"])

SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[CategoryResponse],
    responses=SERVER_ERROR,
    summary="List all categories",
)
async def list_categories(
    db: AsyncSession = Depends(get_db_session),
) -> List[CategoryResponse]:
    return await category_service.list_categories(db)


@router.post(
    "",
    status_code=201,
    response_model=CategoryEnvelope,
    responses={
        400: {"description": "Invalid body", "model": ErrorResponse},
        **SERVER_ERROR,
    },
    summary="Create a category",
)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryEnvelope:
    category = await category_service.create_category(db, nom=payload.nom)
    return CategoryEnvelope(message="Catégorie ajoutée avec succès", data=category)


@router.put(
    "/{category_id}",
    response_model=CategoryEnvelope,
    responses={
        400: {"description": "Invalid body or id", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
        **SERVER_ERROR,
    },
    summary="Rename a category",
)
async def update_category(
    payload: CategoryUpdate,
    category_id: int = Path(ge=1, le=MAX_ID, description="Category identifier"),
    db: AsyncSession = Depends(get_db_session),
) -> CategoryEnvelope:
    category = await category_service.update_category(db, category_id, nom=payload.nom)
    return CategoryEnvelope(message="Catégorie modifiée avec succès", data=category)


@router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    responses=SERVER_ERROR,
    summary="Delete a category and its products",
    description=(
        "Deletes every product of the category, then the category itself, in a "
        "single transaction. Deleting an unknown id succeeds."
    ),
)
async def delete_category(
    category_id: int = Path(ge=1, le=MAX_ID, description="Category identifier"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await category_service.delete_category(db, category_id)
    return MessageResponse(message="Catégorie et produits associés supprimés")


@router.get(
    "/{category_id}/produits",
    response_model=List[ProductResponse],
    responses=SERVER_ERROR,
    summary="List the products of a category",
    description="Returns an empty array when the category has no products or does not exist.",
)
async def list_category_products(
    category_id: int = Path(ge=1, le=MAX_ID, description="Category identifier"),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    return await product_service.list_products_by_category(db, category_id)
