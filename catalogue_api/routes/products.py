"""
Catalogue API - Product Route Handlers
=======================================

What:  CRUD endpoints for products.

Response shapes:
    POST /produits        → 201 {message, data: Product}
    PUT  /produits/{id}   → 200 Product (bare, not wrapped)
    DELETE /produits/{id} → 200 {message}, also for unknown ids
"""

from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.database import get_db_session
from catalogue_api.schemas.common import MAX_ID, ErrorResponse, MessageResponse
from catalogue_api.schemas.product import (
    ProductCreate,
    ProductEnvelope,
    ProductResponse,
    ProductUpdate,
)
from catalogue_api.services.product_service import product_service

router = APIRouter(prefix="/produits", tags=["Products"])


@router.get(
    "",
    response_model=List[ProductResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all products",
)
async def list_products(
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    return await product_service.list_products(db)


@router.post(
    "",
    status_code=201,
    response_model=ProductEnvelope,
    responses={
        400: {"description": "Invalid body or unknown category", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a product",
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductEnvelope:
    product = await product_service.create_product(
        db,
        nom=payload.nom,
        prix=payload.prix,
        categorie_id=payload.categorie_id,
    )
    return ProductEnvelope(message="Produit ajouté avec succès", data=product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"description": "Invalid body or unknown category", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a product",
    description=(
        "The category reference is checked first: an unknown categorie_id "
        "returns 400 and leaves the product unchanged."
    ),
)
async def update_product(
    payload: ProductUpdate,
    product_id: int = Path(ge=1, le=MAX_ID, description="Product identifier"),
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.update_product(
        db,
        product_id,
        nom=payload.nom,
        prix=payload.prix,
        categorie_id=payload.categorie_id,
    )


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Delete a product",
)
async def delete_product(
    product_id: int = Path(ge=1, le=MAX_ID, description="Product identifier"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await product_service.delete_product(db, product_id)
    return MessageResponse(message="Produit supprimé")
