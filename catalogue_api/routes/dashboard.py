"""
Catalogue API - Dashboard Route Handler
========================================

What:  GET /dashboard returns the number of categories and products.
How:   Two sequential COUNT queries in the request's session.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.database import get_db_session
from catalogue_api.schemas.common import DashboardResponse, ErrorResponse
from catalogue_api.services.category_service import category_service
from catalogue_api.services.product_service import product_service

router = APIRouter(tags=["Dashboard"])


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Category and product counts",
)
async def dashboard(
    db: AsyncSession = Depends(get_db_session),
) -> DashboardResponse:
    categories = await category_service.count_categories(db)
    produits = await product_service.count_products(db)
    return DashboardResponse(categories=categories, produits=produits)
