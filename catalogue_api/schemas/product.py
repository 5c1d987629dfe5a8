"""
Catalogue API - Product Schemas
================================

What:  Pydantic models defining the product API contract.
How:   FastAPI validates request bodies against ProductCreate/ProductUpdate;
       shape mismatches become 400 responses through the handler in main.py.
"""

from pydantic import BaseModel, Field, field_validator

from catalogue_api.schemas.common import MAX_ID, MAX_PRICE


class ProductCreate(BaseModel):
    """
    Body of POST /produits.

    Fields:
        nom:          non-blank display name
        prix:         finite price, zero up to 99999999.99
        categorie_id: must reference an existing category (checked by the service)
    """
    nom: str = Field(min_length=1, max_length=255, description="Product display name")
    prix: float = Field(ge=0, le=MAX_PRICE, allow_inf_nan=False, description="Product price")
    categorie_id: int = Field(ge=1, le=MAX_ID, description="Identifier of the owning category")

    @field_validator("nom")
    @classmethod
    def strip_nom(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("nom must not be blank")
        return stripped


class ProductUpdate(ProductCreate):
    """Body of PUT /produits/{id}: full replace of the mutable fields."""


class ProductResponse(BaseModel):
    """A product as returned by the API."""
    id: int
    nom: str
    prix: float
    categorie_id: int

    model_config = {"from_attributes": True}


class ProductEnvelope(BaseModel):
    """Wrapper returned by POST /produits."""
    message: str = Field(description="Human-readable success message")
    data: ProductResponse
