"""
Catalogue API - Category Schemas
=================================

What:  Pydantic models defining the category API contract.
Why:   Request bodies are validated before any query runs; a missing or empty
       `nom` is rejected with 400 instead of reaching the store as NULL.
"""

from pydantic import BaseModel, Field, field_validator


class CategoryCreate(BaseModel):
    """Body of POST /categories."""
    nom: str = Field(min_length=1, max_length=255, description="Category display name")

    @field_validator("nom")
    @classmethod
    def strip_nom(cls, v: str) -> str:
        """Surrounding whitespace is dropped; a blank name is rejected."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("nom must not be blank")
        return stripped


class CategoryUpdate(CategoryCreate):
    """Body of PUT /categories/{id}: full replace of the mutable fields."""


class CategoryResponse(BaseModel):
    """A category as returned by the API."""
    id: int = Field(description="Store-generated identifier")
    nom: str = Field(description="Category display name")

    model_config = {"from_attributes": True}


class CategoryEnvelope(BaseModel):
    """Wrapper returned by POST /categories and PUT /categories/{id}."""
    message: str = Field(description="Human-readable success message")
    data: CategoryResponse
