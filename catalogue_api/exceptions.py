"""
Catalogue API - Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the error taxonomy of the API.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) catch these
       and return structured JSON error responses with the right status code.
Who:   Raised by services; caught by the handlers in main.py.

Exception Hierarchy:
    CatalogueError (base)
    ├── ValidationError          → 400 Bad Request
    │   └── InvalidReferenceError → 400 (product points at a missing category)
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    └── ReportExportError        → 500 Internal Server Error

Deleting a missing row is not an error: deletes are idempotent and never
raise NotFoundError.
"""

from typing import Any, Dict, Optional


class CatalogueError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "Une erreur inattendue est survenue",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CatalogueError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request. Request-body schema failures raised by FastAPI are
    mapped to the same response shape in main.py.
    """

    def __init__(
        self,
        message: str = "Données invalides",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidReferenceError(ValidationError):
    """
    Raised when a product references a category that does not exist.

    Checked before any product write, on creation as well as on update.
    """

    def __init__(
        self,
        categorie_id: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if categorie_id is not None:
            ctx["categorie_id"] = categorie_id
        super().__init__(
            message="La catégorie spécifiée n'existe pas",
            field="categorie_id",
            context=ctx,
        )
        self.categorie_id = categorie_id


class NotFoundError(CatalogueError):
    """
    Raised when an update targets a row that does not exist.

    SQLAlchemy returns None for missing records; services turn that into
    this exception so the handler can answer 404.
    """

    def __init__(
        self,
        message: str = "Ressource non trouvée",
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(CatalogueError):
    """
    Raised when a store operation fails (connection lost, driver error,
    constraint violation).

    The client only ever sees a generic message; the original error type and
    identifiers stay in the server-side log.
    """

    def __init__(
        self,
        message: str = "Erreur serveur",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ReportExportError(CatalogueError):
    """Raised when the product report cannot be rendered or written to disk."""

    def __init__(
        self,
        message: str = "Erreur lors de la génération du PDF",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
