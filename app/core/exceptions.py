"""
Catalog error taxonomy.
Raised by the services and turned into JSON responses by the handler in main.py.
"""

from typing import Optional

from fastapi import status


class CatalogError(Exception):
    """Base class for errors reported to the HTTP layer"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.detail:
            body["detalles"] = self.detail
        return body


class InvalidInput(CatalogError):
    """Malformed required argument"""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(CatalogError):
    """The query ran but matched nothing where at least one row is expected"""
    status_code = status.HTTP_404_NOT_FOUND

    def to_dict(self) -> dict:
        return {"message": self.message}


class UpstreamError(CatalogError):
    """The primary store query failed; carries the driver message as detail"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
