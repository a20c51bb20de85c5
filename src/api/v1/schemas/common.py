"""Common Pydantic schemas shared across the API."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Simple status message response."""

    message: str


class DataResponse(BaseModel, Generic[DataT]):
    """Envelope for successful responses carrying an entity or a list."""

    data: DataT


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Missing, invalid or expired token"},
    503: {"model": ErrorResponse, "description": "Backing store unavailable"},
}
