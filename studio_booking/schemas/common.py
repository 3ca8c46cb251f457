from typing import Optional, List, Generic, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


# Paginated response wrapper: used by list endpoints
class PaginatedResponse(BaseModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    limit: int
    total_pages: int


# Error responses
class ErrorResponse(BaseModel):
    error: str
    message: str
    booking_ids: List[str] = []


# Soft/hard delete result for rooms, providers and upgrades
class DeleteResult(BaseModel):
    id: str
    is_active: bool
    deleted: bool


class BookingCount(BaseModel):
    id: str
    booking_count: int
