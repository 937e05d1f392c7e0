"""
Backend response envelopes.
"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Every backend reply: {success, message, data}."""
    success: bool = True
    message: str = ""
    data: Optional[T] = None


class Page(BaseModel, Generic[T]):
    """One page of a paginated listing. Pages are 0-based."""
    records: list[T] = Field(default_factory=list)
    has_next: bool = False
    current_page: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        """Export for API responses."""
        return {
            "records": [r.model_dump(mode="json") for r in self.records],
            "has_next": self.has_next,
            "current_page": self.current_page,
            "total": self.total,
        }
