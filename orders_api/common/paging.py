"""
Paged result envelope for list endpoints.
"""

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, computed_field

T = TypeVar("T")


class PagedResult(BaseModel, Generic[T]):
    """A page of items plus the count of all matching rows."""
    items: List[T] = []
    total_count: int
    page: int
    page_size: int

    @computed_field
    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.page > 1
