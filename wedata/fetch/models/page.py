"""Page result data model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PageResult(BaseModel):
    """One page of a search query.

    ``total`` is the size of the whole collection as reported by the service.
    Only the first page's value is used; later pages are assumed to report
    the same number.
    """

    documents: list[Any]
    total: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True, extra="ignore")

    def __len__(self) -> int:
        return len(self.documents)

    @property
    def is_complete(self) -> bool:
        """Whether this page already holds every record of the collection."""
        return self.total == 0 or len(self.documents) >= self.total
