from typing import Any, List, Literal

from pydantic import BaseModel, Field

Op = Literal["=", "!=", ">", "<", ">=", "<=", "~", "in"]
Dir = Literal["asc", "desc"]


class FilterClause(BaseModel):
    field: str
    op: Op
    value: Any


class SortClause(BaseModel):
    field: str
    dir: Dir = "asc"


class Pagination(BaseModel):
    limit: int = Field(50, ge=1, le=500)
    offset: int = Field(0, ge=0)


class UniversalQuery(BaseModel):
    """List request body shared by every admin ``/query`` endpoint."""

    filters: List[FilterClause] = Field(default_factory=list)
    sort: List[SortClause] = Field(default_factory=list)
    page: Pagination = Field(default_factory=Pagination)
