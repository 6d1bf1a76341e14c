from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class ViewStateModel(BaseModel):
    active_category: str = "Vista General"
    active_bucket: str = "All"


class MetaCategoriesResponse(BaseModel):
    categories: List[str]
    short_names: List[str]
    overview: str
    table: str


class MetaListResponse(BaseModel):
    values: List[str]


class LoadStatusResponse(BaseModel):
    source: str
    records: int
    raw_rows: int
    error: Optional[str] = None
