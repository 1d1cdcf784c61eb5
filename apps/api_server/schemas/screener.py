# apps/api_server/schemas/screener.py
from typing import Any, Dict, List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from datetime import datetime

from packages.screener.templates import ScreenerTemplate
from packages.screener.views import StockRecordView


class ErrorResponse(BaseModel):
    error: str
    execution_time_ms: int = 0


# --- Query ---
class ScreenerResponse(BaseModel):
    """Response for both the JSON and query-string forms of the screener."""

    total: int  # Matches before pagination
    results: List[StockRecordView]
    execution_time_ms: int
    cached: bool


# --- Templates ---
class TemplateList(BaseModel):
    templates: List[ScreenerTemplate]
    total: int


# --- Sectors ---
class SectorList(BaseModel):
    sectors: List[str]
    total: int


# --- Saved Screens ---
class SavedScreenCreate(BaseModel):
    """Body for POST /screener/saved. Filters are validated like a query's."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=120)
    description: Optional[str] = None
    filters: Dict[str, Any]


class SavedScreenUpdate(BaseModel):
    """Body for PATCH /screener/saved/{id}. Omitted keys are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, max_length=120)
    description: Optional[str] = None
    filters: Optional[Dict[str, Any]] = None


class SavedScreenData(BaseModel):
    # camelCase keys match what the dashboard already consumes.
    # Both spellings validate: ORM rows carry snake_case, dumped responses camelCase.
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str = Field(
        validation_alias=AliasChoices("user_id", "userId"), serialization_alias="userId"
    )
    name: str
    description: Optional[str] = None
    filters: Dict[str, Any] = Field(validation_alias=AliasChoices("filters_json", "filters"))
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"), serialization_alias="createdAt"
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"), serialization_alias="updatedAt"
    )


class SavedScreenList(BaseModel):
    screens: List[SavedScreenData]
    total: int


class DeleteResult(BaseModel):
    success: bool
    message: str


# --- Cache Admin ---
class CacheRefreshResult(BaseModel):
    success: bool
    message: str
    stocks_updated: int
    timestamp: datetime


class CacheStatus(BaseModel):
    cache_age_minutes: Optional[int]
    last_updated: str  # Human readable, e.g. "12 minutes ago" or "Never"
    is_stale: bool
