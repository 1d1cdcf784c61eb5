# apps/api_server/routers/templates.py

from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from apps.api_server.schemas.screener import TemplateList
from packages.screener.errors import TemplateNotFoundError
from packages.screener.templates import ScreenerTemplate, get_template, list_templates
from packages.screener.vocabulary import TemplateCategory

router = APIRouter(prefix="/screener/templates", tags=["Screener Templates"])


@router.get(
    "",
    response_model=TemplateList,
    response_model_exclude_none=True,
    summary="List Screener Templates",
)
async def get_templates(
    category: Optional[TemplateCategory] = Query(None, description="Only this category"),
    popular: bool = Query(False, description="Only templates flagged as popular"),
):
    templates = list_templates(category=category, popular_only=popular)
    return TemplateList(templates=templates, total=len(templates))


@router.get(
    "/{template_id}",
    response_model=ScreenerTemplate,
    response_model_exclude_none=True,
    summary="Get Screener Template",
)
async def get_template_detail(template_id: str):
    try:
        return get_template(template_id)
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
