# apps/api_server/routers/saved.py

from fastapi import APIRouter, Depends, HTTPException, Request

from apps.api_server.core.auth import require_user
from apps.api_server.core.limiter import limiter
from apps.api_server.dependencies.database import get_saved_screen_service
from apps.api_server.schemas.screener import (
    DeleteResult,
    SavedScreenCreate,
    SavedScreenData,
    SavedScreenList,
    SavedScreenUpdate,
)
from apps.api_server.services.saved_screens import SavedScreenService
from packages.database.models import SavedScreen
from packages.quant_lib.config import settings
from packages.quant_lib.logging import get_logger
from packages.screener.parsing import parse_filter_spec

logger = get_logger("saved_screens")

router = APIRouter(prefix="/screener/saved", tags=["Saved Screens"])


async def _get_owned_screen(
    service: SavedScreenService, screen_id: str, user_id: str
) -> SavedScreen:
    screen = await service.get(screen_id)
    if not screen:
        raise HTTPException(status_code=404, detail="Screen not found")
    if screen.user_id != user_id:
        raise HTTPException(status_code=403, detail="Forbidden")
    return screen


@router.get("", response_model=SavedScreenList, summary="List My Saved Screens")
async def list_saved_screens(
    user_id: str = Depends(require_user),
    service: SavedScreenService = Depends(get_saved_screen_service),
):
    screens = await service.list_for_user(user_id)
    data = [SavedScreenData.model_validate(s) for s in screens]
    return SavedScreenList(screens=data, total=len(data))


@router.post(
    "",
    response_model=SavedScreenData,
    status_code=201,
    summary="Save a Screen",
)
@limiter.limit(settings.screener.query_rate_limit)
async def create_saved_screen(
    request: Request,  # Required for limiter
    body: SavedScreenCreate,
    user_id: str = Depends(require_user),
    service: SavedScreenService = Depends(get_saved_screen_service),
):
    filters = parse_filter_spec(body.filters)
    screen = await service.create(
        user_id=user_id,
        name=body.name,
        description=body.description,
        filters=filters,
    )
    logger.info(f"User {user_id} saved screen '{screen.name}' ({screen.id})")
    return SavedScreenData.model_validate(screen)


@router.get("/{screen_id}", response_model=SavedScreenData, summary="Get a Saved Screen")
async def get_saved_screen(
    screen_id: str,
    user_id: str = Depends(require_user),
    service: SavedScreenService = Depends(get_saved_screen_service),
):
    screen = await _get_owned_screen(service, screen_id, user_id)
    return SavedScreenData.model_validate(screen)


@router.patch(
    "/{screen_id}", response_model=SavedScreenData, summary="Update a Saved Screen"
)
async def update_saved_screen(
    screen_id: str,
    body: SavedScreenUpdate,
    user_id: str = Depends(require_user),
    service: SavedScreenService = Depends(get_saved_screen_service),
):
    screen = await _get_owned_screen(service, screen_id, user_id)

    filters = parse_filter_spec(body.filters) if body.filters is not None else None
    screen = await service.update(
        screen,
        name=body.name,
        filters=filters,
        description=body.description,
        description_set="description" in body.model_fields_set,
    )
    return SavedScreenData.model_validate(screen)


@router.delete("/{screen_id}", response_model=DeleteResult, summary="Delete a Saved Screen")
async def delete_saved_screen(
    screen_id: str,
    user_id: str = Depends(require_user),
    service: SavedScreenService = Depends(get_saved_screen_service),
):
    screen = await _get_owned_screen(service, screen_id, user_id)
    await service.delete(screen)

    logger.info(f"User {user_id} deleted screen {screen_id}")
    return DeleteResult(success=True, message="Screen deleted successfully")
