# apps/api_server/services/saved_screens.py

from typing import List, Optional
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from packages.database.models import SavedScreen, utcnow
from packages.screener.models import FilterSpec


def serialize_filters(filters: FilterSpec) -> dict:
    """Stored form: wire names, absent clauses dropped."""
    return filters.model_dump(mode="json", exclude_none=True)


class SavedScreenService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_for_user(self, user_id: str) -> List[SavedScreen]:
        stmt = (
            select(SavedScreen)
            .where(SavedScreen.user_id == user_id)
            .order_by(desc(SavedScreen.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, screen_id: str) -> Optional[SavedScreen]:
        return await self.session.get(SavedScreen, screen_id)

    async def create(
        self,
        user_id: str,
        name: str,
        filters: FilterSpec,
        description: Optional[str] = None,
    ) -> SavedScreen:
        screen = SavedScreen(
            user_id=user_id,
            name=name,
            description=description or None,
            filters_json=serialize_filters(filters),
        )
        self.session.add(screen)
        await self.session.flush()
        return screen

    async def update(
        self,
        screen: SavedScreen,
        name: Optional[str] = None,
        filters: Optional[FilterSpec] = None,
        description: Optional[str] = None,
        description_set: bool = False,
    ) -> SavedScreen:
        """
        Partial update. `description_set` distinguishes "clear the description"
        (explicit null) from "leave it alone" (key omitted).
        """
        if name:
            screen.name = name
        if description_set:
            screen.description = description
        if filters is not None:
            screen.filters_json = serialize_filters(filters)

        screen.updated_at = utcnow()
        await self.session.flush()
        return screen

    async def delete(self, screen: SavedScreen) -> None:
        await self.session.delete(screen)
        await self.session.flush()
