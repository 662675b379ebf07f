from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from movies_api.api.deps import get_rating_service
from movies_api.core.jwt_verify import current_user_id
from movies_api.db.postgres import get_async_session
from movies_api.domain.services.rating_service import RatingService
from movies_api.models.schemas.rating import MovieRatingOut

router = APIRouter()

@router.get(
        "/me",
        response_model=list[MovieRatingOut],
        description="Все оценки текущего пользователя."
)
async def my_ratings(
    user_id: UUID = Depends(current_user_id),
    db: AsyncSession = Depends(get_async_session),
    service: RatingService = Depends(get_rating_service),
):
    return await service.list_user_ratings(db, user_id)
