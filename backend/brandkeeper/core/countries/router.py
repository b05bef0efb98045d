from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.countries import service
from brandkeeper.core.countries.schemas import CountryRead
from brandkeeper.core.responses import Envelope, ok
from brandkeeper.dependencies import CurrentUser, get_current_user, get_db

router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=Envelope[list[CountryRead]])
async def list_countries(db: AsyncSession = Depends(get_db), _: CurrentUser = Depends(get_current_user)):
    return ok(await service.list_countries(db))
