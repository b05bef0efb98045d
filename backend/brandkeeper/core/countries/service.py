from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.countries.models import Country


async def list_countries(db: AsyncSession) -> list[Country]:
    result = await db.execute(select(Country).order_by(Country.region, Country.name))
    return list(result.scalars().all())
