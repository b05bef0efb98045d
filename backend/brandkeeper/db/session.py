from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from brandkeeper.settings import get_settings

settings = get_settings()

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.APP_DEBUG and settings.LOG_LEVEL.upper() == "DEBUG",
    pool_pre_ping=True,
    pool_size=10,
    max_overflow=20,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        async with session.begin():
            yield session


AFTER_COMMIT = "after_commit"
AFTER_ROLLBACK = "after_rollback"
TransactionHook = Callable[[], Awaitable[None]]


def after_commit(session: AsyncSession, hook: TransactionHook) -> None:
    session.info.setdefault(AFTER_COMMIT, []).append(hook)


def after_rollback(session: AsyncSession, hook: TransactionHook) -> None:
    session.info.setdefault(AFTER_ROLLBACK, []).append(hook)


async def run_transaction_hooks(session: AsyncSession, committed: bool) -> None:
    """Run the side effects registered for the outcome and drop the others."""
    on_commit = session.info.pop(AFTER_COMMIT, [])
    on_rollback = session.info.pop(AFTER_ROLLBACK, [])
    for hook in on_commit if committed else on_rollback:
        await hook()
