from collections.abc import AsyncGenerator
from datetime import datetime, timezone

from sqlalchemy import event, inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from foodtruck.core.config import settings


def utcnow() -> datetime:
    """Naive UTC timestamp, the format SQLite stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):

    @property
    def to_schema(self) -> dict:
        """Column values keyed by attribute name; models add derived fields on top."""
        return {attr.key: getattr(self, attr.key) for attr in sa_inspect(self).mapper.column_attrs}


engine = create_async_engine(settings.database_url, echo=settings.database_echo)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


@event.listens_for(engine.sync_engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def create_db_and_tables():
    from .migrations import add_missing_columns

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await add_missing_columns(engine)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


# Register every model on Base.metadata and re-export for routers
from .business import BusinessInfo, Setting  # noqa: E402,F401
from .catering import ArchivedCatering, CateringOrder  # noqa: E402,F401
from .contact import Contact, Note  # noqa: E402,F401
from .employee import (  # noqa: E402,F401
    Availability,
    Employee,
    PerformanceReview,
    Schedule,
    ShiftSwap,
    TimePunch,
)
from .equipment import EquipmentTracking, MaintenanceTask, Tool  # noqa: E402,F401
from .event import ArchivedEvent, Event  # noqa: E402,F401
from .expense import Expense  # noqa: E402,F401
from .file import StoredFile  # noqa: E402,F401
from .ingredient import Ingredient  # noqa: E402,F401
from .inventory import InventoryHistory, InventoryItem, WasteLog  # noqa: E402,F401
from .license import License  # noqa: E402,F401
from .menu import MenuItem, RecipeLine  # noqa: E402,F401
from .menu_special import MenuSpecial  # noqa: E402,F401
from .recipe_book import RecipeBookEntry  # noqa: E402,F401
from .review import Review  # noqa: E402,F401
from .supplier import Supplier  # noqa: E402,F401
from .users import User  # noqa: E402,F401
