import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from foodtruck.core.auth import auth_backend, current_active_superuser, current_active_user, fastapi_users
from foodtruck.core.config import settings
from foodtruck.core.exception_handlers import setup_exception_handlers
from foodtruck.core.log_config import configure_logging
from foodtruck.db.database import create_db_and_tables
from foodtruck.routers.backup import router as backup_router
from foodtruck.routers.business import router as business_router, settings_router
from foodtruck.routers.contacts import contacts_router, notes_router
from foodtruck.routers.employees import (
    availability_router,
    employees_router,
    performance_reviews_router,
    schedules_router,
    shift_swaps_router,
    time_punches_router,
)
from foodtruck.routers.events import (
    archived_catering_router,
    archived_events_router,
    catering_router,
    events_router,
)
from foodtruck.routers.files import files_router, upload_router
from foodtruck.routers.ingredients import router as ingredients_router
from foodtruck.routers.inventory import (
    history_router,
    reports_router,
    router as inventory_router,
    waste_router,
)
from foodtruck.routers.menu import recipes_router, router as menu_router
from foodtruck.routers.menu_specials import public_router as menu_specials_public_router
from foodtruck.routers.menu_specials import router as menu_specials_router
from foodtruck.routers.operations import (
    equipment_router,
    expenses_router,
    licenses_router,
    maintenance_router,
    recipe_book_router,
    reviews_router,
    tools_router,
)
from foodtruck.routers.suppliers import router as suppliers_router
from foodtruck.routers.users import router as login_router
from foodtruck.schemas.users import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await create_db_and_tables()
    logger.info("Database ready at %s", settings.database_url)
    yield


app = FastAPI(
    title="Food Truck Manager API",
    description="API for running a food truck: menu costing, inventory, staff, events and catering",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)


# Authentication routes (fastapi-users)
app.include_router(fastapi_users.get_auth_router(auth_backend), prefix="/api/auth/jwt", tags=["auth"])
# Only the owner creates accounts
app.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
    prefix="/api/auth",
    tags=["auth"],
    dependencies=[Depends(current_active_superuser)],
)
app.include_router(fastapi_users.get_reset_password_router(), prefix="/api/auth", tags=["auth"])
app.include_router(fastapi_users.get_users_router(UserRead, UserUpdate), prefix="/api/users", tags=["users"])
app.include_router(login_router, prefix="/api/login", tags=["auth"])

# Public menu board; registered before the protected /{item_id} routes
app.include_router(menu_specials_public_router, prefix="/api/menu-specials", tags=["menu-specials"])

# Business info: GET is public, writes check the user per route
app.include_router(business_router, prefix="/api/business-info", tags=["business"])

# Backup routes check for a superuser themselves
app.include_router(backup_router, prefix="/api/backup", tags=["backup"])

protected = [Depends(current_active_user)]

PROTECTED_ROUTERS = [
    (menu_router, "/api/menu", "menu"),
    (recipes_router, "/api/recipes", "menu"),
    (ingredients_router, "/api/ingredients", "ingredients"),
    (suppliers_router, "/api/suppliers", "suppliers"),
    (inventory_router, "/api/inventory", "inventory"),
    (history_router, "/api/inventory-history", "inventory"),
    (history_router, "/api/inventory-transactions", "inventory"),
    (waste_router, "/api/waste-log", "inventory"),
    (reports_router, "/api/reports", "reports"),
    (menu_specials_router, "/api/menu-specials", "menu-specials"),
    (employees_router, "/api/employees", "staff"),
    (time_punches_router, "/api/time-punches", "staff"),
    (schedules_router, "/api/schedules", "staff"),
    (availability_router, "/api/availability", "staff"),
    (shift_swaps_router, "/api/shift-swaps", "staff"),
    (performance_reviews_router, "/api/performance-reviews", "staff"),
    (events_router, "/api/events", "events"),
    (archived_events_router, "/api/archived-events", "events"),
    (catering_router, "/api/catering", "catering"),
    (archived_catering_router, "/api/archived-catering", "catering"),
    (reviews_router, "/api/reviews", "operations"),
    (expenses_router, "/api/expenses", "operations"),
    (tools_router, "/api/tools", "operations"),
    (equipment_router, "/api/equipment", "operations"),
    (licenses_router, "/api/licenses", "operations"),
    (maintenance_router, "/api/maintenance-tasks", "operations"),
    (recipe_book_router, "/api/recipe-book", "operations"),
    (contacts_router, "/api/contacts", "contacts"),
    (notes_router, "/api/notes", "contacts"),
    (files_router, "/api/files", "files"),
    (settings_router, "/api/settings", "settings"),
    (upload_router, "/upload", "files"),
]

for router, prefix, tag in PROTECTED_ROUTERS:
    app.include_router(router, prefix=prefix, tags=[tag], dependencies=protected)

# Stored uploads, then the client bundle last so it never shadows an API route
Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")
if Path(settings.static_dir).is_dir():
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")


def run():
    configure_logging()
    kwargs = {}
    if settings.tls_enabled:
        kwargs = {"ssl_certfile": settings.ssl_certfile, "ssl_keyfile": settings.ssl_keyfile}
        logger.info("Serving HTTPS on port %s", settings.port)
    else:
        logger.info("Certificates not found; serving HTTP on port %s", settings.port)
    uvicorn.run("foodtruck.main:app", host=settings.host, port=settings.port, **kwargs)


if __name__ == "__main__":
    run()
