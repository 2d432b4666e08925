from sqlalchemy import func

from foodtruck.db.database import Supplier as SupplierModel
from foodtruck.routers.crud import build_crud_router
from foodtruck.schemas.suppliers import SupplierCreate, SupplierUpdate

router = build_crud_router(
    SupplierModel,
    SupplierCreate,
    SupplierUpdate,
    label="Supplier",
    search_fields=("name", "contact"),
    order_by=(func.lower(SupplierModel.name).asc(),),
)
