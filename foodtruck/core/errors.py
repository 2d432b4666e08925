"""Domain errors raised by services and mapped to HTTP responses in `exception_handlers`."""

from fastapi import status


class FoodTruckError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(FoodTruckError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(FoodTruckError):
    status_code = status.HTTP_409_CONFLICT


class ValidationFailed(FoodTruckError):
    status_code = status.HTTP_400_BAD_REQUEST


class InventoryItemNotFound(NotFoundError):
    def __init__(self, item_id: int):
        super().__init__(f"Inventory item {item_id} not found")
        self.item_id = item_id


class StockConflict(ConflictError):
    pass


class ArchiveConflict(ConflictError):
    pass
