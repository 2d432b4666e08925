"""
Inventory stock ledger.

Models:
- InventoryItem (cached current_stock, optionally linked to an Ingredient)
- InventoryHistory (append-only deltas written alongside every stock change)
- WasteLog (reason-tagged usage; each row is paired with a history row)
"""

from .history import InventoryHistory
from .item import InventoryItem
from .waste import WasteLog

__all__ = ["InventoryItem", "InventoryHistory", "WasteLog"]
