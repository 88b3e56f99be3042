"""Schema definitions for turtle primitive results, inventory and farm layout."""

from .inventory import *
from .layout import *
from .outcomes import *

__all__ = [
    # Outcomes
    "MoveOutcome",
    "UNKNOWN_REASON",
    # Inventory
    "ItemDetail",
    "SlotRoles",
    # Layout
    "PlotOrigin",
    "CELL_OFFSETS",
]
