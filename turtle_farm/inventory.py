"""
Inventory and fuel policy - refueling, stack consolidation and deposits
"""

from .config import FarmConfig
from .errors import InsufficientResourcesError, RefuelError
from .logging_config import get_logger
from .movement import GuardedMover
from .turtle_api import TurtleAPI

logger = get_logger(__name__)


class InventoryManager:
    """Applies the slot role configuration to a turtle's inventory"""

    def __init__(self, turtle: TurtleAPI, mover: GuardedMover, config: FarmConfig):
        self.turtle = turtle
        self.mover = mover
        self.config = config
        self.roles = config.slot_roles

    def require(self, slot: int, count: int, resource: str) -> int:
        """Check a slot holds at least `count` items

        Raises:
            InsufficientResourcesError: the slot holds fewer
        """
        available = self.turtle.get_item_count(slot)
        if available < count:
            logger.error("Insufficient resources", resource=resource, slot=slot, required=count, available=available)
            raise InsufficientResourcesError(resource, count, available)
        return available

    def refuel_if_needed(self) -> bool:
        """Refuel from the fuel slot when below the configured fraction of the limit

        Returns:
            True if the turtle refueled
        """
        level = self.turtle.get_fuel_level()
        threshold = self.turtle.get_fuel_limit() * self.config.refuel_fraction
        if level >= threshold:
            return False

        logger.info("Fuel low, attempting to refuel", fuel_level=level, threshold=threshold)
        previous_slot = self.turtle.get_selected_slot()
        self.turtle.select(self.roles.fuel)
        result = self.turtle.refuel()
        self.turtle.select(previous_slot)

        if not result.success:
            logger.error("Failed to refuel", slot=self.roles.fuel, reason=result.reason)
            raise RefuelError(f"Failed to refuel from slot {self.roles.fuel}: {result.reason}")

        logger.info("Refueled successfully", fuel_level=self.turtle.get_fuel_level())
        return True

    def consolidate(self, slot: int) -> int:
        """Move matching stacks from other slots into `slot`

        Returns:
            Number of slots that were transferred from
        """
        target = self.turtle.get_item_detail(slot)
        if target is None:
            return 0

        moved = 0
        previous_slot = self.turtle.get_selected_slot()
        for other in range(1, self.roles.inventory_size + 1):
            if other == slot:
                continue
            detail = self.turtle.get_item_detail(other)
            if detail is None or detail.name != target.name:
                continue
            self.turtle.select(other)
            if self.turtle.transfer_to(slot):
                moved += 1
            else:
                logger.debug("Role slot full, leaving stack in place", item=detail.name, slot=other, target=slot)
        self.turtle.select(previous_slot)

        if moved:
            logger.info("Consolidated stacks", item=target.name, slot=slot, sources=moved)
        return moved

    def consolidate_roles(self) -> None:
        # Saplings first: an emptied fuel slot can pick up stray saplings
        self.consolidate(self.roles.sapling)
        if self.config.replace_ground:
            self.consolidate(self.roles.fill)
        self.consolidate(self.roles.fuel)

    def deposit_surplus(self) -> int:
        """Drop everything but the reserved role slots into the chest behind the turtle

        Returns:
            Number of items dropped
        """
        logger.info("Depositing surplus items into chest")
        reserved = self.roles.reserved(include_fill=self.config.replace_ground)

        self.mover.turn_left()
        self.mover.turn_left()

        dropped = 0
        for slot in range(1, self.roles.inventory_size + 1):
            if slot in reserved:
                continue
            detail = self.turtle.get_item_detail(slot)
            if detail is None:
                continue
            self.turtle.select(slot)
            result = self.turtle.drop()
            if result.success:
                logger.info("Dropped items", item=detail.name, count=detail.count, slot=slot)
                dropped += detail.count - self.turtle.get_item_count(slot)
            else:
                logger.warning("Failed to drop items", item=detail.name, slot=slot, reason=result.reason)

        self.mover.turn_left()
        self.mover.turn_left()

        logger.info("Finished depositing items", dropped=dropped)
        return dropped
