"""
Plot tasks - planting and harvesting one 2x2 plot

Both tasks start at the plot's travel altitude and leave the turtle in
exactly the pose it started in. Saplings sit one layer below the travel
altitude, soil two layers below.
"""

from .config import FarmConfig
from .errors import PlacementError
from .inventory import InventoryManager
from .logging_config import get_logger
from .movement import GuardedMover
from .navigator import Navigator
from .schemas import PlotOrigin
from .turtle_api import TurtleAPI

logger = get_logger(__name__)

SAPLINGS_PER_PLOT = 4


class PlotTasks:
    """Plant and harvest state machines for a single plot"""

    def __init__(
        self,
        turtle: TurtleAPI,
        mover: GuardedMover,
        navigator: Navigator,
        inventory: InventoryManager,
        config: FarmConfig,
    ):
        self.turtle = turtle
        self.mover = mover
        self.navigator = navigator
        self.inventory = inventory
        self.config = config
        self.roles = config.slot_roles

    def plant(self, plot: PlotOrigin) -> int:
        """Plant four saplings on the plot

        Returns:
            Number of saplings placed

        Raises:
            InsufficientResourcesError: not enough saplings (or fill blocks)
            PlacementError: a ground fill block could not be placed
        """
        logger.info("Planting plot", plot_x=plot.x, plot_z=plot.z)
        start = self.navigator.pose

        self.inventory.require(self.roles.sapling, SAPLINGS_PER_PLOT, "saplings")
        if self.config.replace_ground:
            self.inventory.require(self.roles.fill, SAPLINGS_PER_PLOT, "fill blocks")

        planted = 0
        for x, z in plot.cells():
            self.navigator.move_to(x, start.y, z)
            if self.config.replace_ground:
                self._replace_ground(x, z)

            self.turtle.select(self.roles.sapling)
            result = self.turtle.place_down()
            if result.success:
                planted += 1
            else:
                # The cell may already hold a sapling
                logger.warning("Failed to plant sapling", x=x, z=z, reason=result.reason)

        self.navigator.move_to(plot.x, start.y, plot.z)
        self.navigator.return_to(start)
        logger.info("Finished planting plot", plot_x=plot.x, plot_z=plot.z, planted=planted)
        return planted

    def _replace_ground(self, x: int, z: int) -> None:
        self.mover.down()
        dug = self.turtle.dig_down()
        if not dug.success:
            logger.warning("Nothing to clear under sapling cell", x=x, z=z, reason=dug.reason)

        self.turtle.select(self.roles.fill)
        placed = self.turtle.place_down()
        if not placed.success:
            logger.error("Failed to place ground fill", x=x, z=z, reason=placed.reason)
            raise PlacementError(f"Failed to place ground fill at ({x}, {z}): {placed.reason}")
        self.mover.up()

    def harvest(self, plot: PlotOrigin) -> int:
        """Fell the tree on the plot and collect what it dropped

        Returns:
            Number of ascent steps taken while clearing the trunk
        """
        logger.info("Harvesting plot", plot_x=plot.x, plot_z=plot.z)
        start = self.navigator.pose
        self.turtle.select(self.roles.scratch)

        for x, z in plot.cells():
            # Log bases stand in the sapling layer, one below travel altitude
            self.navigator.move_to(x, start.y, z)
            dug = self.turtle.dig_down()
            if not dug.success:
                logger.warning("Failed to dig base block", x=x, z=z, reason=dug.reason)

        self.navigator.move_to(plot.x, start.y, plot.z)
        height = self._clear_trunk(start.y)
        self._collect_drops()

        self.navigator.return_to(start)
        logger.info("Finished harvesting plot", plot_x=plot.x, plot_z=plot.z, height=height)
        return height

    def _clear_trunk(self, ground_y: int) -> int:
        height = 0
        while height < self.config.max_harvest_height and self.turtle.detect_up():
            self.mover.up()
            dug = self.turtle.dig_down()
            if not dug.success:
                logger.debug("Nothing to dig below while ascending", height=height, reason=dug.reason)
            height += 1

        if height == self.config.max_harvest_height:
            logger.warning("Reached maximum harvest height", height=height)

        while self.navigator.pose.y > ground_y:
            self.mover.down()
            dug = self.turtle.dig_up()
            if not dug.success:
                logger.debug("Nothing to dig above while descending", y=self.navigator.pose.y, reason=dug.reason)
        return height

    def _collect_drops(self) -> None:
        collected = 0
        for _ in range(4):
            if self.turtle.suck().success:
                collected += 1
            self.mover.turn_right()
        for suck in (self.turtle.suck_down, self.turtle.suck_up):
            if suck().success:
                collected += 1
        logger.debug("Collected dropped items", pickups=collected)
