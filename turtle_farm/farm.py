"""
FarmOrchestrator - runs the deposit, plant, wait, harvest cycle over all plots
"""

import time
from typing import Callable, Optional

from .config import FarmConfig, get_config
from .inventory import InventoryManager
from .logging_config import get_logger
from .movement import GuardedMover
from .navigator import Navigator
from .pose import Heading, Pose, PoseTracker
from .tasks import PlotTasks
from .turtle_api import TurtleAPI

logger = get_logger(__name__)

CANONICAL_HEADING = Heading.NORTH


class FarmOrchestrator:
    """Drives one turtle through the farm cycle

    Home is the relative origin; the deposit chest sits directly behind it.
    """

    def __init__(
        self,
        turtle: TurtleAPI,
        config: Optional[FarmConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        tracker: Optional[PoseTracker] = None,
    ):
        self.turtle = turtle
        self.config = config or get_config()
        self.sleep = sleep
        self.tracker = tracker or PoseTracker()
        self.mover = GuardedMover(turtle, self.tracker)
        self.navigator = Navigator(self.mover, self.tracker)
        self.inventory = InventoryManager(turtle, self.mover, self.config)
        self.tasks = PlotTasks(turtle, self.mover, self.navigator, self.inventory, self.config)

    @property
    def pose(self) -> Pose:
        return self.tracker.pose

    def go_home(self) -> None:
        """Return to the farm origin and face the canonical heading"""
        self.navigator.move_to(0, 0, 0)
        self.navigator.face(CANONICAL_HEADING)

    def plant_farm(self) -> int:
        logger.info("Starting planting phase", plots=len(self.config.plots))
        self.go_home()
        planted = 0
        for plot in self.config.plots:
            self.navigator.move_to(plot.x, 0, plot.z)
            planted += self.tasks.plant(plot)
        self.go_home()
        logger.info("Finished planting farm", planted=planted)
        return planted

    def wait_for_growth(self) -> None:
        logger.info("Waiting for trees to grow", seconds=self.config.growth_wait_seconds)
        self.sleep(self.config.growth_wait_seconds)
        logger.info("Finished waiting")

    def harvest_farm(self) -> None:
        logger.info("Starting harvesting phase", plots=len(self.config.plots))
        self.go_home()
        for plot in self.config.plots:
            self.navigator.move_to(plot.x, 0, plot.z)
            self.tasks.harvest(plot)
            # Digging burns a lot of fuel
            self.inventory.refuel_if_needed()
        self.go_home()
        logger.info("Finished harvesting farm")

    def run_cycle(self) -> None:
        """One full farm cycle; fatal errors propagate to the caller"""
        self.inventory.refuel_if_needed()
        self.go_home()
        self.inventory.consolidate_roles()
        self.inventory.deposit_surplus()
        self.plant_farm()
        self.wait_for_growth()
        self.harvest_farm()

    def run(self, cycles: Optional[int] = None) -> int:
        """Repeat the farm cycle, forever when `cycles` is None

        Returns:
            Number of completed cycles
        """
        logger.info("Tree farm automation started", plots=len(self.config.plots), cycles=cycles)
        completed = 0
        while cycles is None or completed < cycles:
            self.run_cycle()
            completed += 1
            if cycles is not None and completed >= cycles:
                break
            logger.info("Cycle complete, pausing", cycle=completed, seconds=self.config.cycle_pause_seconds)
            self.sleep(self.config.cycle_pause_seconds)
        logger.info("Tree farm automation finished", cycles=completed)
        return completed
