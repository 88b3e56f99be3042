"""
Simulated block world and turtle

An in-memory TurtleAPI implementation used by the CLI demo and the tests.
It tracks the turtle's true position separately from the engine's belief,
uses one unit of fuel per move, and reports failures with the same reason
strings as the in-game turtle.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .config import FarmConfig
from .logging_config import get_logger
from .pose import Heading
from .schemas import ItemDetail, MoveOutcome
from .turtle_api import TurtleAPI

logger = get_logger(__name__)

Position = Tuple[int, int, int]

STACK_SIZE = 64
DEFAULT_FUEL_LIMIT = 20000

SAPLING = "minecraft:spruce_sapling"
LOG = "minecraft:spruce_log"
LEAVES = "minecraft:spruce_leaves"
DIRT = "minecraft:dirt"
COAL = "minecraft:coal"
CHEST = "minecraft:chest"
BEDROCK = "minecraft:bedrock"

FUEL_VALUES = {
    COAL: 80,
    "minecraft:charcoal": 80,
    LOG: 15,
    "minecraft:oak_log": 15,
    "minecraft:stick": 5,
}

# Block -> item it drops when dug
BLOCK_DROPS = {
    LEAVES: SAPLING,
    "minecraft:grass_block": DIRT,
}

UNBREAKABLE = {BEDROCK}


@dataclass
class Stack:
    name: str
    count: int


class SimulatedWorld:
    """Sparse block world: anything not in `blocks` is air"""

    def __init__(self):
        self.blocks: Dict[Position, str] = {}
        self.dropped: Dict[Position, List[Stack]] = {}
        self.containers: Dict[Position, List[Stack]] = {}
        self.clock = 0.0

    def set_block(self, position: Position, name: str) -> None:
        self.blocks[position] = name
        if name == CHEST:
            self.containers.setdefault(position, [])

    def block_at(self, position: Position) -> Optional[str]:
        return self.blocks.get(position)

    def remove_block(self, position: Position) -> Optional[str]:
        name = self.blocks.pop(position, None)
        # A broken container spills its contents
        for stack in self.containers.pop(position, []):
            self.drop_items(position, stack.name, stack.count)
        return name

    def drop_items(self, position: Position, name: str, count: int) -> None:
        if count > 0:
            self.dropped.setdefault(position, []).append(Stack(name, count))

    def container_count(self, position: Position, name: Optional[str] = None) -> int:
        return sum(s.count for s in self.containers.get(position, []) if name is None or s.name == name)

    def grow_trees(self, height: int = 6) -> int:
        """Turn every 2x2 group of saplings into a tree

        The four saplings become log bases; the northwest base carries a log
        trunk of `height` blocks in total, topped with leaves.

        Returns:
            Number of trees grown
        """
        grown = 0
        saplings = sorted(pos for pos, name in self.blocks.items() if name == SAPLING)
        for x, y, z in saplings:
            group = [(x, y, z), (x + 1, y, z), (x, y, z + 1), (x + 1, y, z + 1)]
            if not all(self.blocks.get(pos) == SAPLING for pos in group):
                continue
            for pos in group:
                self.blocks[pos] = LOG
            for dy in range(1, height):
                self.blocks.setdefault((x, y + dy, z), LOG)
            self.blocks.setdefault((x, y + height, z), LEAVES)
            grown += 1
        if grown:
            logger.debug("Simulated trees grew", trees=grown)
        return grown

    def elapse(self, seconds: float) -> None:
        """Advance simulated time; saplings mature whenever time passes"""
        self.clock += seconds
        self.grow_trees()


class SimulatedTurtle(TurtleAPI):
    """A turtle living in a SimulatedWorld"""

    def __init__(
        self,
        world: SimulatedWorld,
        position: Position = (0, 0, 0),
        heading: Heading = Heading.NORTH,
        fuel_level: int = 0,
        fuel_limit: int = DEFAULT_FUEL_LIMIT,
        inventory_size: int = 16,
    ):
        self.world = world
        self.position = position
        self.heading = heading
        self.fuel_level = fuel_level
        self.fuel_limit = fuel_limit
        self.inventory_size = inventory_size
        self.slots: List[Optional[Stack]] = [None] * inventory_size
        self.selected = 1

    # Helpers

    def _offset(self, direction: str) -> Position:
        x, y, z = self.position
        if direction == "up":
            return (x, y + 1, z)
        if direction == "down":
            return (x, y - 1, z)
        dx, dz = self.heading.forward_delta
        if direction == "back":
            dx, dz = -dx, -dz
        return (x + dx, y, z + dz)

    def _check_slot(self, slot: int) -> int:
        if not 1 <= slot <= self.inventory_size:
            raise ValueError(f"Slot out of range ({slot})")
        return slot

    def _stack(self, slot: Optional[int] = None) -> Optional[Stack]:
        slot = self.selected if slot is None else self._check_slot(slot)
        return self.slots[slot - 1]

    def _take(self, slot: int, count: int) -> None:
        stack = self.slots[slot - 1]
        stack.count -= count
        if stack.count <= 0:
            self.slots[slot - 1] = None

    def give(self, name: str, count: int, slot: Optional[int] = None) -> int:
        """Insert items, starting at `slot` (default: selected) and wrapping around

        Returns:
            Number of items that did not fit
        """
        start = self.selected if slot is None else self._check_slot(slot)
        order = list(range(start, self.inventory_size + 1)) + list(range(1, start))
        for index in order:
            if count == 0:
                break
            stack = self.slots[index - 1]
            if stack is None:
                moved = min(count, STACK_SIZE)
                self.slots[index - 1] = Stack(name, moved)
            elif stack.name == name:
                moved = min(count, STACK_SIZE - stack.count)
                stack.count += moved
            else:
                continue
            count -= moved
        return count

    def _move(self, direction: str) -> MoveOutcome:
        if self.fuel_level <= 0:
            return MoveOutcome.failed("Out of fuel")
        target = self._offset(direction)
        if self.world.block_at(target) is not None:
            return MoveOutcome.failed("Movement obstructed")
        self.position = target
        self.fuel_level -= 1
        return MoveOutcome.ok()

    def _dig(self, direction: str) -> MoveOutcome:
        target = self._offset(direction)
        name = self.world.block_at(target)
        if name is None:
            return MoveOutcome.failed("Nothing to dig here")
        if name in UNBREAKABLE:
            return MoveOutcome.failed("Cannot break unbreakable block")
        self.world.remove_block(target)
        leftover = self.give(BLOCK_DROPS.get(name, name), 1)
        self.world.drop_items(self.position, BLOCK_DROPS.get(name, name), leftover)
        return MoveOutcome.ok()

    def _place(self, direction: str) -> MoveOutcome:
        stack = self._stack()
        if stack is None:
            return MoveOutcome.failed("No items to place")
        target = self._offset(direction)
        if self.world.block_at(target) is not None:
            return MoveOutcome.failed("Cannot place block here")
        self.world.set_block(target, stack.name)
        self._take(self.selected, 1)
        return MoveOutcome.ok()

    def _suck(self, direction: str) -> MoveOutcome:
        target = self._offset(direction)
        pile = self.world.containers.get(target) or self.world.dropped.get(target)
        if not pile:
            return MoveOutcome.failed("No items to take")
        stack = pile[0]
        leftover = self.give(stack.name, stack.count)
        if leftover == stack.count:
            return MoveOutcome.failed("No space for items")
        if leftover:
            stack.count = leftover
        else:
            pile.pop(0)
        return MoveOutcome.ok()

    # Movement

    def forward(self) -> MoveOutcome:
        return self._move("front")

    def back(self) -> MoveOutcome:
        return self._move("back")

    def up(self) -> MoveOutcome:
        return self._move("up")

    def down(self) -> MoveOutcome:
        return self._move("down")

    def turn_left(self) -> MoveOutcome:
        self.heading = self.heading.left()
        return MoveOutcome.ok()

    def turn_right(self) -> MoveOutcome:
        self.heading = self.heading.right()
        return MoveOutcome.ok()

    # Digging

    def dig(self) -> MoveOutcome:
        return self._dig("front")

    def dig_up(self) -> MoveOutcome:
        return self._dig("up")

    def dig_down(self) -> MoveOutcome:
        return self._dig("down")

    # Placement

    def place(self) -> MoveOutcome:
        return self._place("front")

    def place_up(self) -> MoveOutcome:
        return self._place("up")

    def place_down(self) -> MoveOutcome:
        return self._place("down")

    # Detection

    def detect(self) -> bool:
        return self.world.block_at(self._offset("front")) is not None

    def detect_up(self) -> bool:
        return self.world.block_at(self._offset("up")) is not None

    def detect_down(self) -> bool:
        return self.world.block_at(self._offset("down")) is not None

    # Pickup and drop

    def suck(self) -> MoveOutcome:
        return self._suck("front")

    def suck_up(self) -> MoveOutcome:
        return self._suck("up")

    def suck_down(self) -> MoveOutcome:
        return self._suck("down")

    def drop(self, count: Optional[int] = None) -> MoveOutcome:
        stack = self._stack()
        if stack is None:
            return MoveOutcome.failed("No items to drop")
        count = stack.count if count is None else min(count, stack.count)
        target = self._offset("front")
        if target in self.world.containers:
            self.world.containers[target].append(Stack(stack.name, count))
        else:
            self.world.drop_items(target, stack.name, count)
        self._take(self.selected, count)
        return MoveOutcome.ok()

    # Inventory

    def select(self, slot: int) -> bool:
        self.selected = self._check_slot(slot)
        return True

    def get_selected_slot(self) -> int:
        return self.selected

    def get_item_detail(self, slot: Optional[int] = None) -> Optional[ItemDetail]:
        stack = self._stack(slot)
        if stack is None:
            return None
        return ItemDetail(name=stack.name, count=stack.count)

    def get_item_count(self, slot: Optional[int] = None) -> int:
        stack = self._stack(slot)
        return stack.count if stack else 0

    def transfer_to(self, slot: int, count: Optional[int] = None) -> bool:
        source = self._stack()
        target = self._stack(slot)
        if source is None or slot == self.selected:
            return False
        if target is not None and target.name != source.name:
            return False
        space = STACK_SIZE - (target.count if target else 0)
        moved = min(source.count if count is None else count, source.count, space)
        if moved <= 0:
            return False
        if target is None:
            self.slots[slot - 1] = Stack(source.name, moved)
        else:
            target.count += moved
        self._take(self.selected, moved)
        return True

    # Fuel

    def get_fuel_level(self) -> int:
        return self.fuel_level

    def get_fuel_limit(self) -> int:
        return self.fuel_limit

    def refuel(self, count: Optional[int] = None) -> MoveOutcome:
        stack = self._stack()
        if stack is None:
            return MoveOutcome.failed("No items to combust")
        value = FUEL_VALUES.get(stack.name)
        if value is None:
            return MoveOutcome.failed("Items not combustible")
        count = stack.count if count is None else min(count, stack.count)
        self.fuel_level = min(self.fuel_limit, self.fuel_level + count * value)
        if count:
            self._take(self.selected, count)
        return MoveOutcome.ok()


def build_demo_world(
    config: FarmConfig,
    fuel_level: int = 1000,
    saplings: int = 64,
) -> Tuple[SimulatedWorld, SimulatedTurtle]:
    """A world laid out for `config`: soil under every plot and a chest behind home

    The turtle starts at home facing north with coal, saplings and (when ground
    replacement is on) dirt in their role slots.
    """
    world = SimulatedWorld()
    for plot in config.plots:
        for x, z in plot.cells():
            world.set_block((x, -2, z), DIRT)
    world.set_block((0, 0, 1), CHEST)

    turtle = SimulatedTurtle(world, fuel_level=fuel_level, inventory_size=config.inventory_size)
    turtle.give(COAL, STACK_SIZE, slot=config.fuel_slot)
    turtle.give(SAPLING, saplings, slot=config.sapling_slot)
    if config.replace_ground:
        turtle.give(DIRT, STACK_SIZE, slot=config.fill_slot)
    logger.info("Built simulated farm world", plots=len(config.plots), fuel_level=fuel_level)
    return world, turtle
