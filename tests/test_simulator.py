"""
Tests for the simulated world and turtle
"""

import pytest

from turtle_farm.config import FarmConfig
from turtle_farm.pose import Heading
from turtle_farm.simulator import (
    BEDROCK,
    CHEST,
    COAL,
    DIRT,
    LEAVES,
    LOG,
    SAPLING,
    STACK_SIZE,
    SimulatedTurtle,
    SimulatedWorld,
    Stack,
    build_demo_world,
)


@pytest.fixture
def world():
    return SimulatedWorld()


@pytest.fixture
def turtle(world):
    return SimulatedTurtle(world, fuel_level=100)


class TestMovement:
    """Test fuel and obstruction rules"""

    def test_move_uses_one_fuel(self, turtle):
        result = turtle.forward()

        assert result.success
        assert turtle.position == (0, 0, -1)
        assert turtle.fuel_level == 99

    def test_out_of_fuel(self, world):
        turtle = SimulatedTurtle(world, fuel_level=0)

        result = turtle.up()

        assert result.reason == "Out of fuel"
        assert turtle.position == (0, 0, 0)

    def test_obstructed(self, world, turtle):
        world.set_block((0, -1, 0), DIRT)

        result = turtle.down()

        assert not result.success
        assert result.reason == "Movement obstructed"
        assert turtle.fuel_level == 100

    def test_back_moves_against_heading(self, world):
        turtle = SimulatedTurtle(world, heading=Heading.EAST, fuel_level=10)

        turtle.back()

        assert turtle.position == (-1, 0, 0)

    def test_turns_cost_nothing(self, turtle):
        turtle.turn_left()
        turtle.turn_left()

        assert turtle.heading is Heading.SOUTH
        assert turtle.fuel_level == 100


class TestDigAndPlace:
    """Test block interaction"""

    def test_dig_collects_block(self, world, turtle):
        world.set_block((0, 1, 0), LOG)

        assert turtle.dig_up().success
        assert world.block_at((0, 1, 0)) is None
        assert turtle.get_item_detail(1).name == LOG

    def test_leaves_drop_saplings(self, world, turtle):
        world.set_block((0, 0, -1), LEAVES)

        turtle.dig()

        assert turtle.get_item_detail(1).name == SAPLING

    def test_dig_failures(self, world, turtle):
        world.set_block((0, -1, 0), BEDROCK)

        assert turtle.dig().reason == "Nothing to dig here"
        assert turtle.dig_down().reason == "Cannot break unbreakable block"

    def test_place_uses_selected_slot(self, world, turtle):
        turtle.give(SAPLING, 2, slot=2)
        turtle.select(2)

        assert turtle.place_down().success
        assert world.block_at((0, -1, 0)) == SAPLING
        assert turtle.get_item_count(2) == 1

    def test_place_failures(self, world, turtle):
        assert turtle.place().reason == "No items to place"

        turtle.give(DIRT, 1)
        world.set_block((0, 0, -1), LOG)
        assert turtle.place().reason == "Cannot place block here"

    def test_detect(self, world, turtle):
        world.set_block((0, 1, 0), LOG)

        assert turtle.detect_up() is True
        assert turtle.detect() is False
        assert turtle.detect_down() is False


class TestItems:
    """Test inventory, drops and containers"""

    def test_give_wraps_and_reports_leftover(self, world):
        turtle = SimulatedTurtle(world, inventory_size=4)
        turtle.give(DIRT, STACK_SIZE, slot=1)
        turtle.give(COAL, STACK_SIZE, slot=2)

        leftover = turtle.give(LOG, 200, slot=3)

        assert leftover == 200 - 2 * STACK_SIZE
        assert turtle.get_item_count(3) == STACK_SIZE
        assert turtle.get_item_count(4) == STACK_SIZE

    def test_select_out_of_range(self, turtle):
        with pytest.raises(ValueError, match="Slot out of range"):
            turtle.select(17)

    def test_drop_into_chest(self, world, turtle):
        world.set_block((0, 0, -1), CHEST)
        turtle.give(LOG, 10)

        assert turtle.drop().success
        assert world.container_count((0, 0, -1), LOG) == 10
        assert turtle.drop().reason == "No items to drop"

    def test_dropped_items_can_be_picked_up(self, world, turtle):
        turtle.give(LOG, 5)
        turtle.drop(3)

        assert turtle.suck().success
        assert turtle.get_item_count(1) == 5
        assert turtle.suck().reason == "No items to take"

    def test_broken_chest_spills_contents(self, world):
        world.set_block((1, 0, 0), CHEST)
        world.containers[(1, 0, 0)].append(Stack(LOG, 4))

        world.remove_block((1, 0, 0))

        assert (1, 0, 0) not in world.containers
        assert world.dropped[(1, 0, 0)] == [Stack(LOG, 4)]

    def test_transfer_to(self, turtle):
        turtle.give(SAPLING, 10, slot=5)
        turtle.give(SAPLING, 60, slot=2)
        turtle.select(5)

        assert turtle.transfer_to(2) is True
        assert turtle.get_item_count(2) == STACK_SIZE
        assert turtle.get_item_count(5) == 6
        assert turtle.transfer_to(3, 2) is True
        assert turtle.get_item_count(3) == 2

    def test_transfer_to_refuses_other_items(self, turtle):
        turtle.give(SAPLING, 10, slot=5)
        turtle.give(DIRT, 1, slot=2)
        turtle.select(5)

        assert turtle.transfer_to(2) is False


class TestFuel:
    def test_refuel_burns_whole_stack(self, world):
        turtle = SimulatedTurtle(world, fuel_level=0)
        turtle.give(COAL, 3)

        assert turtle.refuel().success
        assert turtle.get_fuel_level() == 240
        assert turtle.get_item_count(1) == 0

    def test_refuel_capped_at_limit(self, world):
        turtle = SimulatedTurtle(world, fuel_level=0, fuel_limit=100)
        turtle.give(COAL, 3)

        turtle.refuel(2)

        assert turtle.get_fuel_level() == 100
        assert turtle.get_item_count(1) == 1

    def test_refuel_failures(self, turtle):
        assert turtle.refuel().reason == "No items to combust"
        turtle.give(DIRT, 1)
        assert turtle.refuel().reason == "Items not combustible"


class TestWorld:
    """Test tree growth and the demo layout"""

    def test_sapling_square_grows_into_tree(self, world):
        for pos in [(0, -1, 0), (1, -1, 0), (0, -1, 1), (1, -1, 1)]:
            world.set_block(pos, SAPLING)

        grown = world.grow_trees(height=4)

        assert grown == 1
        assert world.block_at((1, -1, 1)) == LOG
        assert [world.block_at((0, y, 0)) for y in range(-1, 4)] == [LOG, LOG, LOG, LOG, LEAVES]
        assert world.block_at((1, 0, 0)) is None

    def test_lone_sapling_does_not_grow(self, world):
        world.set_block((0, -1, 0), SAPLING)

        world.elapse(300)

        assert world.block_at((0, -1, 0)) == SAPLING
        assert world.clock == 300

    def test_demo_world_layout(self):
        config = FarmConfig(_env_file=None, replace_ground=True)

        world, turtle = build_demo_world(config, fuel_level=50)

        assert world.block_at((0, 0, 1)) == CHEST
        for plot in config.plots:
            for x, z in plot.cells():
                assert world.block_at((x, -2, z)) == DIRT
        assert turtle.get_item_detail(config.fuel_slot).name == COAL
        assert turtle.get_item_count(config.sapling_slot) == 64
        assert turtle.get_item_detail(config.fill_slot).name == DIRT
        assert turtle.get_fuel_level() == 50
