"""
TurtleAPI - the capability surface the farm engine drives

Every action returns a MoveOutcome; detection calls return a plain bool.
Slots are 1-based, matching the in-game turtle API.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .schemas import ItemDetail, MoveOutcome


class TurtleAPI(ABC):
    """Abstract capability surface of a single turtle"""

    # Movement
    @abstractmethod
    def forward(self) -> MoveOutcome: ...

    @abstractmethod
    def back(self) -> MoveOutcome: ...

    @abstractmethod
    def up(self) -> MoveOutcome: ...

    @abstractmethod
    def down(self) -> MoveOutcome: ...

    @abstractmethod
    def turn_left(self) -> MoveOutcome: ...

    @abstractmethod
    def turn_right(self) -> MoveOutcome: ...

    # Digging
    @abstractmethod
    def dig(self) -> MoveOutcome: ...

    @abstractmethod
    def dig_up(self) -> MoveOutcome: ...

    @abstractmethod
    def dig_down(self) -> MoveOutcome: ...

    # Placement
    @abstractmethod
    def place(self) -> MoveOutcome: ...

    @abstractmethod
    def place_up(self) -> MoveOutcome: ...

    @abstractmethod
    def place_down(self) -> MoveOutcome: ...

    # Detection
    @abstractmethod
    def detect(self) -> bool: ...

    @abstractmethod
    def detect_up(self) -> bool: ...

    @abstractmethod
    def detect_down(self) -> bool: ...

    # Pickup and drop
    @abstractmethod
    def suck(self) -> MoveOutcome: ...

    @abstractmethod
    def suck_up(self) -> MoveOutcome: ...

    @abstractmethod
    def suck_down(self) -> MoveOutcome: ...

    @abstractmethod
    def drop(self, count: Optional[int] = None) -> MoveOutcome: ...

    # Inventory
    @abstractmethod
    def select(self, slot: int) -> bool: ...

    @abstractmethod
    def get_selected_slot(self) -> int: ...

    @abstractmethod
    def get_item_detail(self, slot: Optional[int] = None) -> Optional[ItemDetail]: ...

    @abstractmethod
    def get_item_count(self, slot: Optional[int] = None) -> int: ...

    @abstractmethod
    def transfer_to(self, slot: int, count: Optional[int] = None) -> bool: ...

    # Fuel
    @abstractmethod
    def get_fuel_level(self) -> int: ...

    @abstractmethod
    def get_fuel_limit(self) -> int: ...

    @abstractmethod
    def refuel(self, count: Optional[int] = None) -> MoveOutcome: ...
