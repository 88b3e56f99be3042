"""Inventory schemas - slot contents and slot role assignments."""

from pydantic import BaseModel, Field, model_validator

__all__ = ["ItemDetail", "SlotRoles"]


class ItemDetail(BaseModel):
    """Contents of a single inventory slot."""
    name: str = Field(..., description="Namespaced item id, e.g. minecraft:spruce_sapling")
    count: int = Field(..., ge=0, le=64)


class SlotRoles(BaseModel):
    """Which 1-based inventory slot holds which resource."""
    fuel: int = Field(1, ge=1)
    sapling: int = Field(2, ge=1)
    fill: int = Field(3, ge=1)
    scratch: int = Field(16, ge=1)
    inventory_size: int = Field(16, ge=4)

    @model_validator(mode="after")
    def check_slots(self) -> "SlotRoles":
        slots = {"fuel": self.fuel, "sapling": self.sapling, "fill": self.fill, "scratch": self.scratch}
        for role, slot in slots.items():
            if slot > self.inventory_size:
                raise ValueError(f"{role} slot {slot} out of range (1 to {self.inventory_size})")
        if len(set(slots.values())) != len(slots):
            raise ValueError(f"Slot roles must use distinct slots, got {slots}")
        return self

    def reserved(self, include_fill: bool) -> set:
        """Slots that are never emptied into the deposit chest."""
        reserved = {self.fuel, self.sapling}
        if include_fill:
            reserved.add(self.fill)
        return reserved
