"""
Configuration management for the turtle tree farm
"""

from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .schemas import PlotOrigin, SlotRoles

# Plots lie ahead of home (north); the deposit chest sits behind it
DEFAULT_PLOTS = [
    PlotOrigin(x=1, z=-6),
    PlotOrigin(x=1, z=-3),
    PlotOrigin(x=4, z=-6),
    PlotOrigin(x=4, z=-3),
]


class FarmConfig(BaseSettings):
    """Configuration for the farming turtle"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TURTLE_FARM_",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Inventory slot roles (1-based, like the in-game API)
    fuel_slot: int = Field(default=1, description="Slot holding fuel items")
    sapling_slot: int = Field(default=2, description="Slot holding saplings")
    fill_slot: int = Field(default=3, description="Slot holding ground fill blocks")
    scratch_slot: int = Field(default=16, description="Slot selected while digging")
    inventory_size: int = Field(default=16, description="Number of inventory slots")

    # Farm layout
    plots: List[PlotOrigin] = Field(
        default_factory=lambda: list(DEFAULT_PLOTS), description="Northwest corners of the 2x2 plots"
    )
    replace_ground: bool = Field(default=False, description="Lay a fill block under every sapling")

    # Fuel policy
    refuel_fraction: float = Field(default=0.2, description="Refuel below this fraction of the fuel limit")

    # Timing
    growth_wait_seconds: float = Field(default=300.0, description="Wait between planting and harvesting")
    cycle_pause_seconds: float = Field(default=10.0, description="Pause between farm cycles")

    # Harvest
    max_harvest_height: int = Field(default=25, description="Maximum ascent steps while clearing a tree")

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_file: Optional[str] = Field(default=None, description="Log file name (None for timestamped name)")
    log_dir: str = Field(default="logs", description="Directory for log files")
    log_json_format: bool = Field(default=False, description="Use JSON format for console logs")

    @field_validator("refuel_fraction")
    @classmethod
    def check_refuel_fraction(cls, v):
        if not 0 < v <= 1:
            raise ValueError(f"refuel_fraction {v} must be in (0, 1]")
        return v

    @field_validator("growth_wait_seconds", "cycle_pause_seconds")
    @classmethod
    def check_duration(cls, v):
        if v < 0:
            raise ValueError(f"Duration {v} cannot be negative")
        return v

    @field_validator("max_harvest_height")
    @classmethod
    def check_harvest_height(cls, v):
        if v < 0:
            raise ValueError(f"max_harvest_height {v} cannot be negative")
        return v

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v):
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level {v}")
        return v.upper()

    @model_validator(mode="after")
    def check_slot_roles(self) -> "FarmConfig":
        # Building the roles model runs its range and distinctness checks
        _ = self.slot_roles
        return self

    @property
    def slot_roles(self) -> SlotRoles:
        return SlotRoles(
            fuel=self.fuel_slot,
            sapling=self.sapling_slot,
            fill=self.fill_slot,
            scratch=self.scratch_slot,
            inventory_size=self.inventory_size,
        )


def get_config(**overrides) -> FarmConfig:
    """Get the configuration instance"""
    return FarmConfig(**overrides)
