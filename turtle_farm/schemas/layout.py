"""Farm layout schemas."""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["PlotOrigin", "CELL_OFFSETS"]

# (dx, dz) of the four cells of a 2x2 plot, in visit order
CELL_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, 0), (0, 1), (1, 0), (1, 1))


class PlotOrigin(BaseModel):
    """Ground-level northwest corner of a 2x2 plot (y is implicitly 0)."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., description="X of the northwest cell")
    z: int = Field(..., description="Z of the northwest cell")

    def cells(self):
        """Absolute (x, z) of each plot cell in visit order."""
        return [(self.x + dx, self.z + dz) for dx, dz in CELL_OFFSETS]
