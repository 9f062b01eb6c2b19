"""
Ground Cell Lattice
===================
Maps muon endpoints onto a square lattice of cells in the x-y plane and
spreads activation to neighbouring cells.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Tuple, TYPE_CHECKING

from eventdisplay.model.geometry_primitives import Point, Quad, Vector

if TYPE_CHECKING:
    import numpy as np
    from eventdisplay.model.dimensions import Dimensions

logger = logging.getLogger(__name__)


class CellGrid:
    """
    `num_cells` x `num_cells` lattice of side `cell_size`, starting at
    -box_width / 2 in both x and y. Both sizes come from the same
    Dimensions, so the lattice always spans the box width.
    """

    def __init__(self, dimensions: Dimensions) -> None:
        self.num_cells: int = dimensions.num_cells
        self.cell_size: float = dimensions.cell_size
        self.origin: float = -dimensions.box_width * 0.5

        c = self.cell_size
        # right, left, up, down, then the four diagonals
        self.directions: Tuple[Vector, ...] = (
            Vector(c, 0.0),
            Vector(-c, 0.0),
            Vector(0.0, c),
            Vector(0.0, -c),
            Vector(c, c),
            Vector(-c, c),
            Vector(c, -c),
            Vector(-c, -c),
        )

    def _corners(self) -> Iterator[Tuple[float, float]]:
        """Lower-left corners, scanned row-major (x index outer)."""
        for i in range(self.num_cells):
            for j in range(self.num_cells):
                yield i * self.cell_size + self.origin, j * self.cell_size + self.origin

    def map_to_cell(self, point: Point) -> Optional[Quad]:
        """
        Return the cell containing (point.x, point.y) at height point.z.

        Returns None when the point lies outside the lattice.
        """
        c = self.cell_size
        for x, y in self._corners():
            if x <= point.x < x + c and y <= point.y < y + c:
                return Quad(
                    Point(x, y, point.z),
                    Point(x + c, y, point.z),
                    Point(x + c, y + c, point.z),
                    Point(x, y + c, point.z),
                )
        return None

    def activate_neighbours(
        self,
        rng: np.random.Generator,
        cells: Sequence[Quad],
        probability: float,
    ) -> List[Quad]:
        """
        Single pass over `cells`: each of the 8 neighbours is activated
        independently with `probability`. Duplicates are kept.
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Activation probability must be in [0, 1], got {probability}.")

        activated: List[Quad] = []
        for cell in cells:
            for direction in self.directions:
                if rng.random() < probability:
                    activated.append(cell.translated(direction))

        logger.debug(f"Activated {len(activated)} neighbour cells from {len(cells)} hits.")
        return activated
