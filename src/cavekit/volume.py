"""
Binary voxel volume for cave generation.

Cells are indexed [x, y, z] and hold SOLID (1) or EMPTY (0).
A Volume never changes after construction; every stage returns a new one.
"""

import numpy as np
from enum import IntEnum
from typing import Iterator, NamedTuple, Tuple
from dataclasses import dataclass

from .errors import CoordinateOutOfRange, InvalidVolumeData, check_dimensions


class CellState(IntEnum):
    """State of one grid cell."""
    EMPTY = 0
    SOLID = 1


class Coord(NamedTuple):
    """Integer cell coordinate."""
    x: int
    y: int
    z: int


@dataclass(eq=False)
class Volume:
    """
    Dense 3D grid of cell states.

    The array is copied on construction and locked read-only, so callers
    can hand a Volume around without worrying about later mutation.
    """
    data: np.ndarray  # (width, height, depth) uint8, values in {0, 1}

    def __post_init__(self):
        data = np.asarray(self.data)
        if data.ndim != 3:
            raise InvalidVolumeData(f"Volume data must be 3D, got shape {data.shape}")
        if data.size == 0:
            raise InvalidVolumeData(f"Volume data must be non-empty, got shape {data.shape}")
        if data.dtype == bool:
            data = data.astype(np.uint8)
        elif not np.isin(data, (0, 1)).all():
            raise InvalidVolumeData("Volume data may only contain 0 (empty) and 1 (solid)")
        data = np.array(data, dtype=np.uint8, copy=True)
        data.flags.writeable = False
        self.data = data

    @classmethod
    def filled(cls, shape: Tuple[int, int, int], state: CellState = CellState.SOLID) -> "Volume":
        """Create a volume with every cell set to ``state``."""
        width, height, depth = check_dimensions(*shape)
        return cls(np.full((width, height, depth), int(state), dtype=np.uint8))

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.data.shape

    @property
    def width(self) -> int:
        return self.data.shape[0]

    @property
    def height(self) -> int:
        return self.data.shape[1]

    @property
    def depth(self) -> int:
        return self.data.shape[2]

    @property
    def n_cells(self) -> int:
        return int(self.data.size)

    def in_bounds(self, x: int, y: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.depth

    def check_coord(self, x: int, y: int, z: int) -> None:
        """Raise CoordinateOutOfRange unless (x, y, z) is a cell of this volume."""
        if not self.in_bounds(x, y, z):
            raise CoordinateOutOfRange((x, y, z), self.shape)

    def get(self, x: int, y: int, z: int) -> CellState:
        """Bounds-checked cell read. Negative indices are rejected, not wrapped."""
        self.check_coord(x, y, z)
        return CellState(int(self.data[x, y, z]))

    def __getitem__(self, coord) -> CellState:
        x, y, z = coord
        return self.get(x, y, z)

    def is_solid(self, x: int, y: int, z: int) -> bool:
        return self.get(x, y, z) == CellState.SOLID

    def count(self, state: CellState) -> int:
        """Number of cells holding ``state``."""
        return int(np.count_nonzero(self.data == int(state)))

    def coords(self) -> Iterator[Coord]:
        """All coordinates in scan order (x outer, y middle, z inner)."""
        for x in range(self.width):
            for y in range(self.height):
                for z in range(self.depth):
                    yield Coord(x, y, z)

    def boundary_mask(self) -> np.ndarray:
        """Boolean mask of cells lying on any of the six faces."""
        mask = np.ones(self.shape, dtype=bool)
        mask[1:-1, 1:-1, 1:-1] = False
        return mask

    def is_enclosed(self) -> bool:
        """True when every boundary cell is solid."""
        return bool(self.data[self.boundary_mask()].all())

    def copy_data(self) -> np.ndarray:
        """Writable copy of the underlying array."""
        return self.data.copy()

    def with_state(self, mask: np.ndarray, state: CellState) -> "Volume":
        """New volume with every cell selected by ``mask`` set to ``state``."""
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != self.shape:
            raise InvalidVolumeData(f"Mask shape {mask.shape} does not match volume {self.shape}")
        result = self.copy_data()
        result[mask] = int(state)
        return Volume(result)

    def equals(self, other: "Volume") -> bool:
        """Bit-identical comparison."""
        return self.shape == other.shape and bool(np.array_equal(self.data, other.data))

    def __repr__(self) -> str:
        return (f"Volume(shape={self.shape}, solid={self.count(CellState.SOLID)}, "
                f"empty={self.count(CellState.EMPTY)})")
