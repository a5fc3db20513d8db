"""
Connected-region labeling over a binary cave volume.

Two cells are connected when they lie in the same 3x3x3 block and share at
least one coordinate: face and edge neighbors connect, pure corner diagonals
do not (18-connectivity).

Regions are reported in discovery order, i.e. ordered by their first member
in x -> y -> z scan order.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from scipy.ndimage import generate_binary_structure, label as ndimage_label

from cavekit.volume import CellState, Coord, Volume

logger = logging.getLogger(__name__)

# Offsets within distance 2 of the center in squared norm: faces and edges
CONNECTIVITY = generate_binary_structure(3, 2)

NEIGHBOR_OFFSETS: Tuple[Tuple[int, int, int], ...] = tuple(
    (dx, dy, dz)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    for dz in (-1, 0, 1)
    if (dx, dy, dz) != (0, 0, 0) and CONNECTIVITY[dx + 1, dy + 1, dz + 1]
)


@dataclass(eq=False)
class Region:
    """One connected component of a single cell state."""
    state: CellState
    index: int  # discovery order within one labeling call
    coords: np.ndarray  # (N, 3) int array of member cells

    @property
    def size(self) -> int:
        return int(len(self.coords))

    def __len__(self) -> int:
        return self.size

    @property
    def first(self) -> Coord:
        """Lowest-order member in scan order."""
        # lexsort uses the last key as primary
        order = np.lexsort((self.coords[:, 2], self.coords[:, 1], self.coords[:, 0]))
        x, y, z = self.coords[order[0]]
        return Coord(int(x), int(y), int(z))

    def mask(self, shape: Tuple[int, int, int]) -> np.ndarray:
        """Boolean mask of this region's members."""
        mask = np.zeros(shape, dtype=bool)
        mask[self.coords[:, 0], self.coords[:, 1], self.coords[:, 2]] = True
        return mask

    def contains(self, coord) -> bool:
        x, y, z = coord
        return bool(np.any(np.all(self.coords == (x, y, z), axis=1)))

    def to_coords(self) -> List[Coord]:
        return [Coord(int(x), int(y), int(z)) for x, y, z in self.coords]

    def __repr__(self) -> str:
        return f"Region(state={self.state.name}, index={self.index}, size={self.size})"


def label_regions(volume: Volume, target_state: CellState) -> Tuple[np.ndarray, int]:
    """
    Label every cell of ``target_state`` with its region number.

    Labels run 1..n in discovery order; 0 marks cells of the other state.
    The label grid is allocated per call.

    Returns:
        Tuple of (labels, n_regions)
    """
    target_state = CellState(target_state)
    labeled, n_regions = ndimage_label(volume.data == int(target_state), structure=CONNECTIVITY)
    if n_regions == 0:
        return labeled, 0

    # Renumber by first occurrence in C order (x outer, z inner)
    values, first_index = np.unique(labeled.ravel(), return_index=True)
    keep = values != 0
    values, first_index = values[keep], first_index[keep]
    ordered = values[np.argsort(first_index, kind="stable")]

    remap = np.zeros(n_regions + 1, dtype=labeled.dtype)
    remap[ordered] = np.arange(1, n_regions + 1, dtype=labeled.dtype)
    return remap[labeled], int(n_regions)


def find_regions(volume: Volume, target_state: CellState) -> List[Region]:
    """
    Partition all cells of ``target_state`` into maximal connected regions.

    Regions are pairwise disjoint and together cover every cell of that state.
    """
    target_state = CellState(target_state)
    labels, n_regions = label_regions(volume, target_state)
    if n_regions == 0:
        logger.debug(f"No {target_state.name} regions in volume {volume.shape}")
        return []

    flat = labels.ravel()
    members = np.flatnonzero(flat)
    # Stable sort keeps scan order within each region
    members = members[np.argsort(flat[members], kind="stable")]
    sizes = np.bincount(flat[members], minlength=n_regions + 1)[1:]
    coords = np.column_stack(np.unravel_index(members, volume.shape))

    regions = []
    start = 0
    for index, size in enumerate(sizes):
        regions.append(Region(
            state=target_state,
            index=index,
            coords=coords[start:start + size]
        ))
        start += size

    logger.debug(f"Found {n_regions} {target_state.name} regions, largest {int(sizes.max())} cells")
    return regions


def region_tiles(volume: Volume, start) -> Region:
    """
    Breadth-first flood fill from ``start`` over cells of the same state.

    Neighbors are visited in x -> y -> z offset order. The visited grid is
    scoped to this call.

    Args:
        volume: Volume to search
        start: Starting coordinate (x, y, z)

    Returns:
        Region containing ``start`` (index 0), members in visit order
    """
    sx, sy, sz = start
    target = volume.get(sx, sy, sz)
    target_value = int(target)
    data = volume.data
    width, height, depth = volume.shape

    visited = np.zeros(volume.shape, dtype=bool)
    visited[sx, sy, sz] = True
    queue = deque([(sx, sy, sz)])
    tiles = []

    while queue:
        x, y, z = queue.popleft()
        tiles.append((x, y, z))
        for dx, dy, dz in NEIGHBOR_OFFSETS:
            nx, ny, nz = x + dx, y + dy, z + dz
            if not (0 <= nx < width and 0 <= ny < height and 0 <= nz < depth):
                continue
            if not visited[nx, ny, nz] and data[nx, ny, nz] == target_value:
                visited[nx, ny, nz] = True
                queue.append((nx, ny, nz))

    return Region(
        state=target,
        index=0,
        coords=np.array(tiles, dtype=np.intp).reshape(-1, 3)
    )
