"""
Seeded initial fill.

Boundary cells are always solid. Each interior cell draws one integer in
[0, 100) from the seeded generator, in x -> y -> z order, and is solid when
the draw is below fill_percent.
"""

import logging
from typing import Callable, Sequence, Union

import numpy as np

from cavekit.errors import InvalidDimensions, check_dimensions, check_fill_percent, check_seed
from cavekit.rng import Seed, make_rng
from cavekit.volume import CellState, Coord, Volume

logger = logging.getLogger(__name__)

ExclusionPredicate = Callable[[Coord], bool]
Exclusion = Union[ExclusionPredicate, np.ndarray]


def random_fill(
    width: int,
    height: int,
    depth: int,
    fill_percent: int,
    seed: Seed
) -> Volume:
    """
    Build the initial random volume.

    Args:
        width, height, depth: Grid size in cells (> 0)
        fill_percent: Chance in percent that an interior cell starts solid
        seed: Level seed string (or int)

    Returns:
        Enclosed Volume
    """
    width, height, depth = check_dimensions(width, height, depth)
    fill_percent = check_fill_percent(fill_percent)
    seed = check_seed(seed)

    rng = make_rng(seed)
    cells = np.ones((width, height, depth), dtype=np.uint8)

    interior = (max(width - 2, 0), max(height - 2, 0), max(depth - 2, 0))
    if all(n > 0 for n in interior):
        # C order: z varies fastest, so draws are consumed x -> y -> z
        draws = rng.integers(0, 100, size=interior)
        cells[1:-1, 1:-1, 1:-1] = (draws < fill_percent).astype(np.uint8)

    volume = Volume(cells)
    logger.debug(f"Random fill {volume.shape} at {fill_percent}%: "
                 f"{volume.count(CellState.SOLID)} solid, {volume.count(CellState.EMPTY)} empty")
    return volume


def exclusion_mask(shape: Sequence[int], exclusion: Exclusion) -> np.ndarray:
    """
    Resolve an exclusion into a boolean mask over interior cells.

    A predicate is called once per interior cell in scan order. An array must
    match the volume shape; its boundary entries are ignored.
    """
    shape = tuple(shape)
    mask = np.zeros(shape, dtype=bool)
    width, height, depth = shape

    if callable(exclusion):
        for x in range(1, width - 1):
            for y in range(1, height - 1):
                for z in range(1, depth - 1):
                    if exclusion(Coord(x, y, z)):
                        mask[x, y, z] = True
        return mask

    selected = np.asarray(exclusion, dtype=bool)
    if selected.shape != shape:
        raise InvalidDimensions(f"Exclusion mask shape {selected.shape} does not match volume {shape}")
    mask[1:-1, 1:-1, 1:-1] = selected[1:-1, 1:-1, 1:-1]
    return mask


def apply_exclusion(volume: Volume, exclusion: Exclusion) -> Volume:
    """Force every interior cell selected by ``exclusion`` to EMPTY."""
    mask = exclusion_mask(volume.shape, exclusion)
    n_carved = int(np.count_nonzero(mask & (volume.data == int(CellState.SOLID))))
    logger.debug(f"Exclusion carved {n_carved} solid cells ({int(mask.sum())} selected)")
    return volume.with_state(mask, CellState.EMPTY)


def box_exclusion(lower: Sequence[float], upper: Sequence[float]) -> ExclusionPredicate:
    """
    Predicate selecting cells inside an axis-aligned box (bounds inclusive).

    Typical use is carving a guaranteed starting chamber.
    """
    lo = tuple(float(v) for v in lower)
    hi = tuple(float(v) for v in upper)
    if len(lo) != 3 or len(hi) != 3:
        raise InvalidDimensions("box bounds need three components each")

    def contains(coord: Coord) -> bool:
        return all(lo[i] <= coord[i] <= hi[i] for i in range(3))

    return contains


def sphere_exclusion(center: Sequence[float], radius: float) -> ExclusionPredicate:
    """Predicate selecting cells whose centers lie within ``radius`` of ``center``."""
    cx, cy, cz = (float(v) for v in center)
    r2 = float(radius) ** 2

    def contains(coord: Coord) -> bool:
        return (coord.x - cx) ** 2 + (coord.y - cy) ** 2 + (coord.z - cz) ** 2 <= r2

    return contains
