"""
Cellular-automaton smoothing over the 3x3x3 neighborhood.

Rule per cell, from the count of solid neighbors (out-of-range counts solid):
    count >= 15  -> solid
    count <  13  -> empty
    13, 14       -> unchanged

The 13/14 dead zone keeps cells from flickering between passes. Every pass
reads the previous volume only and writes a fresh buffer.
"""

import logging

import numpy as np
from scipy.ndimage import convolve

from cavekit.errors import check_iterations
from cavekit.volume import CellState, Volume

logger = logging.getLogger(__name__)

SOLID_NEIGHBOR_THRESHOLD = 15
EMPTY_NEIGHBOR_THRESHOLD = 13

# 26-neighborhood, center excluded
NEIGHBOR_KERNEL = np.ones((3, 3, 3), dtype=np.int16)
NEIGHBOR_KERNEL[1, 1, 1] = 0
NEIGHBOR_KERNEL.flags.writeable = False


def count_solid_neighbors(volume: Volume, x: int, y: int, z: int) -> int:
    """
    Count solid cells around (x, y, z), treating out-of-range neighbors as solid.

    Returns:
        Integer in [0, 26]
    """
    volume.check_coord(x, y, z)
    wall_count = 0
    for nx in range(x - 1, x + 2):
        for ny in range(y - 1, y + 2):
            for nz in range(z - 1, z + 2):
                if nx == x and ny == y and nz == z:
                    continue
                if volume.in_bounds(nx, ny, nz):
                    wall_count += int(volume.data[nx, ny, nz])
                else:
                    wall_count += 1
    return wall_count


def neighbor_counts(volume: Volume) -> np.ndarray:
    """Solid-neighbor count for every cell at once (same rule as count_solid_neighbors)."""
    return convolve(
        volume.data.astype(np.int16),
        NEIGHBOR_KERNEL,
        mode="constant",
        cval=1
    )


def smooth_pass(volume: Volume) -> Volume:
    """One automaton pass. Counts come from ``volume``, results go to a new buffer."""
    counts = neighbor_counts(volume)
    result = volume.copy_data()
    result[counts >= SOLID_NEIGHBOR_THRESHOLD] = int(CellState.SOLID)
    result[counts < EMPTY_NEIGHBOR_THRESHOLD] = int(CellState.EMPTY)
    return Volume(result)


def smooth(volume: Volume, iterations: int) -> Volume:
    """
    Apply ``iterations`` smoothing passes in sequence.

    Zero iterations returns the input volume unchanged.
    """
    iterations = check_iterations(iterations)

    current = volume
    for i in range(iterations):
        smoothed = smooth_pass(current)
        n_changed = int(np.count_nonzero(smoothed.data != current.data))
        logger.debug(f"Smoothing pass {i + 1}/{iterations}: {n_changed} cells changed")
        current = smoothed
        if n_changed == 0:
            # Fixed point: remaining passes would be identical
            logger.debug(f"Smoothing converged after {i + 1} passes")
            break

    return current
