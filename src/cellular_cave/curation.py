"""
Open-region curation.

Pockets smaller than the room threshold are sealed. Of the rooms that
survive, only the largest stays open; ties go to the room discovered first.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from cavekit.errors import check_threshold
from cavekit.volume import CellState, Coord, Volume

from .regions import find_regions

logger = logging.getLogger(__name__)


@dataclass
class CurationReport:
    """What one curation pass sealed and kept."""
    n_regions: int
    region_sizes: List[int] = field(default_factory=list)  # discovery order
    n_sealed_small: int = 0
    n_sealed_merged: int = 0
    cells_sealed: int = 0
    main_region_size: Optional[int] = None
    main_region_first: Optional[Coord] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_regions": self.n_regions,
            "region_sizes": list(self.region_sizes),
            "n_sealed_small": self.n_sealed_small,
            "n_sealed_merged": self.n_sealed_merged,
            "cells_sealed": self.cells_sealed,
            "main_region_size": self.main_region_size,
            "main_region_first": list(self.main_region_first) if self.main_region_first else None
        }


def curate_regions(volume: Volume, room_threshold_size: int) -> Tuple[Volume, CurationReport]:
    """
    Seal undersized open regions and every surviving room but the largest.

    Args:
        volume: Smoothed volume
        room_threshold_size: Minimum size (cells) for an open region to survive

    Returns:
        Tuple of (curated volume, CurationReport)
    """
    room_threshold_size = check_threshold(room_threshold_size)

    regions = find_regions(volume, CellState.EMPTY)
    report = CurationReport(
        n_regions=len(regions),
        region_sizes=[r.size for r in regions]
    )

    small = [r for r in regions if r.size < room_threshold_size]
    rooms = [r for r in regions if r.size >= room_threshold_size]
    # sorted() is stable: equal sizes keep discovery order
    rooms = sorted(rooms, key=lambda r: r.size, reverse=True)

    sealed = small + rooms[1:]
    report.n_sealed_small = len(small)
    report.n_sealed_merged = max(len(rooms) - 1, 0)
    report.cells_sealed = sum(r.size for r in sealed)

    if rooms:
        main_room = rooms[0]
        report.main_region_size = main_room.size
        report.main_region_first = main_room.first
        logger.info(f"Main cavern: {main_room.size} cells at {tuple(main_room.first)} "
                    f"({len(small)} pockets and {len(rooms) - 1} rooms sealed)")
    else:
        logger.warning(f"No open region reached {room_threshold_size} cells; volume is solid rock")

    if not sealed:
        return volume, report

    seal_mask = np.zeros(volume.shape, dtype=bool)
    for region in sealed:
        seal_mask[region.coords[:, 0], region.coords[:, 1], region.coords[:, 2]] = True

    return volume.with_state(seal_mask, CellState.SOLID), report


def curate(volume: Volume, room_threshold_size: int) -> Volume:
    """Curated volume only (see curate_regions)."""
    curated, _ = curate_regions(volume, room_threshold_size)
    return curated
