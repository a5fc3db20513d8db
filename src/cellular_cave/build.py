"""
Cellular Cave: seeded cave volume generation

Generate one enclosed cave volume per seed with:
- Sealed boundary (every face cell is rock)
- Organic cavities from cellular-automaton smoothing
- A single navigable main cavern (small pockets and extra rooms sealed)

Algorithm:
C1. Seeded random fill (boundary forced solid)
C2. Optional exclusion carve (forced-empty interior cells)
C3. N smoothing passes over the 3x3x3 neighborhood
C4. Region curation: seal pockets below threshold, keep largest room

Given the same parameters and seed, output is bit-identical.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from cavekit.config import GenerationConfig, VolumeMetadata
from cavekit.errors import (
    check_cell_size,
    check_dimensions,
    check_fill_percent,
    check_iterations,
    check_seed,
    check_threshold,
)
from cavekit.mesh_ops import compute_mesh_stats, extract_surface
from cavekit.rng import Seed
from cavekit.volume import CellState, Volume

from .curation import CurationReport, curate_regions
from .fill import Exclusion, apply_exclusion, random_fill
from .smoothing import smooth

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Finished volume plus what happened on the way."""
    volume: Volume
    report: CurationReport
    stats: Dict[str, Any] = field(default_factory=dict)


def _stage_counts(volume: Volume) -> Dict[str, int]:
    return {
        "solid": volume.count(CellState.SOLID),
        "empty": volume.count(CellState.EMPTY)
    }


def _run_pipeline(
    dimensions: Tuple[int, int, int],
    fill_percent: int,
    seed: Seed,
    smoothing_iterations: int,
    room_threshold_size: int,
    exclusion: Optional[Exclusion]
) -> GenerationResult:
    # Validate everything before the first grid is allocated
    width, height, depth = check_dimensions(*dimensions)
    fill_percent = check_fill_percent(fill_percent)
    smoothing_iterations = check_iterations(smoothing_iterations)
    room_threshold_size = check_threshold(room_threshold_size)
    seed = check_seed(seed)

    t_start = time.perf_counter()
    stats: Dict[str, Any] = {"stages": {}}

    # === C1: Seeded fill ===
    volume = random_fill(width, height, depth, fill_percent, seed)
    stats["stages"]["fill"] = _stage_counts(volume)

    # === C2: Exclusion carve ===
    if exclusion is not None:
        volume = apply_exclusion(volume, exclusion)
        stats["stages"]["exclusion"] = _stage_counts(volume)

    # === C3: Smoothing ===
    volume = smooth(volume, smoothing_iterations)
    stats["stages"]["smoothing"] = _stage_counts(volume)

    # === C4: Region curation ===
    volume, report = curate_regions(volume, room_threshold_size)
    stats["stages"]["curation"] = _stage_counts(volume)

    stats["elapsed_s"] = round(time.perf_counter() - t_start, 4)
    logger.info(f"Generated {volume.shape} cave for seed {seed!r}: "
                f"{stats['stages']['curation']['empty']} open cells "
                f"in {stats['elapsed_s']:.3f}s")

    return GenerationResult(volume=volume, report=report, stats=stats)


def generate_volume(
    width: int,
    height: int,
    depth: int,
    fill_percent: int,
    seed: Seed,
    smoothing_iterations: int,
    room_threshold_size: int,
    exclusion: Optional[Exclusion] = None
) -> Volume:
    """
    Generate a finished cave volume.

    Args:
        width, height, depth: Grid size in cells (> 0)
        fill_percent: Initial solid chance for interior cells, 0-100
        seed: Level seed
        smoothing_iterations: Automaton passes (>= 0)
        room_threshold_size: Minimum open-region size to survive (>= 0)
        exclusion: Optional predicate or boolean mask of cells forced empty
            before smoothing

    Returns:
        Read-only Volume
    """
    return _run_pipeline(
        (width, height, depth),
        fill_percent,
        seed,
        smoothing_iterations,
        room_threshold_size,
        exclusion
    ).volume


def generate(config: GenerationConfig, exclusion: Optional[Exclusion] = None) -> GenerationResult:
    """Run the full pipeline from a GenerationConfig."""
    return _run_pipeline(
        config.dimensions,
        config.fill_percent,
        config.seed,
        config.smoothing_iterations,
        config.room_threshold_size,
        exclusion
    )


def build_cave_mesh(
    config: GenerationConfig,
    exclusion: Optional[Exclusion] = None
) -> Tuple["trimesh.Trimesh", VolumeMetadata, Dict[str, Any]]:
    """
    Generate a cave and extract its surface.

    Returns:
        Tuple of (mesh, metadata, stats)
    """
    cell_size = check_cell_size(config.cell_size)
    result = generate(config, exclusion)

    mesh = extract_surface(result.volume, cell_size=cell_size)
    mesh_stats = compute_mesh_stats(mesh)

    stats = dict(result.stats)
    stats["curation"] = result.report.to_dict()
    stats["mesh"] = mesh_stats

    metadata = VolumeMetadata(
        seed=str(config.seed),
        dimensions=list(result.volume.shape),
        fill_percent=config.fill_percent,
        smoothing_iterations=config.smoothing_iterations,
        room_threshold_size=config.room_threshold_size,
        cell_size=cell_size,
        n_solid=result.volume.count(CellState.SOLID),
        n_empty=result.volume.count(CellState.EMPTY),
        n_regions=result.report.n_regions,
        main_region_size=result.report.main_region_size,
        n_vertices=mesh_stats["n_vertices"],
        n_triangles=mesh_stats["n_faces"],
        generation_params={
            "algorithm": "cellular_cave",
            "exclusion": exclusion is not None,
            "curation": result.report.to_dict(),
            "elapsed_s": stats["elapsed_s"]
        }
    )

    return mesh, metadata, stats
