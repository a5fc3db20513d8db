"""Cellular Cave: seeded fill, automaton smoothing, single-cavern curation."""

from .build import GenerationResult, build_cave_mesh, generate, generate_volume
from .curation import CurationReport, curate, curate_regions
from .fill import apply_exclusion, box_exclusion, random_fill, sphere_exclusion
from .regions import Region, find_regions, label_regions, region_tiles
from .smoothing import count_solid_neighbors, neighbor_counts, smooth, smooth_pass

__all__ = [
    "generate_volume", "generate", "build_cave_mesh", "GenerationResult",
    "random_fill", "apply_exclusion", "box_exclusion", "sphere_exclusion",
    "count_solid_neighbors", "neighbor_counts", "smooth", "smooth_pass",
    "Region", "find_regions", "label_regions", "region_tiles",
    "CurationReport", "curate", "curate_regions",
]
