"""
Configuration and metadata for cave generation.

Volume model:
- Grid indexed [x, y, z], width x height x depth cells
- Cell size only matters when the volume is meshed (world units per cell)
- Volumes themselves are never written to disk; meshes and summaries are
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import json
from pathlib import Path

from .errors import (
    check_cell_size,
    check_dimensions,
    check_fill_percent,
    check_iterations,
    check_seed,
    check_threshold,
)
from .rng import Seed, seed_to_int


@dataclass
class VolumeMetadata:
    """
    Metadata sidecar written next to every exported cave mesh.

    Records the exact parameters so a mesh can be regenerated from its seed.
    """
    seed: str
    dimensions: List[int]
    fill_percent: int
    smoothing_iterations: int
    room_threshold_size: int
    cell_size: float
    n_solid: int
    n_empty: int
    n_regions: int
    main_region_size: Optional[int]
    n_vertices: int
    n_triangles: int
    generation_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "dimensions": list(self.dimensions),
            "fill_percent": self.fill_percent,
            "smoothing_iterations": self.smoothing_iterations,
            "room_threshold_size": self.room_threshold_size,
            "cell_size": self.cell_size,
            "n_solid": self.n_solid,
            "n_empty": self.n_empty,
            "n_regions": self.n_regions,
            "main_region_size": self.main_region_size,
            "n_vertices": self.n_vertices,
            "n_triangles": self.n_triangles,
            "generation_params": self.generation_params
        }

    def save(self, path: Path) -> None:
        """Save metadata to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VolumeMetadata":
        return cls(**data)


@dataclass
class GenerationConfig:
    """
    Parameters for one cave generation run.

    The generator itself is pure; output_dir is only used by the CLI.
    """

    # Grid size in cells
    width: int = 48
    height: int = 48
    depth: int = 48

    # Chance (percent) that an interior cell starts solid
    fill_percent: int = 45

    # Level seed (str or int)
    seed: Seed = "cave"

    # Cellular automaton passes
    smoothing_iterations: int = 5

    # Open regions smaller than this are sealed
    room_threshold_size: int = 50

    # World units per cell, handed to surface extraction
    cell_size: float = 1.0

    # Paths (relative to working directory)
    output_dir: Path = field(default_factory=lambda: Path("outputs"))

    @property
    def dimensions(self) -> tuple:
        return (self.width, self.height, self.depth)

    def validate(self) -> "GenerationConfig":
        """Raise a CaveConfigError subclass on the first invalid field."""
        check_dimensions(self.width, self.height, self.depth)
        check_fill_percent(self.fill_percent)
        check_iterations(self.smoothing_iterations)
        check_threshold(self.room_threshold_size)
        check_cell_size(self.cell_size)
        check_seed(self.seed)
        return self

    def get_mesh_path(self, seed: Optional[Seed] = None) -> Path:
        """
        Mesh output path for a seed (defaults to this config's seed).

        The file name is a readable slug plus the 64-bit generator seed, so
        seeds that slug alike still get their own file.
        """
        if seed is None:
            seed = self.seed
        return self.output_dir / "meshes" / f"{_slug(seed)}-{seed_to_int(seed):016x}.glb"

    def get_summary_path(self) -> Path:
        return self.output_dir / "run_summary.json"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "depth": self.depth,
            "fill_percent": self.fill_percent,
            "seed": self.seed,
            "smoothing_iterations": self.smoothing_iterations,
            "room_threshold_size": self.room_threshold_size,
            "cell_size": self.cell_size,
            "output_dir": str(self.output_dir)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationConfig":
        data = dict(data)
        if "output_dir" in data:
            data["output_dir"] = Path(data["output_dir"])
        return cls(**data)

    @classmethod
    def from_json(cls, path: Path) -> "GenerationConfig":
        """Load config from JSON file."""
        with open(path) as f:
            data = json.load(f)
        return cls.from_dict(data)

    def save(self, path: Path) -> None:
        """Save config to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def _slug(seed: Seed) -> str:
    cleaned = "".join(c if c.isalnum() or c in "-_" else "_" for c in str(seed))
    return cleaned or "seed"


# Global default config
DEFAULT_CONFIG = GenerationConfig()
