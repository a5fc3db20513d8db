"""
Cave mesh export.

Each mesh is written next to a JSON sidecar holding its VolumeMetadata
(same stem, .json), enough to regenerate the cave from its seed.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

from .config import VolumeMetadata

logger = logging.getLogger(__name__)

try:
    import trimesh
    TRIMESH_AVAILABLE = True
except ImportError:
    TRIMESH_AVAILABLE = False
    logger.warning("trimesh not available, cave meshes cannot be exported")


def _sidecar_path(path: Path) -> Path:
    return path.with_suffix(".json")


def save_mesh(
    mesh: "trimesh.Trimesh",
    path: Path,
    metadata: VolumeMetadata
) -> None:
    """
    Export a cave surface and its generation metadata.

    The mesh format follows the path suffix (.glb for the CLI). Parent
    directories are created as needed; existing files are replaced.
    """
    if not TRIMESH_AVAILABLE:
        raise ImportError("trimesh is required to export cave meshes")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    mesh.export(str(path))
    metadata.save(_sidecar_path(path))
    logger.info(f"Cave {metadata.seed!r} -> {path.name}: "
                f"{metadata.n_triangles} tris, main cavern {metadata.main_region_size} cells")


def load_mesh(path: Path) -> Tuple["trimesh.Trimesh", Optional[VolumeMetadata]]:
    """Read an exported cave mesh; metadata is None when the sidecar is missing."""
    if not TRIMESH_AVAILABLE:
        raise ImportError("trimesh is required to load cave meshes")

    path = Path(path)
    # GLB files load as a scene; collapse to a single mesh
    mesh = trimesh.load(str(path), force="mesh")

    sidecar = _sidecar_path(path)
    if not sidecar.exists():
        logger.debug(f"No metadata sidecar for {path}")
        return mesh, None

    with open(sidecar) as f:
        return mesh, VolumeMetadata.from_dict(json.load(f))
