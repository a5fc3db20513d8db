"""
Mesh operation utilities.

Surface extraction from finished cave volumes, plus mesh statistics.
The extractor only reads the volume; it never feeds back into generation.
"""

import numpy as np
from typing import Dict, Any
import logging

from .errors import check_cell_size
from .volume import Volume

logger = logging.getLogger(__name__)

try:
    import trimesh
    TRIMESH_AVAILABLE = True
except ImportError:
    TRIMESH_AVAILABLE = False

try:
    from skimage.measure import marching_cubes
    SKIMAGE_AVAILABLE = True
except ImportError:
    SKIMAGE_AVAILABLE = False
    logger.warning("scikit-image not available. Install with: pip install scikit-image")


def extract_surface(
    volume: Volume,
    cell_size: float = 1.0,
    level: float = 0.5
) -> "trimesh.Trimesh":
    """
    Extract the rock/air boundary with marching cubes.

    Vertices are in world units: cell index * cell_size.

    Args:
        volume: Finished cave volume (solid = 1)
        cell_size: World units per cell
        level: Isosurface level on the 0/1 solid field

    Returns:
        Trimesh mesh (empty when the volume has no open cells)
    """
    if not SKIMAGE_AVAILABLE:
        raise ImportError("skimage required for marching cubes")
    if not TRIMESH_AVAILABLE:
        raise ImportError("trimesh required for surface extraction")

    cell_size = check_cell_size(cell_size)
    field = volume.data.astype(np.float32)

    if field.min() == field.max():
        logger.warning(f"Volume {volume.shape} is uniform, no surface to extract")
        return trimesh.Trimesh()

    try:
        verts, faces, _, _ = marching_cubes(
            field,
            level=level,
            spacing=(cell_size, cell_size, cell_size),
            allow_degenerate=False
        )
    except (ValueError, RuntimeError) as e:
        logger.error(f"Marching cubes failed: {e}")
        return trimesh.Trimesh()

    mesh = trimesh.Trimesh(vertices=verts, faces=faces, process=False)
    logger.info(f"Extracted mesh: {len(mesh.vertices)} vertices, {len(mesh.faces)} faces")
    return mesh


def compute_mesh_stats(mesh: "trimesh.Trimesh") -> Dict[str, Any]:
    """
    Compute mesh statistics.

    Args:
        mesh: Trimesh mesh object

    Returns:
        Dictionary of mesh statistics
    """
    if len(mesh.vertices) == 0:
        return {
            "n_vertices": 0,
            "n_faces": 0,
            "bounds": None,
            "extents": None,
            "surface_area": 0.0,
            "is_watertight": False
        }

    bounds = mesh.bounds

    return {
        "n_vertices": len(mesh.vertices),
        "n_faces": len(mesh.faces),
        "bounds": {
            "min": bounds[0].tolist(),
            "max": bounds[1].tolist()
        },
        "extents": mesh.extents.tolist(),
        "surface_area": float(mesh.area),
        "is_watertight": bool(mesh.is_watertight)
    }
