"""
Tests for surface extraction and mesh export.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cavekit.config import VolumeMetadata
from cavekit.errors import InvalidCellSize
from cavekit.io import load_mesh, save_mesh
from cavekit.mesh_ops import compute_mesh_stats, extract_surface
from cavekit.volume import CellState, Volume


# ============== Fixtures ==============

@pytest.fixture
def chamber():
    """9x9x9 rock with a 3x3x3 chamber in the middle."""
    data = np.ones((9, 9, 9), dtype=np.uint8)
    data[3:6, 3:6, 3:6] = 0
    return Volume(data)


@pytest.fixture
def metadata():
    return VolumeMetadata(
        seed="mesh",
        dimensions=[9, 9, 9],
        fill_percent=0,
        smoothing_iterations=0,
        room_threshold_size=0,
        cell_size=1.0,
        n_solid=702,
        n_empty=27,
        n_regions=1,
        main_region_size=27,
        n_vertices=0,
        n_triangles=0
    )


# ============== Extraction Tests ==============

class TestExtractSurface:
    """Test marching cubes adapter."""

    def test_chamber_surface(self, chamber):
        mesh = extract_surface(chamber)

        assert len(mesh.vertices) > 0
        assert len(mesh.faces) > 0
        # Surface sits between the chamber (3..5) and the surrounding rock
        assert mesh.vertices.min() >= 2.0
        assert mesh.vertices.max() <= 6.0

    def test_cell_size_scales_vertices(self, chamber):
        unit = extract_surface(chamber, cell_size=1.0)
        scaled = extract_surface(chamber, cell_size=2.0)

        np.testing.assert_allclose(scaled.vertices, unit.vertices * 2.0)

    def test_uniform_volume_gives_empty_mesh(self):
        mesh = extract_surface(Volume.filled((6, 6, 6), CellState.SOLID))
        assert len(mesh.faces) == 0

    def test_invalid_cell_size(self, chamber):
        with pytest.raises(InvalidCellSize):
            extract_surface(chamber, cell_size=-1.0)

    def test_volume_untouched(self, chamber):
        before = chamber.copy_data()
        extract_surface(chamber)
        np.testing.assert_array_equal(chamber.data, before)


# ============== Stats Tests ==============

class TestMeshStats:
    """Test mesh statistics."""

    def test_stats(self, chamber):
        mesh = extract_surface(chamber)
        stats = compute_mesh_stats(mesh)

        assert stats["n_vertices"] == len(mesh.vertices)
        assert stats["n_faces"] == len(mesh.faces)
        assert stats["surface_area"] > 0
        assert len(stats["extents"]) == 3

    def test_empty_stats(self):
        mesh = extract_surface(Volume.filled((4, 4, 4)))
        stats = compute_mesh_stats(mesh)

        assert stats["n_vertices"] == 0
        assert stats["bounds"] is None


# ============== IO Tests ==============

class TestMeshIO:
    """Test mesh export with sidecar."""

    def test_save_and_load(self, chamber, metadata, tmp_path):
        mesh = extract_surface(chamber)
        metadata.n_vertices = len(mesh.vertices)
        metadata.n_triangles = len(mesh.faces)

        path = tmp_path / "meshes" / "chamber.glb"
        save_mesh(mesh, path, metadata)

        assert path.exists()
        assert path.with_suffix(".json").exists()

        loaded, loaded_meta = load_mesh(path)
        assert len(loaded.faces) > 0
        assert loaded_meta == metadata

    def test_load_without_sidecar(self, chamber, metadata, tmp_path):
        path = tmp_path / "chamber.glb"
        save_mesh(extract_surface(chamber), path, metadata)
        path.with_suffix(".json").unlink()

        _, loaded_meta = load_mesh(path)
        assert loaded_meta is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
