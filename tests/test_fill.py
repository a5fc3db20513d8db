"""
Tests for the seeded initial fill and exclusion carving.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cellular_cave.fill import (
    apply_exclusion,
    box_exclusion,
    exclusion_mask,
    random_fill,
    sphere_exclusion,
)
from cavekit.errors import InvalidDimensions, InvalidFillPercent, InvalidSeed
from cavekit.rng import make_rng
from cavekit.volume import CellState, Coord, Volume


# ============== Random Fill Tests ==============

class TestRandomFill:
    """Test seeded random fill."""

    def test_zero_fill_example(self):
        """5x5x5 at 0% leaves the 27 interior cells empty."""
        volume = random_fill(5, 5, 5, 0, "test")

        assert volume.count(CellState.EMPTY) == 27
        assert volume.count(CellState.SOLID) == 98
        assert not volume.data[1:-1, 1:-1, 1:-1].any()

    def test_full_fill(self):
        """100% fill is solid everywhere."""
        volume = random_fill(6, 7, 8, 100, "test")
        assert volume.count(CellState.SOLID) == 6 * 7 * 8

    def test_boundary_always_solid(self):
        """Boundary faces are solid whatever the fill."""
        for fill in (0, 30, 70):
            volume = random_fill(10, 8, 12, fill, f"seed-{fill}")
            assert volume.is_enclosed()

    def test_deterministic(self):
        """Same seed and parameters give identical volumes."""
        a = random_fill(16, 12, 10, 45, "determinism")
        b = random_fill(16, 12, 10, 45, "determinism")
        assert a.equals(b)

    def test_seed_changes_output(self):
        a = random_fill(16, 16, 16, 45, "alpha")
        b = random_fill(16, 16, 16, 45, "beta")
        assert not a.equals(b)

    def test_draw_order_is_x_y_z(self):
        """Interior cells consume draws with z varying fastest."""
        volume = random_fill(6, 5, 4, 50, "order")
        draws = make_rng("order").integers(0, 100, size=4 * 3 * 2)

        expected = []
        for x in range(1, 5):
            for y in range(1, 4):
                for z in range(1, 3):
                    expected.append(volume.data[x, y, z])
        np.testing.assert_array_equal(np.array(expected), (draws < 50).astype(np.uint8))

    def test_fill_ratio_roughly_matches(self):
        """Interior solid fraction tracks fill_percent."""
        volume = random_fill(32, 32, 32, 40, "ratio")
        interior = volume.data[1:-1, 1:-1, 1:-1]
        assert 0.35 < interior.mean() < 0.45

    def test_tiny_volumes_are_all_boundary(self):
        """Axes shorter than three cells leave no interior."""
        volume = random_fill(2, 5, 5, 0, "tiny")
        assert volume.count(CellState.EMPTY) == 0

        single = random_fill(1, 1, 1, 0, "tiny")
        assert single.get(0, 0, 0) == CellState.SOLID

    @pytest.mark.parametrize("dims", [(0, 5, 5), (5, 0, 5), (5, 5, -3)])
    def test_invalid_dimensions(self, dims):
        with pytest.raises(InvalidDimensions):
            random_fill(*dims, 50, "bad")

    @pytest.mark.parametrize("fill", [-1, 101])
    def test_invalid_fill_percent(self, fill):
        with pytest.raises(InvalidFillPercent):
            random_fill(5, 5, 5, fill, "bad")

    @pytest.mark.parametrize("seed", [None, True, 3.0])
    def test_invalid_seed(self, seed):
        with pytest.raises(InvalidSeed):
            random_fill(5, 5, 5, 50, seed)

    def test_int_seed_accepted(self):
        a = random_fill(8, 8, 8, 50, 1234)
        b = random_fill(8, 8, 8, 50, 1234)
        assert a.equals(b)


# ============== Exclusion Tests ==============

class TestExclusion:
    """Test forced-empty carving."""

    @pytest.fixture
    def solid(self):
        return Volume.filled((8, 8, 8), CellState.SOLID)

    def test_box_exclusion_inclusive(self):
        inside = box_exclusion((2, 2, 2), (4, 4, 4))
        assert inside(Coord(2, 2, 2))
        assert inside(Coord(4, 3, 4))
        assert not inside(Coord(5, 3, 3))

    def test_box_exclusion_needs_three_components(self):
        with pytest.raises(InvalidDimensions):
            box_exclusion((1, 2), (3, 4))

    def test_sphere_exclusion(self):
        inside = sphere_exclusion((4, 4, 4), 1.5)
        assert inside(Coord(4, 4, 4))
        assert inside(Coord(5, 5, 4))
        assert not inside(Coord(6, 4, 4))

    def test_apply_predicate(self, solid):
        """Selected interior cells become empty."""
        carved = apply_exclusion(solid, box_exclusion((2, 2, 2), (4, 4, 4)))

        assert carved.count(CellState.EMPTY) == 27
        assert carved.get(3, 3, 3) == CellState.EMPTY
        assert solid.count(CellState.EMPTY) == 0

    def test_boundary_never_carved(self, solid):
        """An exclusion covering everything leaves the shell intact."""
        carved = apply_exclusion(solid, lambda coord: True)

        assert carved.is_enclosed()
        assert carved.count(CellState.EMPTY) == 6 * 6 * 6

    def test_predicate_called_once_per_interior_cell(self, solid):
        seen = []

        def record(coord):
            seen.append(coord)
            return False

        exclusion_mask(solid.shape, record)

        assert len(seen) == 6 * 6 * 6
        assert seen[0] == Coord(1, 1, 1)
        assert seen[1] == Coord(1, 1, 2)
        assert len(set(seen)) == len(seen)

    def test_array_mask(self, solid):
        mask = np.zeros(solid.shape, dtype=bool)
        mask[0, 0, 0] = True  # boundary, ignored
        mask[3, 4, 5] = True
        carved = apply_exclusion(solid, mask)

        assert carved.get(3, 4, 5) == CellState.EMPTY
        assert carved.get(0, 0, 0) == CellState.SOLID
        assert carved.count(CellState.EMPTY) == 1

    def test_array_mask_shape_mismatch(self, solid):
        with pytest.raises(InvalidDimensions):
            apply_exclusion(solid, np.ones((4, 4, 4), dtype=bool))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
