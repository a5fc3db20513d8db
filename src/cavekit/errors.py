"""
Error taxonomy for cave generation.

Every configuration error is raised before any grid is allocated.
"""

import operator


class CaveConfigError(ValueError):
    """Base class for invalid generation parameters."""


class InvalidDimensions(CaveConfigError):
    """Width, height or depth is not a positive integer."""


class InvalidFillPercent(CaveConfigError):
    """Fill percent outside [0, 100]."""


class InvalidThreshold(CaveConfigError):
    """Room threshold size is negative."""


class InvalidIterationCount(CaveConfigError):
    """Smoothing iteration count is negative."""


class InvalidCellSize(CaveConfigError):
    """Cell size handed to surface extraction is not positive."""


class InvalidSeed(CaveConfigError):
    """Seed is neither a string nor an integer."""


class InvalidVolumeData(ValueError):
    """Array is not a 3D grid of 0/1 cell states."""


class CoordinateOutOfRange(IndexError):
    """Cell coordinate lies outside the volume."""

    def __init__(self, coord, shape):
        self.coord = tuple(coord)
        self.shape = tuple(shape)
        super().__init__(f"Coordinate {self.coord} outside volume of shape {self.shape}")


def _require_int(value, name: str, error: type) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise error(f"{name} must be an integer, got {value!r}")
    try:
        return operator.index(value)
    except TypeError as e:
        raise error(f"{name} must be an integer, got {value!r}") from e


def check_dimensions(width, height, depth) -> tuple:
    """Validate grid dimensions, returning them as ints."""
    dims = []
    for name, value in (("width", width), ("height", height), ("depth", depth)):
        value = _require_int(value, name, InvalidDimensions)
        if value <= 0:
            raise InvalidDimensions(f"{name} must be > 0, got {value}")
        dims.append(value)
    return tuple(dims)


def check_fill_percent(fill_percent) -> int:
    fill_percent = _require_int(fill_percent, "fill_percent", InvalidFillPercent)
    if not 0 <= fill_percent <= 100:
        raise InvalidFillPercent(f"fill_percent must be in [0, 100], got {fill_percent}")
    return fill_percent


def check_iterations(iterations) -> int:
    iterations = _require_int(iterations, "smoothing_iterations", InvalidIterationCount)
    if iterations < 0:
        raise InvalidIterationCount(f"smoothing_iterations must be >= 0, got {iterations}")
    return iterations


def check_threshold(threshold) -> int:
    threshold = _require_int(threshold, "room_threshold_size", InvalidThreshold)
    if threshold < 0:
        raise InvalidThreshold(f"room_threshold_size must be >= 0, got {threshold}")
    return threshold


def check_cell_size(cell_size) -> float:
    if isinstance(cell_size, bool):
        raise InvalidCellSize(f"cell_size must be a number, got {cell_size!r}")
    try:
        cell_size = float(cell_size)
    except (TypeError, ValueError) as e:
        raise InvalidCellSize(f"cell_size must be a number, got {cell_size!r}") from e
    if not cell_size > 0:
        raise InvalidCellSize(f"cell_size must be > 0, got {cell_size}")
    return cell_size


def check_seed(seed):
    if isinstance(seed, bool) or not isinstance(seed, (str, int)):
        raise InvalidSeed(f"seed must be a str or int, got {seed!r}")
    return seed
