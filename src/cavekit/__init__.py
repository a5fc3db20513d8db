"""
Shared toolkit for cave generation.

Volume model:
- Binary grid indexed [x, y, z], SOLID = 1, EMPTY = 0
- Boundary faces are always solid (the cave is enclosed)
- Volumes are read-only; every stage returns a new one
"""

from .config import GenerationConfig, VolumeMetadata, DEFAULT_CONFIG
from .errors import (
    CaveConfigError,
    InvalidDimensions,
    InvalidFillPercent,
    InvalidThreshold,
    InvalidIterationCount,
    InvalidCellSize,
    InvalidSeed,
    InvalidVolumeData,
    CoordinateOutOfRange,
)
from .volume import CellState, Coord, Volume
from .rng import make_rng, seed_to_int

__all__ = [
    'GenerationConfig', 'VolumeMetadata', 'DEFAULT_CONFIG',
    'CaveConfigError', 'InvalidDimensions', 'InvalidFillPercent',
    'InvalidThreshold', 'InvalidIterationCount', 'InvalidCellSize', 'InvalidSeed',
    'InvalidVolumeData', 'CoordinateOutOfRange',
    'CellState', 'Coord', 'Volume',
    'make_rng', 'seed_to_int',
]
