"""
Cellular Caves - Seeded 3D cave volume generation.

Pipeline stages:
- Seeded fill (random solid/empty classification, sealed boundary)
- Cellular-automaton smoothing (3x3x3 neighborhood)
- Region curation (seal small pockets, keep one main cavern)

Usage:
    python -m src.run_all --seeds alpha beta --width 48 --height 32 --depth 48
"""

__version__ = "1.0.0"
