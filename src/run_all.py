#!/usr/bin/env python3
"""
Cellular Caves - Orchestrator

Generate one cave per seed, export its surface mesh, write a run summary.

Usage:
    python src/run_all.py --seeds alpha beta gamma --width 48 --height 32 --depth 48
    python src/run_all.py --config cave.json --exclude-box 20 10 20 26 16 26
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional
from datetime import datetime
from dataclasses import replace

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from cavekit.config import GenerationConfig
from cavekit.errors import CaveConfigError
from cavekit.io import save_mesh
from cellular_cave.build import build_cave_mesh, generate
from cellular_cave.fill import Exclusion, box_exclusion

logger = logging.getLogger(__name__)


def run_seed(
    config: GenerationConfig,
    exclusion: Optional[Exclusion] = None,
    export_mesh: bool = True
) -> dict:
    """Generate one seed; export its mesh unless disabled. Returns the seed summary."""
    if not export_mesh:
        result = generate(config, exclusion)
        return {
            "curation": result.report.to_dict(),
            "stats": result.stats
        }

    mesh, metadata, stats = build_cave_mesh(config, exclusion)
    output_path = config.get_mesh_path()

    if len(mesh.faces) == 0:
        logger.warning(f"Seed {config.seed!r} produced no surface, mesh not written")
        output_path = None
    else:
        save_mesh(mesh, output_path, metadata)

    return {
        "mesh_path": str(output_path) if output_path else None,
        "metadata": metadata.to_dict(),
        "stats": stats
    }


def run_all(
    seeds: List[str],
    config: GenerationConfig,
    exclusion: Optional[Exclusion] = None,
    export_mesh: bool = True
) -> dict:
    """
    Generate a cave for every seed.

    Args:
        seeds: Level seeds
        config: Base configuration (seed field is replaced per run)
        exclusion: Optional forced-empty region applied to every run
        export_mesh: Write meshes and sidecars

    Returns:
        Summary dictionary
    """
    summary = {
        "timestamp": datetime.now().isoformat(),
        "config": config.to_dict(),
        "seeds": [],
        "errors": []
    }

    for seed in seeds:
        logger.info(f"\n{'='*60}")
        logger.info(f"Seed: {seed}")
        logger.info(f"{'='*60}")

        seed_config = replace(config, seed=seed)
        seed_results = {"seed": seed}

        try:
            seed_results.update(run_seed(seed_config, exclusion, export_mesh))
            seed_results["status"] = "success"
        except Exception as e:
            logger.error(f"Seed {seed!r} failed: {e}")
            seed_results["status"] = "error"
            seed_results["error"] = str(e)
            summary["errors"].append({
                "seed": seed,
                "error": str(e)
            })

        summary["seeds"].append(seed_results)

    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cellular Caves - Generate seeded cave volumes and meshes"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON config file (command-line options override it)"
    )
    parser.add_argument(
        "--seeds", "-s",
        nargs="+",
        default=None,
        help="Level seeds (default: the config seed)"
    )
    parser.add_argument("--width", type=int, help="Grid width in cells")
    parser.add_argument("--height", type=int, help="Grid height in cells")
    parser.add_argument("--depth", type=int, help="Grid depth in cells")
    parser.add_argument(
        "--fill", "-f",
        type=int,
        dest="fill_percent",
        help="Initial fill percent (0-100)"
    )
    parser.add_argument(
        "--iterations", "-i",
        type=int,
        dest="smoothing_iterations",
        help="Smoothing passes"
    )
    parser.add_argument(
        "--threshold", "-t",
        type=int,
        dest="room_threshold_size",
        help="Minimum open-region size in cells"
    )
    parser.add_argument(
        "--cell-size",
        type=float,
        dest="cell_size",
        help="World units per cell for mesh export"
    )
    parser.add_argument(
        "--exclude-box",
        type=int,
        nargs=6,
        metavar=("X0", "Y0", "Z0", "X1", "Y1", "Z1"),
        help="Carve an open box (inclusive) before smoothing"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        dest="output_dir",
        help="Output directory"
    )
    parser.add_argument(
        "--no-mesh",
        action="store_true",
        help="Skip surface extraction and mesh export"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )
    return parser


def load_config(args: argparse.Namespace) -> GenerationConfig:
    """Base config from --config (or defaults), overridden by explicit options."""
    config = GenerationConfig.from_json(args.config) if args.config else GenerationConfig()

    overrides = {
        name: getattr(args, name)
        for name in (
            "width", "height", "depth", "fill_percent", "smoothing_iterations",
            "room_threshold_size", "cell_size", "output_dir"
        )
        if getattr(args, name) is not None
    }
    return replace(config, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Setup logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config(args).validate()
    except (CaveConfigError, OSError, TypeError, json.JSONDecodeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    seeds = args.seeds or [config.seed]
    exclusion = None
    if args.exclude_box:
        exclusion = box_exclusion(args.exclude_box[:3], args.exclude_box[3:])

    logger.info(f"Generating {len(seeds)} caves at {config.dimensions}")
    logger.info(f"Fill: {config.fill_percent}%, passes: {config.smoothing_iterations}, "
                f"room threshold: {config.room_threshold_size}")
    logger.info(f"Output: {config.output_dir}")

    summary = run_all(
        seeds=seeds,
        config=config,
        exclusion=exclusion,
        export_mesh=not args.no_mesh
    )

    # Save summary
    summary_path = config.get_summary_path()
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    with open(summary_path, 'w') as f:
        json.dump(summary, f, indent=2)

    logger.info(f"\nSummary saved to: {summary_path}")

    n_success = sum(1 for s in summary["seeds"] if s.get("status") == "success")
    n_errors = len(summary["errors"])

    logger.info(f"\n{'='*60}")
    logger.info(f"COMPLETE: {n_success} successful, {n_errors} errors")
    logger.info(f"{'='*60}")

    return 1 if n_errors > 0 else 0


if __name__ == "__main__":
    sys.exit(main())
