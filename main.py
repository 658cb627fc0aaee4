#!/usr/bin/env python3
"""
NeuroPlots - Main Entry Point

Renders an example scalp topography with random electrode values.
"""

import sys
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))


def run_example(grid_size: int, output: str, seed: int, method: str):
    """Render the example montage with random values."""
    import numpy as np
    from neuroplots.core import EXAMPLE_CHANNELS, TopoPlotSettings
    from neuroplots.visualization import get_interpolator
    from neuroplots.visualization.topomap import plot_topography

    rng = np.random.default_rng(seed)
    values = rng.random(len(EXAMPLE_CHANNELS))

    settings = TopoPlotSettings(output_path=output)
    fig = plot_topography(
        EXAMPLE_CHANNELS,
        values,
        grid_size=grid_size,
        settings=settings,
        interpolator=get_interpolator(method),
    )
    print(f"Saved {len(EXAMPLE_CHANNELS)}-channel topography to {settings.output_path}")
    return fig


def main():
    """Main entry point with argument parsing."""
    from neuroplots.core import DEFAULT_GRID_SIZE, DEFAULT_OUTPUT_PATH, setup_logging

    parser = argparse.ArgumentParser(
        description='NeuroPlots - EEG scalp topography',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                       Render the example montage to figure.png
  python main.py --grid-size 200       Faster, coarser interpolation
  python main.py --method cubic -o topo.png
        """
    )
    parser.add_argument(
        '--grid-size', '-g',
        type=int,
        default=DEFAULT_GRID_SIZE,
        help=f'Interpolation samples per axis (default: {DEFAULT_GRID_SIZE})'
    )
    parser.add_argument(
        '--output', '-o',
        default=DEFAULT_OUTPUT_PATH,
        help=f'Output image path (default: {DEFAULT_OUTPUT_PATH})'
    )
    parser.add_argument(
        '--seed', '-s',
        type=int,
        default=None,
        help='Random seed for the example values'
    )
    parser.add_argument(
        '--method', '-m',
        choices=['linear', 'cubic', 'rbf'],
        default='linear',
        help='Interpolation method (default: linear)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    run_example(args.grid_size, args.output, args.seed, args.method)


if __name__ == "__main__":
    main()
