"""
Script to generate a synthetic CAN fuzzy-attack dataset.

Usage:
    python scripts/generate_data.py
    python scripts/generate_data.py --normal-count 9000 --injected-count 1000
    python scripts/generate_data.py --seed 42 --output data/raw/can.csv
"""

import argparse
import logging
from pathlib import Path
import sys

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from canfuzz.config import settings
from canfuzz.data.writer import DatasetWriteError, generate_dataset


def non_negative_int(value: str) -> int:
    """argparse type for frame counts"""
    count = int(value)
    if count < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {count}")
    return count


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate synthetic CAN fuzzy-attack data")

    parser.add_argument(
        "--output",
        type=str,
        default=settings.output_path,
        help=f"Output CSV path (default: {settings.output_path})"
    )

    parser.add_argument(
        "--normal-count",
        type=non_negative_int,
        default=settings.normal_count,
        help=f"Number of normal (R) frames (default: {settings.normal_count})"
    )

    parser.add_argument(
        "--injected-count",
        type=non_negative_int,
        default=settings.injected_count,
        help=f"Number of injected (T) frames (default: {settings.injected_count})"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=settings.seed,
        help="Random seed for reproducible output"
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        generate_dataset(
            output_path=args.output,
            normal_count=args.normal_count,
            injected_count=args.injected_count,
            seed=args.seed,
            show_progress=not args.no_progress,
        )
    except DatasetWriteError as e:
        print(f"Error generating dataset: {e}")
        return 1

    print(f"\nDataset generated successfully and saved to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
