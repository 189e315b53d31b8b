"""
Print statistics for a generated CAN dataset.

Usage:
    python scripts/inspect_dataset.py
    python scripts/inspect_dataset.py --input data/raw/can.csv --validate
"""

import argparse
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).parent.parent))

from canfuzz.config import settings
from canfuzz.data.reader import ID_PATTERN, read_dataset, summarize, validate_dataset
from canfuzz.data.signals import SIGNAL_TABLE


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect a generated CAN dataset")
    parser.add_argument(
        "--input",
        type=str,
        default=settings.output_path,
        help=f"Dataset CSV path (default: {settings.output_path})"
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Check labels, IDs, payload ranges and timestamps"
    )
    args = parser.parse_args()

    df = read_dataset(args.input)
    stats = summarize(df)

    print(f"{'='*60}")
    print("Dataset Statistics:")
    print(f"{'='*60}")
    print(f"Total frames: {stats['total']:,}")
    print(f"Normal (R):   {stats['normal']:,}")
    print(f"Injected (T): {stats['injected']:,} ({stats['injected_ratio']:.2%})")
    print(f"Unique IDs:   {stats['unique_ids']:,}")
    print(f"Time span:    {stats['time_span_seconds']:.3f}s")

    print("\nNormal frames per ID:")
    for can_id, count in stats['normal_id_counts'].items():
        signal = SIGNAL_TABLE.get(int(can_id, 16)) if ID_PATTERN.fullmatch(can_id) else None
        name = signal.name if signal else "?"
        print(f"  {can_id:>4} {name:<22} {count:,}")
    print(f"{'='*60}")

    if not args.validate:
        return 0

    violations = validate_dataset(df)
    if violations:
        print(f"\n❌ {len(violations)} violation(s):")
        for v in violations[:20]:
            print(f"  - {v}")
        return 1

    print("\n✅ Dataset is valid")
    return 0


if __name__ == "__main__":
    sys.exit(main())
