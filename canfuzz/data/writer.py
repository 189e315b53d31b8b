"""
CSV dataset writer.

Streams generated frames to a header-less CSV file in chunks.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd
from tqdm import tqdm

from canfuzz.config import settings
from canfuzz.data.generator import CANFrame, RecordGenerator

logger = logging.getLogger(__name__)


class DatasetWriteError(Exception):
    """Output file could not be created or written"""


def frame_to_row(frame: CANFrame) -> List[str]:
    """
    Convert a frame to CSV fields.

    Layout: timestamp, ID (hex, no prefix), DLC, 8 data bytes (hex), flag
    """
    return [
        frame.timestamp,
        f"{frame.can_id:X}",
        str(frame.dlc),
        *(f"{b:02X}" for b in frame.data),
        frame.label.value,
    ]


def _flush(rows: List[List[str]], f) -> None:
    try:
        pd.DataFrame(rows).to_csv(f, header=False, index=False)
    except OSError as e:
        raise DatasetWriteError(f"could not write record: {e}") from e


def write_dataset(
    frames: Iterable[CANFrame],
    output_path: Union[str, Path],
    total: Optional[int] = None,
    chunk_size: int = 100_000,
    show_progress: bool = True,
) -> int:
    """
    Write frames to a CSV file.

    Args:
        frames: Frames in generation order
        output_path: Destination CSV (created or truncated)
        total: Expected number of frames, for the progress bar
        chunk_size: Rows buffered per write
        show_progress: Display a progress bar

    Returns:
        Number of rows written

    Raises:
        DatasetWriteError: If the file cannot be created or written
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    output_path = Path(output_path)
    logger.info(f"Writing CAN dataset to {output_path}")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        f = output_path.open("w", newline="", encoding="utf-8")
    except OSError as e:
        raise DatasetWriteError(f"could not create file: {e}") from e

    written = 0
    with f, tqdm(
        total=total,
        desc="Generating CAN dataset",
        unit="frame",
        ncols=100,
        disable=not show_progress,
    ) as bar:
        rows: List[List[str]] = []
        for frame in frames:
            rows.append(frame_to_row(frame))
            bar.update(1)

            if len(rows) >= chunk_size:
                _flush(rows, f)
                written += len(rows)
                rows = []

        if rows:
            _flush(rows, f)
            written += len(rows)

    logger.info(f"Wrote {written:,} frames to {output_path}")
    return written


def generate_dataset(
    output_path: Optional[str] = None,
    normal_count: Optional[int] = None,
    injected_count: Optional[int] = None,
    seed: Optional[int] = None,
    show_progress: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Convenience function to generate and save a dataset.

    Unset arguments fall back to `settings`.

    Returns:
        Run statistics (path, total, normal, injected)
    """
    output_path = output_path or settings.output_path
    normal_count = settings.normal_count if normal_count is None else normal_count
    injected_count = settings.injected_count if injected_count is None else injected_count
    seed = settings.seed if seed is None else seed
    show_progress = settings.show_progress if show_progress is None else show_progress

    generator = RecordGenerator(
        normal_target=normal_count,
        injected_target=injected_count,
        injected_id_range=(settings.injected_id_min, settings.injected_id_max),
        seed=seed,
    )

    print(f"Generating {generator.total_target:,} CAN frames...")
    print(f"Normal: {normal_count:,}  Injected: {injected_count:,}")

    total = write_dataset(
        generator,
        output_path,
        total=generator.total_target,
        chunk_size=settings.chunk_size,
        show_progress=show_progress,
    )

    return {
        "output_path": str(output_path),
        "total": total,
        "normal": generator.counters.normal,
        "injected": generator.counters.injected,
    }
