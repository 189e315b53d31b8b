"""
Load and check generated CAN datasets.
"""

import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from canfuzz.data.generator import CANFrame, Label
from canfuzz.data.signals import DATA_LENGTH, SIGNAL_TABLE, Signal, is_valid_payload

DATA_COLUMNS = [f"data{i}" for i in range(DATA_LENGTH)]
COLUMNS = ["timestamp", "can_id", "dlc", *DATA_COLUMNS, "flag"]

TIMESTAMP_PATTERN = re.compile(r"\d+\.\d{6}")
ID_PATTERN = re.compile(r"[0-9A-F]+")
BYTE_PATTERN = re.compile(r"[0-9A-F]{2}")


def read_dataset(path: Union[str, Path]) -> pd.DataFrame:
    """Read a header-less dataset CSV, keeping every column as text"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found at {path}")

    return pd.read_csv(
        path,
        header=None,
        names=COLUMNS,
        dtype=str,
        keep_default_na=False,
    )


def row_to_frame(row: Sequence[str]) -> CANFrame:
    """
    Parse one CSV row back into a frame.

    Raises:
        ValueError: If the row is malformed
    """
    if len(row) != len(COLUMNS):
        raise ValueError(f"Expected {len(COLUMNS)} columns, got {len(row)}")

    timestamp, can_id, dlc, *data, flag = row
    try:
        label = Label(flag)
    except ValueError:
        raise ValueError(f"Unknown flag: {flag!r}") from None

    if not ID_PATTERN.fullmatch(can_id):
        raise ValueError(f"ID must be uppercase hex without prefix: {can_id!r}")
    if not all(BYTE_PATTERN.fullmatch(b) for b in data):
        raise ValueError(f"Data bytes must be 2 uppercase hex digits: {data}")

    return CANFrame(
        timestamp=timestamp,
        can_id=int(can_id, 16),
        dlc=int(dlc),
        data=bytes(int(b, 16) for b in data),
        label=label,
    )


def iter_frames(path: Union[str, Path]) -> Iterator[CANFrame]:
    """Yield frames from a dataset file"""
    df = read_dataset(path)
    for row in df.itertuples(index=False, name=None):
        yield row_to_frame(row)


def summarize(df: pd.DataFrame) -> Dict[str, Any]:
    """
    Compute dataset statistics.

    Args:
        df: DataFrame from read_dataset()

    Returns:
        Dictionary with label counts, ratios, ID counts and time span
    """
    total = len(df)
    normal = int((df["flag"] == Label.NORMAL.value).sum())
    injected = int((df["flag"] == Label.INJECTED.value).sum())

    # Malformed timestamps are skipped here; validate_dataset reports them
    timestamps = pd.to_numeric(df["timestamp"], errors="coerce").to_numpy(dtype=float)
    valid = timestamps[~np.isnan(timestamps)]
    span = float(np.max(valid) - np.min(valid)) if valid.size else 0.0

    normal_ids = df.loc[df["flag"] == Label.NORMAL.value, "can_id"].value_counts()

    return {
        "total": total,
        "normal": normal,
        "injected": injected,
        "injected_ratio": injected / total if total else 0.0,
        "unique_ids": int(df["can_id"].nunique()),
        "normal_id_counts": {k: int(v) for k, v in normal_ids.sort_index().items()},
        "time_span_seconds": span,
    }


def validate_dataset(
    df: pd.DataFrame,
    signal_table: Optional[Dict[int, Signal]] = None,
    normal_target: Optional[int] = None,
    injected_target: Optional[int] = None,
) -> List[str]:
    """
    Check a dataset against the generator's guarantees.

    Returns:
        List of violations (empty if the dataset is valid)
    """
    signal_table = SIGNAL_TABLE if signal_table is None else signal_table
    violations: List[str] = []
    previous = None

    for i, row in enumerate(df.itertuples(index=False, name=None)):
        try:
            frame = row_to_frame(row)
        except ValueError as e:
            violations.append(f"row {i}: {e}")
            continue

        if not TIMESTAMP_PATTERN.fullmatch(frame.timestamp):
            violations.append(f"row {i}: bad timestamp {frame.timestamp!r}")
        else:
            ts = tuple(int(part) for part in frame.timestamp.split("."))
            if previous is not None and ts < previous:
                violations.append(f"row {i}: timestamp goes backward")
            previous = ts

        if frame.dlc != DATA_LENGTH:
            violations.append(f"row {i}: DLC {frame.dlc} != {DATA_LENGTH}")

        signal = signal_table.get(frame.can_id)
        if frame.label is Label.INJECTED:
            if signal is not None:
                violations.append(f"row {i}: injected frame uses known ID {frame.can_id:X}")
        elif signal is None:
            violations.append(f"row {i}: normal frame uses unknown ID {frame.can_id:X}")
        elif not is_valid_payload(signal, frame.data):
            violations.append(f"row {i}: payload out of range for {signal.name}")

    flags = df["flag"].value_counts()
    normal = int(flags.get(Label.NORMAL.value, 0))
    injected = int(flags.get(Label.INJECTED.value, 0))
    if normal_target is not None and normal != normal_target:
        violations.append(f"expected {normal_target} normal frames, found {normal}")
    if injected_target is not None and injected != injected_target:
        violations.append(f"expected {injected_target} injected frames, found {injected}")

    return violations
