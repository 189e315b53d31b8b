"""
Synthetic CAN frame generator.

Generates fuzzy-attack CAN traffic with exact counts of normal and injected frames.
"""

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, Optional, Tuple

from canfuzz.data.signals import DATA_LENGTH, SIGNAL_TABLE, Signal, sample

logger = logging.getLogger(__name__)

# Default injected ID range, just above the signal table (0x206 - 0x2FF)
INJECTED_ID_RANGE = (0x206, 0x2FF)


class Label(str, Enum):
    """Ground truth flag written in the last column"""
    NORMAL = "R"
    INJECTED = "T"


@dataclass(frozen=True)
class CANFrame:
    """A single labeled CAN frame"""
    timestamp: str
    can_id: int
    dlc: int
    data: bytes
    label: Label


@dataclass
class RunCounters:
    """Per-run frame counters, bounded by their targets"""
    normal_target: int
    injected_target: int
    normal: int = 0
    injected: int = 0

    @property
    def total_target(self) -> int:
        return self.normal_target + self.injected_target

    @property
    def total(self) -> int:
        return self.normal + self.injected

    @property
    def normal_done(self) -> bool:
        return self.normal >= self.normal_target

    @property
    def injected_done(self) -> bool:
        return self.injected >= self.injected_target


class GeneratorExhausted(RuntimeError):
    """Raised when a frame is requested after both targets are reached"""


def format_timestamp(ns: Optional[int] = None) -> str:
    """
    Format a wall-clock sample as UNIX time with microsecond precision.

    Args:
        ns: Nanoseconds since the epoch (samples time.time_ns() if None)

    Returns:
        String like "1700000000.012345"
    """
    if ns is None:
        ns = time.time_ns()
    seconds, microseconds = divmod(ns // 1000, 1_000_000)
    return f"{seconds}.{microseconds:06d}"


class RecordGenerator:
    """Generate labeled CAN frames with exact normal/injected counts"""

    def __init__(
        self,
        normal_target: int,
        injected_target: int,
        signal_table: Optional[Dict[int, Signal]] = None,
        injected_id_range: Tuple[int, int] = INJECTED_ID_RANGE,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        clock: Callable[[], int] = time.time_ns,
    ):
        """
        Args:
            normal_target: Exact number of normal (R) frames to produce
            injected_target: Exact number of injected (T) frames to produce
            signal_table: Known-good IDs and their signals (default: SIGNAL_TABLE)
            injected_id_range: Inclusive (min, max) range for injected IDs
            rng: Random source (takes precedence over seed)
            seed: Seed for a fresh random source, for reproducibility
            clock: Returns nanoseconds since the epoch, used for timestamps
        """
        if normal_target < 0 or injected_target < 0:
            raise ValueError("Targets must be non-negative")

        self.signal_table = dict(SIGNAL_TABLE if signal_table is None else signal_table)
        if not self.signal_table:
            raise ValueError("Signal table must not be empty")

        low, high = injected_id_range
        if low > high:
            raise ValueError(f"Empty injected ID range: {low:#x}-{high:#x}")
        overlap = [can_id for can_id in self.signal_table if low <= can_id <= high]
        if overlap:
            raise ValueError(
                "Injected ID range overlaps signal table: "
                + ", ".join(f"{can_id:#x}" for can_id in sorted(overlap))
            )

        self.injected_id_range = (low, high)
        self.rng = rng if rng is not None else random.Random(seed)
        self.clock = clock
        self.counters = RunCounters(normal_target, injected_target)

        # Key order is fixed so a seeded run is reproducible
        self._signal_ids = sorted(self.signal_table)

        logger.debug(
            "Generator ready: %d normal, %d injected, injected IDs %X-%X",
            normal_target, injected_target, low, high,
        )

    @property
    def total_target(self) -> int:
        return self.counters.total_target

    @property
    def remaining(self) -> int:
        """Frames still to be produced"""
        return self.total_target - self.counters.total

    def _generate_injected_frame(self, timestamp: str) -> CANFrame:
        """Random ID outside the signal table with a fully random payload"""
        low, high = self.injected_id_range
        can_id = self.rng.randint(low, high)
        data = bytes(self.rng.randrange(256) for _ in range(DATA_LENGTH))

        self.counters.injected += 1
        return CANFrame(timestamp, can_id, DATA_LENGTH, data, Label.INJECTED)

    def _generate_normal_frame(self, timestamp: str) -> CANFrame:
        """Known ID with fluctuating sensor data"""
        can_id = self.rng.choice(self._signal_ids)
        data = sample(self.signal_table[can_id], self.rng)

        self.counters.normal += 1
        return CANFrame(timestamp, can_id, DATA_LENGTH, data, Label.NORMAL)

    def next_record(self) -> CANFrame:
        """
        Generate the next frame.

        Injected frames win a fair coin flip while both classes have budget left,
        and take every slot once the normal target is met.

        Raises:
            GeneratorExhausted: If both targets have already been reached
        """
        timestamp = format_timestamp(self.clock())
        counters = self.counters

        if not counters.injected_done and (counters.normal_done or self.rng.random() < 0.5):
            return self._generate_injected_frame(timestamp)
        if not counters.normal_done:
            return self._generate_normal_frame(timestamp)

        raise GeneratorExhausted(
            f"All {counters.total_target} frames already generated "
            f"({counters.normal} normal, {counters.injected} injected)"
        )

    def generate(self) -> Iterator[CANFrame]:
        """Yield frames until both targets are reached"""
        while self.remaining > 0:
            yield self.next_record()

    def __iter__(self) -> Iterator[CANFrame]:
        return self.generate()
