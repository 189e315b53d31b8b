"""
Signal definitions for normal CAN traffic.

Each signal models a legitimate ECU message source with its own value behavior.
"""

from dataclasses import dataclass
from typing import Dict, Union
import random

DATA_LENGTH = 8  # DLC is fixed to 8 bytes


@dataclass(frozen=True)
class Toggle:
    """
    On/off signal:
    - Value is 0 (off) or 1 (on)
    - Redrawn on every message, not held between frames
    """
    name: str


@dataclass(frozen=True)
class RangeFluctuation:
    """
    Fluctuating sensor reading:
    - Uniform integer in the closed range [min_value, max_value]
    - Encoded big-endian over the leading `width` bytes
    """
    name: str
    min_value: int
    max_value: int
    width: int = 1

    def __post_init__(self):
        if self.min_value > self.max_value:
            raise ValueError(
                f"{self.name}: min_value {self.min_value} > max_value {self.max_value}"
            )
        if not 1 <= self.width <= DATA_LENGTH:
            raise ValueError(f"{self.name}: width must be between 1 and {DATA_LENGTH}")
        if self.min_value < 0 or self.max_value >= 1 << (8 * self.width):
            raise ValueError(
                f"{self.name}: range [{self.min_value}, {self.max_value}] "
                f"does not fit in {self.width} byte(s)"
            )


Signal = Union[Toggle, RangeFluctuation]


def toggle_on_off(rng: random.Random) -> int:
    """Randomly toggle on/off (1 for on, 0 for off)"""
    return 1 if rng.random() < 0.5 else 0


def fluctuate(rng: random.Random, min_value: int, max_value: int) -> int:
    """Random fluctuation within an inclusive range"""
    return rng.randint(min_value, max_value)


def sample(signal: Signal, rng: random.Random) -> bytes:
    """
    Sample one payload for a signal.

    Args:
        signal: Signal variant to sample
        rng: Random source

    Returns:
        DATA_LENGTH bytes, value in the leading byte(s), the rest zero-filled
    """
    if isinstance(signal, Toggle):
        value, width = toggle_on_off(rng), 1
    elif isinstance(signal, RangeFluctuation):
        # One draw split across bytes, high byte first
        value = fluctuate(rng, signal.min_value, signal.max_value)
        width = signal.width
    else:
        raise TypeError(f"Unknown signal type: {type(signal).__name__}")

    return value.to_bytes(width, "big") + bytes(DATA_LENGTH - width)


def decode(signal: Signal, data: bytes) -> int:
    """Reconstruct the sampled value from a payload"""
    width = signal.width if isinstance(signal, RangeFluctuation) else 1
    return int.from_bytes(data[:width], "big")


def is_valid_payload(signal: Signal, data: bytes) -> bool:
    """Check that a payload could have been produced by `sample`"""
    if len(data) != DATA_LENGTH:
        return False

    width = signal.width if isinstance(signal, RangeFluctuation) else 1
    if any(data[width:]):
        return False

    value = decode(signal, data)
    if isinstance(signal, Toggle):
        return value in (0, 1)
    return signal.min_value <= value <= signal.max_value


# Registry of known-good traffic sources (DBC-like)
SIGNAL_TABLE: Dict[int, Signal] = {
    0x100: Toggle("EngineOnOff"),
    0x101: Toggle("FrontLight"),
    0x200: RangeFluctuation("EngineTempSensor", 80, 100),       # °C
    0x201: RangeFluctuation("InjectorTimingSensor", 60, 90),    # ms
    0x202: RangeFluctuation("OxygenSensor", 90, 100),           # %
    0x203: RangeFluctuation("FuelTankLevel", 60, 80),           # %
    0x204: RangeFluctuation("ThrottlePosition", 40, 60),        # %
    0x205: RangeFluctuation("EngineRPM", 2500, 3000, width=2),  # RPM
}
