"""CAN frame generation, writing and loading"""

from canfuzz.data.generator import CANFrame, Label, RecordGenerator, format_timestamp
from canfuzz.data.writer import DatasetWriteError, write_dataset, generate_dataset
from canfuzz.data.reader import read_dataset, summarize, validate_dataset

__all__ = [
    'CANFrame', 'Label', 'RecordGenerator', 'format_timestamp',
    'DatasetWriteError', 'write_dataset', 'generate_dataset',
    'read_dataset', 'summarize', 'validate_dataset',
]
