"""Synthetic CAN bus fuzzy-attack dataset generator"""

__version__ = "0.1.0"
