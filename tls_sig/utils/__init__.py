"""Utility helpers for binary layout and time operations."""

from .binary import BinaryReader, BinaryWriter
from .time import unix_now, utc_now

__all__ = ["BinaryReader", "BinaryWriter", "unix_now", "utc_now"]
