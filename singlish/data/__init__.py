"""Data input/output helpers."""

from .output_writer import OutputWriter

__all__ = ["OutputWriter"]
