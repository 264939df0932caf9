"""
Output module for writing the generated client.
"""

from __future__ import annotations

from .atomic_writer import OutputWriter

__all__ = [
    "OutputWriter",
]
