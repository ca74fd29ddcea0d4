"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from .parser import MagnetParser
from .codec import (
    normalize_magnet,
    append_trackers,
    build_magnet,
    extract_info_hash,
    get_magnet_name,
)

__all__ = [
    "MagnetParser",
    "normalize_magnet",
    "append_trackers",
    "build_magnet",
    "extract_info_hash",
    "get_magnet_name",
]
