"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from utils.text.titles import build_series_display_title, extract_season_episode, parse_series_id
from utils.text.utils import format_bytes

__all__ = [
    'build_series_display_title',
    'extract_season_episode',
    'parse_series_id',
    'format_bytes',
]
