"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from utils.parsing.release_info import (
    normalize_codec,
    normalize_source,
    parse_group,
    parse_hdr,
    parse_languages,
    parse_release_info,
    parse_size,
)

__all__ = [
    'normalize_codec',
    'normalize_source',
    'parse_group',
    'parse_hdr',
    'parse_languages',
    'parse_release_info',
    'parse_size',
]
