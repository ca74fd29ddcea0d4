"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import logging
from typing import List, Optional, Tuple

from magnet.codec import get_magnet_name
from models.release import ReleaseInfo
from utils.text.constants import (
    LANGUAGE_PATTERNS,
    REGEX_AUDIO,
    REGEX_CODEC,
    REGEX_DOLBY_VISION,
    REGEX_GROUP_BRACKET,
    REGEX_GROUP_DASH,
    REGEX_HDR,
    REGEX_HDR10,
    REGEX_HDR10_PLUS,
    REGEX_RELEASE_SEPARATORS,
    REGEX_RESOLUTION,
    REGEX_SIZE,
    REGEX_SOURCE,
    REGEX_SOURCE_SEPARATORS,
    SIZE_MULTIPLIERS,
)

logger = logging.getLogger(__name__)


# Qualquer variante 265 -> "HEVC x265", 264 -> "x264"
def normalize_codec(value: str) -> str:
    lowered = value.lower()
    if lowered in ('hevc', 'x265', 'h.265', 'h265'):
        return 'HEVC x265'
    if lowered in ('x264', 'h.264', 'h264'):
        return 'x264'
    if lowered in ('xvid', 'divx', 'mpeg4', 'mpeg-4'):
        return 'MPEG4'
    return value.upper()


def normalize_source(value: str) -> str:
    compact = REGEX_SOURCE_SEPARATORS.sub('', value).upper()
    if compact.endswith('CAM'):
        return 'CAM'
    if compact in ('TS', 'HDTS', 'TELESYNC'):
        return 'TS'
    return compact


def parse_hdr(text: str) -> Optional[str]:
    if REGEX_HDR10_PLUS.search(text):
        return 'HDR10+'
    if REGEX_DOLBY_VISION.search(text):
        return 'Dolby Vision'
    if REGEX_HDR10.search(text):
        return 'HDR10'
    if REGEX_HDR.search(text):
        return 'HDR'
    return None


# Tamanho "1.4 GB" -> ("1.4 GB", bytes); base 1024
def parse_size(text: str) -> Tuple[Optional[str], Optional[int]]:
    match = REGEX_SIZE.search(str(text or ''))
    if not match:
        return None, None
    number = float(match.group(1).replace(',', '.'))
    unit = match.group(2).upper().replace('IB', 'B')
    size_bytes = int(round(number * SIZE_MULTIPLIERS[unit]))
    return f"{number:g} {unit}", size_bytes


def parse_languages(text: str) -> List[str]:
    normalized = REGEX_RELEASE_SEPARATORS.sub(' ', str(text or ''))
    return [name for name, pattern in LANGUAGE_PATTERNS if pattern.search(normalized)]


def parse_group(text: str) -> Optional[str]:
    stripped = text.strip()
    bracket = REGEX_GROUP_BRACKET.search(stripped)
    if bracket:
        return bracket.group(1)
    dash = REGEX_GROUP_DASH.search(stripped)
    if dash:
        return dash.group(1)
    return None


def parse_release_info(text: str, magnet: str = '') -> ReleaseInfo:
    """Extrai metadados técnicos do nome do release.

    O dn do magnet, quando existe, tem prioridade sobre o texto. Cada campo
    é opcional e a função nunca levanta exceção.
    """
    name = get_magnet_name(magnet) or str(text or '')
    info = ReleaseInfo(name=name)
    if not name:
        return info

    try:
        resolution = REGEX_RESOLUTION.search(name)
        if resolution:
            info.resolution = resolution.group(1).upper()

        source = REGEX_SOURCE.search(name)
        if source:
            info.source = normalize_source(source.group(1))

        codec = REGEX_CODEC.search(name)
        if codec:
            info.codec = normalize_codec(codec.group(1))

        info.hdr = parse_hdr(name)

        audio = REGEX_AUDIO.search(name)
        if audio:
            info.audio = audio.group(1).replace('_', ' ').upper()

        info.group = parse_group(name)
        info.size_str, info.size_bytes = parse_size(name)
        info.languages = parse_languages(name)
    except Exception as e:  # noqa: BLE001
        logger.debug(f"Falha ao interpretar release '{name[:80]}': {e}")
    return info
