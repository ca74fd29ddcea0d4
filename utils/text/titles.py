"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import re
from typing import Optional, Tuple

from utils.text.constants import REGEX_RELEASE_SEPARATORS

REGEX_MULTIPLE_SPACES = re.compile(r'\s+')
REGEX_EPISODE_MARKER = re.compile(r'\bS(\d{1,2})E(\d{1,3})\b', re.IGNORECASE)
REGEX_LEADING_SEPARATORS = re.compile(r'^[\s:\-–]+')
# Tokens técnicos que encerram o nome do episódio
REGEX_TECHNICAL_TAIL = re.compile(
    r'\b(2160p|1080p|720p|480p|4K|UHD|WEB[- ]?DL|WEB[- ]?Rip|BluRay|BDRip|HDRip|DVDRip|DDP(?:\.\d+)?|'
    r'E-?AC-?3|AC3|DTS(?:-HD)?(?: MA)?|TrueHD|HEVC|x265|H\.265|x264|H\.264|HDR10\+?|Dolby[ \-.]?Vision|DV|'
    r'ENG|ENGLISH|ITA|ITALIAN|MULTI|SUBS?|VOSTFR|LATINO|CASTELLANO)\b',
    re.IGNORECASE
)

MAX_EPISODE_TITLE = 120


# "tt0944947:1:2" -> (1, 2)
def parse_series_id(raw_id: str) -> Optional[Tuple[int, int]]:
    parts = str(raw_id or '').split(':')
    if len(parts) < 3:
        return None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None


def _normalize(raw_title: str) -> str:
    title = REGEX_RELEASE_SEPARATORS.sub(' ', str(raw_title or ''))
    return REGEX_MULTIPLE_SPACES.sub(' ', title).strip()


def extract_season_episode(raw_title: str) -> Optional[Tuple[int, int]]:
    match = REGEX_EPISODE_MARKER.search(_normalize(raw_title))
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def build_series_display_title(raw_title: str) -> str:
    """Título de exibição para séries: "Show S01E02 - Nome do Episódio".

    Corta o nome do episódio no primeiro token técnico (resolução, codec, etc.).
    """
    title = _normalize(raw_title)
    if not title:
        return ''
    match = REGEX_EPISODE_MARKER.search(title)
    if not match:
        return title

    season = match.group(1).zfill(2)
    episode = match.group(2).zfill(2)
    prefix = title[:match.start()].strip()
    tail = REGEX_LEADING_SEPARATORS.sub('', title[match.end():]).strip()

    cut = REGEX_TECHNICAL_TAIL.search(tail)
    if cut and cut.start() > 0:
        tail = tail[:cut.start()].strip()
    elif cut:
        tail = ''
    tail = tail[:MAX_EPISODE_TITLE].strip()

    display = f"{prefix} S{season}E{episode}"
    if tail:
        display += f" - {tail}"
    return REGEX_MULTIPLE_SPACES.sub(' ', display).strip()
