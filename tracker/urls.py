"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import re
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlparse

TRACKER_SCHEMES = ('udp', 'http', 'https', 'ws')
SOURCE_PREFIX = 'tracker:'

_TRACKER_URL_REGEX = re.compile(r'^(udp|http|https|ws)://', re.IGNORECASE)
_SOURCE_URL_REGEX = re.compile(r'^(https?|udp)://', re.IGNORECASE)


def is_tracker_url(value: str) -> bool:
    return bool(_TRACKER_URL_REGEX.match(str(value or '')))


# Remove duplicatas exatas preservando a ordem da primeira ocorrência
def unique(urls: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(urls))


def normalize_tracker(url: str) -> Optional[str]:
    url = (url or "").strip()
    if not url or url.startswith('#'):
        return None
    if not is_tracker_url(url):
        return None

    # Corrige traduções equivocadas presentes em algumas listas e magnets
    url = url.replace("/anunciar", "/announce")
    if url.endswith("/anunc"):
        url = url[:-len("/anunc")] + "/announce"

    return url


def parse_host(url: str) -> str:
    try:
        return urlparse(url).hostname or ''
    except ValueError:
        return ''


# Host e porta (porta padrão 80 quando ausente, como nas listas públicas)
def parse_host_port(url: str) -> Tuple[str, int]:
    try:
        parsed = urlparse(url)
        return parsed.hostname or '', parsed.port or 80
    except ValueError:
        return '', 80


def origin_from(url: str) -> str:
    try:
        parsed = urlparse(url)
    except ValueError:
        return url
    if not parsed.scheme or not parsed.netloc:
        return url
    return f"{parsed.scheme}://{parsed.netloc}"


def scheme_of(url: str) -> str:
    return str(url or '').split('://', 1)[0].lower() if '://' in str(url or '') else ''


# Trackers anexados como "sources" de streams vêm com prefixo tracker:
def to_source(url: str) -> str:
    return f"{SOURCE_PREFIX}{url}"


# Só http(s) e udp viram sources; ws fica apenas no magnet
def to_sources(trackers: Iterable[str]) -> List[str]:
    return [to_source(t) for t in trackers if _SOURCE_URL_REGEX.match(str(t or ''))]


def strip_source_prefix(value: str) -> str:
    value = str(value or '').strip()
    if value.startswith(SOURCE_PREFIX):
        return value[len(SOURCE_PREFIX):]
    return value
