"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import functools
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from magnet.codec import extract_info_hash, normalize_magnet
from models.release import ReleaseInfo
from models.stream import AggregatedStream, StreamCandidate

logger = logging.getLogger(__name__)

SORT_FIELDS = ('resolution', 'peers', 'language', 'size', 'codec', 'source', 'hdr', 'audio')
DEFAULT_SORT_FIELDS = ('resolution', 'peers', 'language')

_RESOLUTION_REGEX = re.compile(r'(\d{3,4})p', re.IGNORECASE)


@dataclass(frozen=True)
class SortConfig:
    order: str = 'desc'
    fields: Tuple[str, ...] = DEFAULT_SORT_FIELDS

    @classmethod
    def build(cls, order: Optional[str] = None, fields: Optional[Iterable[str]] = None) -> 'SortConfig':
        normalized_order = 'asc' if str(order or '').strip().lower() == 'asc' else 'desc'
        requested = [str(f or '').strip().lower() for f in (fields or [])]
        if not requested:
            requested = list(DEFAULT_SORT_FIELDS)
        # Campos desconhecidos são ignorados
        known = tuple(dict.fromkeys(f for f in requested if f in SORT_FIELDS))
        return cls(order=normalized_order, fields=known)

    def cache_token(self) -> str:
        return f"{self.order}:{','.join(self.fields)}"


# Stream final + métricas de ordenação (None = não mensurável)
@dataclass
class ScoredStream:
    stream: AggregatedStream
    scores: Dict[str, Any] = field(default_factory=dict)


def _candidate_hash(candidate: StreamCandidate) -> str:
    if candidate.info_hash:
        return candidate.info_hash.lower()
    if candidate.has_magnet:
        return extract_info_hash(candidate.url)
    return ''


def dedupe_candidates(candidates: Iterable[StreamCandidate]) -> List[StreamCandidate]:
    """Remove duplicatas: info_hash (sem diferenciar maiúsculas) > magnet normalizado.

    Itens sem hash nem magnet passam adiante sem deduplicação.
    """
    result = []
    seen_hashes = set()
    seen_magnets = set()
    for candidate in candidates:
        info_hash = _candidate_hash(candidate)
        if info_hash:
            if info_hash in seen_hashes:
                continue
            seen_hashes.add(info_hash)
            result.append(candidate)
            continue
        if candidate.has_magnet:
            key = normalize_magnet(candidate.url)
            if not key:
                logger.debug(f"[StreamProcessor] magnet malformado descartado ({candidate.provider})")
                continue
            if key in seen_magnets:
                continue
            seen_magnets.add(key)
            result.append(candidate)
            continue
        result.append(candidate)
    return result


# ----------------------------------------------------------------------
# Métricas de ordenação
# ----------------------------------------------------------------------

def resolution_score(resolution: Optional[str]) -> int:
    token = str(resolution or '')
    match = _RESOLUTION_REGEX.search(token)
    if match:
        return int(match.group(1))
    lowered = token.lower()
    if '4k' in lowered or 'uhd' in lowered:
        return 2160
    return 0


def peers_score(candidate: StreamCandidate) -> Optional[int]:
    if candidate.seeds is not None:
        return candidate.seeds
    return candidate.leechers


def size_score(candidate: StreamCandidate, info: ReleaseInfo) -> Optional[int]:
    if candidate.size_bytes:
        return candidate.size_bytes
    return info.size_bytes


def codec_score(codec: Optional[str]) -> Optional[int]:
    if not codec:
        return None
    raw = codec.lower()
    if 'av1' in raw:
        return 6
    if re.search(r'hevc|x265|h\.?265', raw):
        return 5
    if re.search(r'x264|h\.?264', raw):
        return 4
    if 'vp9' in raw:
        return 3
    if re.search(r'mpeg-?4', raw):
        return 2
    return 0


def source_score(source: Optional[str]) -> Optional[int]:
    if not source:
        return None
    src = source.upper()
    if re.search(r'BLURAY|BDRIP|BRRIP', src):
        return 6
    if 'WEBDL' in src:
        return 5
    if 'WEBRIP' in src:
        return 4
    if 'HDRIP' in src:
        return 3
    if 'HDTV' in src:
        return 2
    if 'DVDRIP' in src:
        return 1
    return 0


def hdr_score(hdr: Optional[str]) -> int:
    value = str(hdr or '').upper()
    if not value:
        return 0
    if re.search(r'DOLBY\s?VISION|\bDV\b', value):
        return 3
    if 'HDR10+' in value:
        return 2
    return 1


def audio_score(audio: Optional[str]) -> Optional[int]:
    if not audio:
        return None
    value = audio.upper()
    if re.search(r'ATMOS|TRUEHD', value):
        return 6
    if re.search(r'DTS-?HD|DTS\s?MA', value):
        return 5
    if 'DTS' in value:
        return 4
    if re.search(r'E-?AC-?3|DDP', value):
        return 3
    if 'AC3' in value:
        return 2
    if 'AAC' in value:
        return 1
    return 0


def primary_language(candidate: StreamCandidate, info: ReleaseInfo) -> Optional[str]:
    for language in list(candidate.languages) + list(info.languages):
        if language:
            return str(language).lower()
    return None


def compute_scores(candidate: StreamCandidate, info: ReleaseInfo) -> Dict[str, Any]:
    return {
        'resolution': resolution_score(info.resolution),
        'peers': peers_score(candidate),
        'language': primary_language(candidate, info),
        'size': size_score(candidate, info),
        'codec': codec_score(info.codec),
        'source': source_score(info.source),
        'hdr': hdr_score(info.hdr),
        'audio': audio_score(info.audio),
    }


# ----------------------------------------------------------------------
# Ordenação
# ----------------------------------------------------------------------

def compare_scores(a: Dict[str, Any], b: Dict[str, Any], config: SortConfig) -> int:
    factor = 1 if config.order == 'asc' else -1
    for name in config.fields:
        av = a.get(name)
        bv = b.get(name)
        if av is None and bv is None:
            continue
        # Valor não mensurável vai para o fim em qualquer direção
        if av is None:
            return 1
        if bv is None:
            return -1
        if av == bv:
            continue
        return factor * (-1 if av < bv else 1)
    return 0


def sort_streams(items: List[ScoredStream], config: SortConfig) -> List[ScoredStream]:
    if not config.fields:
        return list(items)
    key = functools.cmp_to_key(lambda a, b: compare_scores(a.scores, b.scores, config))
    return sorted(items, key=key)
