"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import logging
import re
from typing import Iterable, List, Optional, Tuple
from urllib.parse import parse_qsl, quote

from magnet.parser import MagnetParser

logger = logging.getLogger(__name__)

MAGNET_PREFIX = 'magnet:?'
BTIH_PREFIX = 'urn:btih:'

_HTML_AMP_REGEX = re.compile(r'&amp;|&amp%3B', re.IGNORECASE)
_MULTI_AMP_REGEX = re.compile(r'&&+')
_HEX40_REGEX = re.compile(r'^[a-fA-F0-9]{40}$')
_BTIH_REGEX = re.compile(r'xt=urn:btih:([a-fA-F0-9]{40}|[a-zA-Z2-7]{32})(?![a-zA-Z0-9])', re.IGNORECASE)


# Corrige "&amp;" (e a variante "&amp%3B") e colapsa "&&"
def sanitize_query(query: str) -> str:
    cleaned = _HTML_AMP_REGEX.sub('&', str(query or ''))
    return _MULTI_AMP_REGEX.sub('&', cleaned)


def _parse_params(query: str) -> List[Tuple[str, str]]:
    return parse_qsl(sanitize_query(query), keep_blank_values=True)


# Serializa mantendo xt cru (com ':') e codificando o restante
def _serialize(xt: Optional[str], dn: Optional[str], trackers: Iterable[str],
               extras: Iterable[Tuple[str, str]] = ()) -> str:
    parts = []
    if xt:
        parts.append(f"xt={xt}")
    if dn:
        parts.append(f"dn={quote(str(dn), safe='')}")
    for tracker in trackers:
        if tracker:
            parts.append(f"tr={quote(str(tracker), safe='')}")
    for key, value in extras:
        parts.append(f"{quote(str(key), safe='')}={quote(str(value), safe='')}")
    return MAGNET_PREFIX + '&'.join(parts)


def _first(params: List[Tuple[str, str]], name: str) -> Optional[str]:
    for key, value in params:
        if key == name:
            return value
    return None


# Chave canônica de deduplicação: remove todos os tr= (ignora quais trackers vieram anexados)
def normalize_magnet(magnet: str) -> str:
    try:
        value = str(magnet or '')
        if not value.startswith(MAGNET_PREFIX):
            return ''
        parts = []
        for pair in sanitize_query(value[len(MAGNET_PREFIX):]).split('&'):
            if not pair or pair.startswith('tr='):
                continue
            if pair.lower().startswith('xt=' + BTIH_PREFIX):
                hash_value = pair[len('xt=' + BTIH_PREFIX):]
                if _HEX40_REGEX.match(hash_value):
                    pair = f"xt={BTIH_PREFIX}{hash_value.lower()}"
            parts.append(pair)
        if not parts:
            return ''
        return MAGNET_PREFIX + '&'.join(parts)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Falha ao normalizar magnet: %s", exc)
        return ''


# Anexa trackers preservando os existentes e ignorando duplicatas exatas
def append_trackers(magnet: str, trackers: Iterable[str]) -> str:
    base = str(magnet or '')
    if not base.startswith(MAGNET_PREFIX):
        return base
    try:
        params = _parse_params(base[len(MAGNET_PREFIX):])
        merged = [value for key, value in params if key == 'tr']
        seen = set(merged)
        for tracker in trackers or []:
            value = str(tracker or '')
            if not value or value in seen:
                continue
            merged.append(value)
            seen.add(value)
        extras = [(key, value) for key, value in params if key not in ('xt', 'dn', 'tr')]
        return _serialize(_first(params, 'xt'), _first(params, 'dn'), merged, extras)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Falha ao anexar trackers ao magnet: %s", exc)
        return base


# Constrói magnet a partir do info_hash; string vazia = não representável como stream
def build_magnet(info_hash: str, name: str = '', trackers: Iterable[str] = ()) -> str:
    try:
        hash_value = str(info_hash or '').strip()
        if not hash_value:
            return ''
        unique_trackers = []
        seen = set()
        for tracker in trackers or []:
            value = str(tracker or '')
            if not value or value in seen:
                continue
            seen.add(value)
            unique_trackers.append(value)
        return _serialize(f"{BTIH_PREFIX}{hash_value}", name, unique_trackers)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Falha ao construir magnet para %s: %s", info_hash, exc)
        return ''


# Extrai info_hash (hex minúsculo) de um magnet, convertendo base32 quando necessário
def extract_info_hash(magnet: str) -> str:
    match = _BTIH_REGEX.search(str(magnet or ''))
    if not match:
        return ''
    return MagnetParser.to_hex(match.group(1))


# Nome de exibição (dn) decodificado
def get_magnet_name(magnet: str) -> str:
    value = str(magnet or '')
    if not value.startswith(MAGNET_PREFIX):
        return ''
    try:
        return _first(_parse_params(value[len(MAGNET_PREFIX):]), 'dn') or ''
    except Exception:  # noqa: BLE001
        return ''
