"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from typing import List, Optional, Tuple

from models.release import ReleaseInfo
from models.stream import StreamCandidate
from utils.text.utils import format_bytes

BENEFIT_LINE = '🌐 Faster peer discovery and startup time'
ORIGINAL_SEPARATOR = '--- Original ---'


def _size_display(candidate: StreamCandidate, info: ReleaseInfo) -> str:
    # Tamanho informado pelo provider tem prioridade sobre o extraído do nome
    return candidate.size or info.size_str or format_bytes(candidate.size_bytes or 0)


def _languages(candidate: StreamCandidate, info: ReleaseInfo) -> List[str]:
    return [lang for lang in dict.fromkeys(list(candidate.languages) + list(info.languages)) if lang]


def build_description(
    candidate: StreamCandidate,
    info: ReleaseInfo,
    trackers_added: int,
    label: str,
    episode: Optional[Tuple[int, int]] = None,
    require_details: bool = True,
    append_original: bool = False,
) -> str:
    """Descrição multilinha com metadados do release e dados de swarm.

    Sem nenhum detalhe reconhecido e com require_details ligado, devolve a
    descrição original do provider (ou string vazia).
    """
    lines = []
    if trackers_added > 0:
        lines.append(f"⚡ {label} +{trackers_added} trackers")
    else:
        lines.append(f"⚡ {label} optimized")
    if candidate.provider:
        lines.append(f"📦 Provider: {candidate.provider}")

    if episode:
        season_number, episode_number = episode
        lines.append(f"📅 Season: {season_number}")
        lines.append(f"🎬 Episode: {episode_number}")

    if info.source:
        lines.append(f"🧩 Source: {info.source}")
    if info.codec:
        lines.append(f"🎞️ Codec: {info.codec}")
    if info.hdr:
        lines.append(f"🌈 HDR: {info.hdr}")
    if info.audio:
        lines.append(f"🔊 Audio: {info.audio}")
    if info.resolution:
        lines.append(f"🖥️ Resolution: {info.resolution}")
    if info.group:
        lines.append(f"🏷️ Group: {info.group}")

    if candidate.seeds is not None:
        lines.append(f"🌱 Seeds: {candidate.seeds}")
    if candidate.leechers is not None:
        lines.append(f"👥 Peers: {candidate.leechers}")

    size = _size_display(candidate, info)
    if size:
        lines.append(f"🗜️ Size: {size}")

    languages = _languages(candidate, info)
    if languages:
        lines.append(f"🈶 Languages: {', '.join(languages)}")

    lines.append(BENEFIT_LINE)
    enhanced = '\n'.join(lines)

    detail_count = (
        info.detail_count()
        + (1 if languages else 0)
        + (1 if size else 0)
        + (1 if candidate.has_swarm_data else 0)
    )
    original = candidate.description or ''

    if not detail_count and require_details:
        return original
    if append_original and original:
        return f"{enhanced}\n\n{ORIGINAL_SEPARATOR}\n{original}"
    return enhanced
