"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from typing import Optional, Dict, Any, List, Tuple
from dataclasses import dataclass, field


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _first_present(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


# Oferta bruta de um provider (magnet ou info_hash identifica o torrent)
@dataclass
class StreamCandidate:
    provider: str
    title: str = ''
    url: str = ''
    info_hash: str = ''
    seeds: Optional[int] = None
    leechers: Optional[int] = None
    size: str = ''
    size_bytes: Optional[int] = None
    languages: List[str] = field(default_factory=list)
    description: str = ''
    behavior_hints: Dict[str, Any] = field(default_factory=dict)
    file_idx: Optional[int] = None

    @property
    def has_magnet(self) -> bool:
        return self.url.startswith('magnet:?')

    @property
    def is_identifiable(self) -> bool:
        return bool(self.info_hash) or self.has_magnet

    @property
    def has_swarm_data(self) -> bool:
        return bool(self.seeds) or bool(self.leechers)

    def with_swarm(self, stats: 'SwarmStats') -> 'StreamCandidate':
        """Retorna cópia com seeds/leechers substituídos pelos dados do scrape."""
        data = dict(self.__dict__)
        data['seeds'] = stats.seeds
        data['leechers'] = stats.leechers
        data['languages'] = list(self.languages)
        data['behavior_hints'] = dict(self.behavior_hints)
        return StreamCandidate(**data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], provider: str = '') -> 'StreamCandidate':
        """Cria instância a partir do dicionário retornado pelo provider (aceita chaves camelCase)"""
        languages = data.get('languages')
        if isinstance(languages, str):
            languages = [languages]
        elif not isinstance(languages, list):
            language = data.get('language')
            languages = [language] if isinstance(language, str) and language else []

        behavior_hints = data.get('behaviorHints', data.get('behavior_hints'))
        file_idx = _first_present(data, 'fileIdx', 'file_idx')

        return cls(
            provider=str(data.get('provider') or provider or 'Upstream'),
            title=str(data.get('title') or data.get('name') or ''),
            url=str(data.get('url') or ''),
            info_hash=str(_first_present(data, 'infoHash', 'info_hash') or '').strip(),
            seeds=_to_int(_first_present(data, 'seeds', 'seeders')),
            leechers=_to_int(_first_present(data, 'leechers', 'peers')),
            size=str(_first_present(data, 'sizeStr', 'size') or ''),
            size_bytes=_to_int(_first_present(data, 'sizeBytes', 'size_bytes')),
            languages=[str(lang) for lang in languages if lang],
            description=str(data.get('description') or ''),
            behavior_hints=dict(behavior_hints) if isinstance(behavior_hints, dict) else {},
            file_idx=file_idx if isinstance(file_idx, int) and not isinstance(file_idx, bool) else None,
        )


# Estatísticas de swarm obtidas via scrape
@dataclass(frozen=True)
class SwarmStats:
    seeds: int
    leechers: int


# Unidade final entregue ao cliente (imutável após construção)
@dataclass(frozen=True)
class AggregatedStream:
    name: str
    title: str
    description: str
    info_hash: str = ''
    sources: Tuple[str, ...] = ()
    behavior_hints: Tuple[Tuple[str, Any], ...] = ()
    file_idx: Optional[int] = None
    url: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Converte para o formato JSON de stream (camelCase)"""
        result: Dict[str, Any] = {
            'name': self.name,
            'title': self.title,
            'description': self.description,
        }
        if self.info_hash:
            result['infoHash'] = self.info_hash
            if self.sources:
                result['sources'] = list(self.sources)
        elif self.url:
            result['url'] = self.url
        if self.file_idx is not None:
            result['fileIdx'] = self.file_idx
        result['behaviorHints'] = dict(self.behavior_hints)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AggregatedStream':
        """Cria instância a partir de dicionário (usado pelo cache Redis)"""
        hints = data.get('behaviorHints') or {}
        return cls(
            name=data.get('name', ''),
            title=data.get('title', ''),
            description=data.get('description', ''),
            info_hash=data.get('infoHash', ''),
            sources=tuple(data.get('sources') or ()),
            behavior_hints=tuple(sorted(hints.items())),
            file_idx=data.get('fileIdx'),
            url=data.get('url', ''),
        )
