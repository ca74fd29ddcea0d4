"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import asyncio
import concurrent.futures
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from app.config import Config
from core.aggregator import AggregateOptions, StreamAggregator
from core.processors.stream_processor import SortConfig
from providers import available_provider_types, create_providers
from telemetry.boosts import BoostsFeed, get_boosts_feed
from tracker import get_tracker_list_provider, get_tracker_validator
from tracker.list_provider import TrackerListProvider
from tracker.validator import TrackerValidator, ValidationMode

logger = logging.getLogger(__name__)

MEDIA_TYPES = ('movie', 'series')


def _parse_int(value: Optional[str], name: str, default: int) -> int:
    if value is None or str(value).strip() == '':
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        raise ValueError(f"Parâmetro '{name}' deve ser inteiro: {value}")
    if parsed < 0:
        raise ValueError(f"Parâmetro '{name}' não pode ser negativo: {value}")
    return parsed


def _parse_csv(value: Optional[str]) -> List[str]:
    return [item.strip().lower() for item in str(value or '').split(',') if item.strip()]


# Junta lista de trackers -> validação -> agregação para um pedido de streams
class StreamService:
    def __init__(
        self,
        aggregator: Optional[StreamAggregator] = None,
        validator: Optional[TrackerValidator] = None,
        list_provider: Optional[TrackerListProvider] = None,
        boosts: Optional[BoostsFeed] = None,
    ):
        self.aggregator = aggregator or StreamAggregator()
        self.validator = validator or get_tracker_validator()
        self.list_provider = list_provider or get_tracker_list_provider()
        self.boosts = boosts or get_boosts_feed()

    def build_options(self, args: Dict[str, Any]) -> AggregateOptions:
        """Aplica overrides da query string sobre os valores do Config."""
        options = AggregateOptions()
        mode = args.get('mode')
        if mode and str(mode).strip().lower() not in {m.value for m in ValidationMode}:
            raise ValueError(f"Modo de validação inválido: {mode}")

        sort_fields = _parse_csv(args.get('sort')) or list(options.sort.fields)
        order = args.get('order') or options.sort.order
        return replace(
            options,
            mode=ValidationMode.parse(mode or options.mode).value,
            limit=_parse_int(args.get('limit'), 'limit', options.limit),
            max_trackers=_parse_int(args.get('max_trackers'), 'max_trackers', options.max_trackers),
            sort=SortConfig.build(order, sort_fields),
        )

    def provider_names(self, args: Dict[str, Any]) -> List[str]:
        names = _parse_csv(args.get('providers')) or list(Config.PROVIDERS)
        known = available_provider_types()
        unknown = [name for name in names if name not in known]
        if unknown:
            raise ValueError(f"Providers desconhecidos: {unknown}. Disponíveis: {sorted(known)}")
        return names

    async def _healthy_trackers(self, trackers: List[str], mode: str, limit: int) -> List[str]:
        return await self.validator.filter_by_health(trackers, mode, limit)

    async def get_streams_async(self, media_type: str, media_id: str, args: Dict[str, Any]) -> List[Dict[str, Any]]:
        if media_type not in MEDIA_TYPES:
            raise ValueError(f"Tipo inválido: {media_type}. Use {list(MEDIA_TYPES)}")
        if not media_id:
            raise ValueError("id obrigatório")

        options = self.build_options(args)
        providers = create_providers(self.provider_names(args))

        # requests bloqueia: busca da lista roda fora do loop
        loop = asyncio.get_running_loop()
        trackers = await loop.run_in_executor(None, self.list_provider.get_trackers)
        healthy = await self._healthy_trackers(trackers, options.mode, options.limit)
        options = replace(options, trackers_total=len(trackers))

        streams = await self.aggregator.aggregate(media_type, media_id, providers, healthy, options)
        return [stream.to_dict() for stream in streams]

    def get_streams(self, media_type: str, media_id: str, args: Dict[str, Any]) -> List[Dict[str, Any]]:
        return run_async(self.get_streams_async(media_type, media_id, args))

    def validate_trackers(self, args: Dict[str, Any]) -> Dict[str, Any]:
        mode = args.get('mode') or Config.VALIDATION_MODE
        if str(mode).strip().lower() not in {m.value for m in ValidationMode}:
            raise ValueError(f"Modo de validação inválido: {mode}")
        limit = _parse_int(args.get('limit'), 'limit', Config.TRACKERS_LIMIT)
        trackers = self.list_provider.get_trackers()
        healthy = run_async(self._healthy_trackers(trackers, mode, limit))
        return {
            'mode': ValidationMode.parse(mode).value,
            'limit': limit,
            'total': len(trackers),
            'healthy': len(healthy),
            'trackers': healthy,
        }

    def health_stats(self) -> Dict[str, Any]:
        return self.validator.stats()

    def recent_boosts(self) -> List[Dict[str, Any]]:
        return self.boosts.recent()


def run_async(coro):
    """Executa corrotina em loop de eventos existente ou cria novo."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # Não há loop rodando nesta thread (caso das threads do waitress)
        return asyncio.run(coro)
    # Já há um loop rodando, executa em outra thread
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(asyncio.run, coro)
        return future.result()
